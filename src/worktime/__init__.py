"""Work-time accounting package.

Organized by feature modules (punches, calendar, leave, policies, engine,
summaries, reports) with a thin Flask controller layer on top of
service/repository layers.
"""
