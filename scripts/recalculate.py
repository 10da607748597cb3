"""Recompute stored daily summaries for a date range.

Run after a policy change: stored rows keep the figures of the policy they
were computed with until they are recomputed explicitly.

    python scripts/recalculate.py --user 7 --start 2026-01-01 --end 2026-01-31
"""

from __future__ import annotations

import argparse
import importlib
import logging
import sys

from dotenv import load_dotenv

from worktime.common.datetime_utils import parse_iso_date
from worktime.config import get_settings_module
from worktime.container import build_container
from worktime.core.exceptions import DomainError

logger = logging.getLogger("worktime.scripts.recalculate")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--user", type=int, action="append", required=True, help="user id (repeatable)")
    parser.add_argument("--start", required=True, help="first date, YYYY-MM-DD")
    parser.add_argument("--end", required=True, help="last date, YYYY-MM-DD")
    parser.add_argument("--force", action="store_true", help="also overwrite manually set rows")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    load_dotenv(override=False)

    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"), format="%(levelname)s [%(name)s] %(message)s")

    container = build_container(
        db_config=dict(settings.DB_CONFIG),
        lock_backend=str(getattr(settings, "LOCK_BACKEND", "process")),
        lock_timeout=int(getattr(settings, "LOCK_TIMEOUT_SECONDS", 10)),
    )

    try:
        start = parse_iso_date(args.start)
        end = parse_iso_date(args.end)
        for user_id in args.user:
            rows = container.orchestrator.recalculate_range(user_id, start, end, force=args.force)
            logger.info("user=%s: %d days recomputed", user_id, len(rows))
    except DomainError as exc:
        logger.error("Recalculation aborted: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
