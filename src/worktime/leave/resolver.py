from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from ..core.enums import RequestStatus
from ..core.exceptions import LookupUnavailable
from ..policies.model import PolicyConfig
from .model import LeaveGrant, LeaveOverride
from .repository import LeaveGrantRepository

logger = logging.getLogger(__name__)


def _priority(grant: LeaveGrant):
    # Full-day first, then the largest partial, then the oldest grant.
    return (0 if grant.full_day else 1, -(grant.hours or 0.0), grant.grant_id)


class LeaveResolver:
    """Finds the approved leave grant that overrides a day, if any.

    Leave precedence is all-or-nothing per day: a half-day grant on a day
    with punches still replaces the punch-based computation.
    """

    def __init__(self, grants: LeaveGrantRepository):
        self._grants = grants

    def resolve(self, user_id: int, day: date, policy: PolicyConfig) -> Optional[LeaveOverride]:
        try:
            grants = self._grants.find_for_user_and_date(user_id, day)
        except LookupUnavailable:
            raise
        except Exception as exc:
            logger.error("Leave lookup for user=%s date=%s failed: %s", user_id, day, exc)
            raise LookupUnavailable(f"Leave lookup for user {user_id} on {day} failed: {exc}") from exc

        approved = [
            g for g in grants
            if g.status == RequestStatus.APPROVED and g.user_id == user_id and g.covers(day)
        ]
        if not approved:
            return None

        grant = min(approved, key=_priority)
        # Stored hours are used verbatim; a full-day grant without hours
        # falls back to the policy's full-day length.
        if grant.hours is not None:
            hours = Decimal(str(grant.hours))
        else:
            hours = Decimal(str(policy.full_day_leave_hours))
        full_day = grant.full_day or grant.hours is None

        if len(approved) > 1:
            logger.info(
                "user=%s date=%s has %d approved grants; using grant #%s",
                user_id, day, len(approved), grant.grant_id,
            )
        return LeaveOverride(grant_id=grant.grant_id, leave_kind=grant.leave_kind, hours=hours, full_day=full_day)
