from __future__ import annotations

import logging
from datetime import date

from ..core.exceptions import LookupUnavailable, PolicyConfigMissing
from .model import PolicyConfig
from .repository import PolicyRepository

logger = logging.getLogger(__name__)


class PolicyService:
    """Resolves the policy snapshot a computation must use.

    Never falls back to built-in defaults: a missing policy aborts the
    computation so historical rows are not silently recomputed with
    another rate table.
    """

    def __init__(self, policies: PolicyRepository):
        self._policies = policies

    def snapshot_for(self, work_date: date) -> PolicyConfig:
        try:
            policy = self._policies.get_effective(work_date)
        except (LookupUnavailable, PolicyConfigMissing):
            raise
        except Exception as exc:
            logger.error("Policy lookup for %s failed: %s", work_date, exc)
            raise LookupUnavailable(f"Policy lookup for {work_date} failed: {exc}") from exc

        if policy is None:
            raise PolicyConfigMissing(f"No work policy is effective on {work_date}")
        return policy
