from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from .model import PolicyConfig


class PolicyRepository(Protocol):
    def get_effective(self, as_of: date) -> Optional[PolicyConfig]:
        """Latest policy whose ``effective_from`` is on or before ``as_of``."""

        raise NotImplementedError
