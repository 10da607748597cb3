class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class LookupUnavailable(DomainError):
    """Raised when the holiday, leave or policy source cannot be read.

    Fatal for a recomputation: nothing may be written afterwards.
    """


class PolicyConfigMissing(DomainError):
    """Raised when no usable policy snapshot exists for a date."""


class StoreUnavailable(DomainError):
    """Raised when the punch/summary store fails or a key lock times out."""


class IncompletePunchData(DomainError):
    """Missing check-in or check-out.

    Never escapes the engine; it is turned into a status tag on the summary.
    """

    def __init__(self, message: str, *, missing: str):
        super().__init__(message)
        self.missing = missing


class InvalidTimeOrdering(DomainError):
    """Punch pair that cannot form a session (zero length, or an overnight
    span longer than the policy allows). Recorded as an anomaly tag."""
