"""
Exceptions raised by the prioritization engine.
"""


class PrioritizationError(Exception):
    """Base exception for prioritization engine errors."""

    def __init__(self, message: str, contact_id: str | None = None, recoverable: bool = True):
        super().__init__(message)
        self.contact_id = contact_id
        self.recoverable = recoverable


class InvalidInputError(PrioritizationError):
    """Raised when callers pass data the engine cannot interpret (bad dates, capacities, rows)."""

    pass
