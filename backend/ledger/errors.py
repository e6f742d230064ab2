"""
Ledger error hierarchy.

Every error carries the HTTP status the API layer should answer with, so
routers can turn a failed mutation into an ``HTTPException`` without a
lookup table.
"""

from typing import List, Optional


class LedgerError(Exception):
    """Base class for all ledger errors."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class StoreUnavailable(LedgerError):
    """The backing store could not be reached or rejected the operation."""

    status_code = 503


class AuthRequired(LedgerError):
    """A write was attempted without a resolved user identity."""

    status_code = 401

    def __init__(self, message: str = "Authentication is required."):
        super().__init__(message)


class NotFound(LedgerError):
    """An operation referenced a row that no longer exists."""

    status_code = 404


class PartialSequenceFailure(LedgerError):
    """A multi-step mutation failed after some of its steps were committed."""

    status_code = 500

    def __init__(
        self,
        operation: str,
        completed_steps: List[str],
        cause: Optional[Exception] = None
    ):
        done = ", ".join(completed_steps) or "none"
        super().__init__(
            f"{operation} failed after committing steps: {done} ({cause})"
        )
        self.operation = operation
        self.completed_steps = list(completed_steps)
        self.cause = cause


class InvalidInput(LedgerError):
    """A mutation was given a value outside its allowed set."""

    status_code = 422
