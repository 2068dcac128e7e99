from __future__ import annotations

from .results import ResendDecision


class ContractViolationError(Exception):
    """Raised when a state that should be impossible is observed.

    Covers a request that reached the guard without session context, and a
    signed-in member with no account or no verification state. ``decision``
    is the outcome reported to the caller.
    """

    def __init__(self, message: str, *, decision: ResendDecision):
        super().__init__(message)
        self.decision = decision


class VerificationStateDecodeError(ValueError):
    """Raised when a stored verification blob is not valid JSON of the expected shape."""


class DeliveryFailureError(Exception):
    """Raised when the mail transport rejects or fails to deliver a message."""

    def __init__(self, message: str, *, recipient: str):
        super().__init__(message)
        self.recipient = recipient
