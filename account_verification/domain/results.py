from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ResendDecision(str, Enum):
    AUTHORIZED = "authorized"
    UNAUTHORIZED = "unauthorized"
    ALREADY_VERIFIED = "already_verified"
    ACCOUNT_NOT_FOUND = "account_not_found"
    STATE_MISSING = "state_missing"
    # Request reached the guard without session context; middleware ordering is broken.
    CONTEXT_MISSING = "context_missing"


class UnauthorizedReason(str, Enum):
    NOT_SIGNED_IN = "not signed in"
    IDENTITY_MISMATCH = "identity mismatch"


@dataclass(frozen=True)
class ResendDecisionResult:
    decision: ResendDecision
    reason: Optional[UnauthorizedReason] = None

    @property
    def authorized(self) -> bool:
        return self.decision is ResendDecision.AUTHORIZED

    @property
    def is_contract_violation(self) -> bool:
        return self.decision in (
            ResendDecision.CONTEXT_MISSING,
            ResendDecision.ACCOUNT_NOT_FOUND,
            ResendDecision.STATE_MISSING,
        )
