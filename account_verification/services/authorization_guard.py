from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from ..domain.errors import ContractViolationError, VerificationStateDecodeError
from ..domain.interfaces import AccountDirectoryProtocol, AuditChannel, AuditLogProtocol
from ..domain.results import ResendDecision, ResendDecisionResult, UnauthorizedReason
from ..domain.verification import DecodedVerification, is_terminal
from ..schemas import MemberInfo


@dataclass
class ResendAuthorizationGuard:
    """Decides whether a member may have their verification email resent.

    Checks run in a fixed order: session context, sign-in, identity, then the
    stored verification state. Nothing here writes to the account.
    """

    directory: AccountDirectoryProtocol
    audit: AuditLogProtocol

    def authorize(self, member_info: Optional[MemberInfo], target_username: str) -> ResendDecisionResult:
        try:
            return self._authorize(member_info, target_username)
        except ContractViolationError as e:
            self.audit.log(str(e), AuditChannel.ERROR)
            return ResendDecisionResult(e.decision)

    def _authorize(self, member_info: Optional[MemberInfo], target_username: str) -> ResendDecisionResult:
        if member_info is None:
            raise ContractViolationError(
                "request.state.member_info needs to be defined before handling confirmation email request route!",
                decision=ResendDecision.CONTEXT_MISSING,
            )

        if not member_info.signed_in:
            self.audit.log(
                "User tried to resend the account verification email when they're not signed in! "
                "Their page should have auto-refreshed.",
                AuditChannel.ERROR,
            )
            return ResendDecisionResult(ResendDecision.UNAUTHORIZED, UnauthorizedReason.NOT_SIGNED_IN)

        user_id = member_info.user_id
        caller = member_info.username or ""
        if caller.lower() != target_username.lower():
            self.audit.log(
                f'Member "{caller}" of ID "{user_id}" attempted to send verification email for user "{target_username}"!',
                AuditChannel.SUSPICIOUS,
            )
            return ResendDecisionResult(ResendDecision.UNAUTHORIZED, UnauthorizedReason.IDENTITY_MISMATCH)

        if is_terminal(self._load_verification(user_id, caller)):
            self.audit.log(
                f'Member "{caller}" of ID "{user_id}" tried requesting another verification email '
                "after they've already verified!",
                AuditChannel.SUSPICIOUS,
            )
            return ResendDecisionResult(ResendDecision.ALREADY_VERIFIED)

        return ResendDecisionResult(ResendDecision.AUTHORIZED)

    def _load_verification(self, user_id: Optional[int], username: str) -> DecodedVerification:
        """Return the member's verification state; a signed-in member must have one."""
        try:
            data = self.directory.get_member_data(user_id, ["verification"])
        except VerificationStateDecodeError as e:
            raise ContractViolationError(
                f'Verification state of member "{username}" of ID "{user_id}" is corrupt: {e}. This should never happen.',
                decision=ResendDecision.STATE_MISSING,
            ) from e

        if data is None:
            raise ContractViolationError(
                f'Could not find member "{username}" of ID "{user_id}" when requesting confirmation email! '
                "This should never happen.",
                decision=ResendDecision.ACCOUNT_NOT_FOUND,
            )
        if data["verification"] is None:
            raise ContractViolationError(
                f'Member "{username}" of ID "{user_id}" has no verification state when requesting confirmation email! '
                "This should never happen.",
                decision=ResendDecision.STATE_MISSING,
            )
        return data["verification"]
