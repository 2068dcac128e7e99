from typing import Optional

from fastapi import status
from sqlalchemy.exc import SQLAlchemyError

from ..domain.interfaces import AuditChannel, AuditLogProtocol
from ..domain.results import ResendDecision, ResendDecisionResult, UnauthorizedReason
from ..schemas import MemberInfo, ResendResponse
from ..services.authorization_guard import ResendAuthorizationGuard
from ..services.dispatcher import NotificationDispatcher

_SERVER_ERROR_MESSAGES = {
    ResendDecision.CONTEXT_MISSING: "Internal Server Error",
    ResendDecision.ACCOUNT_NOT_FOUND: "Server error. Member not found.",
    ResendDecision.STATE_MISSING: "Server error. Verification state missing.",
}


def _body(sent: bool, message: Optional[str] = None) -> dict:
    return ResendResponse(sent=sent, message=message).model_dump(exclude_none=True)


def _rejection(result: ResendDecisionResult) -> tuple[int, dict]:
    if result.is_contract_violation:
        return status.HTTP_500_INTERNAL_SERVER_ERROR, _body(False, _SERVER_ERROR_MESSAGES[result.decision])
    if result.reason is UnauthorizedReason.NOT_SIGNED_IN:
        return status.HTTP_401_UNAUTHORIZED, _body(False, "Not signed in. Can't resend verification email.")
    # Identity mismatch and already-verified get no explanation.
    return status.HTTP_401_UNAUTHORIZED, _body(False)


def request_confirm_email(
    member_info: Optional[MemberInfo],
    member: str,
    guard: ResendAuthorizationGuard,
    dispatcher: NotificationDispatcher,
    audit: AuditLogProtocol,
) -> tuple[int, dict]:
    """Authorize a resend of the verification email and, if allowed, dispatch it.

    The response is decided before delivery starts; transport problems are
    never reflected in it.
    """
    try:
        result = guard.authorize(member_info, member)
    except SQLAlchemyError as e:
        audit.log_exception(f'Database error while authorizing verification email for "{member}"', e, AuditChannel.ERROR)
        return status.HTTP_500_INTERNAL_SERVER_ERROR, _body(False, "Internal Server Error")

    if not result.authorized:
        return _rejection(result)

    dispatcher.dispatch(member_info.user_id)
    return status.HTTP_200_OK, _body(True)
