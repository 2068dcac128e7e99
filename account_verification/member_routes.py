from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from .core.deps import get_audit_log, get_authorization_guard, get_dispatcher
from .adapters.verification_adapter import request_confirm_email
from .domain.interfaces import AuditLogProtocol
from .services.authorization_guard import ResendAuthorizationGuard
from .services.dispatcher import NotificationDispatcher

router = APIRouter(prefix="/member", tags=["member"])


def get_member_router() -> APIRouter:
    """Return the member APIRouter for integration into other FastAPI apps.

    The including app must install ``MemberInfoMiddleware``; without it every
    request is answered with 500.
    """
    return router


@router.post("/{member}/send-email")
def send_verification_email(
    member: str,
    request: Request,
    guard: ResendAuthorizationGuard = Depends(get_authorization_guard),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
    audit: AuditLogProtocol = Depends(get_audit_log),
):
    """Resend the account verification email to the signed-in member."""
    member_info = getattr(request.state, "member_info", None)
    status_code, body = request_confirm_email(member_info, member, guard, dispatcher, audit)
    return JSONResponse(status_code=status_code, content=body)
