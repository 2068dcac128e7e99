from __future__ import annotations

from typing import Optional

from jose import JWTError, jwt
from starlette.requests import HTTPConnection
from starlette.types import ASGIApp, Receive, Scope, Send

from .core.settings import settings
from .schemas import MemberInfo


def member_info_from_token(token: Optional[str]) -> MemberInfo:
    """Resolve the session cookie to a MemberInfo. Anything invalid is treated as signed out."""
    if not token:
        return MemberInfo()
    try:
        payload = jwt.decode(token, settings.AUTH_SECRET_KEY, algorithms=[settings.AUTH_ALGORITHM])
    except JWTError:
        return MemberInfo()
    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        return MemberInfo()
    username = payload.get("username")
    if not username:
        return MemberInfo()
    return MemberInfo(user_id=user_id, username=username, signed_in=True)


class MemberInfoMiddleware:
    """Pure ASGI middleware that sets ``request.state.member_info`` for every HTTP request."""

    def __init__(self, app: ASGIApp, cookie_name: Optional[str] = None) -> None:
        self.app = app
        self.cookie_name = cookie_name or settings.AUTH_COOKIE_NAME

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope.get("type") != "http":
            return await self.app(scope, receive, send)

        token = HTTPConnection(scope).cookies.get(self.cookie_name)
        state = scope.setdefault("state", {})
        state["member_info"] = member_info_from_token(token)
        await self.app(scope, receive, send)
