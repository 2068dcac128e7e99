from datetime import datetime, timedelta
from typing import Optional
from uuid import uuid4

from jose import jwt

from .core.settings import settings


def create_session_token(user_id: int, username: str, expires_delta: Optional[timedelta] = None) -> str:
    """Issue the session cookie value that ``MemberInfoMiddleware`` reads back.

    Sessions are normally issued by the login flow elsewhere; this mirrors its
    claim layout (``sub`` = user id, ``username``).
    """
    now = datetime.utcnow()
    to_encode = {
        "sub": str(user_id),
        "username": username,
        "iat": now,
        "jti": str(uuid4()),
        "exp": now + (expires_delta or timedelta(minutes=60)),
    }
    return jwt.encode(to_encode, settings.AUTH_SECRET_KEY, algorithm=settings.AUTH_ALGORITHM)
