from dataclasses import dataclass
from typing import Optional
from pydantic import BaseModel


class MemberInfo(BaseModel):
    """Identity of the caller, attached to every request by the session middleware."""

    user_id: Optional[int] = None
    username: Optional[str] = None
    signed_in: bool = False


class ResendResponse(BaseModel):
    sent: bool
    message: Optional[str] = None


@dataclass(frozen=True)
class OutboundEmail:
    from_addr: str
    to: str
    subject: str
    text_body: str
    html_body: str
