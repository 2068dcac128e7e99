from __future__ import annotations
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Protocol

from ..schemas import OutboundEmail


class AuditChannel(str, Enum):
    ERROR = "error"
    SUSPICIOUS = "suspicious"


class AccountDirectoryProtocol(Protocol):
    def get_member_data(self, user_id: int, fields: Iterable[str]) -> Optional[Dict[str, Any]]:
        ...


class AuditLogProtocol(Protocol):
    def log(self, message: str, channel: AuditChannel = AuditChannel.ERROR, *, print_: bool = True) -> None:
        ...

    def log_exception(self, message: str, exc: BaseException, channel: AuditChannel = AuditChannel.ERROR) -> None:
        ...


class TransportProtocol(Protocol):
    async def send(self, message: OutboundEmail) -> None:
        ...
