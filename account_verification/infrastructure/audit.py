from __future__ import annotations
import logging
import traceback

from ..core.logging import CONSOLE_LOGGER, ERROR_AUDIT_LOGGER, SUSPICIOUS_AUDIT_LOGGER
from ..domain.interfaces import AuditChannel

_CHANNEL_LOGGERS = {
    AuditChannel.ERROR: ERROR_AUDIT_LOGGER,
    AuditChannel.SUSPICIOUS: SUSPICIOUS_AUDIT_LOGGER,
}


class AuditLog:
    """Append-only event sink. Each channel writes to its own log file."""

    def __init__(self) -> None:
        self._console = logging.getLogger(CONSOLE_LOGGER)
        self._channels = {channel: logging.getLogger(name) for channel, name in _CHANNEL_LOGGERS.items()}

    def log(self, message: str, channel: AuditChannel = AuditChannel.ERROR, *, print_: bool = True) -> None:
        self._channels[channel].warning(message)
        if print_:
            self._console.warning("[%s] %s", channel.value, message)

    def log_exception(self, message: str, exc: BaseException, channel: AuditChannel = AuditChannel.ERROR) -> None:
        stack = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)).rstrip()
        self.log(f"{message}: {stack}", channel)
