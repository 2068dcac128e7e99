from __future__ import annotations
import logging
import os

from .settings import Settings

CONSOLE_LOGGER = "account_verification.console"
ERROR_AUDIT_LOGGER = "account_verification.audit.error"
SUSPICIOUS_AUDIT_LOGGER = "account_verification.audit.suspicious"

_FILE_FORMAT = "%(asctime)s\t%(message)s"
_CONSOLE_FORMAT = "%(asctime)s %(levelname)s %(message)s"


def _reset_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def configure_logging(cfg: Settings) -> None:
    """Attach handlers for the operator console and the two audit files.

    Safe to call more than once; existing handlers are replaced. The audit
    loggers do not propagate, so each entry lands only in its own file unless
    it is explicitly echoed to the console.
    """
    level = logging.getLevelName(cfg.LOG_LEVEL.upper())
    if not isinstance(level, int):
        level = logging.INFO

    console = logging.getLogger(CONSOLE_LOGGER)
    _reset_handlers(console)
    stream = logging.StreamHandler()
    stream.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    console.addHandler(stream)
    console.setLevel(level)

    os.makedirs(cfg.LOG_DIR, exist_ok=True)
    for name, filename in (
        (ERROR_AUDIT_LOGGER, cfg.ERROR_LOG_FILE),
        (SUSPICIOUS_AUDIT_LOGGER, cfg.HACK_LOG_FILE),
    ):
        audit = logging.getLogger(name)
        _reset_handlers(audit)
        file_handler = logging.FileHandler(os.path.join(cfg.LOG_DIR, filename), encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        audit.addHandler(file_handler)
        audit.setLevel(logging.INFO)
        audit.propagate = False
