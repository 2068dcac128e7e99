from __future__ import annotations
from functools import lru_cache
from fastapi import BackgroundTasks, Depends
from sqlalchemy.orm import Session

from .settings import settings, Settings
from ..database import get_db
from ..domain.interfaces import AccountDirectoryProtocol, AuditLogProtocol, TransportProtocol
from ..domain.repositories import AccountDirectory
from ..infrastructure.audit import AuditLog
from ..infrastructure.mailer import SmtpTransport
from ..services.authorization_guard import ResendAuthorizationGuard
from ..services.dispatcher import NotificationDispatcher


def get_settings() -> Settings:
    return settings


@lru_cache
def get_audit_log() -> AuditLogProtocol:
    return AuditLog()


@lru_cache
def get_transport() -> TransportProtocol:
    return SmtpTransport(settings)


def get_account_directory(db: Session = Depends(get_db)) -> AccountDirectoryProtocol:
    return AccountDirectory(db)


def get_authorization_guard(
    directory: AccountDirectoryProtocol = Depends(get_account_directory),
    audit: AuditLogProtocol = Depends(get_audit_log),
) -> ResendAuthorizationGuard:
    return ResendAuthorizationGuard(directory=directory, audit=audit)


def get_dispatcher(
    background_tasks: BackgroundTasks,
    directory: AccountDirectoryProtocol = Depends(get_account_directory),
    transport: TransportProtocol = Depends(get_transport),
    audit: AuditLogProtocol = Depends(get_audit_log),
    cfg: Settings = Depends(get_settings),
) -> NotificationDispatcher:
    return NotificationDispatcher(
        settings=cfg, directory=directory, transport=transport, audit=audit, background_tasks=background_tasks
    )
