from __future__ import annotations
import logging
from urllib.parse import quote

from fastapi import BackgroundTasks
from sqlalchemy.exc import SQLAlchemyError

from ..core.logging import CONSOLE_LOGGER
from ..core.settings import Settings
from ..domain.errors import VerificationStateDecodeError
from ..domain.interfaces import AccountDirectoryProtocol, AuditChannel, AuditLogProtocol, TransportProtocol
from ..domain.verification import VerificationState
from ..infrastructure.mailer import render_verification_email
from ..schemas import OutboundEmail

console = logging.getLogger(CONSOLE_LOGGER)


def build_verification_url(host: str, username: str, code: str) -> str:
    return f"https://{host}/verify/{quote(username.lower(), safe='')}/{quote(code, safe='')}"


class NotificationDispatcher:
    """Sends account verification emails without blocking the caller.

    ``dispatch`` only queues the send on the request's background tasks, which
    run after the response has gone out. Delivery results are only ever
    logged. Repeated calls are not deduplicated.
    """

    def __init__(
        self,
        settings: Settings,
        directory: AccountDirectoryProtocol,
        transport: TransportProtocol,
        audit: AuditLogProtocol,
        background_tasks: BackgroundTasks,
    ):
        self.settings = settings
        self.directory = directory
        self.transport = transport
        self.audit = audit
        self.background_tasks = background_tasks

    def dispatch(self, user_id: int) -> None:
        try:
            data = self.directory.get_member_data(user_id, ["username", "email", "verification"])
        except (VerificationStateDecodeError, SQLAlchemyError) as e:
            self.audit.log_exception(f'Unable to send email confirmation to member of id "{user_id}"', e)
            return
        if data is None:
            self.audit.log(
                f'Unable to send email confirmation of non-existent member of id "{user_id}"!', AuditChannel.ERROR
            )
            return

        username, email, verification = data["username"], data["email"], data["verification"]
        if not isinstance(verification, VerificationState) or not verification.code:
            self.audit.log(
                f'Unable to send email confirmation to member "{username}" of id "{user_id}": no verification code!',
                AuditChannel.ERROR,
            )
            return

        # Read on every dispatch, never cached.
        verification_url = build_verification_url(self.settings.verification_host, username, verification.code)

        if not self.settings.email_credentials_configured:
            console.info("Email environment variables not specified. Not sending email. Click this link instead to verify:")
            console.info(verification_url)
            return

        message = render_verification_email(self.settings.email_from_address, email, username, verification_url)
        self.background_tasks.add_task(self.deliver, message, user_id=user_id, username=username)

    async def deliver(self, message: OutboundEmail, *, user_id: int, username: str) -> None:
        """Send one message and log the outcome. Failures are terminal; there is no retry."""
        try:
            await self.transport.send(message)
        except Exception as e:
            # Nothing is waiting on this send, so the audit log is the only place the failure can go.
            self.audit.log_exception("Error when sending verification email", e, AuditChannel.ERROR)
            return
        console.info("Email is sent to member %s of ID %s!", username, user_id)
