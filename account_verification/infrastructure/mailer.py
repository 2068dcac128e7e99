import asyncio
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from html import escape

from ..core.settings import Settings
from ..domain.errors import DeliveryFailureError
from ..schemas import OutboundEmail


class SmtpTransport:
    """Sends mail through an authenticated SMTP (STARTTLS) server, e.g. Gmail with an app password."""

    def __init__(self, settings: Settings):
        self.settings = settings

    def _send_blocking(self, message: OutboundEmail) -> None:
        cfg = self.settings
        msg = MIMEMultipart("alternative")
        msg["Subject"] = message.subject
        msg["From"] = message.from_addr
        msg["To"] = message.to

        msg.attach(MIMEText(message.text_body, "plain"))
        msg.attach(MIMEText(message.html_body, "html"))

        with smtplib.SMTP(cfg.SMTP_HOST, cfg.SMTP_PORT, timeout=cfg.SMTP_TIMEOUT_SECONDS) as server:
            server.ehlo()
            server.starttls()
            server.login(cfg.EMAIL_USERNAME, cfg.EMAIL_APP_PASSWORD)
            server.sendmail(cfg.EMAIL_USERNAME, [message.to], msg.as_string())

    async def send(self, message: OutboundEmail) -> None:
        try:
            await asyncio.to_thread(self._send_blocking, message)
        except (smtplib.SMTPException, OSError) as e:
            raise DeliveryFailureError(f"SMTP delivery failed: {e}", recipient=message.to) from e


def render_verification_email(from_addr: str, to_email: str, username: str, verification_url: str) -> OutboundEmail:
    subject = "Verify your account"
    text = f"""
    Welcome to InfiniteChess.org!

    Thank you, {username}, for creating an account. Please verify your account by visiting the following link:

    {verification_url}

    If the link doesn't work, you can copy and paste the URL into your browser.

    If this wasn't you, please ignore this email.
    """
    safe_name = escape(username)
    safe_url = escape(verification_url, quote=True)
    html = f"""
    <div style="font-family: Arial, sans-serif; padding: 20px; max-width: 600px; margin: 0 auto; border: 1px solid #999; border-radius: 5px;">
        <h2 style="color: #333;">Welcome to InfiniteChess.org!</h2>
        <p style="font-size: 16px; color: #555;">Thank you, <strong>{safe_name}</strong>, for creating an account. Please click the button below to verify your account:</p>
        <a href="{safe_url}" style="font-size: 16px; background-color: #fff; color: black; padding: 10px 20px; text-decoration: none; border: 1px solid black; border-radius: 6px; display: inline-block; margin: 20px 0;">Verify Account</a>
        <p style="font-size: 16px; color: #555;">If the link doesn't work, you can copy and paste the following URL into your browser:</p>
        <p style="font-size: 14px; color: #666; word-wrap: break-word;"><a href="{safe_url}" style="color: #007BFF; text-decoration: underline;">{safe_url}</a></p>
        <p style="font-size: 16px; color: #777;">If this wasn't you, please ignore this email or reply to let us know.</p>
    </div>
    """
    return OutboundEmail(from_addr=from_addr, to=to_email, subject=subject, text_body=text, html_body=html)
