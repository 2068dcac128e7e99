import smtplib

import pytest

from account_verification.domain.errors import DeliveryFailureError
from account_verification.infrastructure import mailer
from account_verification.infrastructure.mailer import SmtpTransport, render_verification_email

from conftest import make_settings


class FakeSMTP:
    instances = []

    def __init__(self, host, port, timeout=None):
        self.host, self.port, self.timeout = host, port, timeout
        self.calls = []
        FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def ehlo(self):
        self.calls.append("ehlo")

    def starttls(self):
        self.calls.append("starttls")

    def login(self, user, password):
        self.calls.append(("login", user, password))

    def sendmail(self, from_addr, to_addrs, msg):
        self.calls.append(("sendmail", from_addr, to_addrs, msg))


class RejectingSMTP(FakeSMTP):
    def login(self, user, password):
        raise smtplib.SMTPAuthenticationError(535, b"Username and Password not accepted")


def _message():
    return render_verification_email(
        "Infinite Chess <noreply@chess.example>",
        "alice@chess.example",
        "Alice",
        "https://chess.example/verify/alice/abc123",
    )


def test_render_escapes_html_but_not_text():
    message = render_verification_email("from", "to@x", "<b>eve</b>", "https://h/verify/eve/c?a=1&b=2")

    assert "<b>eve</b>" in message.text_body
    assert "&lt;b&gt;eve&lt;/b&gt;" in message.html_body
    assert "a=1&amp;b=2" in message.html_body


@pytest.mark.asyncio
async def test_smtp_transport_logs_in_and_sends(monkeypatch):
    FakeSMTP.instances.clear()
    monkeypatch.setattr(mailer.smtplib, "SMTP", FakeSMTP)
    transport = SmtpTransport(make_settings(EMAIL_USERNAME="noreply@chess.example", EMAIL_APP_PASSWORD="pw"))

    await transport.send(_message())

    [server] = FakeSMTP.instances
    assert (server.host, server.port) == ("smtp.gmail.com", 587)
    assert server.calls[:3] == ["ehlo", "starttls", ("login", "noreply@chess.example", "pw")]
    _, from_addr, to_addrs, raw = server.calls[3]
    assert from_addr == "noreply@chess.example"
    assert to_addrs == ["alice@chess.example"]
    assert "Subject: Verify your account" in raw


@pytest.mark.asyncio
async def test_smtp_errors_become_delivery_failures(monkeypatch):
    monkeypatch.setattr(mailer.smtplib, "SMTP", RejectingSMTP)
    transport = SmtpTransport(make_settings(EMAIL_USERNAME="noreply@chess.example", EMAIL_APP_PASSWORD="bad"))

    with pytest.raises(DeliveryFailureError) as info:
        await transport.send(_message())

    assert info.value.recipient == "alice@chess.example"
