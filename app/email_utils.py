"""
SMTP transport shared by routes and the reminder worker.

`send` never raises for delivery problems; it reports them in the returned
DeliveryResult so callers can isolate failures per message.
"""
from __future__ import annotations

import logging
import smtplib
from dataclasses import dataclass
from email.mime.text import MIMEText
from email.utils import make_msgid

from core.config import Config

log = logging.getLogger("email")


@dataclass(frozen=True)
class DeliveryResult:
    # None means the transport gave no verdict, which callers must treat as failure.
    ok: bool | None
    message_id: str | None = None
    error: str | None = None

    @property
    def confirmed(self) -> bool:
        return self.ok is True and not self.error


class SmtpTransport:
    def __init__(self, *, server: str, port: int, user: str, password: str, sender: str):
        self.server = server
        self.port = port
        self.user = user
        self.password = password
        self.sender = sender

    @classmethod
    def from_config(cls, config: Config) -> "SmtpTransport":
        if not (config.email_user and config.email_password):
            raise RuntimeError("Email credentials not configured. Set EMAIL_USER and EMAIL_PASSWORD.")
        return cls(
            server=config.smtp_server,
            port=config.smtp_port,
            user=config.email_user,
            password=config.email_password,
            sender=config.effective_from,
        )

    def send(self, to_email: str, subject: str, body: str) -> DeliveryResult:
        msg = MIMEText(body)
        msg["Subject"] = subject
        msg["From"] = self.sender
        msg["To"] = to_email
        msg["Message-ID"] = make_msgid()

        try:
            with smtplib.SMTP(self.server, self.port) as server:
                server.starttls()
                server.login(self.user, self.password)
                refused = server.sendmail(self.sender, [to_email], msg.as_string())
        except (smtplib.SMTPException, OSError) as exc:
            return DeliveryResult(ok=False, error=f"{type(exc).__name__}: {exc}")

        if to_email in refused:
            code, reason = refused[to_email]
            return DeliveryResult(ok=False, error=f"Recipient refused ({code}): {reason!r}")

        log.info("Email sent", extra={"to": to_email, "from": self.sender})
        return DeliveryResult(ok=True, message_id=msg["Message-ID"])


__all__ = ["DeliveryResult", "SmtpTransport"]
