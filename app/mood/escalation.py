import html
import logging
import smtplib
import ssl
from dataclasses import dataclass, field
from datetime import datetime, timezone
from email.message import EmailMessage
from typing import Optional, Protocol

from app.core.config import (
    ALERT_SENDER,
    ALERT_TIMEOUT_SECONDS,
    SMTP_HOST,
    SMTP_PASSWORD,
    SMTP_PORT,
    SMTP_USER,
)
from app.core.exceptions import NotificationDispatchFailed

logger = logging.getLogger(__name__)

EXCERPT_LIMIT = 500
CONTINUATION_MARKER = "..."

CRISIS_RESOURCES = (
    "National Suicide Prevention Lifeline: 988",
    "Crisis Text Line: Text HOME to 741741",
    "Emergency Services: 911",
)


def build_excerpt(text: str, limit: int = EXCERPT_LIMIT) -> str:
    """
    Returns the first `limit` characters of an entry, marking truncation.

    Args:
        text (str): Full journal entry text.
        limit (int): Maximum number of characters kept.

    Returns:
        str: The excerpt, ending in "..." when the text was longer than `limit`.
    """
    text = text or ""
    if len(text) <= limit:
        return text
    return text[:limit] + CONTINUATION_MARKER


@dataclass(frozen=True)
class EmergencyAlert:
    trusted_contact: str
    user_name: str
    user_email: str
    excerpt: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def for_entry(
        cls,
        trusted_contact: str,
        user_name: str,
        user_email: str,
        entry_text: str,
        created_at: Optional[datetime] = None,
    ) -> "EmergencyAlert":
        created_at = created_at or datetime.now(timezone.utc)
        if created_at.tzinfo is None:
            # stored timestamps are UTC; SQLite returns them naive
            created_at = created_at.replace(tzinfo=timezone.utc)
        return cls(
            trusted_contact=trusted_contact,
            user_name=user_name,
            user_email=user_email,
            excerpt=build_excerpt(entry_text),
            created_at=created_at,
        )

    @property
    def subject(self) -> str:
        return f"URGENT: {self.user_name} may need support - Daily Journal Alert"

    def text_body(self) -> str:
        resources = "\n".join(f"  - {r}" for r in CRISIS_RESOURCES)
        return (
            "This is an automated emergency alert from Daily Journal.\n\n"
            f"{self.user_name} ({self.user_email}) has written a journal entry that may indicate "
            "they are experiencing suicidal thoughts.\n\n"
            f"Journal entry content:\n\"{self.excerpt}\"\n"
            f"Entry date: {self.created_at:%Y-%m-%d %H:%M %Z}\n\n"
            f"Please reach out to {self.user_name} as soon as possible.\n"
            "If you believe this is an immediate emergency, please contact local emergency services.\n\n"
            f"Crisis Resources:\n{resources}\n"
        )

    def html_body(self) -> str:
        name = html.escape(self.user_name)
        resources = "".join(f"<li>{html.escape(r)}</li>" for r in CRISIS_RESOURCES)
        return f"""
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
  <h2 style="color: #dc2626;">Emergency Alert - Daily Journal</h2>
  <p>This is an automated emergency alert from Daily Journal.</p>
  <h3 style="margin: 0;">{name}</h3>
  <p style="margin: 5px 0 0 0; color: #6b7280;">{html.escape(self.user_email)}</p>
  <p><strong>{name}</strong> has written a journal entry that may indicate they are experiencing suicidal thoughts.</p>
  <div style="background-color: #fef2f2; border: 1px solid #fecaca; border-radius: 8px; padding: 16px;">
    <h3 style="color: #dc2626; margin-top: 0;">Journal Entry Content:</h3>
    <p style="font-style: italic;">"{html.escape(self.excerpt)}"</p>
    <p><small>Entry date: {self.created_at:%Y-%m-%d %H:%M %Z}</small></p>
  </div>
  <p><strong>Please reach out to {name} as soon as possible.</strong></p>
  <p>If you believe this is an immediate emergency, please contact local emergency services.</p>
  <h4>Crisis Resources:</h4>
  <ul>{resources}</ul>
  <p><small>This message was sent automatically by Daily Journal's emergency alert system.</small></p>
</div>
"""


class AlertDispatcher(Protocol):
    def dispatch_alert(self, alert: EmergencyAlert) -> None:
        ...


class SmtpAlertDispatcher:
    """Sends emergency alerts through a single SMTP attempt."""

    def __init__(
        self,
        host: Optional[str] = SMTP_HOST,
        port: int = SMTP_PORT,
        user: Optional[str] = SMTP_USER,
        password: Optional[str] = SMTP_PASSWORD,
        sender: str = ALERT_SENDER,
        timeout: float = ALERT_TIMEOUT_SECONDS,
    ):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.sender = sender
        self.timeout = timeout

    def build_message(self, alert: EmergencyAlert) -> EmailMessage:
        msg = EmailMessage()
        msg["From"] = f"Daily Journal <{self.sender}>"
        msg["To"] = alert.trusted_contact
        msg["Subject"] = alert.subject
        if alert.user_email:
            msg["Reply-To"] = alert.user_email
        msg.set_content(alert.text_body())
        msg.add_alternative(alert.html_body(), subtype="html")
        return msg

    def dispatch_alert(self, alert: EmergencyAlert) -> None:
        if not self.host:
            raise NotificationDispatchFailed("SMTP host is not configured")

        msg = self.build_message(alert)
        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
                server.starttls(context=ssl.create_default_context())
                if self.user and self.password:
                    server.login(self.user, self.password)
                server.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            raise NotificationDispatchFailed(str(e)) from e


def send_emergency_alert(dispatcher: AlertDispatcher, alert: EmergencyAlert) -> bool:
    """
    Makes one delivery attempt for an emergency alert and logs the outcome.

    Failures are logged and swallowed so they never reach the save path.

    Returns:
        bool: True if the dispatcher reported success.
    """
    try:
        dispatcher.dispatch_alert(alert)
    except NotificationDispatchFailed as e:
        logger.error("Failed to send emergency alert for %s: %s", alert.user_email, e)
        return False
    except Exception:
        logger.exception("Unexpected error sending emergency alert for %s", alert.user_email)
        return False

    logger.info("Emergency alert sent to %s for user %s", alert.trusted_contact, alert.user_email)
    return True
