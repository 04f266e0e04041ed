"""
Reminder dispatcher.

Delivers a bounded batch of due reminders. Each reminder is handled on its
own: a failed delivery is recorded and left pending for the next run, and
never stops the rest of the batch. Only a failure to read the due set
fails the whole call.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, List, Protocol, Tuple

from app.email_utils import DeliveryResult
from core.config import Config
from core.database import get_due_reminders, mark_reminder_sent
from core.reminders.policy import days_since

log = logging.getLogger("reminders.dispatcher")


class Transport(Protocol):
    def send(self, to_email: str, subject: str, body: str) -> DeliveryResult:
        ...


@dataclass(frozen=True)
class ReminderOutcome:
    reminder_id: int
    sent: bool
    error: str | None = None


def build_message(reminder: Dict, now: datetime, app_url: str) -> Tuple[str, str]:
    company = reminder.get("company") or ""
    role = reminder.get("role") or ""
    stage = (reminder.get("status") or "").replace("_", " ")
    last_touched = reminder["last_touched_at"]
    days = days_since(last_touched, now)

    subject = f"Follow-up reminder: {company} - {role}"
    lines = [
        "Time to follow up!",
        "",
        f"You haven't updated this job application in {days} days:",
        "",
        f"Company: {company}",
        f"Role: {role}",
        f"Status: {stage}",
        f"Last updated: {last_touched.strftime('%Y-%m-%d')}",
        "",
        "Consider reaching out to the recruiter or checking the status of your application.",
        "",
        f"View in Job Tracker: {app_url.rstrip('/')}/app",
        "",
        "Good luck!",
    ]
    return subject, "\n".join(lines)


def _deliver(reminder: Dict, transport: Transport, app_url: str, now: datetime) -> ReminderOutcome:
    reminder_id = int(reminder["reminder_id"])
    subject, body = build_message(reminder, now, app_url)

    try:
        result = transport.send(reminder["email"], subject, body)
    except Exception as exc:
        return ReminderOutcome(reminder_id, False, f"{type(exc).__name__}: {exc}")

    if result.error:
        return ReminderOutcome(reminder_id, False, f"Delivery error: {result.error}")
    if not result.confirmed:
        return ReminderOutcome(reminder_id, False, "Transport returned no confirmation")

    mark_reminder_sent(reminder_id=reminder_id, sent_at=now)
    return ReminderOutcome(reminder_id, True)


def summarize(outcomes: List[ReminderOutcome], now: datetime) -> Dict:
    return {
        "sent": sum(1 for o in outcomes if o.sent),
        "total": len(outcomes),
        "errors": [f"{o.reminder_id}: {o.error}" for o in outcomes if not o.sent],
        "timestamp": now.isoformat(),
    }


def send_due_reminders(config: Config, transport: Transport, now: datetime | None = None) -> Dict:
    """
    One dispatcher pass. Returns {"sent", "total", "errors", "timestamp"}.
    """
    now = now or datetime.now(timezone.utc)
    due = get_due_reminders(now=now, limit=config.reminder_batch_size)
    log.info("Sending reminders", extra={"due": len(due)})

    outcomes = [_deliver(reminder, transport, config.app_url, now) for reminder in due]

    for outcome in outcomes:
        if not outcome.sent:
            log.error(
                "Failed to send reminder",
                extra={"reminder_id": outcome.reminder_id, "error": outcome.error},
            )

    summary = summarize(outcomes, now)
    log.info("Reminder dispatch complete", extra={"sent": summary["sent"], "total": summary["total"]})
    return summary


__all__ = ["ReminderOutcome", "build_message", "summarize", "send_due_reminders"]
