"""
feedback.py — Feedback Form Handling
=====================================
Validates a feedback submission and hands the rendered message to a
sender.  The default sender only logs it; deployments that want mail
delivery pass their own callable to `create_app`.

    fb = Feedback.from_payload(request.get_json())
    send(fb.to_message(recipient))
"""

import logging
import re
from dataclasses import dataclass
from html import escape
from typing import Any, Callable, Dict, Optional

log = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class FeedbackError(ValueError):
    """Submission failed validation; the message is shown to the user."""


@dataclass
class Message:
    to:      str
    subject: str
    html:    str


@dataclass
class Feedback:
    name:         str
    email:        str
    experience:   int
    improvements: str = ""
    issues:       str = ""

    @classmethod
    def from_payload(cls, payload: Optional[Dict[str, Any]]) -> "Feedback":
        payload = payload or {}
        name = str(payload.get("name") or "").strip()
        email = str(payload.get("email") or "").strip()
        if not name:
            raise FeedbackError("Please enter your name")
        if not EMAIL_RE.match(email):
            raise FeedbackError("Please enter a valid email address")
        try:
            experience = int(payload.get("experience"))
        except (TypeError, ValueError):
            raise FeedbackError("Please rate your experience from 1 to 5") from None
        if not 1 <= experience <= 5:
            raise FeedbackError("Please rate your experience from 1 to 5")
        return cls(
            name=name,
            email=email,
            experience=experience,
            improvements=str(payload.get("improvements") or "").strip(),
            issues=str(payload.get("issues") or "").strip(),
        )

    def to_message(self, recipient: str) -> Message:
        html = (
            "<h2>New Feedback Received</h2>"
            f"<p><strong>Name:</strong> {escape(self.name)}</p>"
            f"<p><strong>Email:</strong> {escape(self.email)}</p>"
            f"<p><strong>Experience Rating:</strong> {'⭐' * self.experience} ({self.experience}/5)</p>"
            "<p><strong>Suggestions:</strong></p>"
            f"<p>{escape(self.improvements) or 'None provided'}</p>"
            "<p><strong>Issues Faced:</strong></p>"
            f"<p>{escape(self.issues) or 'None reported'}</p>"
            "<hr>"
            '<p style="color: gray; font-size: 12px;">Sent from AlgoVision Feedback Form</p>'
        )
        return Message(to=recipient, subject=f"AlgoVision Feedback from {self.name}", html=html)


Sender = Callable[[Message], None]


def log_sender(message: Message) -> None:
    log.info("feedback for %s: %s", message.to, message.subject)
