"""Customized resume data model and its review/send lifecycle."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from resume_agent.jobs.models import JobInfo

DRAFT = "draft"
PENDING_REVIEW = "pending_review"
APPROVED = "approved"
SENT = "sent"
FAILED = "failed"

STATUSES = (DRAFT, PENDING_REVIEW, APPROVED, SENT, FAILED)

# Review can be skipped: pending_review may go straight to sent/failed.
ALLOWED_TRANSITIONS = {
    DRAFT: {PENDING_REVIEW},
    PENDING_REVIEW: {APPROVED, SENT, FAILED},
    APPROVED: {SENT, FAILED},
    SENT: set(),
    FAILED: set(),
}


@dataclass
class CustomizedContent:
    """The four generated texts, whichever writer produced them."""

    customized_text: str
    cover_letter: str
    email_subject: str
    email_body: str


@dataclass
class CustomizedResume:
    """A resume tailored to one job.

    `job_info` is a private snapshot of the job at customization time. Only
    `status` and `sent_at` change afterwards, through `transition`.
    """

    base_resume_id: str
    job_info: JobInfo
    customized_text: str
    customized_file_name: str
    cover_letter: str
    email_subject: str
    email_body: str
    status: str = PENDING_REVIEW
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: str = field(default_factory=lambda: datetime.now().isoformat())
    sent_at: Optional[str] = None

    def transition(self, new_status: str) -> None:
        """Move to new_status, stamping sent_at on delivery.

        Raises ValueError for unknown statuses and disallowed moves.
        """
        if new_status not in STATUSES:
            raise ValueError(f"Unknown status: {new_status}")
        if new_status not in ALLOWED_TRANSITIONS[self.status]:
            raise ValueError(f"Cannot move customized resume {self.id} from {self.status} to {new_status}")

        self.status = new_status
        if new_status == SENT:
            self.sent_at = datetime.now().isoformat()

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "base_resume_id": self.base_resume_id,
            "job_info": self.job_info.to_dict(),
            "customized_text": self.customized_text,
            "customized_file_name": self.customized_file_name,
            "cover_letter": self.cover_letter,
            "email_subject": self.email_subject,
            "email_body": self.email_body,
            "status": self.status,
            "created_at": self.created_at,
            "sent_at": self.sent_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CustomizedResume":
        return cls(
            id=data["id"],
            base_resume_id=data["base_resume_id"],
            job_info=JobInfo.from_dict(data["job_info"]),
            customized_text=data.get("customized_text", ""),
            customized_file_name=data.get("customized_file_name", ""),
            cover_letter=data.get("cover_letter", ""),
            email_subject=data.get("email_subject", ""),
            email_body=data.get("email_body", ""),
            status=data.get("status", PENDING_REVIEW),
            created_at=data.get("created_at", ""),
            sent_at=data.get("sent_at"),
        )
