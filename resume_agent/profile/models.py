"""Resume data model."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

SECTION_FIELDS = ("education", "experience", "skills", "projects", "summary")


@dataclass
class ParsedSections:
    """Structured fields recovered from a resume's text.

    `name` is always a string ("" when no plausible name line was found);
    every other field is None when it was not found.
    """

    name: str = ""
    phone: Optional[str] = None
    email: Optional[str] = None
    education: Optional[str] = None
    experience: Optional[str] = None
    skills: Optional[str] = None
    projects: Optional[str] = None
    summary: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to dictionary, leaving out fields that were not found."""
        data = {"name": self.name}
        for key in ("phone", "email", *SECTION_FIELDS):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "ParsedSections":
        return cls(
            name=data.get("name") or "",
            **{key: data.get(key) for key in ("phone", "email", *SECTION_FIELDS)},
        )


@dataclass
class ResumeData:
    """An uploaded resume: its text and the sections parsed out of it."""

    file_name: str
    raw_text: str
    parsed_sections: ParsedSections = field(default_factory=ParsedSections)
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    uploaded_at: str = field(default_factory=lambda: datetime.now().isoformat())

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "file_name": self.file_name,
            "raw_text": self.raw_text,
            "parsed_sections": self.parsed_sections.to_dict(),
            "uploaded_at": self.uploaded_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ResumeData":
        return cls(
            id=data["id"],
            file_name=data.get("file_name", ""),
            raw_text=data.get("raw_text", ""),
            parsed_sections=ParsedSections.from_dict(data.get("parsed_sections") or {}),
            uploaded_at=data.get("uploaded_at", ""),
        )
