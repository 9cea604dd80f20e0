"""Job posting data model."""

import copy
from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import Optional


@dataclass
class JobInfo:
    """Job posting fields extracted from one recruitment article.

    Fields that could not be extracted stay empty ("" / [] / None). The
    contact email is either a valid address or "".
    """

    title: str = ""
    company: str = ""
    department: Optional[str] = None
    location: Optional[str] = None
    requirements: list[str] = field(default_factory=list)
    responsibilities: list[str] = field(default_factory=list)
    salary: Optional[str] = None
    contact_email: str = ""
    contact_name: Optional[str] = None
    article_url: str = ""
    article_title: str = ""
    extracted_at: str = field(default_factory=lambda: datetime.now().isoformat())

    def snapshot(self) -> "JobInfo":
        """Independent deep copy, so later edits to self never leak into it."""
        return copy.deepcopy(self)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "title": self.title,
            "company": self.company,
            "department": self.department,
            "location": self.location,
            "requirements": list(self.requirements),
            "responsibilities": list(self.responsibilities),
            "salary": self.salary,
            "contact_email": self.contact_email,
            "contact_name": self.contact_name,
            "article_url": self.article_url,
            "article_title": self.article_title,
            "extracted_at": self.extracted_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "JobInfo":
        """Build from a dict, accepting camelCase keys from browser payloads."""
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            name = _snake_case(key)
            if name in known:
                kwargs[name] = value
        for list_field in ("requirements", "responsibilities"):
            if kwargs.get(list_field) is None:
                kwargs.pop(list_field, None)
            else:
                kwargs[list_field] = list(kwargs[list_field])
        for text_field in ("title", "company", "contact_email", "article_url", "article_title"):
            if kwargs.get(text_field) is None:
                kwargs.pop(text_field, None)
        return cls(**kwargs)


def _snake_case(key: str) -> str:
    return "".join(f"_{c.lower()}" if c.isupper() else c for c in key)
