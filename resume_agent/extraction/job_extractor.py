"""Job posting extraction from recruitment article text.

The same cascades serve both input surfaces: raw article text posted by a
caller (`extract_job_info`) and an article rendered to text from its HTML
(`extract_from_article`). The former only enriches; its output fills gaps in
whatever the caller already trusts and never overwrites it.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Optional, Sequence

from resume_agent.extraction.patterns import (
    COMPANY_PATTERNS,
    CONTACT_NAME_PATTERNS,
    DEPARTMENT_PATTERN,
    EMAIL_NORMALIZATIONS,
    EMAIL_PATTERNS,
    JOB_SECTION_HEADERS,
    LOCATION_PATTERNS,
    POSTING_BLOCK_WINDOW,
    POSTING_CUE,
    SALARY_PATTERNS,
    STRICT_EMAIL,
    TITLE_PATTERNS,
)
from resume_agent.extraction.segmenter import segment, split_list_items
from resume_agent.jobs.models import JobInfo
from resume_agent.utils.text_processing import ensure_text

logger = logging.getLogger("resume_agent.extraction")

UNKNOWN_COMPANY = "未知公司"


@dataclass
class JobBlock:
    """The slice of an article describing a single opening."""

    title: str
    text: str
    requirements: list[str] = field(default_factory=list)
    responsibilities: list[str] = field(default_factory=list)


def first_match(patterns: Sequence[re.Pattern], text: str, group: int = 1) -> str:
    """Try patterns in priority order and return the first capture, trimmed."""
    for pattern in patterns:
        match = pattern.search(text)
        if match:
            value = match.group(group).strip()
            if value:
                return value
    return ""


def normalize_email(raw: str) -> str:
    """Undo anti-scraping formatting: spaces, full-width and bracketed at/dot."""
    email = raw
    for pattern, replacement in EMAIL_NORMALIZATIONS:
        email = pattern.sub(replacement, email)
    return email


def find_contact_email(text: str) -> str:
    """Return the first address found, trying the strictest pattern first.

    Only one address is returned even when the article lists several. A
    match that does not normalize into a valid address is skipped.
    """
    for pattern in EMAIL_PATTERNS:
        for match in pattern.finditer(text):
            email = normalize_email(match.group(0))
            if STRICT_EMAIL.fullmatch(email):
                return email
            logger.debug("Discarding unusable email candidate: %r", match.group(0))
    return ""


def extract_sections(text: str) -> tuple[list[str], list[str]]:
    """Return (requirements, responsibilities) list items found in text."""
    sections = segment(text, JOB_SECTION_HEADERS)
    return (
        split_list_items(sections.get("requirements", "")),
        split_list_items(sections.get("responsibilities", "")),
    )


def split_job_blocks(text: str) -> list[JobBlock]:
    """Split an article into one block per announced opening.

    A block runs from the end of its announcement line to the next
    announcement, or POSTING_BLOCK_WINDOW characters when it is the last.
    """
    text = ensure_text(text)
    cues = list(POSTING_CUE.finditer(text))
    blocks = []

    for i, cue in enumerate(cues):
        start = cue.end()
        end = cues[i + 1].start() if i + 1 < len(cues) else start + POSTING_BLOCK_WINDOW
        block_text = text[start:end]
        requirements, responsibilities = extract_sections(block_text)
        blocks.append(
            JobBlock(
                title=cue.group(1).strip(),
                text=block_text,
                requirements=requirements,
                responsibilities=responsibilities,
            )
        )

    return blocks


def extract_job_info(text: str | bytes, url: str = "") -> JobInfo:
    """Extract a partial JobInfo from raw article text.

    Only the first posting block contributes title, requirements and
    responsibilities; later blocks are ignored.
    """
    text = ensure_text(text)
    job = JobInfo(article_url=url)

    job.contact_email = find_contact_email(text)

    blocks = split_job_blocks(text)
    if blocks:
        first = blocks[0]
        job.title = first.title
        job.requirements = first.requirements
        job.responsibilities = first.responsibilities
        if len(blocks) > 1:
            logger.info("Article lists %d postings; using the first ('%s')", len(blocks), first.title)

    job.department = _optional(DEPARTMENT_PATTERN.search(text))
    job.salary = first_match(SALARY_PATTERNS, text) or None
    job.location = first_match(LOCATION_PATTERNS, text) or None
    job.contact_name = first_match(CONTACT_NAME_PATTERNS, text) or None

    logger.debug(
        "Extracted job '%s': %d requirements, %d responsibilities, email=%s",
        job.title, len(job.requirements), len(job.responsibilities), job.contact_email or "-",
    )
    return job


def merge_job_info(primary: JobInfo, fallback: JobInfo) -> JobInfo:
    """Fill empty fields of primary from fallback, returning a new JobInfo.

    Non-empty fields of primary always win.
    """
    merged = primary.snapshot()
    for name, value in fallback.to_dict().items():
        if name == "extracted_at":
            continue
        if not getattr(merged, name) and value:
            setattr(merged, name, list(value) if isinstance(value, list) else value)
    return merged


def extract_from_article(
    text: str | bytes,
    url: str = "",
    article_title: str = "",
    account_name: str = "",
) -> JobInfo:
    """Build a complete JobInfo from an article's text.

    Page-level cascades run over the whole article first; the posting-block
    extraction then fills anything they missed.
    """
    text = ensure_text(text)
    requirements, responsibilities = extract_sections(text)

    page = JobInfo(
        title=first_match(TITLE_PATTERNS, text) or article_title.strip(),
        company=first_match(COMPANY_PATTERNS, text) or account_name.strip(),
        location=first_match(LOCATION_PATTERNS, text) or None,
        requirements=requirements,
        responsibilities=responsibilities,
        salary=first_match(SALARY_PATTERNS, text) or None,
        contact_email=find_contact_email(text),
        contact_name=first_match(CONTACT_NAME_PATTERNS, text) or None,
        article_url=url,
        article_title=article_title.strip(),
    )

    job = merge_job_info(page, extract_job_info(text, url))
    if not job.company:
        job.company = UNKNOWN_COMPANY

    logger.info(
        "Extracted '%s' at %s (%d requirements, contact %s)",
        job.title or "untitled", job.company, len(job.requirements), job.contact_email or "none",
    )
    return job


def _optional(match: Optional[re.Match]) -> Optional[str]:
    if match is None:
        return None
    return match.group(1).strip() or None
