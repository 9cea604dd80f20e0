"""PDF, DOC and text resume parsing."""

import logging
import re
from pathlib import Path
from typing import Optional

from resume_agent.extraction.patterns import MOBILE_PHONE, RESUME_SECTION_HEADERS, STRICT_EMAIL
from resume_agent.extraction.segmenter import segment
from resume_agent.profile.models import SECTION_FIELDS, ParsedSections, ResumeData
from resume_agent.utils.text_processing import ensure_text

logger = logging.getLogger("resume_agent.profile")

SUPPORTED_SUFFIXES = (".pdf", ".doc", ".docx", ".txt", ".md")

# A short standalone line near the top, e.g. "张三". Matches plenty of
# non-names too ("简历", "求职意向"), so treat the result as a guess.
NAME_LINE = re.compile(r"^\s*([^\s,，。.][^\n\r,，。.]{1,4})\s*$", re.MULTILINE)

# Printable ASCII, CJK, CJK punctuation and full-width forms survive the
# binary .doc fallback; everything else becomes a space.
DOC_NOISE = re.compile(r"[^\x20-\x7E\u4e00-\u9fff\u3000-\u303f\uff00-\uffef\n\r\t]")


def parse_resume(file_path: str, file_name: Optional[str] = None) -> ResumeData:
    """Parse a resume file (PDF, DOC/DOCX, TXT or MD) into a ResumeData record."""
    path = Path(file_path)
    text = load_resume_text(path)

    if not text.strip():
        raise ValueError(f"Resume file is empty or unreadable: {file_path}")

    resume = ResumeData(
        file_name=file_name or path.name,
        raw_text=text,
        parsed_sections=parse_sections(text),
    )

    sections = resume.parsed_sections
    logger.info(
        "Parsed resume %s: name=%s, %d/%d sections found",
        resume.file_name,
        sections.name or "?",
        sum(1 for key in SECTION_FIELDS if getattr(sections, key) is not None),
        len(SECTION_FIELDS),
    )
    return resume


def load_resume_text(path: Path) -> str:
    """Read the text out of a resume file according to its extension."""
    if not path.exists():
        raise FileNotFoundError(f"Resume file not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".pdf":
        return _extract_pdf_text(path)
    if suffix == ".docx":
        return _extract_docx_text(path)
    if suffix == ".doc":
        return _extract_doc_text(path)
    if suffix in (".txt", ".md"):
        return path.read_text(encoding="utf-8", errors="replace")

    raise ValueError(f"Unsupported resume format: {suffix} (supported: {', '.join(SUPPORTED_SUFFIXES)})")


def _extract_pdf_text(path: Path) -> str:
    """Extract text from a PDF file using PyPDF2."""
    try:
        from PyPDF2 import PdfReader
    except ImportError:
        raise ImportError("PyPDF2 is required for PDF parsing. Install with: pip install PyPDF2")

    reader = PdfReader(str(path))
    pages = []
    for page in reader.pages:
        text = page.extract_text()
        if text:
            pages.append(text)
    return "\n".join(pages)


def _extract_docx_text(path: Path) -> str:
    """Extract paragraph and table text from a Word file using python-docx."""
    try:
        from docx import Document
    except ImportError:
        raise ImportError("python-docx is required for DOCX parsing. Install with: pip install python-docx")

    document = Document(str(path))
    lines = [paragraph.text for paragraph in document.paragraphs]
    for table in document.tables:
        for row in table.rows:
            lines.extend(cell.text for cell in row.cells)
    return "\n".join(lines)


def _extract_doc_text(path: Path) -> str:
    """Best-effort text from a legacy binary .doc by keeping only readable characters.

    Line breaks are kept so the name line and paragraph breaks survive.
    """
    text = path.read_bytes().decode("utf-8", errors="ignore")
    text = DOC_NOISE.sub(" ", text)
    lines = [re.sub(r"[ \t]+", " ", line).strip() for line in text.splitlines()]
    return re.sub(r"\n{3,}", "\n\n", "\n".join(lines)).strip()


def parse_sections(raw_text: str | bytes) -> ParsedSections:
    """Extract name, contact details and the five content sections.

    Contact email uses the strict pattern only: a candidate's own resume has
    no reason to obfuscate it.
    """
    text = ensure_text(raw_text)
    sections = ParsedSections()

    name_match = NAME_LINE.search(text)
    if name_match:
        sections.name = name_match.group(1).strip()

    phone_match = MOBILE_PHONE.search(text)
    if phone_match:
        sections.phone = phone_match.group(0)

    email_match = STRICT_EMAIL.search(text)
    if email_match:
        sections.email = email_match.group(0)

    for key, body in segment(text, RESUME_SECTION_HEADERS).items():
        setattr(sections, key, body)

    return sections
