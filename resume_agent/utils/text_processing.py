"""Text normalization, tokenizing, and filename helpers."""

import re

# Punctuation/whitespace class used to split job text into keyword tokens
KEYWORD_SPLIT_PATTERN = re.compile(r"[\s,，、;；:：。.!！?？()（）\[\]【】]")

# Separators between entries of a skills section
SKILL_SPLIT_PATTERN = re.compile(r"[,，、;；\n]")

# Blank line (optionally holding stray spaces) between paragraphs
PARAGRAPH_SPLIT_PATTERN = re.compile(r"\n[ \t\r　]*\n\s*")

# Leading ordinals and bullets: "1.", "2、", "- ", "* ", "• "
LIST_MARKER_PATTERN = re.compile(r"^[\d.、\-*•\s]+")

ILLEGAL_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f\x7f]')

MAX_FILENAME_LENGTH = 120
DEFAULT_FILENAME = "resume_customized"


def ensure_text(value: str | bytes | None) -> str:
    """Coerce caller input to str; undecodable bytes become replacement chars."""
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


def is_latin(token: str) -> bool:
    """True when the token has no characters outside ASCII."""
    return token.isascii()


def keyword_key(token: str) -> str:
    """Comparison key: Latin tokens compare case-insensitively, CJK verbatim."""
    return token.lower() if is_latin(token) else token


def tokenize_keywords(text: str, min_length: int = 2) -> list[str]:
    """Split text on the keyword punctuation class and dedupe, keeping first occurrence."""
    seen = set()
    tokens = []
    for raw in KEYWORD_SPLIT_PATTERN.split(text):
        token = raw.strip()
        if len(token) < min_length:
            continue
        key = keyword_key(token)
        if key in seen:
            continue
        seen.add(key)
        tokens.append(token)
    return tokens


def split_skills(text: str) -> list[str]:
    """Split a skills section into trimmed, non-empty entries."""
    return [s.strip() for s in SKILL_SPLIT_PATTERN.split(text) if s.strip()]


def split_paragraphs(text: str) -> list[str]:
    """Split text on blank lines."""
    return [p for p in PARAGRAPH_SPLIT_PATTERN.split(text.strip()) if p.strip()]


def strip_list_marker(line: str) -> str:
    return LIST_MARKER_PATTERN.sub("", line).strip()


def sanitize_file_name(raw_name: str) -> str:
    """Make a string safe for use as a file name stem.

    Illegal path characters, control characters and whitespace runs become a
    single underscore. The result is capped at MAX_FILENAME_LENGTH and falls
    back to DEFAULT_FILENAME when nothing usable is left.
    """
    name = ILLEGAL_FILENAME_CHARS.sub("_", raw_name)
    name = re.sub(r"\s+", "_", name)
    name = re.sub(r"_+", "_", name)
    name = name[:MAX_FILENAME_LENGTH].strip("_")
    return name or DEFAULT_FILENAME
