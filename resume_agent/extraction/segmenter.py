"""Header-anchored section segmentation.

A section starts at one of its header synonyms and runs until the next
header synonym belonging to any *other* tracked label (or end of text). The
first boundary found wins, so body text that happens to contain another
header keyword ends the section early. That is a known limitation of the
heuristic and callers should not expect nested headers to work.
"""

import logging
import re
from functools import lru_cache
from typing import Mapping, Sequence

from resume_agent.extraction.patterns import MIN_LIST_ITEM_LENGTH
from resume_agent.utils.text_processing import ensure_text, strip_list_marker

logger = logging.getLogger("resume_agent.extraction")

HEADER_SEPARATOR = r"[：:\s]*"


def _alternation(words: Sequence[str]) -> str:
    # Longest first so the lookahead reports the full header
    ordered = sorted(set(words), key=len, reverse=True)
    return "|".join(re.escape(w) for w in ordered)


@lru_cache(maxsize=256)
def _section_pattern(synonym: str, boundaries: tuple[str, ...]) -> re.Pattern:
    stop = _alternation(boundaries)
    lookahead = rf"(?={stop}|\Z)" if stop else r"\Z"
    return re.compile(
        rf"{re.escape(synonym)}{HEADER_SEPARATOR}(.*?){lookahead}",
        re.IGNORECASE | re.DOTALL,
    )


def segment(text: str, table: Mapping[str, Sequence[str]]) -> dict[str, str]:
    """Find each label's section in text.

    Args:
        text: Source text.
        table: Mapping of label -> header synonyms, tried in order.

    Returns:
        Mapping of label -> trimmed section body. Labels whose header never
        appears (or whose body is empty) are left out.
    """
    text = ensure_text(text)
    sections: dict[str, str] = {}

    for label, synonyms in table.items():
        boundaries = tuple(
            s for other, other_synonyms in table.items() if other != label for s in other_synonyms
        )
        for synonym in synonyms:
            match = _section_pattern(synonym, boundaries).search(text)
            if not match:
                continue
            body = match.group(1).strip()
            if body:
                sections[label] = body
                logger.debug("Section '%s' anchored at '%s' (%d chars)", label, synonym, len(body))
                break

    return sections


def split_list_items(section: str) -> list[str]:
    """Turn a section body into list items, one per line.

    Ordinals and bullet markers are stripped from the start of each line and
    lines left with fewer than MIN_LIST_ITEM_LENGTH characters are dropped.
    """
    items = []
    for line in section.split("\n"):
        item = strip_list_marker(line)
        if len(item) >= MIN_LIST_ITEM_LENGTH:
            items.append(item)
    return items
