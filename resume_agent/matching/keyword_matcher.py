"""Keyword derivation and keyword-overlap reordering (default, free customizer)."""

import logging

from resume_agent.jobs.models import JobInfo
from resume_agent.utils.text_processing import split_paragraphs, split_skills, tokenize_keywords

logger = logging.getLogger("resume_agent.matching.keyword")

PARAGRAPH_SEPARATOR = "\n\n"
SKILL_SEPARATOR = "、"
MATCH_LABEL = "核心匹配能力"


def derive_keywords(job: JobInfo) -> list[str]:
    """Mine the keyword set from a job's title, requirements and responsibilities.

    Returned as a list in first-seen order so that matched keywords display
    in a stable order; there are no duplicates.
    """
    text = " ".join([job.title, *job.requirements, *job.responsibilities])
    keywords = tokenize_keywords(text)
    logger.debug("Derived %d keywords from '%s'", len(keywords), job.title)
    return keywords


def score_text(text: str, keywords: list[str]) -> int:
    """Number of keywords appearing verbatim in text."""
    return sum(1 for k in keywords if k in text)


def reorder_paragraphs(text: str, keywords: list[str]) -> str:
    """Put the paragraphs mentioning the most keywords first.

    Paragraphs with equal scores keep their original relative order.
    """
    paragraphs = split_paragraphs(text)
    ranked = sorted(paragraphs, key=lambda p: score_text(p, keywords), reverse=True)
    return PARAGRAPH_SEPARATOR.join(ranked)


def is_skill_match(skill: str, keywords: list[str]) -> bool:
    skill_lower = skill.lower()
    return any(k.lower() in skill_lower or skill_lower in k.lower() for k in keywords)


def reorder_skills(text: str, keywords: list[str]) -> str:
    """Move skills related to any keyword to the front.

    A skill is related when it contains a keyword or a keyword contains it,
    ignoring case. Both groups keep their original order.
    """
    skills = split_skills(text)
    matched = [s for s in skills if is_skill_match(s, keywords)]
    unmatched = [s for s in skills if not is_skill_match(s, keywords)]
    return SKILL_SEPARATOR.join(matched + unmatched)


def matched_keywords(text: str, keywords: list[str]) -> list[str]:
    return [k for k in keywords if k in text]


def annotate_summary(summary: str, keywords: list[str]) -> str:
    """Append a line listing the keywords the summary already mentions."""
    matched = matched_keywords(summary, keywords)
    if not matched:
        return summary
    return f"{summary}\n{MATCH_LABEL}: {SKILL_SEPARATOR.join(matched)}"
