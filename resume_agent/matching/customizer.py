"""Customizer facade: picks the content writer based on config."""

import logging
from typing import Callable, Optional

from resume_agent.config import AppConfig
from resume_agent.jobs.models import JobInfo
from resume_agent.matching.ai_customizer import AIContentWriter
from resume_agent.matching.keyword_matcher import derive_keywords
from resume_agent.matching.models import CustomizedContent, CustomizedResume
from resume_agent.notifications.templates import (
    render_cover_letter,
    render_customized_resume,
    render_email_body,
    render_email_subject,
)
from resume_agent.profile.models import ResumeData
from resume_agent.utils.text_processing import sanitize_file_name

logger = logging.getLogger("resume_agent.matching")

ContentWriter = Callable[[ResumeData, JobInfo], CustomizedContent]

DEFAULT_FILE_STEM = "resume"


def template_writer(resume: ResumeData, job: JobInfo) -> CustomizedContent:
    """Deterministic writer: keyword reordering plus fixed templates."""
    keywords = derive_keywords(job)
    cover_letter = render_cover_letter(resume, job)
    return CustomizedContent(
        customized_text=render_customized_resume(resume, job, keywords),
        cover_letter=cover_letter,
        email_subject=render_email_subject(resume, job),
        email_body=render_email_body(job, cover_letter),
    )


def build_safe_file_name(candidate_name: str, company: str, title: str) -> str:
    """File name stem '{name}_{company}_{title}' with unsafe characters replaced.

    The caller adds the extension.
    """
    return sanitize_file_name(f"{candidate_name or DEFAULT_FILE_STEM}_{company}_{title}")


class ResumeCustomizer:
    """Tailors resumes to jobs.

    An optional writer (e.g. AIContentWriter) is tried first; if it is not
    configured or raises, the template writer produces the result instead.
    """

    def __init__(self, writer: Optional[ContentWriter] = None):
        self.writer = writer

    def generate(self, resume: ResumeData, job: JobInfo) -> CustomizedContent:
        if self.writer is not None:
            try:
                return self.writer(resume, job)
            except Exception as e:
                logger.warning("Content writer failed, using templates: %s", e)
        return template_writer(resume, job)

    def customize(self, resume: ResumeData, job: JobInfo) -> CustomizedResume:
        """Produce a CustomizedResume in pending_review status."""
        snapshot = job.snapshot()
        content = self.generate(resume, snapshot)

        customized = CustomizedResume(
            base_resume_id=resume.id,
            job_info=snapshot,
            customized_text=content.customized_text,
            customized_file_name=f"{build_safe_file_name(resume.parsed_sections.name, snapshot.company, snapshot.title)}.txt",
            cover_letter=content.cover_letter,
            email_subject=content.email_subject,
            email_body=content.email_body,
        )

        logger.info(
            "Customized resume %s for '%s' at %s -> %s",
            resume.id, snapshot.title, snapshot.company, customized.customized_file_name,
        )
        return customized


def build_customizer(config: AppConfig) -> ResumeCustomizer:
    """Create a customizer, with the AI writer when enabled and keyed."""
    use_ai = config.customizer.use_ai and config.api_keys.openai_api_key

    if not use_ai:
        logger.info("Using template customization")
        return ResumeCustomizer()

    logger.info("Using AI customization (%s) with template fallback", config.customizer.model)
    return ResumeCustomizer(
        AIContentWriter(
            api_key=config.api_keys.openai_api_key,
            model=config.customizer.model,
            temperature=config.customizer.temperature,
            max_tokens=config.customizer.max_tokens,
            base_url=config.api_keys.openai_base_url,
        )
    )
