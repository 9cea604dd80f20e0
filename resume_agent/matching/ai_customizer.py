"""OpenAI resume rewriting (optional, requires API key)."""

import json
import logging
from typing import Optional

from resume_agent.jobs.models import JobInfo
from resume_agent.matching.models import CustomizedContent
from resume_agent.profile.models import ResumeData

logger = logging.getLogger("resume_agent.matching.ai")

REQUIRED_KEYS = ("customized_text", "cover_letter", "email_subject", "email_body")


class AIContentWriter:
    """Writes the tailored resume and application email with an OpenAI model.

    Calling the writer raises on any API or parsing problem so the caller can
    fall back to the template writer.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        temperature: float = 0.3,
        max_tokens: int = 2000,
        base_url: Optional[str] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.base_url = base_url or None

    def _client(self):
        try:
            from openai import OpenAI
        except ImportError:
            raise ImportError("openai package required for AI customization. Install with: pip install openai")

        return OpenAI(api_key=self.api_key, base_url=self.base_url)

    def __call__(self, resume: ResumeData, job: JobInfo) -> CustomizedContent:
        prompt = build_prompt(resume, job)

        try:
            response = self._client().chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
            content = parse_response(response.choices[0].message.content or "")
        except json.JSONDecodeError as e:
            logger.warning("Failed to parse AI response as JSON: %s", e)
            raise
        except Exception as e:
            logger.warning("AI customization failed for '%s': %s", job.title, e)
            raise

        logger.debug("AI customized resume %s for '%s' at %s", resume.id, job.title, job.company)
        return content


def build_prompt(resume: ResumeData, job: JobInfo) -> str:
    lines = [f"岗位: {job.title}", f"公司: {job.company}", f"地点: {job.location or ''}", "任职要求:"]
    lines += [f"- {r}" for r in job.requirements]
    lines.append("工作职责:")
    lines += [f"- {r}" for r in job.responsibilities]
    lines.append(f"联系人: {job.contact_name or 'HR'}")
    lines.append(f"文章: {job.article_title} {job.article_url}")
    job_summary = "\n".join(lines)

    return (
        "你是一名求职顾问。请根据岗位信息改写候选人的简历，并撰写求职信和投递邮件。\n"
        "只能重新组织和强调简历中已有的内容，不得编造经历。\n\n"
        f"岗位信息:\n{job_summary}\n\n"
        f"候选人简历:\n{resume.raw_text[:6000]}\n\n"
        "只返回一个 JSON 对象（不要使用 markdown），包含以下字符串字段:\n"
        '- "customized_text": 定制后的完整简历文本\n'
        '- "cover_letter": 求职信\n'
        '- "email_subject": 邮件主题\n'
        '- "email_body": 邮件正文'
    )


def parse_response(content: str) -> CustomizedContent:
    """Parse the model's JSON answer; raises ValueError when a field is missing."""
    content = content.strip()

    # Handle potential markdown code blocks
    if content.startswith("```"):
        content = content.split("\n", 1)[1].rsplit("```", 1)[0].strip()

    result = json.loads(content)
    if not isinstance(result, dict):
        raise ValueError("AI response is not a JSON object")

    missing = [key for key in REQUIRED_KEYS if not isinstance(result.get(key), str) or not result[key].strip()]
    if missing:
        raise ValueError(f"AI response missing fields: {', '.join(missing)}")

    return CustomizedContent(**{key: result[key] for key in REQUIRED_KEYS})
