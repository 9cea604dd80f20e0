"""Plain-text templates for the tailored resume, cover letter and application email."""

from resume_agent.jobs.models import JobInfo
from resume_agent.matching.keyword_matcher import annotate_summary, reorder_paragraphs, reorder_skills
from resume_agent.profile.models import ResumeData

DEFAULT_CANDIDATE_NAME = "候选人"
DEFAULT_SALUTATION = "HR"
SUMMARY_EXCERPT_LENGTH = 150
REQUIREMENTS_MENTIONED = 3
RULE = "─" * 40
PRODUCT_NAME = "简历智投"


def candidate_name(resume: ResumeData) -> str:
    return resume.parsed_sections.name or DEFAULT_CANDIDATE_NAME


def _section(heading: str, body: str) -> str:
    return f"{heading}\n{RULE}\n{body}\n"


def render_customized_resume(resume: ResumeData, job: JobInfo, keywords: list[str]) -> str:
    """Render the resume reorganized for one job.

    Summary gets a matched-keywords line, experience paragraphs and skills
    are reordered by relevance; projects and education are copied as-is.
    """
    sections = resume.parsed_sections

    header = [candidate_name(resume)]
    if sections.phone:
        header.append(f"电话: {sections.phone}")
    if sections.email:
        header.append(f"邮箱: {sections.email}")

    target = [f"目标岗位: {job.title}", f"目标公司: {job.company}"]
    if job.location:
        target.append(f"工作地点: {job.location}")

    parts = ["\n".join(header) + "\n", _section("求职意向", "\n".join(target))]

    if sections.summary:
        parts.append(_section("个人简介", annotate_summary(sections.summary, keywords)))
    if sections.experience:
        parts.append(_section("工作经验", reorder_paragraphs(sections.experience, keywords)))
    if sections.projects:
        parts.append(_section("项目经验", sections.projects))
    if sections.skills:
        parts.append(_section("专业技能", reorder_skills(sections.skills, keywords)))
    if sections.education:
        parts.append(_section("教育背景", sections.education))

    return "\n".join(parts)


def render_cover_letter(resume: ResumeData, job: JobInfo) -> str:
    """Render the cover letter. Returns the letter text."""
    sections = resume.parsed_sections
    salutation = job.contact_name or DEFAULT_SALUTATION

    paragraphs = [
        f"尊敬的{salutation}，您好！",
        f"我在贵公司微信公众号文章中看到{job.title}的招聘信息，非常感兴趣，特此投递简历。",
    ]
    if sections.summary:
        paragraphs.append(f"个人简介：{sections.summary[:SUMMARY_EXCERPT_LENGTH]}")
    if job.requirements:
        highlights = "、".join(job.requirements[:REQUIREMENTS_MENTIONED])
        paragraphs.append(f"我注意到该岗位要求包括{highlights}等，我在相关领域有丰富的经验和积累。")
    paragraphs.append("期待有机会与您进一步交流，感谢您的时间！")
    paragraphs.append("此致\n敬礼")

    signature = [candidate_name(resume), sections.phone or "", sections.email or ""]
    paragraphs.append("\n".join(line for line in signature if line))

    return "\n\n".join(paragraphs)


def render_email_subject(resume: ResumeData, job: JobInfo) -> str:
    return f"求职申请 - {job.title} - {candidate_name(resume)}"


def render_email_body(job: JobInfo, cover_letter: str) -> str:
    """Cover letter plus a footer pointing back at the source article."""
    return (
        f"{cover_letter}\n\n"
        "------\n"
        f"本邮件通过「{PRODUCT_NAME}」系统自动发送\n"
        f"文章来源: {job.article_title}\n"
        f"{job.article_url}"
    )
