"""Tests for resume customization: templates, writer fallback and AI parsing."""

import json
from types import SimpleNamespace

import pytest

from resume_agent.config import AppConfig
from resume_agent.jobs.models import JobInfo
from resume_agent.matching.ai_customizer import AIContentWriter, parse_response
from resume_agent.matching.customizer import (
    ResumeCustomizer,
    build_customizer,
    build_safe_file_name,
    template_writer,
)
from resume_agent.matching.models import PENDING_REVIEW, CustomizedContent
from resume_agent.profile.models import ParsedSections, ResumeData


def make_resume(**overrides):
    sections = dict(
        name="张三",
        phone="13812345678",
        email="zs@example.com",
        summary="熟悉Go和分布式系统",
        experience="Java项目\n\nGo微服务",
        skills="沟通能力, Go",
        education="某某大学",
    )
    sections.update(overrides)
    return ResumeData(file_name="zs.txt", raw_text="张三的简历", parsed_sections=ParsedSections(**sections))


def make_job(**overrides):
    fields = dict(
        title="后端工程师",
        company="Acme/Corp",
        requirements=["熟悉 Go 语言", "了解 分布式 系统", "会写 SQL", "有责任心"],
        contact_email="hr@acme.com",
        article_title="Acme招聘",
        article_url="https://example.com/a",
    )
    fields.update(overrides)
    return JobInfo(**fields)


AI_CONTENT = {
    "customized_text": "AI 简历",
    "cover_letter": "AI 求职信",
    "email_subject": "AI 主题",
    "email_body": "AI 正文",
}


class FakeCompletions:
    def __init__(self, content):
        self.content = content

    def create(self, **kwargs):
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def fake_client(content):
    return SimpleNamespace(chat=SimpleNamespace(completions=FakeCompletions(content)))


class TestFileName:
    def test_example(self):
        assert build_safe_file_name("张三", "Acme/Corp", "后端:工程师") == "张三_Acme_Corp_后端_工程师"

    def test_whitespace_collapsed(self):
        assert build_safe_file_name("Li  Lei", "A B", "C\tD") == "Li_Lei_A_B_C_D"

    def test_missing_name(self):
        assert build_safe_file_name("", "Acme", "测试") == "resume_Acme_测试"


class TestTemplateCustomization:
    def test_customized_resume(self):
        customized = ResumeCustomizer().customize(make_resume(), make_job())
        text = customized.customized_text
        assert "目标岗位: 后端工程师" in text
        assert "Go微服务\n\nJava项目" in text
        assert "Go、沟通能力" in text
        assert "核心匹配能力: 熟悉、Go、分布式、系统" in text
        assert customized.customized_file_name == "张三_Acme_Corp_后端工程师.txt"
        assert customized.status == PENDING_REVIEW
        assert customized.sent_at is None

    def test_cover_letter_and_email(self):
        resume = make_resume()
        customized = ResumeCustomizer().customize(resume, make_job())
        letter = customized.cover_letter
        assert letter.startswith("尊敬的HR，您好！")
        assert "个人简介：熟悉Go和分布式系统" in letter
        assert "熟悉 Go 语言、了解 分布式 系统、会写 SQL" in letter
        assert "有责任心" not in letter
        assert letter.endswith("张三\n13812345678\nzs@example.com")
        assert customized.email_subject == "求职申请 - 后端工程师 - 张三"
        assert customized.email_body.startswith(letter)
        assert customized.email_body.endswith("文章来源: Acme招聘\nhttps://example.com/a")
        assert customized.base_resume_id == resume.id

    def test_contact_name_used_as_salutation(self):
        letter = template_writer(make_resume(), make_job(contact_name="王女士")).cover_letter
        assert letter.startswith("尊敬的王女士，您好！")

    def test_summary_excerpt_is_capped(self):
        letter = template_writer(make_resume(summary="好" * 300), make_job()).cover_letter
        assert "个人简介：" + "好" * 150 in letter
        assert "好" * 151 not in letter

    def test_missing_name_uses_placeholder(self):
        content = template_writer(make_resume(name=""), make_job())
        assert content.email_subject == "求职申请 - 后端工程师 - 候选人"

    def test_job_is_snapshotted(self):
        job = make_job()
        customized = ResumeCustomizer().customize(make_resume(), job)
        job.requirements.append("新增要求")
        job.title = "改过的标题"
        assert customized.job_info is not job
        assert "新增要求" not in customized.job_info.requirements
        assert customized.job_info.title == "后端工程师"


class TestWriterFallback:
    def test_writer_output_used(self):
        customizer = ResumeCustomizer(lambda resume, job: CustomizedContent(**AI_CONTENT))
        customized = customizer.customize(make_resume(), make_job())
        assert customized.customized_text == "AI 简历"
        assert customized.email_body == "AI 正文"
        assert customized.customized_file_name == "张三_Acme_Corp_后端工程师.txt"

    def test_failing_writer_falls_back_to_templates(self):
        def broken(resume, job):
            raise RuntimeError("quota exceeded")

        resume, job = make_resume(), make_job()
        expected = template_writer(resume, job)
        customized = ResumeCustomizer(broken).customize(resume, job)
        assert customized.customized_text == expected.customized_text
        assert customized.cover_letter == expected.cover_letter
        assert customized.email_subject == expected.email_subject
        assert customized.email_body == expected.email_body

    def test_ai_writer_with_bad_json_falls_back(self, monkeypatch):
        monkeypatch.setattr(AIContentWriter, "_client", lambda self: fake_client("not json"))
        customized = ResumeCustomizer(AIContentWriter(api_key="k")).customize(make_resume(), make_job())
        assert customized.email_subject == "求职申请 - 后端工程师 - 张三"

    def test_ai_writer_success(self, monkeypatch):
        answer = "```json\n" + json.dumps(AI_CONTENT, ensure_ascii=False) + "\n```"
        monkeypatch.setattr(AIContentWriter, "_client", lambda self: fake_client(answer))
        content = AIContentWriter(api_key="k")(make_resume(), make_job())
        assert content == CustomizedContent(**AI_CONTENT)


class TestParseResponse:
    def test_plain_json(self):
        assert parse_response(json.dumps(AI_CONTENT)).cover_letter == "AI 求职信"

    def test_missing_field(self):
        partial = {k: v for k, v in AI_CONTENT.items() if k != "email_body"}
        with pytest.raises(ValueError, match="email_body"):
            parse_response(json.dumps(partial))

    def test_empty_field(self):
        with pytest.raises(ValueError):
            parse_response(json.dumps({**AI_CONTENT, "cover_letter": "  "}))

    def test_not_an_object(self):
        with pytest.raises(ValueError):
            parse_response("[1, 2]")


class TestBuildCustomizer:
    def test_templates_by_default(self):
        assert build_customizer(AppConfig()).writer is None

    def test_ai_needs_key(self):
        config = AppConfig()
        config.customizer.use_ai = True
        assert build_customizer(config).writer is None

        config.api_keys.openai_api_key = "sk-test"
        config.customizer.model = "gpt-4o"
        writer = build_customizer(config).writer
        assert isinstance(writer, AIContentWriter)
        assert writer.model == "gpt-4o"
