"""Tests for the SQLite record store."""

import os
import tempfile

import pytest

from resume_agent.jobs.models import JobInfo
from resume_agent.matching.models import APPROVED, PENDING_REVIEW, SENT, CustomizedResume
from resume_agent.profile.models import ParsedSections, ResumeData
from resume_agent.storage.database import RecordStore


@pytest.fixture
def store():
    with tempfile.TemporaryDirectory() as d:
        s = RecordStore(os.path.join(d, "test.db"))
        yield s
        s.close()


def make_resume():
    return ResumeData(
        file_name="zs.txt",
        raw_text="张三\n13812345678",
        parsed_sections=ParsedSections(name="张三", phone="13812345678"),
    )


def make_customized(resume_id):
    return CustomizedResume(
        base_resume_id=resume_id,
        job_info=JobInfo(title="后端工程师", company="Acme", requirements=["熟悉Go"], contact_email="hr@acme.com"),
        customized_text="定制简历",
        customized_file_name="张三_Acme_后端工程师.txt",
        cover_letter="求职信",
        email_subject="求职申请 - 后端工程师 - 张三",
        email_body="正文",
    )


class TestResumes:
    def test_save_and_get(self, store):
        resume = make_resume()
        store.save_resume(resume)
        assert store.get_resume(resume.id) == resume

    def test_get_missing(self, store):
        assert store.get_resume("nope") is None

    def test_save_is_insert_only(self, store):
        resume = make_resume()
        store.save_resume(resume)
        resume.raw_text = "changed"
        store.save_resume(resume)
        assert store.get_resume(resume.id).raw_text == "张三\n13812345678"

    def test_list(self, store):
        first, second = make_resume(), make_resume()
        store.save_resume(first)
        store.save_resume(second)
        assert {r.id for r in store.list_resumes()} == {first.id, second.id}


class TestCustomizedResumes:
    def test_save_and_get(self, store):
        customized = make_customized("r1")
        store.save_customized_resume(customized)
        loaded = store.get_customized_resume(customized.id)
        assert loaded == customized
        assert loaded.job_info.requirements == ["熟悉Go"]

    def test_update_status(self, store):
        customized = make_customized("r1")
        store.save_customized_resume(customized)

        store.update_status(customized.id, APPROVED)
        updated = store.update_status(customized.id, SENT)
        assert updated.sent_at is not None

        loaded = store.get_customized_resume(customized.id)
        assert loaded.status == SENT
        assert loaded.sent_at == updated.sent_at
        assert loaded.customized_text == "定制简历"

    def test_disallowed_transition(self, store):
        customized = make_customized("r1")
        store.save_customized_resume(customized)
        with pytest.raises(ValueError):
            store.update_status(customized.id, "draft")
        assert store.get_customized_resume(customized.id).status == PENDING_REVIEW

    def test_unknown_id(self, store):
        with pytest.raises(KeyError):
            store.update_status("nope", SENT)


class TestStats:
    def test_empty(self, store):
        stats = store.get_stats()
        assert stats["resume_count"] == 0
        assert stats["customized_count"] == 0
        assert stats["total_sent"] == 0
        assert stats["by_status"] == {}

    def test_counts(self, store):
        resume = make_resume()
        store.save_resume(resume)
        sent = make_customized(resume.id)
        pending = make_customized(resume.id)
        store.save_customized_resume(sent)
        store.save_customized_resume(pending)
        store.update_status(sent.id, SENT)

        stats = store.get_stats()
        assert stats["resume_count"] == 1
        assert stats["customized_count"] == 2
        assert stats["total_sent"] == 1
        assert stats["sent_today"] == 1
        assert stats["by_status"] == {SENT: 1, PENDING_REVIEW: 1}
