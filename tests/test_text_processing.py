"""Tests for text processing utilities."""

from resume_agent.utils.text_processing import (
    DEFAULT_FILENAME,
    MAX_FILENAME_LENGTH,
    ensure_text,
    keyword_key,
    sanitize_file_name,
    split_skills,
    strip_list_marker,
    tokenize_keywords,
)


class TestEnsureText:
    def test_decodes_bytes(self):
        assert ensure_text("任职要求".encode("utf-8")) == "任职要求"

    def test_invalid_bytes_replaced(self):
        assert ensure_text(b"ok\xff") == "ok\ufffd"

    def test_none(self):
        assert ensure_text(None) == ""


class TestTokenizeKeywords:
    def test_splits_on_mixed_punctuation(self):
        text = "熟悉Go、Python；了解（Docker）【K8s】"
        assert tokenize_keywords(text) == ["熟悉Go", "Python", "了解", "Docker", "K8s"]

    def test_keeps_first_spelling(self):
        assert tokenize_keywords("mysql MySQL MYSQL") == ["mysql"]

    def test_keyword_key(self):
        assert keyword_key("MySQL") == "mysql"
        assert keyword_key("熟悉Go") == "熟悉Go"


class TestSplitting:
    def test_split_skills(self):
        assert split_skills("Go，Python;  ；Redis\n\n沟通") == ["Go", "Python", "Redis", "沟通"]

    def test_strip_list_marker(self):
        assert strip_list_marker("1. 熟悉Go") == "熟悉Go"
        assert strip_list_marker("12、 有责任心") == "有责任心"
        assert strip_list_marker("• 英语流利") == "英语流利"
        assert strip_list_marker("熟悉5G协议") == "熟悉5G协议"


class TestSanitizeFileName:
    def test_illegal_characters(self):
        assert sanitize_file_name('a<b>c:d"e|f?g*h') == "a_b_c_d_e_f_g_h"

    def test_control_characters(self):
        assert sanitize_file_name("a\x00b") == "a_b"

    def test_no_double_underscores(self):
        assert sanitize_file_name("a // b") == "a_b"

    def test_length_capped(self):
        assert len(sanitize_file_name("简" * 200)) == MAX_FILENAME_LENGTH

    def test_empty_result_uses_default(self):
        assert sanitize_file_name("///") == DEFAULT_FILENAME
        assert sanitize_file_name("") == DEFAULT_FILENAME
