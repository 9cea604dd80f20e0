"""Tests for the article-to-text adapters."""

import pytest

from resume_agent.extraction import article_source
from resume_agent.extraction.article_source import article_from_html, article_from_text, fetch_article

ARTICLE_HTML = (
    "<html><head><title>页面标题</title></head><body>"
    '<h1 class="rich_media_title"> Acme 招聘季 </h1>'
    '<a id="js_name">Acme科技</a>'
    '<div id="js_content">'
    "<p><span>招聘：</span><span>后端工程师</span></p>"
    "<p>任职要求</p>"
    "<p>1. 熟悉Go</p>"
    "<p>2. 熟悉MySQL<br>3. 熟悉Redis</p>"
    "<p>联系：<span>hr@acme.com</span></p>"
    "<script>var x = 1;</script>"
    "</div>"
    "</body></html>"
)


class FakeResponse:
    def __init__(self, text, encoding=None):
        self.text = text
        self.encoding = encoding
        self.apparent_encoding = "utf-8"


class TestArticleFromHtml:
    def test_renders_article_body(self):
        article = article_from_html(ARTICLE_HTML, "https://mp.weixin.qq.com/s/abc")
        assert article.text.splitlines() == [
            "招聘：后端工程师",
            "任职要求",
            "1. 熟悉Go",
            "2. 熟悉MySQL",
            "3. 熟悉Redis",
            "联系：hr@acme.com",
        ]
        assert article.title == "Acme 招聘季"
        assert article.account_name == "Acme科技"
        assert article.url == "https://mp.weixin.qq.com/s/abc"

    def test_extract(self):
        job = article_from_html(ARTICLE_HTML, "https://mp.weixin.qq.com/s/abc").extract()
        assert job.title == "后端工程师"
        assert job.company == "Acme科技"
        assert job.requirements == ["熟悉Go", "熟悉MySQL", "熟悉Redis"]
        assert job.contact_email == "hr@acme.com"
        assert job.article_title == "Acme 招聘季"

    def test_falls_back_to_body_and_page_title(self):
        html = "<html><head><title>T</title></head><body><p>招聘：测试工程师</p></body></html>"
        article = article_from_html(html)
        assert article.title == "T"
        assert article.text == "招聘：测试工程师"
        assert article.account_name == ""


class TestArticleFromText:
    def test_passthrough(self):
        article = article_from_text("招聘：后端工程师".encode("utf-8"), url="a.txt", title="标题")
        assert article.text == "招聘：后端工程师"
        assert article.title == "标题"
        assert article.extract().title == "后端工程师"


class TestFetchArticle:
    def test_failed_download_raises(self, monkeypatch):
        monkeypatch.setattr(article_source, "safe_get", lambda url, session=None, timeout=30: None)
        with pytest.raises(ConnectionError):
            fetch_article("https://example.com/a", max_retries=0)

    def test_session_is_closed(self, monkeypatch):
        closed = []

        class Session:
            def __enter__(self):
                return self

            def __exit__(self, *exc_info):
                closed.append(True)

        monkeypatch.setattr(article_source, "create_session", lambda max_retries=3: Session())
        monkeypatch.setattr(
            article_source,
            "safe_get",
            lambda url, session=None, timeout=30: FakeResponse(ARTICLE_HTML),
        )
        fetch_article("https://example.com/a")
        assert closed == [True]

    def test_downloaded_page_is_rendered(self, monkeypatch):
        monkeypatch.setattr(
            article_source,
            "safe_get",
            lambda url, session=None, timeout=30: FakeResponse(ARTICLE_HTML),
        )
        article = fetch_article("https://example.com/a", max_retries=0)
        assert article.url == "https://example.com/a"
        assert article.account_name == "Acme科技"
        assert "1. 熟悉Go" in article.text
