import logging
from concurrent.futures import ThreadPoolExecutor

import pytest
from bs4 import BeautifulSoup

from article_parse.models import ArticleResult, ExtractedContent, PageMetadata
from article_parse.pipeline import (
    ArticleParser,
    parse_article,
    sanitize_and_parse_article,
    sanitize_article,
)

ARTICLE_HTML = """
<html>
<head>
  <title>Tide pools at dawn</title>
  <meta property="og:image" content="https://news.example.com/media/tide-pools.jpg">
  <script>window.tracker = true;</script>
</head>
<body>
  <nav><a href="/">Home</a> <a href="/about">About</a></nav>
  <article>
    <h1>Tide pools at dawn</h1>
    <p>Every morning, long before the first visitors arrive, the tide pools along the northern
    shore fill with anemones, crabs, and small fish that have been stranded by the retreating sea.</p>
    <p>Marine biologists have been counting these animals for more than a decade, and their notes
    show a slow but steady increase in the number of species that survive the summer heat.</p>
    <p>Volunteers walk the rocks with clipboards, recording what they find, and the data is shared
    with schools, local councils, and anyone else who wants to understand the changing coastline.</p>
    <p>The project relies on careful timing, since the pools are only exposed for a few hours, and
    the volunteers must leave before the water returns and covers the rocks once again.</p>
  </article>
  <footer>Copyright, all rights reserved.</footer>
</body>
</html>
"""


class StubContentExtractor:
    def __init__(self, content):
        self.content = content

    def extract(self, soup):
        if self.content is None:
            return None
        return ExtractedContent(content=self.content, title="Stub")


class StubImageExtractor:
    def __init__(self, image):
        self.image = image

    def extract(self, soup):
        return PageMetadata(image=self.image)


class FailingCollaborator:
    def parse(self, html):
        raise RuntimeError("parser should not be called")

    def extract(self, soup):
        raise RuntimeError("extractor failed")

    def sanitize(self, html):
        raise RuntimeError("sanitizer failed")


def _parser(content, image=""):
    return ArticleParser(
        content_extractor=StubContentExtractor(content),
        image_extractor=StubImageExtractor(image),
    )


def test_empty_html_short_circuits_without_collaborators():
    failing = FailingCollaborator()
    parser = ArticleParser(
        parser=failing,
        content_extractor=failing,
        image_extractor=failing,
        sanitizer=failing,
    )
    assert parser.run("", "https://x.test/a.jpg") == ArticleResult(
        content="", image="https://x.test/a.jpg", is_duplicate_image=False
    )
    assert parser.run(None) == ArticleResult(content="", image="", is_duplicate_image=False)


def test_module_function_short_circuits_on_empty_html():
    result = sanitize_and_parse_article("", "https://x.test/a.jpg")
    assert result.to_dict() == {
        "content": "",
        "image": "https://x.test/a.jpg",
        "isDuplicateImage": False,
    }


def test_default_image_wins_and_is_detected_as_duplicate():
    parser = _parser(
        '<div><p>Body</p><img src="https://cdn.example.com/a/photo-1024-768.jpg"></div>',
        image="https://extracted.test/hero.jpg",
    )
    result = parser.run("<html><body>page</body></html>", "https://other.example.com/b/photo.jpg")
    assert result.image == "https://other.example.com/b/photo.jpg"
    assert result.is_duplicate_image is True


def test_extracted_image_used_without_default():
    parser = _parser("<div><p>Body only</p></div>", image="https://extracted.test/hero.jpg")
    result = parser.run("<p>page</p>")
    assert result.image == "https://extracted.test/hero.jpg"
    assert result.is_duplicate_image is False
    assert "Body only" in result.content


def test_extraction_failures_degrade_to_empty_strings():
    failing = FailingCollaborator()
    parser = ArticleParser(content_extractor=failing, image_extractor=failing)
    assert parser.parse("<p>page</p>") == ("", "")
    assert parser.run("<p>page</p>", "https://x.test/a.jpg") == ArticleResult(
        content="", image="https://x.test/a.jpg", is_duplicate_image=False
    )


def test_missing_extraction_results_degrade_to_empty_strings():
    parser = ArticleParser(
        content_extractor=StubContentExtractor(None),
        image_extractor=type("NoMetadata", (), {"extract": lambda self, soup: None})(),
    )
    assert parser.parse("<p>page</p>") == ("", "")


def test_sanitizer_failure_propagates():
    parser = ArticleParser(
        content_extractor=StubContentExtractor("<p>x</p>"),
        image_extractor=StubImageExtractor(""),
        sanitizer=FailingCollaborator(),
    )
    with pytest.raises(RuntimeError, match="sanitizer failed"):
        parser.run("<p>page</p>")


def test_parser_failure_propagates():
    parser = ArticleParser(parser=FailingCollaborator())
    with pytest.raises(RuntimeError, match="parser should not be called"):
        parser.run("<p>page</p>")


def test_sanitize_applies_transforms_before_sanitizing():
    html = (
        "<div><time>May 1</time><p>Posted <time>May 2</time></p>"
        '<p><a href="http://x.test" onclick="go()">link</a></p>'
        '<img src="/img/a.jpg"><script>bad()</script></div>'
    )
    result = sanitize_article(html, "https://site.test/img/a.jpg")
    soup = BeautifulSoup(result.content, "html.parser")

    assert [t.get_text() for t in soup.find_all("time")] == ["May 2"]
    anchor = soup.find("a")
    assert anchor.attrs == {"data-href": "http://x.test"}
    assert soup.find("img")["loading"] == "lazy"
    assert "bad()" not in result.content
    assert result.is_duplicate_image is True


def test_sanitize_serializes_body_children_only():
    result = sanitize_article("<html><body><p>Inside</p></body></html>", "")
    assert result.content == "<p>Inside</p>"
    assert result.image == ""
    assert result.is_duplicate_image is False


def test_readability_pipeline_extracts_article_and_page_image():
    content, image = parse_article(ARTICLE_HTML)
    assert "tide pools along the northern" in content
    assert image == "https://news.example.com/media/tide-pools.jpg"

    result = sanitize_and_parse_article(ARTICLE_HTML)
    assert "Marine biologists" in result.content
    assert "tracker" not in result.content
    assert result.image == "https://news.example.com/media/tide-pools.jpg"
    assert result.is_duplicate_image is False


def test_sanitize_drops_head_content_without_body():
    result = sanitize_article("<head><title>Page title</title></head><p>body</p>", "")
    assert result.content == "<p>body</p>"

    result = sanitize_article("<title>Stray</title><p>body</p>", "")
    assert result.content == "<p>body</p>"


def test_shared_parser_gives_identical_results_across_threads():
    fragment = "".join(
        f'<p id="p{i}">Paragraph {i} with <a href="/n/{i}">a link</a> &amp; text.</p>'
        f'<img src="/img/{i}.jpg"><script>track({i})</script>'
        for i in range(200)
    )
    parser = ArticleParser()
    expected = parser.sanitize(fragment, "https://site.test/img/7.jpg")

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(
            pool.map(
                lambda _: parser.sanitize(fragment, "https://site.test/img/7.jpg"),
                range(64),
            )
        )

    assert all(result == expected for result in results)
    assert expected.is_duplicate_image is True
    assert "track(" not in expected.content


def test_page_metadata_is_logged(caplog):
    class FullMetadata:
        def extract(self, soup):
            return PageMetadata(
                title="Tide pools", byline="A. Writer", description="Rocks", image="/hero.jpg"
            )

    parser = ArticleParser(
        content_extractor=StubContentExtractor("<p>x</p>"),
        image_extractor=FullMetadata(),
    )
    with caplog.at_level(logging.DEBUG, logger="article_parse"):
        assert parser.parse("<p>page</p>") == ("<p>x</p>", "/hero.jpg")

    assert "title='Tide pools'" in caplog.text
    assert "byline='A. Writer'" in caplog.text
