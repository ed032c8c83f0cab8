"""Tests for the per-field document extraction cascade."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from digest_trends.errors import ArticleFetchError
from digest_trends.extract import extractor
from digest_trends.extract.extractor import ReaderResult, count_words, extract_document, parse_article

PLAIN_PAGE = """
<html>
  <head>
    <title>  Plain Page Title </title>
    <meta property="og:site_name" content="Plain Times">
    <script>var tracking = "do not count me";</script>
  </head>
  <body>
    <div>First   paragraph
      of text.</div>
    <div>Second paragraph.</div>
    <noscript>Enable JavaScript</noscript>
  </body>
</html>
"""

META_PAGE = """
<html>
  <head>
    <title>Document Title</title>
    <meta property="og:title" content="OG Title">
    <meta name="twitter:title" content="Twitter Title">
    <meta name="pubdate" content="2026-03-01">
    <meta name="date" content="2026-02-01">
  </head>
  <body>
    <nav>Menu</nav>
    <main>Main text here</main>
    <article>Article <b>body</b> text</article>
    <time datetime="2026-01-01T00:00:00Z">Jan 1</time>
  </body>
</html>
"""


STORY_PAGE = """
<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="utf-8">
    <title>Tidal Power Plant Opens On The Coast</title>
    <meta property="og:title" content="Tidal Power Plant Opens On The Coast">
    <meta property="og:site_name" content="Harbor Gazette">
    <meta property="article:published_time" content="2026-06-12T08:30:00Z">
  </head>
  <body>
    <header><nav><a href="/">Home</a> <a href="/energy">Energy</a> <a href="/about">About</a></nav></header>
    <article>
      <h1>Tidal Power Plant Opens On The Coast</h1>
      <p>The first commercial tidal power plant on the northern coast began feeding electricity into the regional grid on Friday, after nearly six years of planning, permitting and construction in the narrow channel below the old lighthouse.</p>
      <p>Engineers said the twelve underwater turbines turn with both the rising and the falling tide, which means the plant produces power on a schedule that can be predicted decades in advance, unlike wind or solar farms that depend on the weather.</p>
      <p>Local fishing crews, who had opposed the project at first, negotiated a monitoring program with the operator, and marine biologists from the university will publish yearly reports on fish populations, seabirds and seals in the channel.</p>
      <p>The operator expects the plant to supply roughly eight thousand homes, and the town council has already asked whether a second array could be installed farther out in the bay once the first winter of operation is complete.</p>
    </article>
    <footer><p>Copyright Harbor Gazette. All rights reserved.</p></footer>
  </body>
</html>
"""


def _raise(*_args, **_kwargs):
    raise ValueError("unsupported page shape")


def test_plain_page_falls_back_to_title_site_name_and_body(monkeypatch):
    monkeypatch.setattr(extractor, "_read_trafilatura", _raise)

    doc = extract_document(PLAIN_PAGE, "https://www.plain.test/a")

    assert doc.title == "Plain Page Title"
    assert doc.source == "Plain Times"
    assert doc.content == "First paragraph of text. Second paragraph."
    assert doc.published_at is None
    assert doc.word_count == 6


def test_meta_fallback_order():
    doc = extract_document(META_PAGE, "https://example.com/story", reader="none")

    assert doc.title == "OG Title"
    assert doc.published_at == "2026-03-01"
    # <article> wins over <main>
    assert doc.content == "Article body text"
    assert doc.source == "example.com"


def test_twitter_title_then_document_title():
    page = '<html><head><title>Doc</title><meta name="twitter:title" content="Tw"></head></html>'

    assert extract_document(page, "https://x.test", reader="none").title == "Tw"
    assert extract_document("<title>Doc</title>", "https://x.test", reader="none").title == "Doc"


def test_published_at_chain():
    published = '<meta property="article:published_time" content="2026-04-04T10:00:00Z"><meta name="date" content="x">'
    dated = '<meta name="date" content="2026-02-02">'
    timed = '<p><time>no attr</time><time datetime="2026-05-05">May</time></p>'

    assert extract_document(published, "https://x.test", reader="none").published_at == "2026-04-04T10:00:00Z"
    assert extract_document(dated, "https://x.test", reader="none").published_at == "2026-02-02"
    assert extract_document(timed, "https://x.test", reader="none").published_at == "2026-05-05"
    assert extract_document("<p>nothing</p>", "https://x.test", reader="none").published_at is None


def test_main_used_when_no_article():
    page = "<html><body><header>Top</header><main> Main\n\ncontent </main></body></html>"

    assert extract_document(page, "https://x.test", reader="none").content == "Main content"


def test_reader_results_take_precedence(monkeypatch):
    def fake_reader(html, url):
        return ReaderResult(title="Reader Title", text="  reader text body  ", site_name="Reader Site")

    monkeypatch.setattr(extractor, "_read_trafilatura", fake_reader)

    doc = extract_document(META_PAGE, "https://example.com/story")

    assert doc.title == "Reader Title"
    assert doc.source == "Reader Site"
    assert doc.content == "reader text body"
    assert doc.word_count == 3
    assert doc.published_at == "2026-03-01"


def test_partial_reader_result_falls_back_per_field(monkeypatch):
    monkeypatch.setattr(
        extractor, "_read_trafilatura", lambda html, url: ReaderResult(title="", text=None, site_name=None)
    )

    doc = extract_document(META_PAGE, "https://www.example.com/story")

    assert doc.title == "OG Title"
    assert doc.source == "example.com"
    assert doc.content == "Article body text"


def test_readability_reader_is_selectable(monkeypatch):
    calls = []

    def fake_readability(html, url):
        calls.append(url)
        return ReaderResult(title="Readable", text="readable text")

    monkeypatch.setattr(extractor, "_read_readability", fake_readability)

    doc = extract_document(PLAIN_PAGE, "https://plain.test/a", reader="readability")

    assert calls == ["https://plain.test/a"]
    assert doc.title == "Readable"
    assert doc.source == "Plain Times"


def test_empty_payload_yields_empty_document():
    doc = extract_document("", "not a url", reader="none")

    assert doc.to_dict() == {
        "title": "",
        "content": "",
        "source": "",
        "published_at": None,
        "word_count": 0,
    }


def test_count_words():
    assert count_words("") == 0
    assert count_words("   ") == 0
    assert count_words("one  two\tthree\nfour") == 4


def test_parse_article_fetches_and_extracts(make_client, monkeypatch):
    monkeypatch.setattr(extractor, "_read_trafilatura", _raise)

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text=PLAIN_PAGE, headers={"Content-Type": "text/html"})

    doc = asyncio.run(parse_article(make_client(handler), "https://www.plain.test/a"))

    assert doc.title == "Plain Page Title"
    assert doc.word_count == 6


def test_parse_article_surfaces_fetch_failure(make_client):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    with pytest.raises(ArticleFetchError):
        asyncio.run(parse_article(make_client(handler), "https://down.test/a"))


def test_inline_markup_does_not_split_words():
    page = "<html><body><p>Hel<b>lo</b> wor<i>ld</i></p></body></html>"

    doc = extract_document(page, "https://x.test", reader="none")

    assert doc.content == "Hello world"
    assert doc.word_count == 2


def test_inline_link_before_punctuation_stays_one_word():
    page = "<article>Please see <a href='/more'>this</a>.</article>"

    doc = extract_document(page, "https://x.test", reader="none")

    assert doc.content == "Please see this."
    assert doc.word_count == 3


def test_trafilatura_reader_on_article_page():
    doc = extract_document(STORY_PAGE, "https://www.harbor.test/energy/tidal")

    assert doc.title == "Tidal Power Plant Opens On The Coast"
    assert doc.source == "Harbor Gazette"
    assert doc.published_at == "2026-06-12T08:30:00Z"
    assert "twelve underwater turbines" in doc.content
    assert "All rights reserved" not in doc.content
    assert doc.word_count == len(doc.content.split())
    assert doc.word_count > 50


def test_readability_reader_on_article_page():
    doc = extract_document(STORY_PAGE, "https://www.harbor.test/energy/tidal", reader="readability")

    assert doc.title == "Tidal Power Plant Opens On The Coast"
    # readability has no site name, so og:site_name fills it
    assert doc.source == "Harbor Gazette"
    assert "twelve underwater turbines" in doc.content
    assert "  " not in doc.content
    assert doc.word_count == len(doc.content.split())
    assert doc.word_count > 50


def test_readability_reader_without_title_uses_og_title():
    page = STORY_PAGE.replace("<title>Tidal Power Plant Opens On The Coast</title>", "")
    page = page.replace('content="Tidal Power Plant Opens On The Coast"', 'content="Tidal Plant Opens"')

    doc = extract_document(page, "https://harbor.test/energy/tidal", reader="readability")

    assert doc.title == "Tidal Plant Opens"
    assert doc.source == "Harbor Gazette"


def test_meta_values_are_taken_as_found():
    padded = '<meta property="og:title" content=" Padded Title "><title>Doc</title>'
    blank = '<meta property="og:title" content="   "><title>Doc</title>'
    empty = '<meta property="og:title" content=""><title>Doc</title>'

    assert extract_document(padded, "https://x.test", reader="none").title == " Padded Title "
    assert extract_document(blank, "https://x.test", reader="none").title == "   "
    assert extract_document(empty, "https://x.test", reader="none").title == "Doc"
