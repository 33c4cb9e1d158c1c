import logging

import pytest

from seminar_post.comments import (
    BadLinkPolicy,
    Link,
    ParseMode,
    link_domain,
    parse_comment,
    parse_comments,
    parse_link,
)
from seminar_post.errors import MalformedLink


SCHNORR = "Talk: Schnorr signatures\r\nhttps://example.com/talk\r\nhttps://docs.example.org/spec"


def test_blank_bodies_yield_no_entry():
    assert parse_comment("") is None
    assert parse_comment("\r\n\r\n") is None
    assert parse_comment("\r\n", mode=ParseMode.SIMPLE) is None


def test_title_without_link_is_skipped():
    assert parse_comment("Just a title\r\n\r\n") is None


def test_blank_title_line_is_skipped():
    assert parse_comment("   \r\nhttps://a.example/x") is None
    assert parse_comment("\t\r\nhttps://a.example/x", mode=ParseMode.SIMPLE) is None


def test_multi_mode_labels_links_by_host():
    entry = parse_comment(SCHNORR)
    assert entry.title == "Talk: Schnorr signatures"
    assert entry.links == (
        Link("example.com", "https://example.com/talk"),
        Link("docs.example.org", "https://docs.example.org/spec"),
    )
    assert entry.first_link.url == "https://example.com/talk"
    assert [l.url for l in entry.extra_links] == ["https://docs.example.org/spec"]


def test_surrounding_blank_lines_and_whitespace_are_trimmed():
    body = "\r\n\r\n  Lightning fees \r\n\r\n https://a.example/x \r\n\r\n"
    entry = parse_comment(body)
    assert entry.title == "Lightning fees"
    assert entry.links == (Link("a.example", "https://a.example/x"),)


def test_simple_mode_keeps_only_first_link():
    entry = parse_comment(SCHNORR + "\r\nnot a url at all", mode=ParseMode.SIMPLE)
    assert entry.links == (Link("Talk: Schnorr signatures", "https://example.com/talk"),)


def test_simple_mode_does_not_validate():
    entry = parse_comment("Title\r\nsee the slides", mode="simple")
    assert entry.first_link.url == "see the slides"


@pytest.mark.parametrize("line", [
    "example.com/talk",
    "not a url",
    "mailto:someone@example.com",
    "https:///path-only",
    "http://127.0.0.1:8080/x",
    "http://[::1]/x",
    "https://example.com:notaport/",
    "https://exa<mple.com/x",
    "https://exa%mple.com/",
    "https://exa^mple.com/",
    "https://exa|mple.com/",
    "https://exa mple.com/x",
])
def test_link_domain_rejects_invalid_urls(line):
    with pytest.raises(MalformedLink):
        link_domain(line)


def test_link_domain_lowercases_host():
    assert link_domain("https://Docs.Example.ORG:8443/a?b=c#d") == "docs.example.org"


def test_whitespace_in_path_is_percent_encoded():
    assert parse_link("https://example.com/talk slides") == Link("example.com", "https://example.com/talk%20slides")


def test_international_domain_uses_punycode():
    link = parse_link("https://bücher.example/katalog")
    assert link == Link("xn--bcher-kva.example", "https://xn--bcher-kva.example/katalog")


def test_whitespace_link_renders_in_multi_mode():
    entry = parse_comment("Slides\r\nhttps://example.com/talk\r\nhttps://docs.example.org/my notes")
    assert entry.links[1] == Link("docs.example.org", "https://docs.example.org/my%20notes")


def test_malformed_link_aborts_by_default():
    with pytest.raises(MalformedLink) as exc:
        parse_comment("Title\r\nhttps://ok.example\r\nbroken link")
    assert exc.value.line == "broken link"
    assert exc.value.stage == "render"


def test_malformed_link_skipped_with_warning(caplog):
    caplog.set_level(logging.WARNING)
    entry = parse_comment(
        "Title\r\nhttps://ok.example/a\r\nbroken link\r\nhttps://b.example/c",
        on_bad_link=BadLinkPolicy.SKIP,
    )
    assert [l.label for l in entry.links] == ["ok.example", "b.example"]
    assert any("broken link" in r.message for r in caplog.records)


def test_entry_with_only_bad_links_is_dropped_when_skipping(caplog):
    caplog.set_level(logging.WARNING)
    assert parse_comment("Title\r\nnope", on_bad_link="skip") is None
    assert any("no valid link" in r.message for r in caplog.records)


def test_parse_comments_preserves_order_and_duplicates():
    bodies = [
        "B\r\nhttps://b.example",
        "\r\n",
        "A\r\nhttps://a.example",
        "B\r\nhttps://b.example",
    ]
    titles = [e.title for e in parse_comments(bodies)]
    assert titles == ["B", "A", "B"]
