"""
Unit tests for the rich-text template helpers.
"""
import sys
import os

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from markupsafe import Markup

from folio_site.content.models import parse_entry
from folio_site.content.richtext import as_html, as_text, link_resolver


def test_as_text_joins_blocks():
    field = [
        {"type": "heading1", "text": "Hello", "spans": []},
        {"type": "paragraph", "text": "world", "spans": []},
    ]
    assert as_text(field) == "Hello world"
    assert as_text(None) == ""
    assert as_text([]) == ""
    assert as_text("plain") == "plain"

    print("PASS: as_text joins block texts")


def test_as_html_blocks_and_escaping():
    field = [
        {"type": "heading2", "text": "Title", "spans": []},
        {"type": "paragraph", "text": "a < b\nnext", "spans": []},
        {"type": "preformatted", "text": "code", "spans": []},
    ]
    html = as_html(field)

    assert isinstance(html, Markup)
    assert html == "<h2>Title</h2><p>a &lt; b<br />next</p><pre>code</pre>", html

    print("PASS: as_html renders blocks and escapes text")


def test_as_html_groups_list_items():
    field = [
        {"type": "list-item", "text": "one", "spans": []},
        {"type": "list-item", "text": "two", "spans": []},
        {"type": "o-list-item", "text": "first", "spans": []},
        {"type": "paragraph", "text": "end", "spans": []},
    ]
    html = as_html(field)

    assert html == "<ul><li>one</li><li>two</li></ul><ol><li>first</li></ol><p>end</p>", html

    print("PASS: Consecutive list items share a list")


def test_as_html_nested_spans():
    field = [{
        "type": "paragraph",
        "text": "Read the case study now",
        "spans": [
            {"start": 5, "end": 19, "type": "hyperlink",
             "data": {"link_type": "Document", "type": "project", "uid": "alpha"}},
            {"start": 9, "end": 13, "type": "strong"},
            {"start": 20, "end": 23, "type": "em"},
        ],
    }]
    html = as_html(field)

    assert html == (
        '<p>Read <a href="/case/alpha">the <strong>case</strong> study</a> <em>now</em></p>'
    ), html

    print("PASS: Nested spans render inside their parent")


def test_as_html_web_link_target_and_image():
    field = [
        {"type": "paragraph", "text": "site", "spans": [
            {"start": 0, "end": 4, "type": "hyperlink",
             "data": {"link_type": "Web", "url": "https://example.com", "target": "_blank"}},
        ]},
        {"type": "image", "url": "https://images.prismic.io/folio/a.jpg", "alt": "A \"quoted\" alt"},
    ]
    html = as_html(field)

    assert '<a href="https://example.com" target="_blank" rel="noopener">site</a>' in html
    assert '<p class="block-img"><img src="https://images.prismic.io/folio/a.jpg" alt="A &#34;quoted&#34; alt" /></p>' in html, html

    print("PASS: Web links and images render")


def test_link_resolver():
    assert link_resolver({"link_type": "Document", "type": "project", "uid": "alpha"}) == "/case/alpha"
    assert link_resolver({"link_type": "Document", "type": "post", "uid": "one"}) == "/article/one"
    assert link_resolver({"link_type": "Document", "type": "about"}) == "/about"
    assert link_resolver({"link_type": "Document", "type": "home"}) == "/"
    assert link_resolver({"link_type": "Web", "url": "https://example.com"}) == "https://example.com"
    assert link_resolver({"link_type": "Document", "type": "project", "uid": "x", "isBroken": True}) == "/"
    assert link_resolver(None) == "/"

    entry = parse_entry({"id": "p", "uid": "beta", "type": "project", "data": {}})
    assert link_resolver(entry) == "/case/beta"

    print("PASS: Link resolver maps documents to site URLs")


def test_span_offsets_count_utf16_units():
    field = [{"type": "paragraph", "text": "\U0001F600 bold", "spans": [{"type": "strong", "start": 3, "end": 7}]}]
    assert as_html(field) == "<p>\U0001F600 <strong>bold</strong></p>", as_html(field)

    field = [{"type": "paragraph", "text": "\U0001F600\U0001F600 ab", "spans": [{"type": "em", "start": 0, "end": 4}]}]
    assert as_html(field) == "<p><em>\U0001F600\U0001F600</em> ab</p>", as_html(field)

    print("PASS: Span offsets count UTF-16 code units")


def test_scalar_fields():
    assert as_text(2021) == "2021"
    assert as_text(0) == "0"
    assert as_text(4.5) == "4.5"
    assert as_text({"latitude": 1.0}) == ""
    assert as_html(2021) == "<p>2021</p>"

    print("PASS: Scalar fields render without errors")


def test_unknown_heading_type_renders_paragraph():
    field = [{"type": "heading", "text": "Bare", "spans": []}, {"type": "heading6", "text": "Six", "spans": []}]
    assert as_html(field) == "<p>Bare</p><h6>Six</h6>", as_html(field)

    print("PASS: Only heading1-heading6 render as headings")


if __name__ == "__main__":
    test_as_text_joins_blocks()
    test_as_html_blocks_and_escaping()
    test_as_html_groups_list_items()
    test_as_html_nested_spans()
    test_as_html_web_link_target_and_image()
    test_link_resolver()
    test_span_offsets_count_utf16_units()
    test_scalar_fields()
    test_unknown_heading_type_renders_paragraph()
    print("\nAll rich text tests passed.")
