"""
MiniNote Backend - Content Negotiation Unit Tests
==================================================

What:  Tests for raw-mode detection, HTML escaping, excerpts and the page.
"""

import pytest

from mininote.services.negotiation import (
    html_escape,
    make_excerpt,
    render_note_page,
    wants_raw,
)


class TestWantsRaw:
    """Raw mode: explicit flag or a command-line client."""

    def test_flag_wins(self):
        assert wants_raw(True, "Mozilla/5.0") is True

    @pytest.mark.parametrize("user_agent", ["curl/8.4.0", "Wget/1.21.4"])
    def test_cli_clients(self, user_agent):
        assert wants_raw(False, user_agent) is True

    @pytest.mark.parametrize(
        "user_agent",
        ["Mozilla/5.0 (X11; Linux x86_64)", "python-httpx/0.27", "", None, "wget/1.0", "my-curl"],
    )
    def test_browsers_and_others_get_html(self, user_agent):
        assert wants_raw(False, user_agent) is False


class TestHtmlEscape:
    """The five-character escaping contract."""

    def test_all_five_substitutions(self):
        assert html_escape("<script>&\"'") == "&lt;script&gt;&amp;&quot;&#39;"

    def test_ampersand_not_double_escaped(self):
        assert html_escape("&lt;") == "&amp;lt;"

    def test_plain_text_unchanged(self):
        assert html_escape("hello world") == "hello world"


class TestMakeExcerpt:
    """Excerpts count characters and mark truncation."""

    def test_long_text_truncated(self):
        assert make_excerpt("a" * 200) == "a" * 150 + "..."

    def test_short_text_untouched(self):
        assert make_excerpt("a" * 100) == "a" * 100

    def test_exact_length_untouched(self):
        assert make_excerpt("a" * 150) == "a" * 150

    def test_counts_characters_not_bytes(self):
        text = "笔记" * 100
        excerpt = make_excerpt(text, 5)
        assert excerpt == "笔记笔记笔..."

    def test_custom_length(self):
        assert make_excerpt("abcdef", 3) == "abc..."


class TestRenderNotePage:
    """The editor page embeds escaped content, title and description."""

    def test_absent_note_renders_empty_editor(self):
        html = render_note_page("abc", None)
        assert "<title>web-mini-note · abc</title>" in html
        assert 'autocorrect="off"></textarea>' in html

    def test_content_escaped_in_textarea(self):
        html = render_note_page("abc", "<script>&\"'".encode())
        assert "&lt;script&gt;&amp;&quot;&#39;</textarea>" in html
        assert "<script>&\"'" not in html

    def test_description_escaped_for_attribute(self):
        html = render_note_page("abc", b'say "hi" <b>')
        assert '<meta name="description" content="📔 say &quot;hi&quot; &lt;b&gt;">' in html

    def test_invalid_utf8_is_replaced(self):
        html = render_note_page("abc", b"ok \xff")
        assert "ok �</textarea>" in html

    def test_dollar_signs_in_content_are_literal(self):
        html = render_note_page("abc", b"$content $slug")
        assert "$content $slug</textarea>" in html
