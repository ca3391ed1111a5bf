"""
MiniNote Backend - Content Negotiation
=======================================

What:  Decides between raw text and the HTML editor page, and prepares the
       escaped content and excerpt for the page.
Who:   Called by GET /{slug}.

Raw mode is chosen when:
    - the query string contains `raw` (any value, including empty), or
    - the User-Agent starts with a known command-line client prefix.
      Such clients do not run the page's JavaScript, so `curl host/note`
      prints the note text directly.

Escaping contract (both the textarea body and the description attribute):
    &  → &amp;
    <  → &lt;
    >  → &gt;
    "  → &quot;
    '  → &#39;
"""

from typing import Optional

from mininote.services.page import render_page

CLI_USER_AGENT_PREFIXES = ("curl", "Wget")

DEFAULT_EXCERPT_LENGTH = 150

TRUNCATION_MARKER = "..."

RAW_MEDIA_TYPE = "text/plain; charset=utf-8"

# "&" must come first so the entities produced below are not escaped again
_HTML_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#39;"),
)


def is_cli_client(user_agent: Optional[str]) -> bool:
    return bool(user_agent) and user_agent.startswith(CLI_USER_AGENT_PREFIXES)


def wants_raw(raw_flag_present: bool, user_agent: Optional[str]) -> bool:
    """True if the response should be the stored bytes instead of HTML."""
    return raw_flag_present or is_cli_client(user_agent)


def html_escape(text: str) -> str:
    for char, entity in _HTML_ESCAPES:
        text = text.replace(char, entity)
    return text


def make_excerpt(text: str, length: int = DEFAULT_EXCERPT_LENGTH) -> str:
    """
    First `length` characters of `text`, plus "..." if anything was cut.

    Counts characters (code points), not bytes, so a multi-byte character
    is never split.
    """
    if len(text) > length:
        return text[:length] + TRUNCATION_MARKER
    return text


def decode_note(content: Optional[bytes]) -> str:
    """Note bytes as text for the editor; invalid UTF-8 is replaced, absent is ""."""
    if not content:
        return ""
    return content.decode("utf-8", errors="replace")


def render_note_page(
    slug: str,
    content: Optional[bytes],
    excerpt_length: int = DEFAULT_EXCERPT_LENGTH,
) -> str:
    """
    Build the editor page for a note.

    An absent note renders exactly like an empty one.
    """
    text = decode_note(content)
    return render_page(
        slug=slug,
        content=html_escape(text),
        description=html_escape(make_excerpt(text, excerpt_length)),
    )
