"""Markdown → Slack mrkdwn inline conversion.

Only two constructs are rewritten:
  - Bold: ``**text**`` → ``*text*``
  - Links: ``[label](https://url)`` → ``<https://url|label>``

Everything inside fenced code blocks and inline code spans is passed
through untouched (see segmenter). Anything that does not match is left
as written, so unmatched ``**`` or a link without its closing paren
survive unchanged.

Key function: convert_inline(text) → mrkdwn string.
"""

from __future__ import annotations

import re

from .segmenter import iter_segments

# Single-line only; lazy so "**a** and **b**" yields two spans.
_BOLD_RE = re.compile(r"\*\*([^\n]+?)\*\*")

# Labels exclude brackets so bracket-heavy input stays linear.
_LINK_RE = re.compile(r"\[([^\[\]\n]+)\]\((https?://[^\s)]+)\)")


def _convert_bold(text: str) -> str:
    return _BOLD_RE.sub(r"*\1*", text)


def _convert_links(text: str) -> str:
    return _LINK_RE.sub(r"<\2|\1>", text)


def _convert_text_segment(text: str) -> str:
    """Apply bold then link conversion to a non-code segment."""
    return _convert_links(_convert_bold(text))


def convert_inline(text: str) -> str:
    """Convert Markdown bold and links to Slack mrkdwn, leaving code as-is."""
    if not text:
        return ""
    return "".join(
        part.value if part.preserve else _convert_text_segment(part.value)
        for part in iter_segments(text)
    )
