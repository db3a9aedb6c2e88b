"""Text splitting for Slack's per-block character limits.

Provides:
  - split_text(): cuts text into consecutive chunks of at most
    ``max_chars`` characters. Joining the chunks gives back the input
    exactly; nothing is added, trimmed or reordered.
"""

from __future__ import annotations

SECTION_MAX_CHARS = 3000


def split_text(text: str, max_chars: int = SECTION_MAX_CHARS) -> list[str]:
    """Split text into chunks that fit a section block.

    Each cut prefers the last newline in the second half of the window,
    then the last space there, and falls back to a hard cut at
    ``max_chars``. The separator stays at the end of the earlier chunk.
    """
    if max_chars <= 0:
        raise ValueError("max_chars must be > 0")
    if len(text) <= max_chars:
        return [text]

    chunks: list[str] = []
    start = 0
    n = len(text)

    while start < n:
        end = min(start + max_chars, n)
        if end < n:
            preferred_from = start + max_chars // 2
            newline = text.rfind("\n", preferred_from, end)
            if newline > start:
                end = newline + 1
            else:
                space = text.rfind(" ", preferred_from, end)
                if space > start:
                    end = space + 1
        chunks.append(text[start:end])
        start = end

    return chunks
