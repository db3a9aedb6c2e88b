"""Split markdown into code and non-code segments.

Code (fenced ``` blocks and single-backtick spans) must reach Slack
byte-for-byte, so the inline converter only ever touches the segments
this module tags as transformable.

Unterminated fences and spans run to the end of the input: it is
better to leave some markdown unconverted than to rewrite code.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

FENCE = "```"
TICK = "`"


@dataclass(frozen=True, slots=True)
class Segment:
    """A slice of the input and whether it must be kept verbatim."""

    value: str
    preserve: bool


def iter_segments(text: str) -> Iterator[Segment]:
    """Yield segments left to right; joined values equal ``text``."""
    pos = 0
    n = len(text)

    while pos < n:
        if text.startswith(FENCE, pos):
            close = text.find(FENCE, pos + len(FENCE))
            end = n if close == -1 else close + len(FENCE)
            yield Segment(text[pos:end], preserve=True)
            pos = end
            continue

        if text[pos] == TICK:
            close = text.find(TICK, pos + 1)
            end = n if close == -1 else close + 1
            yield Segment(text[pos:end], preserve=True)
            pos = end
            continue

        next_tick = text.find(TICK, pos)
        end = n if next_tick == -1 else next_tick
        yield Segment(text[pos:end], preserve=False)
        pos = end


def segment(text: str) -> list[Segment]:
    return list(iter_segments(text))
