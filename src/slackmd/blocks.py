"""Block Kit values produced by the compiler.

Each block is a frozen dataclass tagged by a ``type`` class attribute
and knows how to serialize itself with ``to_dict()``. Header, section
and divider serialization goes through ``slack_sdk.models.blocks`` so
Slack's own length validation runs on the way out.

Tables are not valid top-level message blocks; they travel inside an
``Attachment``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, TypeAlias

from slack_sdk.models.blocks import (
    DividerBlock,
    HeaderBlock,
    MarkdownTextObject,
    PlainTextObject,
    SectionBlock,
)


@dataclass(frozen=True, slots=True)
class Header:
    type: ClassVar[str] = "header"

    text: str

    def to_dict(self) -> dict[str, Any]:
        return HeaderBlock(text=PlainTextObject(text=self.text)).to_dict()


@dataclass(frozen=True, slots=True)
class Section:
    type: ClassVar[str] = "section"

    text: str

    def to_dict(self) -> dict[str, Any]:
        return SectionBlock(text=MarkdownTextObject(text=self.text)).to_dict()


@dataclass(frozen=True, slots=True)
class Divider:
    type: ClassVar[str] = "divider"

    def to_dict(self) -> dict[str, Any]:
        return DividerBlock().to_dict()


@dataclass(frozen=True, slots=True)
class Table:
    """Capped table grid.

    ``rows`` holds data rows only; the header row is kept apart and
    emitted first when serialized. ``aligns`` has one entry per header
    column (``None`` where the divider gave no alignment).
    """

    type: ClassVar[str] = "table"

    header: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...]
    aligns: tuple[str | None, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        grid = [self.header, *self.rows] if self.header else list(self.rows)
        result: dict[str, Any] = {
            "type": self.type,
            "rows": [
                [{"type": "raw_text", "text": cell} for cell in row] for row in grid
            ],
        }
        if any(self.aligns):
            result["column_settings"] = [
                {"align": align or "left"} for align in self.aligns
            ]
        return result


Block: TypeAlias = Header | Section | Divider | Table


@dataclass(frozen=True, slots=True)
class Attachment:
    """Secondary container for blocks that cannot sit in the message body."""

    blocks: tuple[Block, ...]

    def to_dict(self) -> dict[str, Any]:
        return {"blocks": [block.to_dict() for block in self.blocks]}


@dataclass(frozen=True, slots=True)
class BlocksPayload:
    """Compiled message body: top-level blocks plus table attachments."""

    blocks: tuple[Block, ...] = ()
    attachments: tuple[Attachment, ...] = ()

    def to_dict(self) -> dict[str, list[dict[str, Any]]]:
        return {
            "blocks": [block.to_dict() for block in self.blocks],
            "attachments": [attachment.to_dict() for attachment in self.attachments],
        }
