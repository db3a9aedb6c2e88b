"""Markdown → Slack Block Kit compilation.

Classifies markdown into logical units using markdown-it block tokens,
then pulls pipe tables out of the section units by line shape, then
renders each unit into blocks that respect Slack's limits:

  - Headings become header blocks. Text past the header limit is moved
    into a section right after the header, never dropped.
  - Pipe tables become a table block inside the message's single
    attachment. Slack allows one table per message, so later tables are
    sent as code-formatted sections.
  - Thematic breaks become dividers.
  - Everything else (paragraphs, code, lists, quotes, stray lines) is
    converted to mrkdwn and split into as many sections as needed.

The top-level block list is capped last, so trailing content is what
gets dropped when a message is too long.

Key function: compile_blocks(markdown) → BlocksPayload.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal

from markdown_it import MarkdownIt
from markdown_it.token import Token

from .blocks import Attachment, Block, BlocksPayload, Divider, Header, Section
from .config import DEFAULT_LIMITS, BlockLimits
from .mrkdwn import convert_inline
from .splitter import split_text
from .tables import (
    is_table_divider_line,
    is_table_line,
    render_table,
    render_table_fallback,
    split_table_row,
)

logger = logging.getLogger(__name__)

# Indented code is disabled: only fenced ``` blocks are code.
# Tables are found by line shape afterwards, not by the GFM table rule.
_PARSER = MarkdownIt("commonmark").disable("code")


@dataclass(slots=True)
class _Unit:
    """A classified run of source lines, ``start`` inclusive to ``end`` exclusive."""

    kind: Literal["header", "section", "table", "divider"]
    start: int
    end: int
    text: str = ""


def _trim_end(lines: list[str], start: int, end: int) -> int:
    while end > start and not lines[end - 1].strip():
        end -= 1
    return end


def _add_section(units: list[_Unit], start: int, end: int) -> None:
    """Append a section unit, merging it with a directly preceding one."""
    if units and units[-1].kind == "section" and units[-1].end == start:
        units[-1].end = end
        return
    units.append(_Unit("section", start, end))


def _add_loose_lines(units: list[_Unit], lines: list[str], start: int, end: int) -> None:
    """Turn non-blank lines no token claimed into section units."""
    run_start: int | None = None
    for index in range(start, end):
        if lines[index].strip():
            if run_start is None:
                run_start = index
        elif run_start is not None:
            _add_section(units, run_start, index)
            run_start = None
    if run_start is not None:
        _add_section(units, run_start, end)


def _extract_tables(units: list[_Unit], lines: list[str]) -> list[_Unit]:
    """Split pipe-table runs out of section units.

    A table is a ``|``-delimited header line, a divider line, and every
    directly following ``|``-delimited line. Lines inside fenced code are
    never tables.
    """
    result: list[_Unit] = []
    for unit in units:
        if unit.kind != "section":
            result.append(unit)
            continue

        i = unit.start
        run_start = unit.start
        in_code_block = False
        while i < unit.end:
            line = lines[i]
            if line.strip().startswith("```"):
                in_code_block = not in_code_block
                i += 1
                continue

            if (
                not in_code_block
                and i + 1 < unit.end
                and is_table_line(line)
                and is_table_divider_line(lines[i + 1])
            ):
                if i > run_start:
                    result.append(_Unit("section", run_start, i))
                table_start = i
                i += 2
                while i < unit.end and is_table_line(lines[i]):
                    i += 1
                result.append(_Unit("table", table_start, i))
                run_start = i
                continue

            i += 1

        if run_start < unit.end:
            result.append(_Unit("section", run_start, unit.end))
    return result


def _classify(lines: list[str], tokens: list[Token]) -> list[_Unit]:
    units: list[_Unit] = []
    covered = 0

    for index, token in enumerate(tokens):
        if token.level != 0 or token.nesting == -1 or token.map is None:
            continue
        start, end = token.map
        end = _trim_end(lines, start, end)
        if start > covered:
            _add_loose_lines(units, lines, covered, start)

        if token.type == "heading_open":
            inline = tokens[index + 1]
            units.append(
                _Unit("header", start, end, text=inline.content.replace("\n", " "))
            )
        elif token.type == "hr":
            units.append(_Unit("divider", start, end))
        else:
            _add_section(units, start, end)
        covered = max(covered, end)

    if covered < len(lines):
        _add_loose_lines(units, lines, covered, len(lines))
    return _extract_tables(units, lines)


def _render_section(text: str, limits: BlockLimits) -> list[Block]:
    converted = convert_inline(text)
    if not converted.strip():
        return []
    chunks = split_text(converted, limits.section_max_chars)
    if len(chunks) > 1:
        logger.debug(
            "Section of %d chars split into %d blocks", len(converted), len(chunks)
        )
    return [Section(text=chunk) for chunk in chunks if chunk.strip()]


def _render_header(text: str, limits: BlockLimits) -> list[Block]:
    text = text.strip()
    if not text:
        return []
    limit = limits.header_max_chars
    if len(text) <= limit:
        return [Header(text=text)]
    logger.debug("Header of %d chars truncated to %d", len(text), limit)
    return [Header(text=text[:limit]), *_render_section(text[limit:], limits)]


def compile_blocks(
    markdown: str, limits: BlockLimits = DEFAULT_LIMITS
) -> BlocksPayload:
    """Compile markdown into capped top-level blocks plus a table attachment."""
    if not markdown or not markdown.strip():
        return BlocksPayload()

    source = markdown.replace("\r\n", "\n").replace("\r", "\n")
    lines = source.split("\n")
    units = _classify(lines, _PARSER.parse(source))

    blocks: list[Block] = []
    attachments: list[Attachment] = []

    for unit in units:
        if unit.kind == "header":
            blocks.extend(_render_header(unit.text, limits))
        elif unit.kind == "divider":
            blocks.append(Divider())
        elif unit.kind == "table" and not attachments:
            table = render_table(
                split_table_row(lines[unit.start]),
                split_table_row(lines[unit.start + 1]),
                [split_table_row(line) for line in lines[unit.start + 2 : unit.end]],
                max_rows=limits.table_max_rows,
                max_columns=limits.table_max_columns,
            )
            attachments.append(Attachment(blocks=(table,)))
        elif unit.kind == "table":
            logger.debug("Extra table at line %d sent as code block", unit.start + 1)
            fallback = render_table_fallback(lines[unit.start : unit.end])
            blocks.extend(_render_section(fallback, limits))
        else:
            text = "\n".join(lines[unit.start : unit.end]).strip()
            blocks.extend(_render_section(text, limits))

    if len(blocks) > limits.max_blocks:
        logger.info(
            "Dropping %d blocks beyond the %d block limit",
            len(blocks) - limits.max_blocks,
            limits.max_blocks,
        )
        blocks = blocks[: limits.max_blocks]

    return BlocksPayload(blocks=tuple(blocks), attachments=tuple(attachments))
