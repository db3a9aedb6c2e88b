"""Markdown pipe tables → Slack table blocks.

Slack renders at most 100 data rows and 20 columns per table, and only
one table per message. render_table() caps a pre-split table to those
limits, always dropping from the end (bottom rows, rightmost cells).
Tables beyond the first are shown as preformatted text instead
(render_table_fallback).
"""

from __future__ import annotations

import logging
import re

from .blocks import Table

logger = logging.getLogger(__name__)

TABLE_MAX_ROWS = 100
TABLE_MAX_COLUMNS = 20

_ALIGN_CELL_RE = re.compile(r"^(:?)-+(:?)$")
_DIVIDER_RE = re.compile(r"^\|(?=[^-]*-)[:\-|]+\|$")


def split_table_row(line: str) -> list[str]:
    """Split a table row by pipes, respecting escaped pipes (\\|)."""
    content = line.strip().strip("|")
    cells = re.split(r"(?<!\\)\|", content)
    return [cell.strip().replace("\\|", "|") for cell in cells]


def is_table_line(line: str) -> bool:
    stripped = line.strip()
    return len(stripped) > 1 and stripped.startswith("|") and stripped.endswith("|")


def is_table_divider_line(line: str) -> bool:
    return _DIVIDER_RE.match(line.strip().replace(" ", "")) is not None


def _parse_align(cell: str) -> str | None:
    match = _ALIGN_CELL_RE.match(cell.replace(" ", ""))
    if match is None:
        return None
    left, right = match.groups()
    if left and right:
        return "center"
    if right:
        return "right"
    if left:
        return "left"
    return None


def render_table(
    header_cells: list[str],
    divider_cells: list[str],
    body_rows: list[list[str]],
    *,
    max_rows: int = TABLE_MAX_ROWS,
    max_columns: int = TABLE_MAX_COLUMNS,
) -> Table:
    """Build a capped, rectangular Table block.

    The header row sets the width: short rows are padded with empty
    cells and extra cells are dropped. The divider row is only read for
    column alignment; it never becomes a row of its own.
    """
    if len(body_rows) > max_rows:
        logger.debug("Table has %d data rows, keeping first %d", len(body_rows), max_rows)
    widest = max([len(header_cells), *(len(row) for row in body_rows)])
    if widest > max_columns:
        logger.debug("Table has %d columns, keeping first %d", widest, max_columns)

    header = tuple(header_cells[:max_columns])
    width = len(header)
    rows = tuple(
        tuple(row[:width]) + ("",) * (width - len(row[:width]))
        for row in body_rows[:max_rows]
    )
    aligns = tuple(
        _parse_align(divider_cells[i]) if i < len(divider_cells) else None
        for i in range(width)
    )
    return Table(header=header, rows=rows, aligns=aligns)


def render_table_fallback(lines: list[str]) -> str:
    """Wrap raw table source in a code block so it keeps its columns."""
    return "```\n" + "\n".join(line.strip() for line in lines) + "\n```"
