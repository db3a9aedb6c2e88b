"""Block Kit limits and their environment overrides.

Defaults are Slack's documented limits. Each one can be lowered (or
raised, if Slack raises it) through an environment variable:

  SLACKMD_HEADER_MAX_CHARS    header block plain_text length   (150)
  SLACKMD_SECTION_MAX_CHARS   section block mrkdwn length      (3000)
  SLACKMD_MAX_BLOCKS          top-level blocks per message     (50)
  SLACKMD_TABLE_MAX_ROWS      data rows per table              (100)
  SLACKMD_TABLE_MAX_COLUMNS   cells per table row              (20)

The compiler never reads the environment itself; callers pass
``config.limits`` (or their own BlockLimits) explicitly.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from .splitter import SECTION_MAX_CHARS
from .tables import TABLE_MAX_COLUMNS, TABLE_MAX_ROWS

HEADER_MAX_CHARS = 150
MAX_BLOCKS = 50


@dataclass(frozen=True, slots=True)
class BlockLimits:
    header_max_chars: int = HEADER_MAX_CHARS
    section_max_chars: int = SECTION_MAX_CHARS
    max_blocks: int = MAX_BLOCKS
    table_max_rows: int = TABLE_MAX_ROWS
    table_max_columns: int = TABLE_MAX_COLUMNS


DEFAULT_LIMITS = BlockLimits()


def _positive_int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name} must be > 0, got {value}")
    return value


class Config:
    """Process-wide settings read once from the environment."""

    def __init__(self) -> None:
        self.header_max_chars = _positive_int_env(
            "SLACKMD_HEADER_MAX_CHARS", HEADER_MAX_CHARS
        )
        self.section_max_chars = _positive_int_env(
            "SLACKMD_SECTION_MAX_CHARS", SECTION_MAX_CHARS
        )
        self.max_blocks = _positive_int_env("SLACKMD_MAX_BLOCKS", MAX_BLOCKS)
        self.table_max_rows = _positive_int_env("SLACKMD_TABLE_MAX_ROWS", TABLE_MAX_ROWS)
        self.table_max_columns = _positive_int_env(
            "SLACKMD_TABLE_MAX_COLUMNS", TABLE_MAX_COLUMNS
        )

    @property
    def limits(self) -> BlockLimits:
        return BlockLimits(
            header_max_chars=self.header_max_chars,
            section_max_chars=self.section_max_chars,
            max_blocks=self.max_blocks,
            table_max_rows=self.table_max_rows,
            table_max_columns=self.table_max_columns,
        )


config = Config()
