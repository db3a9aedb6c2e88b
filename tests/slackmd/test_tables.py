"""Tests for table capping and tokenizing."""

import pytest

from slackmd.blocks import Table
from slackmd.tables import (
    TABLE_MAX_COLUMNS,
    TABLE_MAX_ROWS,
    is_table_divider_line,
    is_table_line,
    render_table,
    render_table_fallback,
    split_table_row,
)


def _grid(rows: int, columns: int) -> list[list[str]]:
    return [[f"r{r}c{c}" for c in range(columns)] for r in range(rows)]


class TestSplitTableRow:
    def test_strips_outer_pipes_and_whitespace(self) -> None:
        assert split_table_row("|  a | b  |c|") == ["a", "b", "c"]

    def test_escaped_pipe_stays_in_cell(self) -> None:
        assert split_table_row(r"| a \| b | c |") == ["a | b", "c"]

    def test_divider_row(self) -> None:
        assert split_table_row("| :--- | ---: |") == [":---", "---:"]


class TestLineShape:
    @pytest.mark.parametrize(
        ("line", "expected"),
        [
            pytest.param("| a | b |", True, id="row"),
            pytest.param("  |a|  ", True, id="surrounding_space"),
            pytest.param("a | b", False, id="no_outer_pipes"),
            pytest.param("| a", False, id="open_row"),
            pytest.param("|", False, id="single_pipe"),
        ],
    )
    def test_is_table_line(self, line: str, expected: bool) -> None:
        assert is_table_line(line) is expected

    @pytest.mark.parametrize(
        ("line", "expected"),
        [
            pytest.param("|---|---|", True, id="plain"),
            pytest.param("| :-- | :-: | --: |", True, id="aligned"),
            pytest.param("|---|", True, id="single_column"),
            pytest.param("|||", False, id="no_dash"),
            pytest.param("| a | b |", False, id="content_row"),
            pytest.param("---", False, id="thematic_break"),
        ],
    )
    def test_is_table_divider_line(self, line: str, expected: bool) -> None:
        assert is_table_divider_line(line) is expected


class TestRenderTable:
    def test_small_table_kept_as_is(self) -> None:
        table = render_table(["h1", "h2"], ["---", "---"], [["a", "b"], ["c", "d"]])
        assert isinstance(table, Table)
        assert table.header == ("h1", "h2")
        assert table.rows == (("a", "b"), ("c", "d"))
        assert table.aligns == (None, None)

    def test_caps_rows_and_columns_from_the_end(self) -> None:
        header = [f"h{c}" for c in range(25)]
        body = _grid(120, 25)
        table = render_table(header, ["---"] * 25, body)

        assert len(table.header) == TABLE_MAX_COLUMNS
        assert table.header[-1] == "h19"
        assert len(table.rows) == TABLE_MAX_ROWS
        assert all(len(row) == TABLE_MAX_COLUMNS for row in table.rows)
        assert table.rows[0][0] == "r0c0"
        assert table.rows[-1] == tuple(f"r99c{c}" for c in range(20))

    def test_custom_caps(self) -> None:
        table = render_table(["a", "b", "c"], [], _grid(5, 3), max_rows=2, max_columns=2)
        assert table.header == ("a", "b")
        assert table.rows == (("r0c0", "r0c1"), ("r1c0", "r1c1"))

    def test_header_only_table(self) -> None:
        table = render_table(["only"], ["---"], [])
        assert table.header == ("only",)
        assert table.rows == ()

    def test_divider_alignment(self) -> None:
        table = render_table(
            ["a", "b", "c", "d"], [":---", ":-:", "--:", "---"], [["1", "2", "3", "4"]]
        )
        assert table.aligns == ("left", "center", "right", None)

    def test_alignment_is_column_capped(self) -> None:
        table = render_table(["a", "b"], [":-:", ":-:", ":-:"], [], max_columns=1)
        assert table.aligns == ("center",)

    def test_rows_padded_and_capped_to_header_width(self) -> None:
        table = render_table(["a", "b", "c"], ["---"], [["1"], ["1", "2", "3", "4"]])
        assert table.rows == (("1", "", ""), ("1", "2", "3"))
        assert table.aligns == (None, None, None)


class TestRenderTableFallback:
    def test_wraps_lines_in_code_block(self) -> None:
        lines = ["  | a | b |", "|---|---|", "| 1 | 2 |  "]
        assert render_table_fallback(lines) == "```\n| a | b |\n|---|---|\n| 1 | 2 |\n```"
