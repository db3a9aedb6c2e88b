"""Tests for Block Kit serialization."""

import pytest
from slack_sdk.errors import SlackObjectFormationError

from slackmd.blocks import Attachment, BlocksPayload, Divider, Header, Section, Table


class TestBlockTypes:
    @pytest.mark.parametrize(
        "block, expected",
        [
            pytest.param(Header(text="t"), "header", id="header"),
            pytest.param(Section(text="t"), "section", id="section"),
            pytest.param(Divider(), "divider", id="divider"),
            pytest.param(Table(header=(), rows=()), "table", id="table"),
        ],
    )
    def test_type_tag(self, block, expected: str) -> None:
        assert block.type == expected
        assert block.to_dict()["type"] == expected

    def test_blocks_are_immutable(self) -> None:
        with pytest.raises(AttributeError):
            Header(text="t").text = "other"  # type: ignore[misc]


class TestToDict:
    def test_header_is_plain_text(self) -> None:
        data = Header(text="Release notes").to_dict()
        assert data["text"]["type"] == "plain_text"
        assert data["text"]["text"] == "Release notes"

    def test_section_is_mrkdwn(self) -> None:
        data = Section(text="*bold*").to_dict()
        assert data["text"]["type"] == "mrkdwn"
        assert data["text"]["text"] == "*bold*"

    def test_divider(self) -> None:
        assert Divider().to_dict() == {"type": "divider"}

    def test_oversized_header_rejected_by_slack_sdk(self) -> None:
        with pytest.raises(SlackObjectFormationError):
            Header(text="A" * 151).to_dict()

    def test_table_puts_header_row_first(self) -> None:
        table = Table(header=("h1", "h2"), rows=(("a", "b"),))
        assert table.to_dict() == {
            "type": "table",
            "rows": [
                [{"type": "raw_text", "text": "h1"}, {"type": "raw_text", "text": "h2"}],
                [{"type": "raw_text", "text": "a"}, {"type": "raw_text", "text": "b"}],
            ],
        }

    def test_table_column_settings_only_when_aligned(self) -> None:
        plain = Table(header=("a", "b"), rows=(), aligns=(None, None))
        aligned = Table(header=("a", "b"), rows=(), aligns=(None, "right"))
        assert "column_settings" not in plain.to_dict()
        assert aligned.to_dict()["column_settings"] == [{"align": "left"}, {"align": "right"}]

    def test_payload(self) -> None:
        payload = BlocksPayload(
            blocks=(Divider(),),
            attachments=(Attachment(blocks=(Table(header=("x",), rows=()),)),),
        )
        assert payload.to_dict() == {
            "blocks": [{"type": "divider"}],
            "attachments": [
                {"blocks": [{"type": "table", "rows": [[{"type": "raw_text", "text": "x"}]]}]}
            ],
        }

    def test_empty_payload(self) -> None:
        assert BlocksPayload().to_dict() == {"blocks": [], "attachments": []}
