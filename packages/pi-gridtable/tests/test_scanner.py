"""Tests for pi.gridtable.scanner -- document-level conversion."""

from __future__ import annotations

from pi.gridtable.config import GridTableConfig
from pi.gridtable.parser import parse_row
from pi.gridtable.scanner import closes_fence, convert_tables, find_table, open_fence
from pi.gridtable.types import FenceState

TABLE = "| ID | Name |\n| - | -- |\n| A1 | 山田太郎 |\n"

EXPECTED_GRID = [
    "+------+------------------+",
    "| ID   | Name             |",
    "+======+==================+",
    "| A1   | 山田太郎         |",
    "+------+------------------+",
]


# ---------------------------------------------------------------------------
# Fence detection
# ---------------------------------------------------------------------------


class TestFences:
    def test_backtick_opener(self) -> None:
        assert open_fence("```python") == FenceState(marker_char="`", marker_length=3)

    def test_tilde_opener_with_indent(self) -> None:
        assert open_fence("  ~~~~~") == FenceState(marker_char="~", marker_length=5)

    def test_two_backticks_do_not_open(self) -> None:
        assert open_fence("``inline``") is None

    def test_close_requires_same_marker(self) -> None:
        fence = FenceState(marker_char="`", marker_length=3)
        assert closes_fence("```", fence)
        assert not closes_fence("~~~", fence)

    def test_close_requires_at_least_opening_length(self) -> None:
        fence = FenceState(marker_char="~", marker_length=4)
        assert not closes_fence("~~~", fence)
        assert closes_fence("~~~~~~", fence)

    def test_close_rejects_trailing_content(self) -> None:
        fence = FenceState(marker_char="`", marker_length=3)
        assert not closes_fence("``` python", fence)
        assert closes_fence("   ```   ", fence)

    def test_blank_line_does_not_close(self) -> None:
        assert not closes_fence("", FenceState(marker_char="`", marker_length=3))


# ---------------------------------------------------------------------------
# Table detection
# ---------------------------------------------------------------------------


class TestFindTable:
    def test_block_extends_over_matching_rows(self) -> None:
        lines = ["| a | b |", "| - | - |", "| 1 | 2 |", "| 3 | 4 |", "after"]
        found = find_table(lines, 0)
        assert found is not None
        table, end = found
        assert end == 4
        assert table.header == ["a", "b"]
        assert table.rows == [["1", "2"], ["3", "4"]]
        assert table.weights == [1, 1]

    def test_requires_a_body_row(self) -> None:
        assert find_table(["| a | b |", "| - | - |"], 0) is None

    def test_requires_separator_row(self) -> None:
        assert find_table(["| a | b |", "| 1 | 2 |", "| 3 | 4 |"], 0) is None

    def test_column_count_change_ends_block(self) -> None:
        lines = ["| a | b |", "| - | - |", "| 1 | 2 |", "| 1 | 2 | 3 |"]
        table, end = find_table(lines, 0)
        assert end == 3
        assert len(table.rows) == 1

    def test_indent_change_ends_block(self) -> None:
        lines = ["| a | b |", "| - | - |", "| 1 | 2 |", "  | 3 | 4 |"]
        _, end = find_table(lines, 0)
        assert end == 3

    def test_header_on_last_line(self) -> None:
        assert find_table(["| a | b |"], 0) is None


# ---------------------------------------------------------------------------
# convert_tables
# ---------------------------------------------------------------------------


class TestConvertTables:
    def test_end_to_end_example(self, narrow_config: GridTableConfig) -> None:
        result = convert_tables(TABLE, narrow_config)
        assert result.changed
        assert result.tables == 1
        assert result.content == "\n".join(EXPECTED_GRID) + "\n"

    def test_surrounding_text_untouched(self, narrow_config: GridTableConfig) -> None:
        doc = "# Title\n\nIntro text.\n\n" + TABLE + "\nOutro | with | pipes\n"
        result = convert_tables(doc, narrow_config)
        lines = result.content.split("\n")
        assert lines[:4] == ["# Title", "", "Intro text.", ""]
        assert lines[4:9] == EXPECTED_GRID
        assert lines[9:] == ["", "Outro | with | pipes", ""]

    def test_no_tables_is_unchanged(self) -> None:
        doc = "plain text\n| lonely | row |\nmore\n"
        result = convert_tables(doc)
        assert not result.changed
        assert result.tables == 0
        assert result.content == doc

    def test_default_config(self) -> None:
        result = convert_tables(TABLE)
        # target 90 with margin 2: fixed "ID" column 4 wide, "Name" takes the other 86
        assert result.content.split("\n")[0] == "+" + "-" * 6 + "+" + "-" * 88 + "+"

    def test_idempotent(self, narrow_config: GridTableConfig) -> None:
        first = convert_tables(TABLE, narrow_config)
        second = convert_tables(first.content, narrow_config)
        assert not second.changed
        assert second.content == first.content

    def test_idempotent_with_wrapped_rows(self, narrow_config: GridTableConfig) -> None:
        doc = "| key | value |\n| - | --- |\n| k | " + "word " * 12 + "|\n"
        first = convert_tables(doc, narrow_config)
        assert first.changed
        second = convert_tables(first.content, narrow_config)
        assert not second.changed

    def test_table_inside_fence_is_untouched(self, narrow_config: GridTableConfig) -> None:
        doc = "```markdown\n" + TABLE + "```\n"
        result = convert_tables(doc, narrow_config)
        assert not result.changed
        assert result.content == doc

    def test_short_closing_fence_keeps_fence_open(self, narrow_config: GridTableConfig) -> None:
        doc = "~~~~\n~~~\n" + TABLE + "~~~~\n"
        result = convert_tables(doc, narrow_config)
        assert result.content == doc

    def test_other_marker_does_not_close_fence(self, narrow_config: GridTableConfig) -> None:
        doc = "```\n~~~\n" + TABLE + "```\n"
        assert convert_tables(doc, narrow_config).content == doc

    def test_table_after_closed_fence_is_converted(self, narrow_config: GridTableConfig) -> None:
        doc = "```\ncode\n```\n" + TABLE
        result = convert_tables(doc, narrow_config)
        assert result.changed
        assert result.content.split("\n")[3:8] == EXPECTED_GRID

    def test_unterminated_fence_accepted(self, narrow_config: GridTableConfig) -> None:
        doc = "```\n" + TABLE
        result = convert_tables(doc, narrow_config)
        assert not result.changed
        assert result.content == doc

    def test_crlf_preserved(self, narrow_config: GridTableConfig) -> None:
        doc = TABLE.replace("\n", "\r\n")
        result = convert_tables(doc, narrow_config)
        assert result.content == "\r\n".join(EXPECTED_GRID) + "\r\n"
        assert "\n" not in result.content.replace("\r\n", "")

    def test_missing_final_newline_preserved(self, narrow_config: GridTableConfig) -> None:
        result = convert_tables(TABLE.rstrip("\n"), narrow_config)
        assert result.content == "\n".join(EXPECTED_GRID)

    def test_final_newline_not_duplicated(self) -> None:
        doc = "text\n\n"
        assert convert_tables(doc).content == doc

    def test_empty_document(self) -> None:
        result = convert_tables("")
        assert result.content == ""
        assert not result.changed

    def test_indented_table_keeps_indent(self, narrow_config: GridTableConfig) -> None:
        doc = "".join(f"  {line}\n" for line in TABLE.splitlines())
        result = convert_tables(doc, narrow_config)
        assert result.content == "".join(f"  {line}\n" for line in EXPECTED_GRID)

    def test_multiple_tables(self, narrow_config: GridTableConfig) -> None:
        doc = TABLE + "\n" + TABLE
        result = convert_tables(doc, narrow_config)
        assert result.tables == 2
        assert result.content.count("+======+") == 2

    def test_escaped_pipe_round_trip(self, narrow_config: GridTableConfig) -> None:
        doc = "| a | b |\n| - | -- |\n| x\\|y | z |\n"
        result = convert_tables(doc, narrow_config)
        data_line = result.content.split("\n")[3]
        assert "x\\|y" in data_line
        row = parse_row(data_line)
        assert row is not None
        assert row.cells[0] == "x|y"

    def test_never_raises_on_odd_input(self) -> None:
        for doc in ["|", "||\n||\n||", "| - | - |\n| - | - |\n| - | - |", "\r\n\r\n", "```", "~~~\n~~"]:
            convert_tables(doc)
