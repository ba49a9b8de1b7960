"""Tests for table parsing."""

from orger import Paragraph, ParseConfig, Table, TableCell, TableRow, parse
from orger.nodes import Bold, Text


def cell_texts(row: TableRow) -> list[str]:
    return [cell.text_content() for cell in row.children]


class TestTables:
    """Rows, header detection and ragged rows."""

    def test_header_row(self) -> None:
        doc = parse("| A | B |\n|---+---|\n| 1 | 2 |")
        table = doc.children[0]
        assert isinstance(table, Table)
        assert len(table.children) == 2

        header, body = table.children
        assert header.is_header is True
        assert cell_texts(header) == ["A", "B"]
        assert all(cell.is_header for cell in header.children)
        assert body.is_header is False
        assert cell_texts(body) == ["1", "2"]

    def test_no_rule_no_header(self) -> None:
        table = parse("| a | b |\n| c | d |").children[0]
        assert not any(row.is_header for row in table.children)

    def test_only_first_rule_marks_header(self) -> None:
        table = parse("| h |\n|---|\n| a |\n|---|\n| b |").children[0]
        assert [row.is_header for row in table.children] == [True, False, False]

    def test_leading_rule(self) -> None:
        table = parse("|---|\n| a |").children[0]
        assert len(table.children) == 1
        assert table.children[0].is_header is False

    def test_ragged_rows_padded(self) -> None:
        """Short rows get empty cells; never an error."""
        table = parse("| a | b | c |\n| 1 |").children[0]
        assert table.column_count == 3
        short = table.children[1]
        assert len(short.children) == 3
        assert short.children[1] == TableCell()

    def test_missing_trailing_pipe(self) -> None:
        table = parse("| a | b").children[0]
        assert cell_texts(table.children[0]) == ["a", "b"]

    def test_inline_markup_in_cells(self) -> None:
        table = parse("| *bold* | plain |").children[0]
        first = table.children[0].children[0]
        assert first.children == [Bold(children=[Text(value="bold")])]

    def test_parents(self) -> None:
        doc = parse("| a |")
        table = doc.children[0]
        row = table.children[0]
        assert row.parent is table
        assert row.children[0].parent is row

    def test_tables_disabled(self) -> None:
        doc = parse("| a | b |", config=ParseConfig(parse_tables=False))
        assert isinstance(doc.children[0], Paragraph)

    def test_table_ends_at_text(self) -> None:
        doc = parse("| a |\nafter")
        assert isinstance(doc.children[0], Table)
        assert isinstance(doc.children[1], Paragraph)
