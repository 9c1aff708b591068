from __future__ import annotations

from sheet_engine.clipboard import copy_selection, format_tsv, is_single_value, parse_tsv
from sheet_engine.table import CopiedColumns, RowStore, Selection

COLUMNS = ["x", "y", "timeValue"]


def make_store() -> RowStore:
    return RowStore.from_dicts(
        [
            {"id": "r1", "x": "1", "y": "a", "timeValue": "=timeValue"},
            {"id": "r2", "x": "2", "y": "b", "timeValue": "0.50"},
            {"id": "r3", "x": "3", "y": "", "timeValue": "1.00"},
        ]
    )


def test_parse_tsv_keeps_blank_cells_and_lines() -> None:
    assert parse_tsv("a\t\tc\n") == [["a", "", "c"], [""]]
    assert format_tsv([["a", "b"], ["c"]]) == "a\tb\nc"
    assert is_single_value("plain text")
    assert not is_single_value("a\tb")
    assert not is_single_value("a\nb")


def test_copy_rows_uses_store_order_and_all_columns() -> None:
    copied = CopiedColumns()
    selection = Selection(rows=("r3", "r1"))

    text = copy_selection(selection, make_store(), COLUMNS, copied)

    assert text == "1\ta\t=timeValue\n3\t\t1.00"
    assert copied.current == COLUMNS


def test_rows_take_priority_over_cells() -> None:
    copied = CopiedColumns()
    selection = Selection(rows=("r2",), cells=("r1|x",))

    assert copy_selection(selection, make_store(), COLUMNS, copied) == "2\tb\t0.50"


def test_copy_cells_groups_by_row_in_selection_order() -> None:
    copied = CopiedColumns()
    selection = Selection(cells=("r2|y", "r1|x", "r2|x", "r1|y"))

    text = copy_selection(selection, make_store(), COLUMNS, copied)

    assert text == "b\t2\n1\ta"
    assert copied.current == ["y", "x"]


def test_copy_cells_reads_literal_store_value() -> None:
    copied = CopiedColumns()
    selection = Selection(cells=("r1|timeValue",))

    text = copy_selection(selection, make_store(), COLUMNS, copied)

    assert text == "=timeValue"
    assert copied.is_exactly("timeValue")


def test_copy_skips_row_number_column() -> None:
    copied = CopiedColumns()
    selection = Selection(cells=("r1|rowNum", "r1|x", "r2|rowNum"))

    text = copy_selection(selection, make_store(), COLUMNS, copied)

    assert text == "1"
    assert copied.current == ["x"]


def test_copy_is_noop_while_editing() -> None:
    copied = CopiedColumns(current=["x"])
    selection = Selection(rows=("r1",), editing_cell=("r1", "x"))

    assert copy_selection(selection, make_store(), COLUMNS, copied) is None
    assert copied.current == ["x"]


def test_copy_with_empty_selection_returns_none() -> None:
    assert copy_selection(Selection(), make_store(), COLUMNS, CopiedColumns()) is None
