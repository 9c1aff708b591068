from __future__ import annotations

import pytest

from sheet_engine.table import (
    Row,
    RowStore,
    RowStoreError,
    Selection,
    cell_key,
    cell_range,
    row_range,
    split_cell_key,
)


def make_store() -> RowStore:
    return RowStore.from_dicts(
        [
            {"id": "r1", "x": "1", "y": "a"},
            {"id": "r2", "x": "2", "y": None},
            {"id": "r3", "x": "3"},
        ]
    )


def test_row_get_treats_missing_and_empty_as_blank() -> None:
    store = make_store()

    assert store.value("r2", "y") == ""
    assert store.value("r3", "y") == ""
    assert store.value("missing", "x") == ""


def test_apply_replaces_rows_and_keeps_old_snapshots() -> None:
    store = make_store()
    before = store.rows
    original = store.get("r1")

    replaced = store.apply({"r1": {"x": "10"}, "gone": {"x": "?"}})

    assert replaced == 1
    assert store.version == 1
    assert store.value("r1", "x") == "10"
    assert original is before[0]
    assert original.get("x") == "1"
    assert store.get("r1") is not original


def test_apply_with_only_unknown_rows_keeps_version() -> None:
    store = make_store()

    assert store.apply({"nope": {"x": "1"}}) == 0
    assert store.version == 0


def test_duplicate_row_ids_raise() -> None:
    with pytest.raises(RowStoreError) as info:
        RowStore([Row(id="a"), Row(id="a")])

    assert info.value.row_id == "a"


def test_row_values_are_read_only() -> None:
    row = Row(id="a", values={"x": "1"})

    with pytest.raises(TypeError):
        row.values["x"] = "2"  # type: ignore[index]


def test_cell_key_round_trip() -> None:
    assert cell_key("r1", "x") == "r1|x"
    assert split_cell_key("r1|x") == ("r1", "x")


def test_selection_deduplicates_in_insertion_order() -> None:
    selection = Selection(cells=("r2|x", "r1|x", "r2|x"))

    assert selection.cells == ("r2|x", "r1|x")
    assert selection.anchor_cell == ("r2", "x")


def test_row_and_cell_selection_replace_each_other() -> None:
    selection = Selection(cells=("r1|x",)).with_rows(["r2"])
    assert selection.rows == ("r2",)
    assert selection.cells == ()

    selection = selection.with_cells(["r3|y"])
    assert selection.rows == ()
    assert selection.cells == ("r3|y",)


def test_row_range_follows_store_order() -> None:
    store = make_store()

    assert row_range(store, "r3", "r1") == ("r1", "r2", "r3")
    assert row_range(store, "r1", "missing") == ()


def test_cell_range_is_row_major_and_skips_row_number() -> None:
    store = make_store()
    columns = ["rowNum", "x", "y"]

    keys = cell_range(store, columns, ("r2", "y"), ("r1", "rowNum"))

    assert keys == ("r1|x", "r1|y", "r2|x", "r2|y")


def test_cell_range_with_unknown_column_is_empty() -> None:
    store = make_store()

    assert cell_range(store, ["x"], ("r1", "x"), ("r2", "zzz")) == ()
