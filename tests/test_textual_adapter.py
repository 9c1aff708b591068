from __future__ import annotations

from typing import List

from sheet_engine.adapters.textual import TextualGridAdapter, TextualUIHooks
from sheet_engine.session import GridSession, SessionView


def make_session() -> GridSession:
    return GridSession.from_records(
        [
            {"id": "1", "task": "Write", "hours": "1"},
            {"id": "2", "task": "Read", "hours": "2"},
        ],
        ["task", "hours"],
    )


def make_adapter(
    session: GridSession,
    *,
    views: List[SessionView] | None = None,
    statuses: List[str] | None = None,
    clipboard: List[str] | None = None,
    logs: List[str] | None = None,
) -> TextualGridAdapter:
    views = views if views is not None else []
    statuses = statuses if statuses is not None else []
    clipboard = clipboard if clipboard is not None else []
    logs = logs if logs is not None else []
    hooks = TextualUIHooks(
        update_table=views.append,
        update_status=statuses.append,
        set_clipboard=clipboard.append,
        log=logs.append,
    )
    return TextualGridAdapter(session, hooks)


def test_adapter_publishes_initial_snapshot() -> None:
    views: List[SessionView] = []
    make_adapter(make_session(), views=views)

    assert len(views) == 1
    assert views[0].version == 0


def test_ctrl_c_sends_payload_to_host_clipboard() -> None:
    session = make_session()
    clipboard: List[str] = []
    adapter = make_adapter(session, clipboard=clipboard)
    session.select_rows(["1", "2"])

    status = adapter.handle_key("c", modifiers=("CTRL",))

    assert clipboard == ["Write\t1\nRead\t2"]
    assert status == "copied 2 row(s)"


def test_paste_then_undo_redo_shortcuts() -> None:
    session = make_session()
    views: List[SessionView] = []
    statuses: List[str] = []
    adapter = make_adapter(session, views=views, statuses=statuses)
    session.select_cells(["1|hours"])

    adapter.paste("5\n6")
    assert session.store.value("2", "hours") == "6"
    assert views[-1].version == 1
    assert statuses[-1] == "pasted 2 cell(s) [cell_range]"

    adapter.handle_key("ctrl+z")
    assert session.store.value("2", "hours") == "2"

    adapter.handle_key("z", modifiers=("ctrl", "shift"))
    assert session.store.value("1", "hours") == "5"
    assert statuses[-1] == "redo cell_range"


def test_delete_clears_selection() -> None:
    session = make_session()
    adapter = make_adapter(session)
    session.select_cells(["2|task"])

    adapter.handle_key("delete")

    assert session.store.value("2", "task") == ""


def test_shortcuts_are_ignored_while_editing() -> None:
    session = make_session()
    statuses: List[str] = []
    adapter = make_adapter(session, statuses=statuses)
    session.select_cells(["1|task"])
    session.begin_edit("1", "task")

    adapter.paste("changed")
    adapter.handle_key("backspace")

    assert session.store.value("1", "task") == "Write"
    assert statuses == ["paste: nothing to do", "clear: nothing selected"]


def test_unknown_key_is_not_handled_but_logged() -> None:
    logs: List[str] = []
    adapter = make_adapter(make_session(), logs=logs)

    assert adapter.handle_key("q") is None
    assert any(line.startswith("key ->") for line in logs)
