# tests/test_task_store.py

from __future__ import annotations

import json
from pathlib import Path

import pytest

from todolist.storage.kv_store import InMemoryKeyValueSlot, SqliteKeyValueSlot
from todolist.storage.snapshot import SnapshotStorage
from todolist.tasks.task_models import TaskFilter, Theme
from todolist.tasks.task_store import TaskStore

from .fakes import FailingSlot, assert_partition


def _fresh(slot) -> TaskStore:
    s = TaskStore(SnapshotStorage(slot))
    s.load()
    return s


def test_add_task_goes_to_head_and_is_active(store: TaskStore) -> None:
    task = store.add_task("buy milk")

    assert store.all_tasks[0].text == "buy milk"
    assert store.all_tasks[0].completed is False
    assert store.all_tasks[0].active is True
    assert store.active_tasks[0] is task
    assert store.completed_tasks == []


def test_newest_first_and_partitions_keep_order(store: TaskStore) -> None:
    a = store.add_task("a")
    b = store.add_task("b")
    c = store.add_task("c")
    store.toggle_completed(b.id)

    assert [t.text for t in store.all_tasks] == ["c", "b", "a"]
    assert [t.id for t in store.active_tasks] == [c.id, a.id]
    assert [t.id for t in store.completed_tasks] == [b.id]


def test_partition_holds_after_every_mutation(store: TaskStore) -> None:
    ids = [store.add_task(f"task {i}").id for i in range(6)]
    assert_partition(store)

    for task_id in ids[::2]:
        store.toggle_completed(task_id)
        assert_partition(store)

    store.delete_task(ids[1])
    assert_partition(store)

    store.toggle_completed(ids[0])
    assert_partition(store)

    store.clear_completed()
    assert_partition(store)
    assert store.completed_tasks == []


def test_add_rejects_blank_text(store: TaskStore) -> None:
    with pytest.raises(ValueError):
        store.add_task("   ")
    with pytest.raises(ValueError):
        store.add_task("")
    assert store.all_tasks == []


def test_ids_are_unique_for_rapid_adds(store: TaskStore) -> None:
    for i in range(300):
        store.add_task(f"t{i}")
    ids = [t.id for t in store.all_tasks]
    assert len(set(ids)) == len(ids)


def test_toggle_flips_both_flags_and_back(store: TaskStore) -> None:
    task = store.add_task("x")

    updated = store.toggle_completed(task.id)
    assert updated is not None
    assert updated.completed is True and updated.active is False
    assert store.completed_tasks == [task]

    store.toggle_completed(task.id)
    assert task.completed is False and task.active is True
    assert store.active_tasks == [task]


def test_toggle_unknown_id_is_noop(store: TaskStore) -> None:
    store.add_task("x")
    before = [t.to_dict() for t in store.all_tasks]

    assert store.toggle_completed("nope") is None
    assert [t.to_dict() for t in store.all_tasks] == before


def test_delete_unknown_id_leaves_list_unchanged(store: TaskStore) -> None:
    store.add_task("a")
    store.add_task("b")
    before = [t.to_dict() for t in store.all_tasks]

    store.delete_task("does-not-exist")

    assert [t.to_dict() for t in store.all_tasks] == before


def test_delete_removes_task(store: TaskStore) -> None:
    a = store.add_task("a")
    b = store.add_task("b")
    store.delete_task(a.id)
    assert store.all_tasks == [b]
    assert store.get_task(a.id) is None


def test_clear_completed_keeps_order_and_is_idempotent(store: TaskStore) -> None:
    tasks = [store.add_task(name) for name in ("a", "b", "c", "d")]
    store.toggle_completed(tasks[1].id)
    store.toggle_completed(tasks[3].id)

    store.clear_completed()
    once = [t.to_dict() for t in store.all_tasks]
    assert [t["text"] for t in once] == ["c", "a"]

    store.clear_completed()
    assert [t.to_dict() for t in store.all_tasks] == once
    assert store.completed_tasks == []


def test_visible_tasks_and_items_left_follow_partitions(store: TaskStore) -> None:
    a = store.add_task("a")
    store.add_task("b")
    store.toggle_completed(a.id)

    store.set_filter(TaskFilter.COMPLETED)
    assert store.visible_tasks() == [a]
    assert store.items_left() == 1

    store.set_filter(TaskFilter.ACTIVE)
    assert [t.text for t in store.visible_tasks()] == ["b"]
    assert store.items_left() == 1

    store.set_filter(TaskFilter.ALL)
    assert len(store.visible_tasks()) == 2


def test_mutations_write_through_to_slot(slot: InMemoryKeyValueSlot, store: TaskStore) -> None:
    task = store.add_task("persist me")

    data = json.loads(slot.items["state"])
    assert data["allTasks"][0] == {
        "id": task.id,
        "text": "persist me",
        "completed": False,
        "active": True,
    }
    assert data["activeTasks"][0]["id"] == task.id
    assert data["completedTasks"] == []

    store.set_theme(Theme.NIGHT)
    assert json.loads(slot.items["state"])["theme"] == "night"


def test_set_filter_does_not_persist(slot: InMemoryKeyValueSlot, store: TaskStore) -> None:
    store.add_task("a")
    before = slot.items["state"]

    store.set_filter(TaskFilter.COMPLETED)

    assert slot.items["state"] == before
    assert store.filter is TaskFilter.COMPLETED


def test_round_trip_restores_tasks_and_theme_but_resets_filter(slot: InMemoryKeyValueSlot) -> None:
    first = _fresh(slot)
    a = first.add_task("a")
    first.add_task("b")
    first.toggle_completed(a.id)
    first.set_theme(Theme.NIGHT)
    first.set_filter(TaskFilter.ACTIVE)
    # a later mutation persists the non-default filter too
    first.add_task("c")

    second = _fresh(slot)

    assert [t.to_dict() for t in second.all_tasks] == [t.to_dict() for t in first.all_tasks]
    assert second.theme is Theme.NIGHT
    assert second.filter is TaskFilter.ALL
    assert_partition(second)


def test_round_trip_through_sqlite(tmp_path: Path) -> None:
    db = tmp_path / "state.sqlite3"
    first = _fresh(SqliteKeyValueSlot(db))
    task = first.add_task("survives restart")
    first.toggle_completed(task.id)

    second = _fresh(SqliteKeyValueSlot(db))
    assert second.all_tasks[0].text == "survives restart"
    assert second.completed_tasks[0].id == task.id


@pytest.mark.parametrize(
    "raw",
    [
        None,
        "",
        "not json {",
        "[]",
        '"just a string"',
        "null",
        '{"allTasks": "oops"}',
        '{"allTasks": {"id": "x"}}',
    ],
)
def test_malformed_snapshot_yields_default_state(raw: str | None) -> None:
    slot = InMemoryKeyValueSlot({} if raw is None else {"state": raw})

    s = _fresh(slot)

    assert s.all_tasks == []
    assert s.active_tasks == []
    assert s.completed_tasks == []
    assert s.filter is TaskFilter.ALL
    assert s.theme is Theme.DAY


def test_load_skips_bad_entries_and_normalizes_flags() -> None:
    snapshot = {
        "allTasks": [
            {"id": "1", "text": "ok", "completed": True, "active": True},
            {"id": "2"},
            "garbage",
            {"id": "1", "text": "duplicate"},
            {"id": "3", "text": "fine", "completed": False, "active": False},
        ],
        "completedTasks": [{"id": "ghost", "text": "stale cache", "completed": True, "active": False}],
        "filter": "completed",
        "theme": "sepia",
    }
    s = _fresh(InMemoryKeyValueSlot({"state": json.dumps(snapshot)}))

    assert [t.id for t in s.all_tasks] == ["1", "3"]
    assert s.all_tasks[0].active is False
    assert s.all_tasks[1].active is True
    assert [t.id for t in s.completed_tasks] == ["1"]
    assert s.theme is Theme.DAY
    assert s.filter is TaskFilter.ALL


def test_load_accepts_legacy_key_names() -> None:
    legacy = {
        "allTodos": [{"id": "123456", "text": "old", "completed": False, "active": True}],
        "completedTodos": [],
        "activeTodos": [],
        "theme": "night",
        "type": "completed",
    }
    s = _fresh(InMemoryKeyValueSlot({"state": json.dumps(legacy)}))

    assert [t.text for t in s.all_tasks] == ["old"]
    assert s.theme is Theme.NIGHT
    assert s.filter is TaskFilter.ALL


def test_write_failure_does_not_break_mutations() -> None:
    slot = FailingSlot()
    s = _fresh(slot)

    task = s.add_task("still in memory")
    s.toggle_completed(task.id)

    assert slot.write_attempts == 2
    assert s.completed_tasks == [task]
