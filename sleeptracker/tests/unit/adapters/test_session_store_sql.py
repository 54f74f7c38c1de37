from __future__ import annotations

import logging
import threading

import pytest
from sqlmodel import SQLModel

from sleeptracker.adapters.session_store_sql import SleepNightRow, SqlSessionStore, make_engine
from sleeptracker.domain.entities import SleepNight, UNRATED_QUALITY
from sleeptracker.domain.errors import StoreFailure


@pytest.fixture
def store(tmp_path) -> SqlSessionStore:
    return SqlSessionStore(database_url=f"sqlite:///{tmp_path / 'sleep.db'}")


def test_insert_assigns_ids_and_round_trips(store: SqlSessionStore) -> None:
    first = store.insert(SleepNight.open_at(1_000))
    second = store.insert(SleepNight.open_at(2_000))

    assert first.night_id is not None
    assert second.night_id != first.night_id
    assert store.get(first.night_id) == first
    assert first.sleep_quality == UNRATED_QUALITY
    assert store.get(9999) is None


def test_most_recent_orders_by_start_time(store: SqlSessionStore) -> None:
    assert store.get_most_recent() is None
    late = store.insert(SleepNight(start_time_milli=5_000, end_time_milli=6_000))
    store.insert(SleepNight(start_time_milli=1_000, end_time_milli=2_000))

    assert store.get_most_recent() == late
    assert [n.start_time_milli for n in store.list_all()] == [5_000, 1_000]


def test_update_overwrites_end_and_quality(store: SqlSessionStore) -> None:
    night = store.insert(SleepNight.open_at(1_000))
    closed = SleepNight(
        night_id=night.night_id, start_time_milli=1_000, end_time_milli=4_000, sleep_quality=4
    )

    store.update(closed)

    assert store.get(night.night_id) == closed
    assert store.get_most_recent().is_open is False


def test_update_of_missing_row_is_a_no_op(store: SqlSessionStore) -> None:
    store.update(SleepNight(night_id=42, start_time_milli=1, end_time_milli=2))
    assert store.list_all() == []


def test_update_requires_an_id(store: SqlSessionStore) -> None:
    with pytest.raises(StoreFailure):
        store.update(SleepNight.open_at(1))


def test_clear_removes_every_row(store: SqlSessionStore, caplog) -> None:
    store.insert(SleepNight.open_at(1_000))
    store.insert(SleepNight.open_at(2_000))

    with caplog.at_level(logging.INFO, logger="sleeptracker.adapters.session_store_sql"):
        store.clear()

    assert store.list_all() == []
    assert store.get_most_recent() is None
    assert "Cleared 2 night(s)" in caplog.text


def test_rows_survive_a_new_store_instance(tmp_path) -> None:
    url = f"sqlite:///{tmp_path / 'sleep.db'}"
    night = SqlSessionStore(database_url=url).insert(SleepNight.open_at(7_000))

    reopened = SqlSessionStore(database_url=url)

    assert reopened.get_most_recent() == night


def test_memory_database_is_shared_across_threads() -> None:
    store = SqlSessionStore(make_engine("sqlite://"))
    worker = threading.Thread(target=lambda: store.insert(SleepNight.open_at(3_000)))
    worker.start()
    worker.join()

    assert store.get_most_recent().start_time_milli == 3_000


def test_engine_errors_become_store_failures(store: SqlSessionStore) -> None:
    SQLModel.metadata.drop_all(store.engine, tables=[SleepNightRow.__table__])

    with pytest.raises(StoreFailure) as excinfo:
        store.list_all()

    assert excinfo.value.operation == "list_all"
    assert excinfo.value.cause is not None
