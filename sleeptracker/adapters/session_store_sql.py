"""SQLite-backed session store built on SQLModel.

Dependencies:
    - ``sqlmodel`` for the table model and sessions.
    - ``sqlalchemy`` for engine pooling options and the error hierarchy.

Call context:
    Constructed once by ``sleeptracker.app.main`` and shared with the use cases.
    Calls arrive on the task-scope worker thread, so SQLite connections are
    opened with ``check_same_thread=False``.
"""

# sleeptracker/adapters/session_store_sql.py
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional

from sqlalchemy import delete
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool
from sqlmodel import Field, Session, SQLModel, col, create_engine, select

from ..domain.entities import NightId, SleepNight, UNRATED_QUALITY
from ..domain.errors import StoreFailure
from ..domain.ports import DEFAULT_DATABASE_URL, SessionStorePort

_log = logging.getLogger(__name__)


class SleepNightRow(SQLModel, table=True):
    __tablename__ = "daily_sleep_quality_table"

    night_id: Optional[int] = Field(default=None, primary_key=True)
    start_time_milli: int = Field(index=True)
    end_time_milli: int
    sleep_quality: int = UNRATED_QUALITY


def _is_memory_url(url: str) -> bool:
    return url in ("sqlite://", "sqlite:///:memory:") or "mode=memory" in url


def make_engine(database_url: str = DEFAULT_DATABASE_URL, *, echo: bool = False) -> Engine:
    """Create an engine suitable for use from a worker thread.

    In-memory SQLite databases exist per connection, so they are pinned to a
    single shared connection via ``StaticPool``.
    """
    if not database_url.startswith("sqlite"):
        return create_engine(database_url, echo=echo)
    kwargs = {"connect_args": {"check_same_thread": False}}
    if _is_memory_url(database_url):
        kwargs["poolclass"] = StaticPool
    return create_engine(database_url, echo=echo, **kwargs)


def _to_domain(row: SleepNightRow) -> SleepNight:
    return SleepNight(
        night_id=row.night_id,
        start_time_milli=row.start_time_milli,
        end_time_milli=row.end_time_milli,
        sleep_quality=row.sleep_quality,
    )


class SqlSessionStore(SessionStorePort):
    """Nights table accessed through SQLModel sessions (one per call)."""

    def __init__(self, engine: Optional[Engine] = None, *, database_url: str = DEFAULT_DATABASE_URL) -> None:
        self.engine = engine if engine is not None else make_engine(database_url)
        try:
            SQLModel.metadata.create_all(self.engine, tables=[SleepNightRow.__table__])
        except SQLAlchemyError as exc:
            raise StoreFailure("create_schema", str(exc), exc) from exc

    @contextmanager
    def _session(self, operation: str) -> Iterator[Session]:
        try:
            with Session(self.engine) as session:
                yield session
        except SQLAlchemyError as exc:
            _log.error("Sleep store %s failed: %s", operation, exc)
            raise StoreFailure(operation, str(exc), exc) from exc

    # ---- Writes ----
    def insert(self, night: SleepNight) -> SleepNight:
        row = SleepNightRow(
            start_time_milli=night.start_time_milli,
            end_time_milli=night.end_time_milli,
            sleep_quality=night.sleep_quality,
        )
        with self._session("insert") as session:
            session.add(row)
            session.commit()
            session.refresh(row)
            stored = _to_domain(row)
        _log.debug("Inserted night %s", stored.night_id)
        return stored

    def update(self, night: SleepNight) -> None:
        if night.night_id is None:
            raise StoreFailure("update", "night has no id (was it inserted?)")
        with self._session("update") as session:
            row = session.get(SleepNightRow, night.night_id)
            if row is None:
                # Same as an UPDATE matching zero rows.
                _log.warning("Update skipped, night %s not found", night.night_id)
                return
            row.start_time_milli = night.start_time_milli
            row.end_time_milli = night.end_time_milli
            row.sleep_quality = night.sleep_quality
            session.add(row)
            session.commit()
        _log.debug("Updated night %s", night.night_id)

    def clear(self) -> None:
        with self._session("clear") as session:
            cleared = session.exec(delete(SleepNightRow)).rowcount
            session.commit()
        _log.info("Cleared %d night(s)", cleared)

    # ---- Reads ----
    def get(self, night_id: NightId) -> Optional[SleepNight]:
        with self._session("get") as session:
            row = session.get(SleepNightRow, night_id)
            return _to_domain(row) if row is not None else None

    def get_most_recent(self) -> Optional[SleepNight]:
        with self._session("get_most_recent") as session:
            row = session.exec(self._newest_first().limit(1)).first()
            return _to_domain(row) if row is not None else None

    def list_all(self) -> List[SleepNight]:
        with self._session("list_all") as session:
            return [_to_domain(row) for row in session.exec(self._newest_first()).all()]

    @staticmethod
    def _newest_first():
        return select(SleepNightRow).order_by(
            col(SleepNightRow.start_time_milli).desc(),
            col(SleepNightRow.night_id).desc(),
        )


__all__ = ["SleepNightRow", "SqlSessionStore", "make_engine"]
