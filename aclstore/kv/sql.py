"""
SQL key-value backend using SQLAlchemy.

Every entry is one row ``(key, value, version)``. Writes are guarded by the
version read at the start of the cycle: a new key is inserted (a duplicate
primary key means another writer won), an existing key is updated with
``WHERE version = :seen`` (zero affected rows means another writer won).
Losing writers re-read and retry.
"""

import asyncio
from typing import List, Optional

from sqlalchemy import (
    Column, Integer, LargeBinary, MetaData, String, Table, create_engine, insert, select, update
)
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..core.exceptions import BackendError, KeyNotFoundError
from ..core.logging import LoggerMixin
from .base import KeyLister, KeyValueStore, UpdateFunc, UpdateResult


class SQLKVStore(KeyValueStore, KeyLister, LoggerMixin):
    """Key-value store persisted in a single SQL table."""

    def __init__(
        self,
        database_url: Optional[str] = None,
        engine: Optional[Engine] = None,
        table_name: str = "acl_entries",
        max_attempts: int = 100,
    ):
        if engine is None and database_url is None:
            raise ValueError("either database_url or engine is required")
        self.max_attempts = max_attempts
        self._owns_engine = engine is None
        try:
            self._engine = engine if engine is not None else create_engine(database_url, pool_pre_ping=True)
        except SQLAlchemyError as e:
            raise BackendError(f"Engine creation failed: {e}", e)
        self._metadata = MetaData()
        self.table = Table(
            table_name,
            self._metadata,
            Column("key", String(255), primary_key=True),
            Column("value", LargeBinary, nullable=False),
            Column("version", Integer, nullable=False),
        )
        self._create_table()

    def _create_table(self) -> None:
        try:
            self._metadata.create_all(self._engine)
        except SQLAlchemyError as e:
            self.logger.error(f"Failed to create table {self.table.name}: {e}")
            raise BackendError(f"cannot create table {self.table.name}: {e}", e)
        self.logger.info(f"SQL key-value store ready on table {self.table.name}")

    @property
    def engine(self) -> Engine:
        return self._engine

    # Blocking implementations; the async API runs them in a worker thread.

    def _get_sync(self, key: str) -> bytes:
        with self._engine.connect() as conn:
            row = conn.execute(select(self.table.c.value).where(self.table.c.key == key)).first()
        if row is None:
            raise KeyNotFoundError(key)
        return bytes(row.value)

    def _update_sync(self, key: str, fn: UpdateFunc) -> UpdateResult:
        t = self.table
        for attempt in range(self.max_attempts):
            with self._engine.connect() as conn:
                row = conn.execute(select(t.c.value, t.c.version).where(t.c.key == key)).first()
                old = None if row is None else bytes(row.value)
                new = fn(old)
                if new is None:
                    return UpdateResult(value=old, written=False)
                try:
                    if row is None:
                        conn.execute(insert(t).values(key=key, value=bytes(new), version=1))
                    else:
                        result = conn.execute(
                            update(t)
                            .where(t.c.key == key, t.c.version == row.version)
                            .values(value=bytes(new), version=row.version + 1)
                        )
                        if result.rowcount == 0:
                            conn.rollback()
                            self.logger.debug(f"Version conflict on {key!r}, retrying (attempt {attempt + 1})")
                            continue
                    conn.commit()
                except IntegrityError:
                    conn.rollback()
                    self.logger.debug(f"Concurrent insert of {key!r}, retrying (attempt {attempt + 1})")
                    continue
            return UpdateResult(value=bytes(new), written=True)
        raise BackendError(f"cannot update {key!r}: too many concurrent modifications")

    def _keys_sync(self) -> List[str]:
        with self._engine.connect() as conn:
            return [row.key for row in conn.execute(select(self.table.c.key))]

    async def get(self, key: str) -> bytes:
        try:
            return await asyncio.to_thread(self._get_sync, key)
        except SQLAlchemyError as e:
            raise BackendError(f"cannot get {key!r}: {e}", e)

    async def update(self, key: str, fn: UpdateFunc) -> UpdateResult:
        try:
            return await asyncio.to_thread(self._update_sync, key, fn)
        except SQLAlchemyError as e:
            raise BackendError(f"cannot update {key!r}: {e}", e)

    async def keys(self) -> List[str]:
        try:
            return await asyncio.to_thread(self._keys_sync)
        except SQLAlchemyError as e:
            raise BackendError(f"cannot list keys: {e}", e)

    async def close(self) -> None:
        if self._owns_engine:
            self._engine.dispose()
