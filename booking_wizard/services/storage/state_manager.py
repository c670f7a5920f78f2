"""
State manager for persistent wizard state.
"""

import asyncio
import sqlite3
from typing import Optional, Tuple

from ...core.exceptions import PersistenceError
from ...core.models.booking import BookingRecord
from ...utils.logging import get_logger

logger = get_logger(__name__)

STORAGE_KEY_PREFIX = "bookingFormData"


def storage_key(session_id: str) -> str:
    """Row key for a wizard session."""
    return f"{STORAGE_KEY_PREFIX}:{session_id}"


class StateManager:
    """Manages persistent wizard state using SQLite database."""

    def __init__(self, db_path: str):
        self.state_db = db_path
        self._lock = asyncio.Lock()
        self._table_ready = False

    async def _run(self, func):
        """Run a blocking SQLite call in a worker thread under the lock."""
        async with self._lock:
            try:
                return await asyncio.to_thread(func)
            except sqlite3.Error as e:
                logger.error("Wizard state store failure: %s", e)
                raise PersistenceError(f"Wizard state store failure: {e}") from e

    async def _ensure_table(self) -> None:
        """Ensure the state table exists."""
        if self._table_ready:
            return

        def _create_table():
            conn = sqlite3.connect(self.state_db)
            try:
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS wizard_state (
                        storage_key TEXT PRIMARY KEY,
                        record TEXT NOT NULL,
                        current_step INTEGER NOT NULL DEFAULT 1
                    )
                    """
                )
                conn.commit()
            finally:
                conn.close()

        await self._run(_create_table)
        self._table_ready = True

    async def get_state(self, session_id: str) -> Optional[Tuple[BookingRecord, int]]:
        """Retrieve the stored record and current step for ``session_id``."""
        await self._ensure_table()
        key = storage_key(session_id)

        def _fetch() -> Optional[Tuple[str, int]]:
            conn = sqlite3.connect(self.state_db)
            try:
                cur = conn.execute(
                    "SELECT record, current_step FROM wizard_state WHERE storage_key = ?",
                    (key,),
                )
                row = cur.fetchone()
            finally:
                conn.close()
            return (row[0], row[1]) if row else None

        row = await self._run(_fetch)
        if row is None:
            return None

        raw, step = row
        try:
            record = BookingRecord.from_json(raw)
        except (ValueError, TypeError) as e:
            # A corrupt row behaves like an empty wizard
            logger.warning("Discarding unreadable wizard state for %s: %s", key, e)
            return BookingRecord(), 1

        # Nothing past service selection is reachable without a service
        if not record.service:
            return record, 1
        return record, int(step or 1)

    async def save_state(self, session_id: str, record: BookingRecord, current_step: int) -> None:
        """Persist the record and current step for ``session_id``."""
        await self._ensure_table()
        key = storage_key(session_id)
        record_json = record.to_json()

        def _write() -> None:
            conn = sqlite3.connect(self.state_db)
            try:
                conn.execute(
                    "INSERT OR REPLACE INTO wizard_state (storage_key, record, current_step) "
                    "VALUES (?, ?, ?)",
                    (key, record_json, int(current_step)),
                )
                conn.commit()
            finally:
                conn.close()

        await self._run(_write)

    async def clear_state(self, session_id: str) -> None:
        """Remove stored state for ``session_id``."""
        await self._ensure_table()
        key = storage_key(session_id)

        def _delete() -> None:
            conn = sqlite3.connect(self.state_db)
            try:
                conn.execute("DELETE FROM wizard_state WHERE storage_key = ?", (key,))
                conn.commit()
            finally:
                conn.close()

        await self._run(_delete)
