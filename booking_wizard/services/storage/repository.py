"""
Booking persistence: bookings and their payment log.
"""

import asyncio
import json
import sqlite3
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ...core.enums import BookingStatus
from ...core.exceptions import BookingNotFoundError, PersistenceError
from ...core.models.booking import BookingRecord
from ...core.models.payment import StoredBooking
from ...utils.logging import get_logger

logger = get_logger(__name__)

_BOOKING_COLUMNS = (
    "id, service, service_details, contact_info, files, amount_minor_units, currency, "
    "status, gateway, gateway_payment_id, checkout_url, created_at, updated_at"
)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _row_to_booking(row: tuple) -> StoredBooking:
    return StoredBooking(
        id=row[0],
        service=row[1],
        service_details=json.loads(row[2] or "{}"),
        contact_info=json.loads(row[3] or "{}"),
        files=json.loads(row[4] or "[]"),
        amount_minor_units=int(row[5]),
        currency=row[6],
        status=BookingStatus(row[7]),
        gateway=row[8],
        gateway_payment_id=row[9],
        checkout_url=row[10],
        created_at=row[11],
        updated_at=row[12],
    )


class BookingRepository:
    """SQLite-backed store for submitted bookings."""

    def __init__(self, db_path: str):
        self.db_path = db_path
        self._lock = asyncio.Lock()
        self._tables_ready = False

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self.db_path)

    async def _run(self, func):
        """Run a blocking SQLite call in a worker thread under the lock."""
        async with self._lock:
            try:
                return await asyncio.to_thread(func)
            except sqlite3.Error as e:
                logger.error("Booking store failure: %s", e)
                raise PersistenceError(f"Booking store failure: {e}") from e

    async def _ensure_tables(self) -> None:
        if self._tables_ready:
            return

        def _create() -> None:
            conn = self._connect()
            try:
                conn.executescript(
                    """
                    CREATE TABLE IF NOT EXISTS bookings (
                        id TEXT PRIMARY KEY,
                        service TEXT NOT NULL,
                        service_details TEXT NOT NULL,
                        contact_info TEXT NOT NULL,
                        files TEXT NOT NULL,
                        amount_minor_units INTEGER NOT NULL,
                        currency TEXT NOT NULL,
                        status TEXT NOT NULL,
                        gateway TEXT,
                        gateway_payment_id TEXT,
                        checkout_url TEXT,
                        created_at TEXT NOT NULL,
                        updated_at TEXT NOT NULL
                    );
                    CREATE INDEX IF NOT EXISTS idx_bookings_payment
                        ON bookings (gateway_payment_id);
                    CREATE TABLE IF NOT EXISTS payment_logs (
                        id INTEGER PRIMARY KEY AUTOINCREMENT,
                        booking_id TEXT NOT NULL,
                        event_type TEXT NOT NULL,
                        event_data TEXT NOT NULL,
                        created_at TEXT NOT NULL
                    );
                    """
                )
                conn.commit()
            finally:
                conn.close()

        await self._run(_create)
        self._tables_ready = True

    async def create_booking(
        self, record: BookingRecord, amount_minor_units: int, currency: str
    ) -> StoredBooking:
        """Insert a pending booking for ``record``."""
        await self._ensure_tables()
        now = _now()
        booking = StoredBooking(
            id=uuid.uuid4().hex,
            service=record.service,
            service_details=dict(record.service_details),
            contact_info=record.contact_info.to_dict(),
            files=[f.to_dict() for f in record.files],
            amount_minor_units=amount_minor_units,
            currency=currency,
            status=BookingStatus.PENDING,
            created_at=now,
            updated_at=now,
        )

        def _insert() -> None:
            conn = self._connect()
            try:
                conn.execute(
                    f"INSERT INTO bookings ({_BOOKING_COLUMNS}) "
                    "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
                    (
                        booking.id,
                        booking.service,
                        json.dumps(booking.service_details, ensure_ascii=False),
                        json.dumps(booking.contact_info, ensure_ascii=False),
                        json.dumps(booking.files, ensure_ascii=False),
                        booking.amount_minor_units,
                        booking.currency,
                        booking.status.value,
                        None,
                        None,
                        None,
                        booking.created_at,
                        booking.updated_at,
                    ),
                )
                conn.commit()
            finally:
                conn.close()

        await self._run(_insert)
        logger.info("Created booking %s for %s", booking.id, booking.service)
        return booking

    async def get_booking(self, booking_id: str) -> StoredBooking:
        """Fetch a booking by id, raising ``BookingNotFoundError`` when absent."""
        await self._ensure_tables()

        def _fetch() -> Optional[tuple]:
            conn = self._connect()
            try:
                cur = conn.execute(
                    f"SELECT {_BOOKING_COLUMNS} FROM bookings WHERE id = ?", (booking_id,)
                )
                return cur.fetchone()
            finally:
                conn.close()

        row = await self._run(_fetch)
        if row is None:
            raise BookingNotFoundError(f"Booking {booking_id} not found")
        return _row_to_booking(row)

    async def find_by_payment_id(self, payment_id: str) -> Optional[StoredBooking]:
        """Find the booking attached to a gateway payment id."""
        await self._ensure_tables()

        def _fetch() -> Optional[tuple]:
            conn = self._connect()
            try:
                cur = conn.execute(
                    f"SELECT {_BOOKING_COLUMNS} FROM bookings WHERE gateway_payment_id = ?",
                    (payment_id,),
                )
                return cur.fetchone()
            finally:
                conn.close()

        row = await self._run(_fetch)
        return _row_to_booking(row) if row else None

    async def attach_payment(
        self, booking_id: str, gateway: str, payment_id: str, checkout_url: str
    ) -> None:
        """Record the gateway payment created for a booking."""
        await self._ensure_tables()

        def _update() -> int:
            conn = self._connect()
            try:
                cur = conn.execute(
                    "UPDATE bookings SET gateway = ?, gateway_payment_id = ?, checkout_url = ?, "
                    "updated_at = ? WHERE id = ?",
                    (gateway, payment_id, checkout_url, _now(), booking_id),
                )
                conn.commit()
                return cur.rowcount
            finally:
                conn.close()

        if not await self._run(_update):
            raise BookingNotFoundError(f"Booking {booking_id} not found")

    async def update_status(self, booking_id: str, status: BookingStatus) -> None:
        """Set the status of a booking."""
        await self._ensure_tables()

        def _update() -> int:
            conn = self._connect()
            try:
                cur = conn.execute(
                    "UPDATE bookings SET status = ?, updated_at = ? WHERE id = ?",
                    (status.value, _now(), booking_id),
                )
                conn.commit()
                return cur.rowcount
            finally:
                conn.close()

        if not await self._run(_update):
            raise BookingNotFoundError(f"Booking {booking_id} not found")
        logger.info("Booking %s is now %s", booking_id, status.value)

    async def log_payment_event(
        self, booking_id: str, event_type: str, event_data: Dict[str, Any]
    ) -> None:
        """Append an entry to the payment log."""
        await self._ensure_tables()
        payload = json.dumps(event_data, ensure_ascii=False, default=str)

        def _insert() -> None:
            conn = self._connect()
            try:
                conn.execute(
                    "INSERT INTO payment_logs (booking_id, event_type, event_data, created_at) "
                    "VALUES (?, ?, ?, ?)",
                    (booking_id, event_type, payload, _now()),
                )
                conn.commit()
            finally:
                conn.close()

        await self._run(_insert)

    async def get_payment_logs(self, booking_id: str) -> List[Dict[str, Any]]:
        """Return the payment log of a booking, oldest first."""
        await self._ensure_tables()

        def _fetch() -> List[tuple]:
            conn = self._connect()
            try:
                cur = conn.execute(
                    "SELECT event_type, event_data, created_at FROM payment_logs "
                    "WHERE booking_id = ? ORDER BY id",
                    (booking_id,),
                )
                return cur.fetchall()
            finally:
                conn.close()

        rows = await self._run(_fetch)
        return [
            {"event_type": r[0], "event_data": json.loads(r[1]), "created_at": r[2]}
            for r in rows
        ]
