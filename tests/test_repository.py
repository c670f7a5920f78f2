"""
Tests for booking persistence.
"""

import pytest

from booking_wizard.core.enums import BookingStatus
from booking_wizard.core.exceptions import BookingNotFoundError, PersistenceError
from booking_wizard.services.storage import BookingRepository


@pytest.fixture
def repository(tmp_path):
    return BookingRepository(str(tmp_path / "bookings.db"))


@pytest.mark.asyncio
async def test_create_and_get_booking(repository, tshirt_record):
    booking = await repository.create_booking(tshirt_record, 12000, "MAD")

    stored = await repository.get_booking(booking.id)
    assert stored.status == BookingStatus.PENDING
    assert stored.service == "tshirt-printing"
    assert stored.service_details["quantity"] == "7"
    assert stored.contact_info["email"] == "jane@example.com"
    assert stored.amount_minor_units == 12000
    assert stored.amount == 120
    assert stored.gateway_payment_id is None


@pytest.mark.asyncio
async def test_attach_payment_and_find(repository, tshirt_record):
    booking = await repository.create_booking(tshirt_record, 12000, "MAD")
    await repository.attach_payment(booking.id, "dodo", "pay_123", "https://pay.test/123")

    found = await repository.find_by_payment_id("pay_123")
    assert found is not None
    assert found.id == booking.id
    assert found.gateway == "dodo"
    assert found.checkout_url == "https://pay.test/123"
    assert await repository.find_by_payment_id("pay_other") is None


@pytest.mark.asyncio
async def test_update_status(repository, tshirt_record):
    booking = await repository.create_booking(tshirt_record, 12000, "MAD")
    await repository.update_status(booking.id, BookingStatus.PAID)
    assert (await repository.get_booking(booking.id)).status == BookingStatus.PAID


@pytest.mark.asyncio
async def test_missing_booking(repository):
    with pytest.raises(BookingNotFoundError):
        await repository.get_booking("nope")
    with pytest.raises(BookingNotFoundError):
        await repository.update_status("nope", BookingStatus.PAID)
    with pytest.raises(BookingNotFoundError):
        await repository.attach_payment("nope", "dodo", "p", "u")


@pytest.mark.asyncio
async def test_payment_log_is_append_only(repository, tshirt_record):
    booking = await repository.create_booking(tshirt_record, 12000, "MAD")
    await repository.log_payment_event(booking.id, "payment_created", {"payment_id": "p1"})
    await repository.log_payment_event(booking.id, "payment.succeeded", {"id": "p1"})

    logs = await repository.get_payment_logs(booking.id)
    assert [entry["event_type"] for entry in logs] == ["payment_created", "payment.succeeded"]
    assert logs[0]["event_data"] == {"payment_id": "p1"}


@pytest.mark.asyncio
async def test_unusable_database_raises_persistence_error(tmp_path, tshirt_record):
    repository = BookingRepository(str(tmp_path / "missing-dir" / "bookings.db"))
    with pytest.raises(PersistenceError):
        await repository.create_booking(tshirt_record, 100, "MAD")
