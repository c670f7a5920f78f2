"""
Pytest configuration and fixtures.
"""

import io
from typing import Dict, List, Mapping, Optional

import pytest
from PIL import Image

from booking_wizard.config import GatewayConfig, Settings
from booking_wizard.core.enums import ContactChannel, PaymentStatus
from booking_wizard.core.exceptions import GatewayError, WebhookSignatureError
from booking_wizard.core.models.booking import BookingRecord, ContactInfo
from booking_wizard.core.models.payment import CheckoutSession
from booking_wizard.services.payments import PaymentGateway
from booking_wizard.utils.event_log import set_log_path, set_session_id


class FakeGateway(PaymentGateway):
    """In-memory gateway recording every checkout request."""

    name = "fake"

    def __init__(self, secret: str = "fake-secret"):
        super().__init__(GatewayConfig(provider="dodo", api_key="fake-key", webhook_secret=secret))
        self.checkouts: List[Dict] = []
        self.status = PaymentStatus.PENDING
        self.fail_with: Optional[GatewayError] = None

    async def create_checkout(
        self,
        amount_minor_units: int,
        currency: str,
        customer_email: str,
        success_url: str,
        cancel_url: str,
        metadata: Mapping[str, str],
    ) -> CheckoutSession:
        if self.fail_with is not None:
            raise self.fail_with
        payment_id = f"pay_{len(self.checkouts) + 1}"
        self.checkouts.append(
            {
                "amount_minor_units": amount_minor_units,
                "currency": currency,
                "customer_email": customer_email,
                "success_url": success_url,
                "cancel_url": cancel_url,
                "metadata": dict(metadata),
            }
        )
        return CheckoutSession(
            checkout_url=f"https://checkout.test/{payment_id}", payment_id=payment_id
        )

    async def retrieve_status(self, payment_id: str) -> PaymentStatus:
        if self.fail_with is not None:
            raise self.fail_with
        return self.status

    def verify_webhook(self, raw_body: bytes, headers: Mapping[str, str]) -> None:
        secret = self._require_secret()
        if headers.get("x-test-signature") != secret:
            raise WebhookSignatureError("bad signature")


def make_png(transparent: bool, mode: str = "RGBA", size=(4, 4)) -> bytes:
    """Small PNG, with one see-through pixel when ``transparent`` is set."""
    if mode == "RGBA":
        image = Image.new("RGBA", size, (255, 0, 0, 255))
        if transparent:
            image.putpixel((0, 0), (255, 0, 0, 0))
    else:
        image = Image.new(mode, size, (255, 0, 0) if mode == "RGB" else 128)
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture(autouse=True)
def event_log_path(tmp_path):
    """Send the JSONL event log of every test to a temporary file."""
    path = tmp_path / "events.jsonl"
    set_log_path(path)
    set_session_id(None)
    return path


@pytest.fixture
def settings(tmp_path, event_log_path):
    """Settings pointing every file at the test's temporary directory."""
    return Settings(
        state_db_path=str(tmp_path / "state.db"),
        bookings_db_path=str(tmp_path / "bookings.db"),
        upload_dir=str(tmp_path / "uploads"),
        event_log_path=str(event_log_path),
        public_url="https://studio.test",
        dodo_api_key="dodo-test-key",
        dodo_webhook_secret="dodo-test-secret",
        business_whatsapp_number="212600000000",
    )


@pytest.fixture
def fake_gateway():
    return FakeGateway()


@pytest.fixture
def valid_contact():
    return ContactInfo(
        name="Jane Doe",
        phone="+212612345678",
        email="jane@example.com",
        preferred_contact_channel=ContactChannel.EMAIL,
    )


@pytest.fixture
def tshirt_record(valid_contact):
    """Complete DTF t-shirt booking."""
    return BookingRecord(
        service="tshirt-printing",
        service_details={"printingMethod": "dtf", "quantity": "7", "sizes": "m"},
        contact_info=valid_contact,
    )


@pytest.fixture
def wordpress_record(valid_contact):
    """Complete new-website WordPress booking."""
    return BookingRecord(
        service="wordpress",
        service_details={"websiteType": "new", "pageCount": "one-page"},
        contact_info=valid_contact,
    )


@pytest.fixture
def png_transparent():
    return make_png(transparent=True)


@pytest.fixture
def png_opaque():
    return make_png(transparent=False)
