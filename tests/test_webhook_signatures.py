"""
Tests for webhook signature verification.
"""

import base64
import hashlib
import hmac
import time

import pytest

from booking_wizard.config import GatewayConfig
from booking_wizard.core.exceptions import GatewayError, WebhookSignatureError
from booking_wizard.services.payments import DodoGateway, StripeGateway
from booking_wizard.services.payments.signatures import (
    constant_time_compare,
    standard_webhooks_key,
    verify_timestamp,
)

BODY = b'{"type": "payment.succeeded", "data": {"id": "pay_1"}}'


def _dodo(secret="shared-secret"):
    return DodoGateway(GatewayConfig(provider="dodo", api_key="k", webhook_secret=secret))


def _stripe(secret="whsec_stripe"):
    return StripeGateway(GatewayConfig(provider="stripe", api_key="sk", webhook_secret=secret))


class TestHelpers:
    """Test signature helper functions."""

    def test_constant_time_compare(self):
        assert constant_time_compare("abc", "abc") is True
        assert constant_time_compare("abc", "abd") is False
        assert constant_time_compare("", "") is False

    def test_verify_timestamp(self):
        now = 1_700_000_000
        assert verify_timestamp(str(now - 299), now=now) is True
        assert verify_timestamp(str(now - 301), now=now) is False
        assert verify_timestamp("yesterday", now=now) is False
        assert verify_timestamp(None, now=now) is False

    def test_standard_webhooks_key(self):
        encoded = base64.b64encode(b"key-bytes").decode()
        assert standard_webhooks_key(f"whsec_{encoded}") == b"key-bytes"
        assert standard_webhooks_key("not base64!") == b"not base64!"


class TestDodoWebhook:
    """Test DODO webhook verification."""

    def test_header_equal_to_secret(self):
        _dodo().verify_webhook(BODY, {"x-dodo-signature": "shared-secret"})

    def test_sha256_hmac(self):
        digest = hmac.new(b"shared-secret", BODY, hashlib.sha256).hexdigest()
        _dodo().verify_webhook(BODY, {"X-Dodo-Signature": f"sha256={digest}"})

    def test_wrong_signature(self):
        with pytest.raises(WebhookSignatureError):
            _dodo().verify_webhook(BODY, {"x-dodo-signature": "sha256=deadbeef"})
        with pytest.raises(WebhookSignatureError):
            _dodo().verify_webhook(BODY, {"x-dodo-signature": "guess"})

    def test_hmac_over_tampered_body(self):
        digest = hmac.new(b"shared-secret", BODY, hashlib.sha256).hexdigest()
        with pytest.raises(WebhookSignatureError):
            _dodo().verify_webhook(BODY + b" ", {"x-dodo-signature": f"sha256={digest}"})

    def test_standard_webhooks_headers(self):
        key = b"standard-key"
        secret = "whsec_" + base64.b64encode(key).decode()
        timestamp = str(int(time.time()))
        signed = b".".join([b"msg_1", timestamp.encode(), BODY])
        signature = base64.b64encode(hmac.new(key, signed, hashlib.sha256).digest()).decode()

        headers = {
            "webhook-id": "msg_1",
            "webhook-timestamp": timestamp,
            "webhook-signature": f"v1,bogus v1,{signature}",
        }
        _dodo(secret).verify_webhook(BODY, headers)

    def test_standard_webhooks_expired(self):
        key = b"standard-key"
        secret = "whsec_" + base64.b64encode(key).decode()
        timestamp = str(int(time.time()) - 3600)
        signed = b".".join([b"msg_1", timestamp.encode(), BODY])
        signature = base64.b64encode(hmac.new(key, signed, hashlib.sha256).digest()).decode()

        with pytest.raises(WebhookSignatureError):
            _dodo(secret).verify_webhook(
                BODY,
                {"webhook-id": "msg_1", "webhook-timestamp": timestamp, "webhook-signature": f"v1,{signature}"},
            )

    def test_no_signature_headers(self):
        with pytest.raises(WebhookSignatureError):
            _dodo().verify_webhook(BODY, {})

    def test_missing_secret(self):
        with pytest.raises(GatewayError):
            _dodo(secret=None).verify_webhook(BODY, {"x-dodo-signature": "anything"})


class TestStripeWebhook:
    """Test Stripe-Signature verification."""

    def _header(self, secret, body, timestamp):
        payload = f"{timestamp}.".encode() + body
        sig = hmac.new(secret.encode(), payload, hashlib.sha256).hexdigest()
        return f"t={timestamp},v1={sig}"

    def test_valid_signature(self):
        header = self._header("whsec_stripe", BODY, int(time.time()))
        _stripe().verify_webhook(BODY, {"Stripe-Signature": header})

    def test_tampered_body(self):
        header = self._header("whsec_stripe", BODY, int(time.time()))
        with pytest.raises(WebhookSignatureError):
            _stripe().verify_webhook(BODY.replace(b"pay_1", b"pay_2"), {"stripe-signature": header})

    def test_old_timestamp(self):
        header = self._header("whsec_stripe", BODY, int(time.time()) - 600)
        with pytest.raises(WebhookSignatureError):
            _stripe().verify_webhook(BODY, {"stripe-signature": header})

    def test_malformed_header(self):
        with pytest.raises(WebhookSignatureError):
            _stripe().verify_webhook(BODY, {"stripe-signature": "garbage"})
        with pytest.raises(WebhookSignatureError):
            _stripe().verify_webhook(BODY, {})
