"""
Tests for the service catalog and pricing table.
"""

import pytest

from booking_wizard.core.models.booking import BookingRecord
from booking_wizard.services.booking import ServiceDataProvider


@pytest.fixture
def provider():
    return ServiceDataProvider()


def _record(service, **details):
    return BookingRecord(service=service, service_details=dict(details))


class TestCatalog:
    """Test the service catalog."""

    def test_four_services(self, provider):
        ids = [s["id"] for s in provider.get_services()]
        assert ids == ["wordpress", "graphic-design", "video-editing", "tshirt-printing"]

    def test_graphic_design_is_popular(self, provider):
        assert provider.find_service("graphic-design")["popular"] is True

    def test_display_name_fallback(self, provider):
        assert provider.display_name("wordpress") == "WordPress Development"
        assert provider.display_name("unknown") == "unknown"


class TestQuote:
    """Test price lookup."""

    def test_tshirt_dtf_tier(self, provider):
        """Test 7 DTF shirts fall in the 5-to-10 tier."""
        quote = provider.quote(_record("tshirt-printing", printingMethod="dtf", quantity="7"))
        assert quote.tier == "5-to-10"
        assert quote.price == 120
        assert quote.amount_minor_units == 12000

    @pytest.mark.parametrize(
        "quantity,tier",
        [("1", "less-than-5"), ("4", "less-than-5"), ("5", "5-to-10"), ("10", "5-to-10"), ("11", "more-than-10")],
    )
    def test_quantity_tiers(self, provider, quantity, tier):
        assert provider.quantity_tier(int(quantity)) == tier

    def test_embroidery_by_garment_and_type(self, provider):
        quote = provider.quote(
            _record(
                "tshirt-printing",
                printingMethod="embroidery",
                quantity="12",
                embroideryGarmentType="hoodie",
                embroideryType="design",
            )
        )
        assert quote.price == 300
        assert quote.tier == "more-than-10"

    def test_embroidery_without_garment_has_no_price(self, provider):
        quote = provider.quote(
            _record("tshirt-printing", printingMethod="embroidery", quantity="3")
        )
        assert quote is None

    @pytest.mark.parametrize(
        "length,unit,tier",
        [
            ("5", "seconds", "short"),
            ("30", "seconds", "medium"),
            ("45", "seconds", "long"),
            ("0", "minutes", "short"),
            ("2", "minutes", "medium"),
            ("3", "minutes", "long"),
        ],
    )
    def test_video_tiers(self, provider, length, unit, tier):
        quote = provider.quote(_record("video-editing", videoLength=length, videoLengthUnit=unit))
        assert quote.tier == tier

    def test_video_unit_defaults_to_minutes(self, provider):
        quote = provider.quote(_record("video-editing", videoLength="2"))
        assert quote.tier == "medium"

    def test_wordpress_by_type_and_page_count(self, provider):
        quote = provider.quote(_record("wordpress", websiteType="new", pageCount="one-page"))
        assert quote.price == 1200

        quote = provider.quote(_record("wordpress", websiteType="maintenance", pageCount="errors"))
        assert quote.price == 350

    def test_graphic_design(self, provider):
        assert provider.quote(_record("graphic-design", designType="logo")).price == 600

    def test_incomplete_details_have_no_price(self, provider):
        assert provider.quote(_record("wordpress", websiteType="new")) is None
        assert provider.quote(_record("tshirt-printing", printingMethod="dtf", quantity="many")) is None
        assert provider.quote(BookingRecord()) is None
