"""
Service catalog and pricing data for the booking wizard.
"""

from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional

from ...core.enums import ServiceType
from ...core.models.booking import BookingRecord

# Services whose wizard includes a File Upload step.
FILE_UPLOAD_SERVICES = frozenset(
    {ServiceType.GRAPHIC_DESIGN.value, ServiceType.TSHIRT_PRINTING.value}
)


def requires_file_upload(service: str) -> bool:
    """Check if the wizard for ``service`` has a File Upload step."""
    return service in FILE_UPLOAD_SERVICES


@dataclass(frozen=True)
class PriceQuote:
    """Estimated price for a booking, in major currency units."""

    price: int
    description: str
    tier: str

    @property
    def amount_minor_units(self) -> int:
        return self.price * 100

    def to_dict(self) -> Dict[str, object]:
        return {
            "price": self.price,
            "description": self.description,
            "tier": self.tier,
            "amountMinorUnits": self.amount_minor_units,
        }


class ServiceDataProvider:
    """Provides the service catalog and the pricing table."""

    SERVICES: List[Dict] = [
        {
            "id": ServiceType.WORDPRESS.value,
            "title": "WordPress",
            "display_name": "WordPress Development",
            "description": "Website development and maintenance services",
            "features": ["Custom Development", "Maintenance", "SEO Optimization", "Responsive Design"],
            "popular": False,
        },
        {
            "id": ServiceType.GRAPHIC_DESIGN.value,
            "title": "Graphic Design",
            "display_name": "Graphic Design",
            "description": "Logos, banners, and social media graphics",
            "features": ["Logo Design", "Social Media Graphics", "Banners", "Brand Identity"],
            "popular": True,
        },
        {
            "id": ServiceType.VIDEO_EDITING.value,
            "title": "Video Editing",
            "display_name": "Video Editing",
            "description": "Promotional videos and social content",
            "features": ["Promotional Videos", "Social Content", "Presentations", "Motion Graphics"],
            "popular": False,
        },
        {
            "id": ServiceType.TSHIRT_PRINTING.value,
            "title": "T-shirt Printing",
            "display_name": "T-shirt Printing",
            "description": "DTF & Embroidery custom apparel",
            "features": ["DTF Printing", "Embroidery", "Custom Designs", "Bulk Orders"],
            "popular": False,
        },
    ]

    # Prices in MAD
    PRICING: Dict = {
        "wordpress": {
            "new": {
                "e-commerce": {"price": 4500, "description": "Online store with product catalog and checkout"},
                "press": {"price": 3000, "description": "News or magazine website"},
                "hostel-booking": {"price": 4000, "description": "Hostel website with booking system"},
                "business-page": {"price": 2500, "description": "Multi-page business website"},
                "one-page": {"price": 1200, "description": "Single landing page"},
                "portfolio": {"price": 1800, "description": "Portfolio showcase website"},
            },
            "maintenance": {
                "elementor": {"price": 400, "description": "Elementor layout fixes and edits"},
                "errors": {"price": 350, "description": "Fixing website errors"},
                "plugin-theme-installation": {"price": 250, "description": "Plugin or theme installation"},
            },
        },
        "graphic-design": {
            "logo": {"price": 600, "description": "Logo design"},
            "banner": {"price": 300, "description": "Banner or header design"},
            "social": {"price": 200, "description": "Social media graphics"},
            "business-card": {"price": 250, "description": "Business card design"},
            "flyer": {"price": 350, "description": "Flyer or poster design"},
            "other": {"price": 400, "description": "Custom design work"},
        },
        "video-editing": {
            "short": {"price": 300, "description": "Short clip (under 10 seconds)"},
            "medium": {"price": 600, "description": "Medium clip (up to 30 seconds)"},
            "long": {"price": 1000, "description": "Long video"},
        },
        "tshirt-printing": {
            "dtf": {
                "less-than-5": {"price": 150, "description": "DTF printing, fewer than 5 pieces"},
                "5-to-10": {"price": 120, "description": "DTF printing, 5 to 10 pieces"},
                "more-than-10": {"price": 100, "description": "DTF printing, more than 10 pieces"},
            },
            "embroidery": {
                "tshirt": {
                    "logo": {
                        "less-than-5": {"price": 180, "description": "Embroidered logo on t-shirt"},
                        "5-to-10": {"price": 160, "description": "Embroidered logo on t-shirt, 5 to 10 pieces"},
                        "more-than-10": {"price": 140, "description": "Embroidered logo on t-shirt, more than 10 pieces"},
                    },
                    "design": {
                        "less-than-5": {"price": 250, "description": "Embroidered design on t-shirt"},
                        "5-to-10": {"price": 220, "description": "Embroidered design on t-shirt, 5 to 10 pieces"},
                        "more-than-10": {"price": 200, "description": "Embroidered design on t-shirt, more than 10 pieces"},
                    },
                },
                "hoodie": {
                    "logo": {
                        "less-than-5": {"price": 280, "description": "Embroidered logo on hoodie"},
                        "5-to-10": {"price": 250, "description": "Embroidered logo on hoodie, 5 to 10 pieces"},
                        "more-than-10": {"price": 230, "description": "Embroidered logo on hoodie, more than 10 pieces"},
                    },
                    "design": {
                        "less-than-5": {"price": 350, "description": "Embroidered design on hoodie"},
                        "5-to-10": {"price": 320, "description": "Embroidered design on hoodie, 5 to 10 pieces"},
                        "more-than-10": {"price": 300, "description": "Embroidered design on hoodie, more than 10 pieces"},
                    },
                },
            },
        },
    }

    def get_services(self) -> List[Dict]:
        """Get the full service catalog."""
        return list(self.SERVICES)

    def find_service(self, service_id: str) -> Optional[Dict]:
        """Find a catalog entry by id."""
        for service in self.SERVICES:
            if service["id"] == service_id:
                return service
        return None

    def display_name(self, service_id: str) -> str:
        """Human-readable service name, falling back to the raw id."""
        service = self.find_service(service_id)
        return service["display_name"] if service else service_id

    # ------------------------------------------------------------------
    @staticmethod
    def _parse_int(value: Optional[str]) -> Optional[int]:
        if not value:
            return None
        try:
            return int(str(value).strip())
        except ValueError:
            return None

    @staticmethod
    def quantity_tier(quantity: int) -> str:
        """Bucket a garment quantity into its pricing tier."""
        if quantity < 5:
            return "less-than-5"
        if quantity <= 10:
            return "5-to-10"
        return "more-than-10"

    @staticmethod
    def video_tier(length: int, unit: str) -> str:
        """Bucket a video length into its pricing tier."""
        if unit == "seconds":
            if length < 10:
                return "short"
            if length <= 30:
                return "medium"
            return "long"
        if length < 1:
            return "short"
        if length <= 2:
            return "medium"
        return "long"

    def _quote(self, entry: Optional[Mapping], tier: str) -> Optional[PriceQuote]:
        if not entry:
            return None
        return PriceQuote(price=entry["price"], description=entry["description"], tier=tier)

    def quote(self, record: BookingRecord) -> Optional[PriceQuote]:
        """Look up the price for the record's service and details."""
        details = record.service_details
        service = record.service

        if service == ServiceType.WORDPRESS.value:
            website_type = details.get("websiteType")
            page_count = details.get("pageCount")
            if website_type in ("new", "maintenance") and page_count:
                table = self.PRICING["wordpress"][website_type]
                return self._quote(table.get(page_count), page_count)

        elif service == ServiceType.GRAPHIC_DESIGN.value:
            design_type = details.get("designType")
            if design_type:
                return self._quote(self.PRICING["graphic-design"].get(design_type), design_type)

        elif service == ServiceType.VIDEO_EDITING.value:
            length = self._parse_int(details.get("videoLength"))
            if length is not None:
                unit = details.get("videoLengthUnit") or "minutes"
                tier = self.video_tier(length, unit)
                return self._quote(self.PRICING["video-editing"][tier], tier)

        elif service == ServiceType.TSHIRT_PRINTING.value:
            quantity = self._parse_int(details.get("quantity"))
            if quantity is None:
                return None
            tier = self.quantity_tier(quantity)
            method = details.get("printingMethod")

            if method == "dtf":
                return self._quote(self.PRICING["tshirt-printing"]["dtf"][tier], tier)

            if method == "embroidery":
                garment = details.get("embroideryGarmentType")
                kind = details.get("embroideryType")
                table = self.PRICING["tshirt-printing"]["embroidery"].get(garment or "", {})
                by_kind = table.get(kind or "", {})
                return self._quote(by_kind.get(tier), tier)

        return None
