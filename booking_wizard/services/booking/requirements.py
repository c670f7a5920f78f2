"""
Per-service detail fields and the rules deciding which of them are required.

The tables here are plain data so product changes to a service's form only
touch this module, never the step validator.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Mapping, Tuple

from ...core.enums import ServiceType

Predicate = Callable[[Mapping[str, str]], bool]


def _always(_details: Mapping[str, str]) -> bool:
    return True


def when_equals(field_name: str, value: str) -> Predicate:
    """Require a field only while ``field_name`` holds ``value``."""

    def _predicate(details: Mapping[str, str]) -> bool:
        return details.get(field_name) == value

    return _predicate


@dataclass(frozen=True)
class FieldRequirement:
    """A detail field and the condition under which it must be filled."""

    name: str
    message: str
    when: Predicate = _always

    def is_required(self, details: Mapping[str, str]) -> bool:
        return self.when(details)


REQUIRED_FIELDS: Dict[str, Tuple[FieldRequirement, ...]] = {
    ServiceType.WORDPRESS.value: (
        FieldRequirement("websiteType", "Please select a website type"),
        FieldRequirement("pageCount", "Please select the website or maintenance type"),
        FieldRequirement(
            "existingUrl",
            "Please enter your existing website URL",
            when_equals("websiteType", "maintenance"),
        ),
    ),
    ServiceType.GRAPHIC_DESIGN.value: (
        FieldRequirement("designType", "Please select a design type"),
        FieldRequirement("dimensions", "Please specify dimensions or format"),
        FieldRequirement("conceptCount", "Please select the number of concepts"),
    ),
    ServiceType.VIDEO_EDITING.value: (
        FieldRequirement("videoLength", "Please enter the video length"),
        FieldRequirement("stylePreference", "Please select a style preference"),
        FieldRequirement("rawFootage", "Please tell us about raw footage availability"),
        FieldRequirement("exportFormat", "Please select an export format"),
        FieldRequirement(
            "socialMediaFormat",
            "Please select a social media format",
            when_equals("exportFormat", "social-optimized"),
        ),
    ),
    ServiceType.TSHIRT_PRINTING.value: (
        FieldRequirement("printingMethod", "Please select a printing method"),
        FieldRequirement("quantity", "Please enter the quantity needed"),
        FieldRequirement("sizes", "Please select the sizes needed"),
        FieldRequirement(
            "embroideryGarmentType",
            "Please select a garment type",
            when_equals("printingMethod", "embroidery"),
        ),
        FieldRequirement(
            "embroideryType",
            "Please select an embroidery type",
            when_equals("printingMethod", "embroidery"),
        ),
        FieldRequirement(
            "embroideryPlacement",
            "Please select the design placement",
            when_equals("printingMethod", "embroidery"),
        ),
    ),
}

# Optional fields a service's form may also carry.
OPTIONAL_FIELDS: Dict[str, Tuple[str, ...]] = {
    ServiceType.WORDPRESS.value: ("features",),
    ServiceType.GRAPHIC_DESIGN.value: ("brandColors",),
    ServiceType.VIDEO_EDITING.value: ("videoLengthUnit",),
    ServiceType.TSHIRT_PRINTING.value: ("colors",),
}

SERVICE_FIELDS: Dict[str, frozenset] = {
    service: frozenset(
        [req.name for req in requirements] + list(OPTIONAL_FIELDS.get(service, ()))
    )
    for service, requirements in REQUIRED_FIELDS.items()
}


def known_fields(service: str) -> frozenset:
    """Return every detail field the form for ``service`` can hold."""
    return SERVICE_FIELDS.get(service, frozenset())


def missing_fields(service: str, details: Mapping[str, str]) -> Dict[str, str]:
    """Return ``{field: message}`` for required fields left blank."""
    errors: Dict[str, str] = {}
    for requirement in REQUIRED_FIELDS.get(service, ()):
        if not requirement.is_required(details):
            continue
        value = details.get(requirement.name)
        if not isinstance(value, str) or not value.strip():
            errors[requirement.name] = requirement.message
    return errors
