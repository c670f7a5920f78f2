"""
Booking-related data models.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..enums import ContactChannel, StepKind


@dataclass
class UploadedFile:
    """Descriptor of a file the customer attached to the booking."""

    id: str
    name: str
    size_bytes: int
    mime_type: str
    access_url: str
    is_transparent_background: Optional[bool] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "sizeBytes": self.size_bytes,
            "mimeType": self.mime_type,
            "accessUrl": self.access_url,
        }
        if self.is_transparent_background is not None:
            data["isTransparentBackground"] = self.is_transparent_background
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UploadedFile":
        transparent = data.get("isTransparentBackground")
        return cls(
            id=str(data.get("id") or ""),
            name=str(data.get("name") or ""),
            size_bytes=int(data.get("sizeBytes") or 0),
            mime_type=str(data.get("mimeType") or ""),
            access_url=str(data.get("accessUrl") or ""),
            is_transparent_background=None if transparent is None else bool(transparent),
        )


@dataclass
class ContactInfo:
    """How the studio can reach the customer."""

    name: str = ""
    phone: str = ""
    email: str = ""
    preferred_contact_channel: ContactChannel = ContactChannel.WHATSAPP

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "phone": self.phone,
            "email": self.email,
            "preferredContactChannel": self.preferred_contact_channel.value,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ContactInfo":
        if not isinstance(data, dict):
            data = {}
        return cls(
            name=str(data.get("name") or ""),
            phone=str(data.get("phone") or ""),
            email=str(data.get("email") or ""),
            preferred_contact_channel=ContactChannel.from_string(
                data.get("preferredContactChannel") or ""
            ),
        )


@dataclass
class BookingRecord:
    """Single source of truth for one in-progress booking."""

    # "" means no service selected yet
    service: str = ""
    service_details: Dict[str, str] = field(default_factory=dict)
    files: List[UploadedFile] = field(default_factory=list)
    contact_info: ContactInfo = field(default_factory=ContactInfo)

    def is_empty(self) -> bool:
        """Check if nothing has been entered yet."""
        return (
            not self.service
            and not self.service_details
            and not self.files
            and self.contact_info == ContactInfo()
        )

    def find_file(self, file_id: str) -> Optional[UploadedFile]:
        """Return the file descriptor with ``file_id`` if attached."""
        for uploaded in self.files:
            if uploaded.id == file_id:
                return uploaded
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "service": self.service,
            "serviceDetails": dict(self.service_details),
            "files": [f.to_dict() for f in self.files],
            "contactInfo": self.contact_info.to_dict(),
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "BookingRecord":
        """Rebuild a record from its stored form.

        Storage layers have been seen to hand back ``files`` as a keyed
        object (``{"0": {...}, "1": {...}}``); it is always coerced back to
        an ordered list here.
        """
        if not isinstance(data, dict):
            data = {}

        raw_files = data.get("files")
        if isinstance(raw_files, dict):
            raw_files = list(raw_files.values())
        elif not isinstance(raw_files, list):
            raw_files = []

        raw_details = data.get("serviceDetails")
        if not isinstance(raw_details, dict):
            raw_details = {}

        return cls(
            service=str(data.get("service") or ""),
            service_details={
                str(k): v for k, v in raw_details.items() if isinstance(v, str)
            },
            files=[UploadedFile.from_dict(f) for f in raw_files if isinstance(f, dict)],
            contact_info=ContactInfo.from_dict(data.get("contactInfo")),
        )

    @classmethod
    def from_json(cls, raw: str) -> "BookingRecord":
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError("stored booking record is not a JSON object")
        return cls.from_dict(data)


@dataclass(frozen=True)
class StepDefinition:
    """One screen of the wizard."""

    id: int
    kind: StepKind
    title: str
    description: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "kind": self.kind.value,
            "title": self.title,
            "description": self.description,
        }


class UploadedFilePayload(BaseModel):
    """Wire form of an uploaded file descriptor."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    size_bytes: int = Field(default=0, alias="sizeBytes")
    mime_type: str = Field(default="", alias="mimeType")
    access_url: str = Field(default="", alias="accessUrl")
    is_transparent_background: Optional[bool] = Field(
        default=None, alias="isTransparentBackground"
    )


class ContactInfoUpdate(BaseModel):
    """Model for partial contact information updates."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    preferred_contact_channel: Optional[ContactChannel] = Field(
        default=None, alias="preferredContactChannel"
    )


class BookingRecordPayload(BaseModel):
    """Inline booking record sent by clients that keep state themselves."""

    model_config = ConfigDict(populate_by_name=True)

    service: str = ""
    service_details: Dict[str, str] = Field(default_factory=dict, alias="serviceDetails")
    files: List[UploadedFilePayload] = Field(default_factory=list)
    contact_info: ContactInfoUpdate = Field(default_factory=ContactInfoUpdate, alias="contactInfo")

    def to_record(self) -> BookingRecord:
        return BookingRecord.from_dict(
            {
                "service": self.service,
                "serviceDetails": self.service_details,
                "files": [f.model_dump(by_alias=True) for f in self.files],
                "contactInfo": self.contact_info.model_dump(
                    by_alias=True, exclude_none=True, mode="json"
                ),
            }
        )


class ServiceSelection(BaseModel):
    """Model for choosing a service."""

    model_config = ConfigDict(extra="forbid")

    service: str


class ServiceDetailsUpdate(BaseModel):
    """Model for updating service detail fields."""

    model_config = ConfigDict(extra="forbid")

    fields: Dict[str, Optional[str]]


class StepJump(BaseModel):
    """Model for jumping to a specific step."""

    model_config = ConfigDict(extra="forbid")

    step: int
