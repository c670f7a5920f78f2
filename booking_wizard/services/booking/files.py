"""
File intake for the booking wizard: filtering, storage and transparency checks.
"""

import asyncio
import io
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from PIL import Image, UnidentifiedImageError

from ...core.enums import ServiceType
from ...core.models.booking import UploadedFile
from ...utils.logging import get_logger

logger = get_logger(__name__)

TSHIRT_REJECTION = "Please upload PNG files only for t-shirt printing."
GENERIC_REJECTION = "Please upload valid image, video, or PDF files."


@dataclass
class IncomingFile:
    """Raw file as received from the client."""

    name: str
    mime_type: str
    data: bytes


@dataclass
class IntakeResult:
    """Outcome of one upload batch."""

    accepted: List[UploadedFile] = field(default_factory=list)
    rejected: List[str] = field(default_factory=list)
    notice: Optional[str] = None


def is_accepted_type(service: str, mime_type: str) -> bool:
    """Check if ``mime_type`` may be attached to a booking for ``service``."""
    mime_type = (mime_type or "").lower()
    if service == ServiceType.TSHIRT_PRINTING.value:
        return mime_type == "image/png"
    return (
        mime_type.startswith("image/")
        or mime_type.startswith("video/")
        or mime_type == "application/pdf"
    )


def has_transparent_pixels(data: bytes) -> bool:
    """Return True if any pixel of the image has alpha below 255.

    Undecodable data counts as opaque.
    """
    try:
        with Image.open(io.BytesIO(data)) as image:
            if image.mode in ("RGBA", "LA"):
                alpha = image.getchannel("A")
            elif image.mode == "P" and "transparency" in image.info:
                alpha = image.convert("RGBA").getchannel("A")
            elif image.mode in ("RGB", "L") and "transparency" in image.info:
                alpha = image.convert("RGBA").getchannel("A")
            else:
                return False
            low, _high = alpha.getextrema()
            return low < 255
    except (UnidentifiedImageError, OSError, ValueError) as e:
        logger.warning("Could not decode image for transparency check: %s", e)
        return False


class FileIntake:
    """Accepts uploads into the upload directory."""

    def __init__(self, upload_dir: str, url_prefix: str = "/uploads"):
        self.upload_dir = Path(upload_dir)
        self.url_prefix = url_prefix.rstrip("/")

    @staticmethod
    def _safe_name(name: str) -> str:
        base = Path(name or "").name
        return base or "upload"

    def _store(self, file_id: str, name: str, data: bytes) -> None:
        target_dir = self.upload_dir / file_id
        target_dir.mkdir(parents=True, exist_ok=True)
        (target_dir / name).write_bytes(data)

    async def _accept_one(self, service: str, incoming: IncomingFile) -> UploadedFile:
        file_id = uuid.uuid4().hex
        name = self._safe_name(incoming.name)
        await asyncio.to_thread(self._store, file_id, name, incoming.data)

        transparent: Optional[bool] = None
        if service == ServiceType.TSHIRT_PRINTING.value and incoming.mime_type.startswith("image/"):
            transparent = await asyncio.to_thread(has_transparent_pixels, incoming.data)

        return UploadedFile(
            id=file_id,
            name=name,
            size_bytes=len(incoming.data),
            mime_type=incoming.mime_type,
            access_url=f"{self.url_prefix}/{file_id}/{name}",
            is_transparent_background=transparent,
        )

    async def accept(self, service: str, files: Sequence[IncomingFile]) -> IntakeResult:
        """Filter, store and describe a batch of uploads, keeping submission order."""
        result = IntakeResult()
        to_accept: List[IncomingFile] = []

        for incoming in files:
            if is_accepted_type(service, incoming.mime_type):
                to_accept.append(incoming)
            else:
                result.rejected.append(incoming.name)

        if result.rejected:
            result.notice = (
                TSHIRT_REJECTION
                if service == ServiceType.TSHIRT_PRINTING.value
                else GENERIC_REJECTION
            )
            logger.info("Rejected %d upload(s) for %s", len(result.rejected), service)

        if to_accept:
            result.accepted = list(
                await asyncio.gather(*(self._accept_one(service, f) for f in to_accept))
            )

        return result
