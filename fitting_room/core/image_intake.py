"""
Image intake for the fitting room.
Validates uploaded files and turns them into base64 image assets.
"""

from __future__ import annotations

import base64
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from fastapi import UploadFile

from fitting_room.config import MAX_UPLOAD_BYTES, logger
from fitting_room.core.messages import get_message


class SlotName(str, Enum):
    """Image inputs shown on the page, in request order."""

    PERSON = "person"
    TOP = "top"
    BOTTOM = "bottom"


class InvalidImageError(ValueError):
    """Raised when a selected file cannot be used as an image."""


@dataclass(frozen=True)
class ImageAsset:
    """Raw base64 payload plus the declared media type of an upload."""

    data: str
    mime_type: str

    @property
    def data_uri(self) -> str:
        return f"data:{self.mime_type};base64,{self.data}"


@dataclass(frozen=True)
class IntakeResult:
    asset: ImageAsset
    preview_uri: str


def is_image_type(content_type: Optional[str]) -> bool:
    return bool(content_type) and content_type.startswith("image/")


def encode_data_uri(raw: bytes, mime_type: str) -> str:
    """Return a base64 data URI for a byte payload."""
    encoded = base64.b64encode(raw).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def split_data_uri(data_uri: str, mime_type: str) -> ImageAsset:
    """Strip the ``data:...;base64,`` prefix and keep the declared type."""
    if not data_uri.startswith("data:"):
        raise InvalidImageError("Invalid data URI provided for image input")

    try:
        payload = data_uri.split(",", 1)[1]
    except IndexError as exc:
        raise InvalidImageError("Invalid data URI provided for image input") from exc

    return ImageAsset(data=payload, mime_type=mime_type)


def _check_size(size: int, slot: SlotName) -> None:
    if size > MAX_UPLOAD_BYTES:
        logger.warning(
            "Rejected oversized upload",
            extra={"slot": slot.value, "size": size},
        )
        raise InvalidImageError(get_message("file_too_large"))


async def read_upload(upload: UploadFile, slot: SlotName) -> IntakeResult:
    """
    Read an uploaded file into an image asset.

    Args:
        upload: File received from the page's file picker
        slot: Slot the file was selected for (used for logging)

    Returns:
        IntakeResult with the asset and the full data URI for preview

    Raises:
        InvalidImageError: If the declared type is not an image, the file is
            empty, or it exceeds MAX_UPLOAD_BYTES
    """
    content_type = upload.content_type
    if not is_image_type(content_type):
        logger.warning(
            "Rejected non-image upload",
            extra={"slot": slot.value, "content_type": content_type},
        )
        raise InvalidImageError(get_message("invalid_file"))

    # size is known up front for multipart uploads
    if upload.size is not None:
        _check_size(upload.size, slot)

    raw = await upload.read()
    if not raw:
        logger.warning("Rejected empty upload", extra={"slot": slot.value})
        raise InvalidImageError(get_message("invalid_file"))
    _check_size(len(raw), slot)

    preview_uri = encode_data_uri(raw, content_type)
    asset = split_data_uri(preview_uri, content_type)

    logger.info(
        f"Read {slot.value} image",
        extra={"slot": slot.value, "mime_type": content_type, "size": len(raw)},
    )
    return IntakeResult(asset=asset, preview_uri=preview_uri)


__all__ = [
    "SlotName",
    "InvalidImageError",
    "ImageAsset",
    "IntakeResult",
    "is_image_type",
    "encode_data_uri",
    "split_data_uri",
    "read_upload",
]
