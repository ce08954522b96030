"""Builds the multimodal generateContent request for a try-on."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from fitting_room.core.image_intake import ImageAsset
from fitting_room.core.prompt_templates import build_virtual_tryon_prompt

RESPONSE_MODALITIES = ["IMAGE", "TEXT"]


class TryOnRequestError(ValueError):
    """Raised when the inputs cannot form a valid try-on request."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code


class InlineData(BaseModel):
    """Base64 image payload as sent to and returned by Gemini."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    data: str
    mime_type: str = Field(..., alias="mimeType")


class ContentPart(BaseModel):
    """One request part: either an inline image or a text segment."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    inline_data: Optional[InlineData] = Field(None, alias="inlineData")
    text: Optional[str] = None

    @model_validator(mode="after")
    def _exactly_one_kind(self) -> "ContentPart":
        if (self.inline_data is None) == (self.text is None):
            raise ValueError("A content part carries either inlineData or text")
        return self

    @classmethod
    def from_asset(cls, asset: ImageAsset) -> "ContentPart":
        return cls(inline_data=InlineData(data=asset.data, mime_type=asset.mime_type))

    @property
    def is_image(self) -> bool:
        return self.inline_data is not None


class TryOnRequest(BaseModel):
    """
    Ordered parts for a try-on: person image, then top and/or bottom
    images, then exactly one instruction text.
    """

    model_config = ConfigDict(frozen=True)

    parts: List[ContentPart]

    @model_validator(mode="after")
    def _check_order(self) -> "TryOnRequest":
        if len(self.parts) < 3:
            raise ValueError("A try-on request needs a person, a garment and a prompt")
        *images, prompt = self.parts
        if prompt.is_image:
            raise ValueError("The instruction text must be the last part")
        if not all(part.is_image for part in images):
            raise ValueError("Only the last part may be text")
        if len(images) > 3:
            raise ValueError("At most one person and two garment images are allowed")
        return self

    @property
    def image_parts(self) -> List[ContentPart]:
        return self.parts[:-1]

    @property
    def prompt(self) -> str:
        return self.parts[-1].text or ""

    def to_payload(self) -> Dict[str, Any]:
        """Return the JSON body for the generateContent endpoint."""
        return {
            "contents": [
                {
                    "parts": [
                        part.model_dump(by_alias=True, exclude_none=True)
                        for part in self.parts
                    ]
                }
            ],
            "generationConfig": {"responseModalities": list(RESPONSE_MODALITIES)},
        }


def build_tryon_request(
    person: Optional[ImageAsset],
    top: Optional[ImageAsset] = None,
    bottom: Optional[ImageAsset] = None,
) -> TryOnRequest:
    """
    Assemble a try-on request from the populated slots.

    Raises:
        TryOnRequestError: If the person image is missing or no garment
            image is provided
    """
    if person is None:
        raise TryOnRequestError("missing_person", "A person image is required")
    if top is None and bottom is None:
        raise TryOnRequestError(
            "missing_garment", "At least one garment image is required"
        )

    parts = [ContentPart.from_asset(person)]
    if top is not None:
        parts.append(ContentPart.from_asset(top))
    if bottom is not None:
        parts.append(ContentPart.from_asset(bottom))
    parts.append(
        ContentPart(
            text=build_virtual_tryon_prompt(
                has_top=top is not None, has_bottom=bottom is not None
            )
        )
    )

    return TryOnRequest(parts=parts)


__all__ = [
    "RESPONSE_MODALITIES",
    "TryOnRequestError",
    "InlineData",
    "ContentPart",
    "TryOnRequest",
    "build_tryon_request",
]
