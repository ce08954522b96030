"""Unit tests for the try-on prompt and request builder."""

import pytest
from pydantic import ValidationError

from fitting_room.core.image_intake import ImageAsset
from fitting_room.core.prompt_templates import (
    build_virtual_tryon_prompt,
    describe_garments,
)
from fitting_room.core.request_builder import (
    ContentPart,
    InlineData,
    TryOnRequest,
    TryOnRequestError,
    build_tryon_request,
)

PERSON = ImageAsset(data="UEVSU09O", mime_type="image/jpeg")
TOP = ImageAsset(data="VE9Q", mime_type="image/png")
BOTTOM = ImageAsset(data="Qk9UVE9N", mime_type="image/webp")


class TestPrompt:
    """Tests for the instruction text."""

    @pytest.mark.parametrize("has_top,has_bottom,expected", [
        (True, False, "a top"),
        (False, True, "a bottom"),
        (True, True, "a top and a bottom"),
    ])
    def test_describe_garments(self, has_top, has_bottom, expected):
        assert describe_garments(has_top, has_bottom) == expected

    def test_describe_garments_requires_one(self):
        with pytest.raises(ValueError):
            describe_garments(False, False)

    def test_full_prompt_for_top(self):
        assert build_virtual_tryon_prompt(True, False) == (
            "The first image is a person. "
            "The following image(s) contain a top. "
            "Your task is to realistically render the clothing item(s) onto the person in the first image. "
            "Preserve the background of the original person image. "
            "The output image must have the same dimensions as the original person image. "
            "Output only the final edited image, with no additional text or commentary."
        )


class TestBuildTryOnRequest:
    """Tests for part ordering and validation."""

    def test_person_and_top(self):
        request = build_tryon_request(PERSON, top=TOP)

        assert len(request.parts) == 3
        assert [p.inline_data.data for p in request.image_parts] == ["UEVSU09O", "VE9Q"]
        assert request.parts[-1].text == request.prompt
        assert "a top" in request.prompt
        assert "a bottom" not in request.prompt

    def test_person_top_and_bottom(self):
        request = build_tryon_request(PERSON, top=TOP, bottom=BOTTOM)

        assert len(request.image_parts) == 3
        assert [p.inline_data.mime_type for p in request.image_parts] == [
            "image/jpeg",
            "image/png",
            "image/webp",
        ]
        assert "a top and a bottom" in request.prompt

    def test_person_and_bottom(self):
        request = build_tryon_request(PERSON, bottom=BOTTOM)

        assert [p.inline_data.data for p in request.image_parts] == ["UEVSU09O", "Qk9UVE9N"]
        assert "contain a bottom." in request.prompt

    def test_missing_person(self):
        with pytest.raises(TryOnRequestError) as exc_info:
            build_tryon_request(None, top=TOP)

        assert exc_info.value.code == "missing_person"

    def test_missing_garments(self):
        with pytest.raises(TryOnRequestError) as exc_info:
            build_tryon_request(PERSON)

        assert exc_info.value.code == "missing_garment"


class TestRequestValidation:
    """Malformed part lists are rejected at construction time."""

    def test_part_needs_exactly_one_kind(self):
        with pytest.raises(ValidationError):
            ContentPart()
        with pytest.raises(ValidationError):
            ContentPart(inline_data=InlineData(data="AA", mime_type="image/png"), text="x")

    def test_text_must_be_last(self):
        with pytest.raises(ValidationError):
            TryOnRequest(parts=[
                ContentPart(text="prompt"),
                ContentPart.from_asset(PERSON),
                ContentPart.from_asset(TOP),
            ])

    def test_garment_required(self):
        with pytest.raises(ValidationError):
            TryOnRequest(parts=[ContentPart.from_asset(PERSON), ContentPart(text="prompt")])

    def test_too_many_images(self):
        with pytest.raises(ValidationError):
            TryOnRequest(parts=[ContentPart.from_asset(PERSON)] * 4 + [ContentPart(text="p")])


class TestPayload:
    """Tests for the generateContent JSON body."""

    def test_payload_shape(self):
        payload = build_tryon_request(PERSON, top=TOP).to_payload()

        parts = payload["contents"][0]["parts"]
        assert parts[0] == {"inlineData": {"data": "UEVSU09O", "mimeType": "image/jpeg"}}
        assert parts[1] == {"inlineData": {"data": "VE9Q", "mimeType": "image/png"}}
        assert set(parts[2]) == {"text"}
        assert payload["generationConfig"] == {"responseModalities": ["IMAGE", "TEXT"]}
