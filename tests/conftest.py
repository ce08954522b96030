# Test fixtures and configuration
import base64
import os
import sys
from pathlib import Path

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Must be set before fitting_room.config is imported
os.environ["GEMINI_KEY"] = "test-key"
os.environ["UI_LANGUAGE"] = "en"
os.environ.setdefault("LOG_FILE", str(project_root / "test_run.log"))

from fitting_room.core.image_intake import ImageAsset, IntakeResult  # noqa: E402


@pytest.fixture
def minimal_png_bytes():
    """Minimal valid PNG image bytes."""
    return bytes([
        0x89, 0x50, 0x4E, 0x47, 0x0D, 0x0A, 0x1A, 0x0A,  # PNG signature
        0x00, 0x00, 0x00, 0x0D, 0x49, 0x48, 0x44, 0x52,  # IHDR chunk
        0x00, 0x00, 0x00, 0x01, 0x00, 0x00, 0x00, 0x01,  # 1x1 dimensions
        0x08, 0x02, 0x00, 0x00, 0x00, 0x90, 0x77, 0x53,
        0xDE, 0x00, 0x00, 0x00, 0x0C, 0x49, 0x44, 0x41,  # IDAT chunk
        0x54, 0x08, 0xD7, 0x63, 0xF8, 0xCF, 0xC0, 0x00,
        0x00, 0x00, 0x03, 0x00, 0x01, 0x00, 0x05, 0xFE,
        0xD4, 0xAA, 0x00, 0x00, 0x00, 0x00, 0x49, 0x45,  # IEND chunk
        0x4E, 0x44, 0xAE, 0x42, 0x60, 0x82
    ])


@pytest.fixture
def png_asset(minimal_png_bytes):
    """ImageAsset built from the minimal PNG."""
    return ImageAsset(
        data=base64.b64encode(minimal_png_bytes).decode(),
        mime_type="image/png",
    )


@pytest.fixture
def make_intake():
    """Factory for intake results with a recognisable payload."""

    def _make(data: str = "AAAA", mime_type: str = "image/png") -> IntakeResult:
        asset = ImageAsset(data=data, mime_type=mime_type)
        return IntakeResult(asset=asset, preview_uri=asset.data_uri)

    return _make


@pytest.fixture
def gemini_image_response():
    """Successful generateContent response carrying one PNG."""
    return {
        "candidates": [
            {
                "content": {
                    "role": "model",
                    "parts": [
                        {"text": "Here is the edited image."},
                        {"inlineData": {"mimeType": "image/png", "data": "AAAA"}},
                    ],
                }
            }
        ]
    }


@pytest.fixture
def gemini_text_only_response():
    """Response where the model answered with text only."""
    return {
        "candidates": [
            {"content": {"role": "model", "parts": [{"text": "I cannot do that."}]}}
        ]
    }
