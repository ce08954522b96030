from typing import Any, Dict, Optional

import httpx

# Import from centralized config
from fitting_room.config import (
    GEMINI_API_BASE,
    GEMINI_KEY,
    GEMINI_MODEL,
    GEMINI_TIMEOUT_SECONDS,
    logger,
    require_gemini_key,
)
from fitting_room.core.messages import get_message
from fitting_room.core.request_builder import InlineData, TryOnRequest

# Missing credentials stop the app here, at import time
GEMINI_API_KEY = require_gemini_key(GEMINI_KEY)

logger.info(f"Gemini module initialized with model: {GEMINI_MODEL}")


class GenerationError(Exception):
    """Raised when the generation service fails to produce a try-on image."""


class NoImageProducedError(GenerationError):
    """Raised when the service answers without any inline image."""


def _failure_message(reason: str) -> str:
    return f"{get_message('tryon_failed')}: {reason}"


def _build_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=GEMINI_TIMEOUT_SECONDS)


def _generate_content_url(model: str = GEMINI_MODEL) -> str:
    return f"{GEMINI_API_BASE}/models/{model}:generateContent"


async def virtual_tryon(request: TryOnRequest) -> str:
    """
    Generate a virtual try-on image using Gemini AI.

    Args:
        request: Validated try-on request (person, garments, prompt)

    Returns:
        The generated image as ``data:<mime_type>;base64,<data>``

    Raises:
        NoImageProducedError: If the response holds no inline image
        GenerationError: If the API call fails for any other reason
    """
    logger.info(
        "Sending try-on request to Gemini",
        extra={"model": GEMINI_MODEL, "image_parts": len(request.image_parts)},
    )
    logger.debug(f"VIRTUAL TRY-ON PROMPT: {request.prompt}")

    try:
        async with _build_client() as client:
            response = await client.post(
                _generate_content_url(),
                json=request.to_payload(),
                headers={
                    "Content-Type": "application/json",
                    "x-goog-api-key": GEMINI_API_KEY,
                },
            )
            response.raise_for_status()
            api_result = response.json()

    except httpx.HTTPStatusError as exc:
        logger.error(
            f"Gemini API HTTP error: {exc.response.status_code} - {exc.response.text}"
        )
        raise GenerationError(
            _failure_message(
                f"Gemini API HTTP error {exc.response.status_code}"
                f"{_api_error_detail(exc.response)}"
            )
        ) from exc
    except httpx.RequestError as exc:
        logger.error("Network error calling Gemini API", exc_info=True)
        raise GenerationError(
            _failure_message(f"Network error calling Gemini API: {exc}")
        ) from exc
    except ValueError as exc:
        logger.error("Gemini API returned invalid JSON", exc_info=True)
        raise GenerationError(
            _failure_message("Gemini API returned an unreadable response")
        ) from exc

    image = extract_first_image(api_result)
    if image is None:
        logger.error(
            "No image found in Gemini API response",
            extra={"response_keys": sorted(api_result) if isinstance(api_result, dict) else []},
        )
        raise NoImageProducedError(_failure_message(get_message("no_image")))

    logger.info("Try-on image generated", extra={"mime_type": image.mime_type})
    return f"data:{image.mime_type};base64,{image.data}"


def extract_first_image(api_result: Dict[str, Any]) -> Optional[InlineData]:
    """Return the first inline image of the first candidate, if any."""

    if not isinstance(api_result, dict):
        return None

    candidates = api_result.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return None

    candidate = candidates[0]
    content = candidate.get("content") if isinstance(candidate, dict) else None
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list):
        return None

    for part in parts:
        if not isinstance(part, dict):
            continue
        # Check both camelCase and snake_case formats
        inline = part.get("inlineData") or part.get("inline_data")
        if not isinstance(inline, dict) or not isinstance(inline.get("data"), str):
            continue
        mime_type = inline.get("mimeType") or inline.get("mime_type")
        if not isinstance(mime_type, str) or not mime_type:
            mime_type = "image/png"
        return InlineData(data=inline["data"], mime_type=mime_type)

    return None


def _api_error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return ""
    error = body.get("error") if isinstance(body, dict) else None
    message = error.get("message") if isinstance(error, dict) else None
    return f" - {message}" if message else ""


__all__ = [
    "GEMINI_API_KEY",
    "GenerationError",
    "NoImageProducedError",
    "virtual_tryon",
    "extract_first_image",
]
