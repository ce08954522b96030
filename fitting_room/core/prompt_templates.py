"""Prompt templates and builders for the Gemini virtual try-on flow."""

from __future__ import annotations
from dataclasses import dataclass


# --- GENERATION PROMPT ---
# The wording is part of the contract with the model: it refers to the images
# by position, so it must stay in sync with the part order of the request.

PROMPT_TEMPLATE = (
    "The first image is a person. "
    "The following image(s) contain {GARMENT_PHRASE}. "
    "Your task is to realistically render the clothing item(s) onto the person in the first image. "
    "Preserve the background of the original person image. "
    "The output image must have the same dimensions as the original person image. "
    "Output only the final edited image, with no additional text or commentary."
)


@dataclass(frozen=True)
class GarmentLabels:
    """How each garment slot is named inside the prompt."""

    top: str = "a top"
    bottom: str = "a bottom"
    joiner: str = " and "


LABELS = GarmentLabels()


def describe_garments(has_top: bool, has_bottom: bool) -> str:
    """Return "a top", "a bottom" or "a top and a bottom"."""
    items = []
    if has_top:
        items.append(LABELS.top)
    if has_bottom:
        items.append(LABELS.bottom)

    if not items:
        raise ValueError("Virtual try-on prompt needs at least one garment image.")

    return LABELS.joiner.join(items)


def build_virtual_tryon_prompt(has_top: bool, has_bottom: bool) -> str:
    """Render the generation prompt for the populated garment slots."""
    return PROMPT_TEMPLATE.format(GARMENT_PHRASE=describe_garments(has_top, has_bottom))


__all__ = [
    "PROMPT_TEMPLATE",
    "LABELS",
    "GarmentLabels",
    "describe_garments",
    "build_virtual_tryon_prompt",
]
