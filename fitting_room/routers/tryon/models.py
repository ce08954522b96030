"""Pydantic models used by the try-on router."""

from typing import Optional

from pydantic import BaseModel, Field

from fitting_room.core.controller import UIState
from fitting_room.core.image_intake import SlotName


class SlotPreview(BaseModel):
    """Preview of one image slot."""

    present: bool
    mime_type: Optional[str] = None
    preview_uri: Optional[str] = Field(
        None, description="Full data URI of the uploaded image"
    )


class StateResponse(BaseModel):
    """Everything the page needs to render itself."""

    phase: str = Field(..., description="idle, submitting, success or failed")
    loading: bool
    can_submit: bool
    person: SlotPreview
    top: SlotPreview
    bottom: SlotPreview
    result_image: Optional[str] = Field(
        None, description="Generated image as a data URI"
    )
    error_message: Optional[str] = None

    @classmethod
    def from_state(cls, state: UIState) -> "StateResponse":
        previews = {}
        for slot, view in state.slots.items():
            previews[slot.value] = SlotPreview(
                present=view.asset is not None,
                mime_type=view.asset.mime_type if view.asset else None,
                preview_uri=view.preview_uri,
            )

        return cls(
            phase=state.phase.value,
            loading=state.loading,
            can_submit=state.can_submit,
            person=previews[SlotName.PERSON.value],
            top=previews[SlotName.TOP.value],
            bottom=previews[SlotName.BOTTOM.value],
            result_image=state.result_image,
            error_message=state.error_message,
        )


class TryOnResponse(BaseModel):
    """Response model for a try-on submission."""

    success: bool
    phase: str
    image: Optional[str] = Field(None, description="Generated image as a data URI")
    error: Optional[str] = None
