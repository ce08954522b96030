"""FastAPI dependencies shared across try-on endpoints."""

from typing import Optional

from fastapi import HTTPException

from fitting_room.config import logger
from fitting_room.core.controller import TryOnController
from fitting_room.core.image_intake import SlotName

# Single in-process session
_controller: Optional[TryOnController] = None


def get_controller() -> TryOnController:
    """Get or create the controller instance."""
    global _controller
    if _controller is None:
        _controller = TryOnController()
        logger.info("Try-on controller initialized")
    return _controller


def get_slot(slot: str) -> SlotName:
    """Resolve the ``{slot}`` path parameter."""
    try:
        return SlotName(slot)
    except ValueError:
        raise HTTPException(status_code=404, detail=f"Unknown image slot: {slot}")
