"""FastAPI router for virtual try-on endpoints."""

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from fitting_room.config import logger
from fitting_room.core.controller import SubmissionInProgressError, TryOnController
from fitting_room.core.image_intake import SlotName

from .dependencies import get_controller, get_slot
from .models import StateResponse, TryOnResponse
from .services import store_slot_image

router = APIRouter(prefix="/api/v1", tags=["Virtual Try-On"])


@router.get("/state", response_model=StateResponse)
async def get_state(
    controller: TryOnController = Depends(get_controller),
) -> StateResponse:
    """Return the current page state."""

    return StateResponse.from_state(controller.snapshot())


@router.post("/images/{slot}", response_model=StateResponse)
async def upload_image(
    slot: SlotName = Depends(get_slot),
    image: UploadFile = File(..., description="Image selected for the slot"),
    controller: TryOnController = Depends(get_controller),
) -> StateResponse:
    """Store the selected file in a person, top or bottom slot."""

    logger.info("Image upload received", extra={"slot": slot.value})
    await store_slot_image(controller, slot, image)
    return StateResponse.from_state(controller.snapshot())


@router.delete("/images/{slot}", response_model=StateResponse)
async def clear_image(
    slot: SlotName = Depends(get_slot),
    controller: TryOnController = Depends(get_controller),
) -> StateResponse:
    """Remove the image from a slot."""

    controller.clear_slot(slot)
    logger.info("Image slot cleared", extra={"slot": slot.value})
    return StateResponse.from_state(controller.snapshot())


@router.post("/tryon", response_model=TryOnResponse)
async def create_virtual_tryon(
    controller: TryOnController = Depends(get_controller),
) -> TryOnResponse:
    """Run a try-on with the current slots and return the outcome."""

    try:
        logger.info("Virtual try-on request received")
        state = await controller.submit()

    except SubmissionInProgressError as exc:
        logger.warning("Try-on rejected, another one is running")
        raise HTTPException(status_code=409, detail=str(exc))

    except Exception as exc:
        logger.error("Unexpected error in try-on request", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=f"An unexpected error occurred: {exc}",
        )

    return TryOnResponse(
        success=state.result is not None and state.result.ok,
        phase=state.phase.value,
        image=state.result_image,
        error=state.error_message,
    )


@router.get("/health")
async def health_check() -> dict:
    """Simple health check endpoint."""

    return {
        "status": "healthy",
        "service": "fitting-room",
        "version": "1.0.0",
    }
