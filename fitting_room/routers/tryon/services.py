"""Service helpers used by the try-on router."""

from fastapi import HTTPException, UploadFile

from fitting_room.config import logger
from fitting_room.core.controller import TryOnController
from fitting_room.core.image_intake import InvalidImageError, SlotName, read_upload


async def store_slot_image(
    controller: TryOnController,
    slot: SlotName,
    upload: UploadFile,
) -> bool:
    """
    Read an uploaded image into a slot.

    Returns:
        True if the read was stored, False if a clear superseded it

    Raises:
        HTTPException: 400 with the user-facing message for invalid files
    """
    ticket = controller.begin_read(slot)

    try:
        intake = await read_upload(upload, slot)
    except InvalidImageError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    finally:
        await upload.close()

    stored = controller.commit_read(ticket, intake)
    logger.info(
        "Image slot updated" if stored else "Image slot update skipped",
        extra={"slot": slot.value, "mime_type": intake.asset.mime_type},
    )
    return stored
