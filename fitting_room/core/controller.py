"""
State machine behind the fitting room page.
Tracks the three image slots, the submission phase and the last outcome.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Awaitable, Callable, Dict, Optional

from fitting_room.config import logger
from fitting_room.core import gemini
from fitting_room.core.image_intake import ImageAsset, IntakeResult, SlotName
from fitting_room.core.messages import get_message
from fitting_room.core.request_builder import (
    TryOnRequest,
    TryOnRequestError,
    build_tryon_request,
)

Generator = Callable[[TryOnRequest], Awaitable[str]]


class TryOnPhase(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    FAILED = "failed"


class SubmissionInProgressError(RuntimeError):
    """Raised when a try-on is triggered while another one is running."""


@dataclass(frozen=True)
class TryOnResult:
    """Outcome of one submission: an image URI or an error, never both."""

    image_uri: Optional[str] = None
    error: Optional[str] = None

    def __post_init__(self) -> None:
        if (self.image_uri is None) == (self.error is None):
            raise ValueError("TryOnResult holds exactly one of image_uri or error")

    @classmethod
    def success(cls, image_uri: str) -> "TryOnResult":
        return cls(image_uri=image_uri)

    @classmethod
    def failure(cls, error: str) -> "TryOnResult":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.image_uri is not None


@dataclass(frozen=True)
class ReadTicket:
    """Handed out when a file read starts; needed to commit its result."""

    slot: SlotName
    epoch: int


@dataclass
class _SlotState:
    asset: Optional[ImageAsset] = None
    preview_uri: Optional[str] = None
    # bumped on clear; reads started in an older epoch are dropped
    epoch: int = 0


@dataclass(frozen=True)
class SlotView:
    asset: Optional[ImageAsset]
    preview_uri: Optional[str]


@dataclass(frozen=True)
class UIState:
    phase: TryOnPhase
    slots: Dict[SlotName, SlotView]
    result: Optional[TryOnResult]
    can_submit: bool

    @property
    def loading(self) -> bool:
        return self.phase is TryOnPhase.SUBMITTING

    @property
    def error_message(self) -> Optional[str]:
        return self.result.error if self.result else None

    @property
    def result_image(self) -> Optional[str]:
        return self.result.image_uri if self.result else None


@dataclass
class TryOnController:
    """Single-session controller: intake -> build -> generate -> display."""

    generator: Generator = gemini.virtual_tryon
    phase: TryOnPhase = TryOnPhase.IDLE
    result: Optional[TryOnResult] = None
    _slots: Dict[SlotName, _SlotState] = field(
        init=False,
        default_factory=lambda: {slot: _SlotState() for slot in SlotName},
    )

    # -------------------------
    # Image slots
    # -------------------------
    def asset(self, slot: SlotName) -> Optional[ImageAsset]:
        return self._slots[slot].asset

    def begin_read(self, slot: SlotName) -> ReadTicket:
        return ReadTicket(slot=slot, epoch=self._slots[slot].epoch)

    def commit_read(self, ticket: ReadTicket, intake: IntakeResult) -> bool:
        """
        Store a finished read. Among reads of the same slot the last one to
        finish wins; reads started before the slot was cleared are dropped.

        Returns:
            True if the read was stored
        """
        state = self._slots[ticket.slot]
        if ticket.epoch != state.epoch:
            logger.info(
                "Discarded stale image read",
                extra={"slot": ticket.slot.value, "epoch": ticket.epoch},
            )
            return False

        state.asset = intake.asset
        state.preview_uri = intake.preview_uri
        self._on_input_changed()
        return True

    def clear_slot(self, slot: SlotName) -> None:
        state = self._slots[slot]
        state.asset = None
        state.preview_uri = None
        state.epoch += 1
        self._on_input_changed()

    def _on_input_changed(self) -> None:
        # the last result stays on screen until the next trigger
        if self.phase in (TryOnPhase.SUCCESS, TryOnPhase.FAILED):
            self.phase = TryOnPhase.IDLE

    # -------------------------
    # Submission
    # -------------------------
    @property
    def can_submit(self) -> bool:
        return (
            self.asset(SlotName.PERSON) is not None
            and (
                self.asset(SlotName.TOP) is not None
                or self.asset(SlotName.BOTTOM) is not None
            )
            and self.phase is not TryOnPhase.SUBMITTING
        )

    async def submit(self) -> UIState:
        """Run one try-on and return the resulting state."""

        if self.phase is TryOnPhase.SUBMITTING:
            raise SubmissionInProgressError(get_message("busy"))

        try:
            request = build_tryon_request(
                self.asset(SlotName.PERSON),
                self.asset(SlotName.TOP),
                self.asset(SlotName.BOTTOM),
            )
        except TryOnRequestError as exc:
            logger.info("Try-on validation failed", extra={"code": exc.code})
            self.phase = TryOnPhase.IDLE
            self.result = TryOnResult.failure(get_message(exc.code))
            return self.snapshot()

        self.result = None
        self.phase = TryOnPhase.SUBMITTING
        logger.info(
            "Try-on submitted", extra={"image_parts": len(request.image_parts)}
        )

        try:
            image_uri = await self.generator(request)
        except gemini.GenerationError as exc:
            self.result = TryOnResult.failure(str(exc))
            self.phase = TryOnPhase.FAILED
        except Exception:
            logger.error("Unexpected error during try-on", exc_info=True)
            self.result = TryOnResult.failure(get_message("unexpected"))
            self.phase = TryOnPhase.FAILED
        else:
            self.result = TryOnResult.success(image_uri)
            self.phase = TryOnPhase.SUCCESS

        logger.info("Try-on finished", extra={"phase": self.phase.value})
        return self.snapshot()

    def snapshot(self) -> UIState:
        return UIState(
            phase=self.phase,
            slots={
                slot: SlotView(asset=state.asset, preview_uri=state.preview_uri)
                for slot, state in self._slots.items()
            },
            result=self.result,
            can_submit=self.can_submit,
        )


__all__ = [
    "TryOnPhase",
    "TryOnResult",
    "TryOnController",
    "SubmissionInProgressError",
    "ReadTicket",
    "UIState",
    "SlotView",
]
