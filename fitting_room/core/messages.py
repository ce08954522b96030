"""User-facing message catalogue for the fitting room page."""

from typing import Dict

from fitting_room.config import UI_LANGUAGE

MESSAGES: Dict[str, Dict[str, str]] = {
    "en": {
        "invalid_file": "Please select a valid image file.",
        "file_too_large": "The selected image is too large.",
        "missing_person": "Please upload a photo of a person.",
        "missing_garment": "Please upload at least one top or bottom photo.",
        "no_image": "No image was produced in the response.",
        "tryon_failed": "Virtual try-on failed",
        "unexpected": "An unexpected error occurred.",
        "busy": "A try-on is already in progress.",
    },
    "ko": {
        "invalid_file": "유효한 이미지 파일을 선택해주세요.",
        "file_too_large": "이미지 파일이 너무 큽니다.",
        "missing_person": "인물 사진을 업로드해주세요.",
        "missing_garment": "상의 또는 하의 사진을 하나 이상 업로드해주세요.",
        "no_image": "응답에서 이미지가 생성되지 않았습니다.",
        "tryon_failed": "가상 피팅에 실패했습니다",
        "unexpected": "예상치 못한 오류가 발생했습니다.",
        "busy": "이미 가상 피팅이 진행 중입니다.",
    },
}


def get_message(key: str, language: str | None = None) -> str:
    """Look up a message, falling back to English for unknown languages."""
    catalogue = MESSAGES.get(language or UI_LANGUAGE, MESSAGES["en"])
    return catalogue.get(key, MESSAGES["en"][key])


__all__ = ["MESSAGES", "get_message"]
