"""Tests for the user-facing message catalogue."""

import pytest

from fitting_room.core.messages import MESSAGES, get_message


class TestMessageCatalogue:
    """Tests for language selection and fallback."""

    def test_english_default(self):
        """The test run pins UI_LANGUAGE to English."""
        assert get_message("missing_person") == "Please upload a photo of a person."

    def test_korean(self):
        assert get_message("missing_person", "ko") == "인물 사진을 업로드해주세요."
        assert get_message("tryon_failed", "ko") == "가상 피팅에 실패했습니다"

    def test_unknown_language_falls_back_to_english(self):
        assert get_message("no_image", "fr") == MESSAGES["en"]["no_image"]

    @pytest.mark.parametrize("key", sorted(MESSAGES["en"]))
    def test_catalogues_share_keys(self, key):
        assert MESSAGES["ko"][key]
        assert get_message(key, "ko") != get_message(key, "en")
