"""Tests for settings loading."""

import pytest
from pathlib import Path
from pydantic import ValidationError

from pptx_richtext.config import Settings, get_settings, load_settings, reset_settings
from pptx_richtext.formatting.ir import UnderlineVariant
from pptx_richtext.formatting.parser import MarkdownParser


class TestSettings:
    """Tests for Settings defaults and overrides."""

    def test_defaults(self):
        settings = Settings()

        assert settings.underline_variant == "heavy"
        assert settings.skip_classes == ["ql-ui"]
        assert settings.apply_default_font is False
        assert settings.heading_space_after == 12
        assert settings.list_space_after == 6
        assert settings.slide_font_size == 8
        assert settings.slide_font_face == "Arial"
        assert settings.slide_color == "000000"

    def test_environment_override(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("RICHTEXT_UNDERLINE", "single")
        monkeypatch.setenv("RICHTEXT_SKIP_CLASSES", '["ql-ui", "toolbar"]')

        settings = Settings()

        assert settings.underline_variant == "single"
        assert settings.skip_classes == ["ql-ui", "toolbar"]

    def test_invalid_underline_rejected(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("RICHTEXT_UNDERLINE", "zigzag")

        with pytest.raises(ValidationError):
            Settings()


class TestGlobalSettings:
    """Tests for the shared settings instance."""

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    def test_reset_rereads_environment(self, monkeypatch: pytest.MonkeyPatch):
        """Test that a reset picks up environment changes."""
        assert get_settings().underline_variant == "heavy"

        monkeypatch.setenv("RICHTEXT_UNDERLINE", "single")
        reset_settings()

        run = MarkdownParser().convert("<u>x</u>")[0]
        assert run.style.underline.variant is UnderlineVariant.SINGLE

    def test_load_settings_from_env_file(self, tmp_path: Path):
        env_file = tmp_path / "custom.env"
        env_file.write_text("RICHTEXT_SLIDE_FONT_FACE=Calibri\n", encoding="utf-8")

        settings = load_settings(env_file)

        assert settings.slide_font_face == "Calibri"
        assert get_settings() is settings
