"""Tests for configuration loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from sani.config import Settings, get_settings, load_settings
from sani.formatting.ir import TextStyle
from sani.render.styles import StyleMap


class TestSettings:
    """Tests for the Settings model."""

    def test_defaults(self):
        settings = Settings()

        assert settings.color == "auto"
        assert settings.preserve_wrapping is False
        assert settings.emphasis_style == "italic"
        assert settings.strong_style == "bold"
        assert settings.strikethrough_style == "strikethrough"
        assert settings.log_level == "WARNING"

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("SANI_COLOR", "never")
        monkeypatch.setenv("SANI_PRESERVE_WRAPPING", "true")
        monkeypatch.setenv("SANI_STRIKETHROUGH_STYLE", "dim+strikethrough")

        settings = Settings()

        assert settings.color == "never"
        assert settings.preserve_wrapping is True
        assert StyleMap.from_settings(settings).strikethrough == (
            TextStyle.DIM | TextStyle.STRIKETHROUGH
        )

    def test_unknown_style_is_rejected(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("SANI_STRONG_STYLE", "blink")

        with pytest.raises(ValidationError):
            Settings()

    def test_unknown_color_mode_is_rejected(self):
        with pytest.raises(ValidationError):
            Settings(color="sometimes")

    def test_log_level_is_normalised(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

        with pytest.raises(ValidationError):
            Settings(log_level="chatty")


class TestGlobalSettings:
    """Tests for the cached settings instance."""

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    def test_load_settings_from_env_file(self, tmp_path: Path):
        env_file = tmp_path / "custom.env"
        env_file.write_text("SANI_COLOR=always\nSANI_EMPHASIS_STYLE=underline\n")

        settings = load_settings(env_file)

        assert settings.color == "always"
        assert settings.emphasis_style == "underline"
        assert get_settings() is settings

    def test_dotenv_in_working_directory(self, tmp_path: Path):
        (tmp_path / ".env").write_text("SANI_PRESERVE_WRAPPING=1\n")

        assert load_settings().preserve_wrapping is True
