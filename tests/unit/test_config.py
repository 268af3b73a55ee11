"""Tests for render settings — env-driven defaults."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from termstack.config import RenderSettings


class TestRenderSettings:
    def test_defaults(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        config = RenderSettings()
        assert (config.fallback_width, config.fallback_height) == (100, 100)
        assert config.force_redirected is False
        assert config.refresh_hz == 10.0
        assert config.log_level == "WARNING"
        assert config.signal_errors == "log"

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("TERMSTACK_FALLBACK_WIDTH", "120")
        monkeypatch.setenv("TERMSTACK_FORCE_REDIRECTED", "true")
        config = RenderSettings()
        assert config.fallback_width == 120
        assert config.force_redirected is True

    def test_dotenv_file(self, monkeypatch, tmp_path):
        (tmp_path / ".env").write_text("TERMSTACK_SIGNAL_ERRORS=raise\n", encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        assert RenderSettings().signal_errors == "raise"

    def test_invalid_signal_policy(self, monkeypatch):
        monkeypatch.setenv("TERMSTACK_SIGNAL_ERRORS", "explode")
        with pytest.raises(ValidationError):
            RenderSettings()
