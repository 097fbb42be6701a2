from __future__ import annotations

from pathlib import Path

import pytest

from plant_analyzer.core.config import Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("API_KEY", "GEMINI_API_KEY", "PORT", "REPORTS_DIR"):
        monkeypatch.delenv(name, raising=False)


def test_settings_defaults() -> None:
    settings = Settings(_env_file=None)
    assert settings.port == 5000
    assert settings.api_key is None
    assert settings.reports_dir == Path("reports")
    assert settings.gemini_model == "gemini-1.5-flash"
    assert "plain text" in settings.analysis_prompt


def test_settings_read_gemini_api_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GEMINI_API_KEY", "from-gemini-var")
    assert Settings(_env_file=None).api_key == "from-gemini-var"


def test_settings_api_key_takes_precedence(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GEMINI_API_KEY", "from-gemini-var")
    monkeypatch.setenv("API_KEY", "from-api-key")
    assert Settings(_env_file=None).api_key == "from-api-key"


def test_settings_port_and_reports_dir_from_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("REPORTS_DIR", str(tmp_path))
    settings = Settings(_env_file=None)
    assert settings.port == 8080
    assert settings.reports_dir == tmp_path


def test_settings_reject_invalid_port(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PORT", "not-a-port")
    with pytest.raises(ValueError):
        Settings(_env_file=None)
