from __future__ import annotations

import base64
import io
from pathlib import Path
from typing import Optional

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from plant_analyzer.api.deps import get_vision_client
from plant_analyzer.core.config import Settings
from plant_analyzer.main import create_app


class FakeVisionClient:
    """Stands in for GeminiVisionClient; records calls and replays a canned answer."""

    def __init__(self, text: str = "Species: Monstera deliciosa. Health: good.", error: Optional[Exception] = None):
        self.text = text
        self.error = error
        self.calls: list[tuple[bytes, str]] = []

    async def analyze_image(self, data: bytes, mime_type: str) -> str:
        self.calls.append((data, mime_type))
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture
def reports_dir(tmp_path: Path) -> Path:
    return tmp_path / "reports"


@pytest.fixture
def settings(reports_dir: Path) -> Settings:
    return Settings(_env_file=None, gemini_api_key="test-key", reports_dir=reports_dir)


@pytest.fixture
def vision_client() -> FakeVisionClient:
    return FakeVisionClient()


@pytest.fixture
def app(settings: Settings, vision_client: FakeVisionClient):
    application = create_app(settings)
    application.dependency_overrides[get_vision_client] = lambda: vision_client
    return application


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def red_png() -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (10, 10), (255, 0, 0)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def red_png_data_uri(red_png: bytes) -> str:
    return "data:image/png;base64," + base64.b64encode(red_png).decode("ascii")
