from __future__ import annotations

import logging
from pathlib import Path

from fastapi.testclient import TestClient

from plant_analyzer.core.config import Settings
from plant_analyzer.core.logging_config import LoggingConfig
from plant_analyzer.main import create_app


def test_health(client) -> None:
    res = client.get("/health")
    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "healthy"
    assert body["version"] == "0.1.0"


def test_root(client) -> None:
    res = client.get("/")
    assert res.status_code == 200
    assert res.json() == {"status": "OK"}


def test_body_size_limit(reports_dir: Path) -> None:
    settings = Settings(_env_file=None, reports_dir=reports_dir, max_body_bytes=64)
    client = TestClient(create_app(settings))

    res = client.post("/download", json={"result": "x" * 200})

    assert res.status_code == 413
    assert "error" in res.json()


def test_malformed_json_is_rejected(client) -> None:
    res = client.post("/download", content=b"{not json", headers={"Content-Type": "application/json"})

    assert res.status_code == 400
    assert res.json()["success"] is False


def test_logging_config_switches_to_json(tmp_path: Path) -> None:
    settings = Settings(_env_file=None, json_logging=True, log_dir=tmp_path)
    config = LoggingConfig.build_config(settings, str(tmp_path / "app.log"))

    assert {h["formatter"] for h in config["handlers"].values()} == {"json"}
    assert config["handlers"]["file"]["maxBytes"] == settings.log_max_bytes


def test_setup_logging_writes_log_file(tmp_path: Path) -> None:
    settings = Settings(_env_file=None, log_dir=tmp_path / "logs", log_level="DEBUG")
    logger = LoggingConfig.setup_logging(settings)

    logger.info("report generated")
    for handler in logging.getLogger("plant_analyzer").handlers:
        handler.flush()

    assert "report generated" in (tmp_path / "logs" / "app.log").read_text(encoding="utf8")
