# plant_analyzer/api/deps.py

from fastapi import Depends, Request

from plant_analyzer.core.config import Settings
from plant_analyzer.services.gemini_client import GeminiVisionClient
from plant_analyzer.services.report_builder import ReportBuilder


def get_settings(request: Request) -> Settings:
    """
    Dependencia que provee la configuración construida en create_app().
    """
    return request.app.state.settings


def get_vision_client(request: Request) -> GeminiVisionClient:
    return request.app.state.vision_client


def get_report_builder(settings: Settings = Depends(get_settings)) -> ReportBuilder:
    return ReportBuilder(settings)
