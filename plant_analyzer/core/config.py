from pathlib import Path
from typing import List, Optional

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


# Fuente Unicode incluida con el paquete (SIL OFL)
DEFAULT_REPORT_FONT = Path(__file__).resolve().parent.parent / "fonts" / "Lato-Regular.ttf"

DEFAULT_ANALYSIS_PROMPT = (
    "Analyze this plant image and provide a detailed analysis of its species, "
    "health condition, care recommendations, characteristics, and any interesting facts. "
    "Format the response in plain text."
)


class Settings(BaseSettings):
    """Application settings configuration.

    Loads configuration from environment variables or .env file. Built once at
    startup and handed to the handlers through ``app.state.settings``.
    """
    # Application settings
    app_name: str = "Plant Analyzer API"
    version: str = "0.1.0"
    debug: bool = False
    environment: str = Field(default="development")

    # Server
    host: str = "0.0.0.0"
    port: int = 5000

    # Gemini settings (API_KEY tiene prioridad sobre GEMINI_API_KEY)
    gemini_api_key: Optional[SecretStr] = Field(
        default=None,
        validation_alias=AliasChoices("API_KEY", "GEMINI_API_KEY", "gemini_api_key"),
    )
    gemini_model: str = "gemini-1.5-flash"
    analysis_prompt: str = DEFAULT_ANALYSIS_PROMPT

    # Uploads / bodies
    max_upload_bytes: int = 10 * 1024 * 1024  # 10 MB
    max_body_bytes: int = 10 * 1024 * 1024

    # Reports
    reports_dir: Path = Path("reports")
    report_title: str = "Plant Analysis Report"
    report_font_path: Path = DEFAULT_REPORT_FONT
    # Helvetica core font with Latin-1 substitution instead of the TTF font
    report_core_font: bool = False

    # CORS settings
    cors_origins: List[str] = []

    # Logging
    log_level: str = "INFO"
    log_dir: Optional[Path] = None
    log_filename: str = "app.log"
    log_max_bytes: int = 10485760  # 10 MB
    log_backup_count: int = 5
    json_logging: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def api_key(self) -> Optional[str]:
        if self.gemini_api_key is None:
            return None
        return self.gemini_api_key.get_secret_value() or None
