import logging
from logging.config import dictConfig
from pathlib import Path
from typing import Optional

from plant_analyzer.core.config import Settings


class LoggingConfig:
    """Logging configuration for the application."""

    @staticmethod
    def build_config(settings: Settings, log_file: Optional[str] = None) -> dict:
        """Return the ``dictConfig`` mapping for the given settings.

        Args:
            settings: Application settings (level, rotation, formatter choice).
            log_file: Target file for the rotating handler. ``None`` disables it.
        """
        log_level = settings.log_level.upper()
        is_development = settings.environment.lower() == "development"
        log_format = (
            "%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(lineno)d - %(message)s"
            if is_development
            else "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        formatter = "json" if settings.json_logging else "default"

        handlers = {
            "console": {
                "class": "logging.StreamHandler",
                "level": log_level,
                "formatter": formatter,
            },
        }
        if log_file:
            handlers["file"] = {
                "class": "logging.handlers.RotatingFileHandler",
                "level": log_level,
                "formatter": formatter,
                "filename": log_file,
                "maxBytes": settings.log_max_bytes,
                "backupCount": settings.log_backup_count,
                "encoding": "utf8",
            }
        handler_names = list(handlers)

        return {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": log_format,
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
                "json": {
                    "()": "pythonjsonlogger.json.JsonFormatter",
                    "format": "%(asctime)s %(name)s %(levelname)s %(module)s %(lineno)d %(message)s",
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
            },
            "handlers": handlers,
            "loggers": {
                "plant_analyzer": {
                    "level": log_level,
                    "handlers": handler_names,
                    "propagate": False,
                },
                "uvicorn": {
                    "level": log_level,
                    "handlers": handler_names,
                    "propagate": False,
                },
                "fastapi": {
                    "level": log_level,
                    "handlers": handler_names,
                    "propagate": False,
                },
            },
            "root": {
                "level": log_level,
                "handlers": handler_names,
            },
        }

    @staticmethod
    def setup_logging(settings: Settings) -> logging.Logger:
        """Setup logging configuration.

        Log files go to ``settings.log_dir`` (created if needed) or the current
        directory when it is unset.

        Returns:
            Logger: Configured application logger.
        """
        if settings.log_dir:
            log_path = Path(settings.log_dir)
            log_path.mkdir(parents=True, exist_ok=True)
            log_file = str(log_path / settings.log_filename)
        else:
            log_file = settings.log_filename

        dictConfig(LoggingConfig.build_config(settings, log_file))
        return logging.getLogger("plant_analyzer")
