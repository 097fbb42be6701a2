from datetime import datetime, timezone
from typing import Optional

import uvicorn
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware

from plant_analyzer.core.config import Settings
from plant_analyzer.core.logging_config import LoggingConfig
from plant_analyzer.core.middleware import setup_middlewares
from plant_analyzer.api.v1.endpoints.analyze import router as analyze_router
from plant_analyzer.api.v1.endpoints.report import router as report_router
from plant_analyzer.services.gemini_client import GeminiVisionClient
from plant_analyzer.utils.response import error_response, failure_response


# Define API metadata
tags_metadata = [
    {
        "name": "Health",
        "description": "API health check endpoints.",
    },
    {
        "name": "Plant analysis",
        "description": "Image analysis with Gemini and PDF report download.",
    },
]


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the FastAPI application around a single Settings instance."""
    settings = settings or Settings()

    app = FastAPI(
        title=settings.app_name,
        description=f"Plant Analyzer {datetime.now().year} 🌱",
        version=settings.version,
        openapi_tags=tags_metadata,
        docs_url="/docs",
        redoc_url=None,
        debug=settings.debug,
    )
    app.state.settings = settings
    app.state.vision_client = GeminiVisionClient(settings)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    setup_middlewares(app, max_body_bytes=settings.max_body_bytes)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        message = exc.detail if isinstance(exc.detail, str) else "Error"
        return error_response(message, code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return failure_response(
            "Invalid request",
            details=jsonable_encoder(exc.errors(), exclude={"input", "ctx", "url"}),
            code=400,
        )

    # Include routers
    app.include_router(analyze_router, tags=["Plant analysis"])
    app.include_router(report_router, tags=["Plant analysis"])

    @app.get("/", tags=["Health"])
    async def root():
        return {"status": "OK"}

    @app.get("/health", tags=["Health"])
    async def health_check():
        """
        Current API status, timestamp and version.
        """
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": settings.version,
            "environment": settings.environment,
        }

    return app


app = create_app()


def run() -> None:
    """Console entry point: configure logging and serve ``app`` with uvicorn."""
    settings: Settings = app.state.settings
    logger = LoggingConfig.setup_logging(settings)
    logger.info(f"Listening on port {settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
