from typing import Any, Optional

from fastapi.responses import JSONResponse

from plant_analyzer.schemas.response import ErrorResponse, FailureResponse


def error_response(message: str, code: int = 400) -> JSONResponse:
    """
    Error simple: ``{"error": message}`` (400 por defecto).
    """
    return JSONResponse(status_code=code, content=ErrorResponse(error=message).model_dump())


def failure_response(error: str, details: Optional[Any] = None, code: int = 500) -> JSONResponse:
    """
    Fallo del servidor: ``{"success": false, "error": ...}``.

    ``details`` is only included when given, so generic failures leak nothing.
    """
    payload = FailureResponse(error=error, details=details).model_dump(exclude_none=True)
    return JSONResponse(status_code=code, content=payload)
