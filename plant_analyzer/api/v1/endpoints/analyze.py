# plant_analyzer/api/v1/endpoints/analyze.py

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile, status

from plant_analyzer.api.deps import get_settings, get_vision_client
from plant_analyzer.core.config import Settings
from plant_analyzer.schemas.analysis import AnalysisResponse
from plant_analyzer.schemas.response import ErrorResponse, FailureResponse
from plant_analyzer.services.errors import InvalidModelResponseError
from plant_analyzer.services.gemini_client import GeminiVisionClient
from plant_analyzer.utils.data_uri import encode_data_uri
from plant_analyzer.utils.response import error_response, failure_response

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post(
    "/analyze",
    response_model=AnalysisResponse,
    responses={
        400: {"model": ErrorResponse},
        413: {"model": ErrorResponse},
        500: {"model": FailureResponse},
    },
    summary="Analiza la imagen de una planta con Gemini",
)
async def analyze_plant(
    image: Optional[UploadFile] = File(None, description="Imagen de la planta (PNG/JPEG/...)"),
    settings: Settings = Depends(get_settings),
    vision_client: GeminiVisionClient = Depends(get_vision_client),
):
    """
    Sends the uploaded image with the fixed plant-analysis prompt to the vision
    model and returns the text analysis plus the image as a data URI.
    """
    if image is None:
        return error_response("Please upload an image.")

    try:
        content = await image.read()
        if len(content) > settings.max_upload_bytes:
            return error_response(
                f"Image exceeds the {settings.max_upload_bytes} byte upload limit.",
                code=status.HTTP_413_CONTENT_TOO_LARGE,
            )
        mime_type = image.content_type or "application/octet-stream"

        logger.info(f"Analyzing {image.filename!r} ({mime_type}, {len(content)} bytes)")
        plant_info = await vision_client.analyze_image(content, mime_type)

        return AnalysisResponse(
            results=plant_info,
            image=encode_data_uri(content, mime_type),
        )

    except InvalidModelResponseError:
        logger.error("Vision model returned no candidates[0].content.parts[0].text")
        return failure_response("Invalid response from AI.")
    except Exception as e:
        logger.error(f"Error during analysis: {e}", exc_info=True)
        return failure_response("Analysis failed", details=str(e))
    finally:
        # El archivo temporal del upload se libera siempre
        await image.close()
