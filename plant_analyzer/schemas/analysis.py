from pydantic import BaseModel, Field


class AnalysisResponse(BaseModel):
    """Response del análisis de la planta"""
    results: str = Field(..., description="Plain-text analysis produced by the vision model")
    image: str = Field(..., description="The uploaded image as a base64 data URI")
