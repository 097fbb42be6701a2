from typing import Any, Optional
from pydantic import BaseModel, Field


class ReportRequest(BaseModel):
    """Request body para generar el reporte PDF (salida de /analyze).

    Sin validación de tipos: los valores inválidos fallan al renderizar (500).
    """
    result: Optional[Any] = Field(None, description="Analysis text to print in the report")
    image: Optional[Any] = Field(None, description="Image as a data URI (data:image/png;base64,...)")
