# plant_analyzer/api/v1/endpoints/report.py

import logging
import os
from pathlib import Path

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse
from starlette.concurrency import run_in_threadpool

from plant_analyzer.api.deps import get_report_builder
from plant_analyzer.schemas.report import ReportRequest
from plant_analyzer.schemas.response import FailureResponse
from plant_analyzer.services.report_builder import ReportBuilder
from plant_analyzer.utils.response import error_response, failure_response
from plant_analyzer.utils.temp_files import remove_file

logger = logging.getLogger(__name__)
router = APIRouter()


class TransientFileResponse(FileResponse):
    """FileResponse that deletes its file once sending ends, however it ends."""

    async def __call__(self, scope, receive, send) -> None:
        try:
            await super().__call__(scope, receive, send)
        finally:
            remove_file(Path(self.path))


@router.post(
    "/download",
    response_class=FileResponse,
    responses={
        200: {"content": {"application/pdf": {}}, "description": "PDF report"},
        500: {"model": FailureResponse},
    },
    summary="Genera y descarga el reporte PDF del análisis",
)
async def download_report(
    payload: ReportRequest,
    builder: ReportBuilder = Depends(get_report_builder),
):
    """
    Renders ``result`` and ``image`` (as returned by ``/analyze``) into a PDF
    and streams it back as an attachment. The file is removed from
    ``reports/`` after the transfer.
    """
    try:
        pdf_path = await run_in_threadpool(builder.build, payload.result, payload.image)
    except Exception as e:
        logger.error(f"Error during download: {e}", exc_info=True)
        return failure_response("Download failed")

    try:
        stat_result = os.stat(pdf_path)
    except OSError as e:
        logger.error(f"Error downloading the PDF report {pdf_path}: {e}")
        remove_file(pdf_path)
        return error_response("Error downloading the PDF report", code=500)

    return TransientFileResponse(
        pdf_path,
        stat_result=stat_result,
        media_type="application/pdf",
        filename=pdf_path.name,
    )
