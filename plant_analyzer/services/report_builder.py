import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from fpdf import FPDF
from fpdf.enums import XPos, YPos

from plant_analyzer.core.config import Settings
from plant_analyzer.services.errors import ReportGenerationError
from plant_analyzer.utils.data_uri import decode_data_uri
from plant_analyzer.utils.temp_files import remove_file, scoped_file, timestamp_ms

logger = logging.getLogger(__name__)

# Page geometry in points (US Letter, 1 inch margins)
PAGE_MARGIN = 72
IMAGE_BOX = (500, 300)

_IMAGE_SUFFIXES = {
    "image/png": ".png",
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "image/gif": ".gif",
}

# Sustituciones comunes antes de caer a Latin-1 con la fuente core
_LATIN1_REPLACEMENTS = {
    "‘": "'", "’": "'", "“": '"', "”": '"',
    "–": "-", "—": "-", "•": "-", "…": "...",
    "\u00a0": " ",
}


def to_latin1(text: str) -> str:
    for src, dst in _LATIN1_REPLACEMENTS.items():
        text = text.replace(src, dst)
    return text.encode("latin-1", "replace").decode("latin-1")


def report_filename(ts: Optional[int] = None) -> str:
    return f"plant_analysis_report_{ts if ts is not None else timestamp_ms()}.pdf"


class ReportBuilder:
    """Renders the analysis text and the plant image into a PDF under ``reports_dir``."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.reports_dir = Path(settings.reports_dir)

    def _setup_font(self, pdf: FPDF) -> str:
        if self.settings.report_core_font:
            return "Helvetica"
        pdf.add_font("ReportFont", fname=str(self.settings.report_font_path))
        return "ReportFont"

    def _text(self, value: str, font: str) -> str:
        return value if font != "Helvetica" else to_latin1(value)

    def _add_image(self, pdf: FPDF, image: Any) -> None:
        if not isinstance(image, str):
            raise ReportGenerationError(f"Image must be a data URI string, got {type(image).__name__}")
        mime_type, data = decode_data_uri(image)
        suffix = _IMAGE_SUFFIXES.get(mime_type or "", ".png")
        image_path = self.reports_dir / f"temp_{timestamp_ms()}{suffix}"

        with scoped_file(image_path):
            image_path.write_bytes(data)
            box_w = min(IMAGE_BOX[0], pdf.epw)
            box_h = IMAGE_BOX[1]
            pdf.ln(14)
            if pdf.get_y() + box_h > pdf.page_break_trigger:
                pdf.add_page()
            pdf.image(
                str(image_path),
                x=pdf.l_margin + (pdf.epw - box_w) / 2,
                y=pdf.get_y(),
                w=box_w,
                h=box_h,
                keep_aspect_ratio=True,
            )

    def render(self, result: Any, image: Any) -> FPDF:
        pdf = FPDF(unit="pt", format="letter")
        pdf.set_margins(PAGE_MARGIN, PAGE_MARGIN, PAGE_MARGIN)
        pdf.set_auto_page_break(True, margin=PAGE_MARGIN)
        pdf.add_page()
        font = self._setup_font(pdf)

        pdf.set_font(font, size=24)
        pdf.multi_cell(0, 30, self._text(self.settings.report_title, font),
                       align="C", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.ln(14)

        pdf.set_font(font, size=14)
        pdf.multi_cell(0, 18, f"Date: {datetime.now().strftime('%x')}",
                       align="L", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.ln(14)
        pdf.multi_cell(0, 18, self._text("" if result is None else str(result), font),
                       align="L", new_x=XPos.LMARGIN, new_y=YPos.NEXT)

        if image:
            self._add_image(pdf, image)
        return pdf

    def build(self, result: Any, image: Any) -> Path:
        """
        Write the report to ``reports_dir`` and return its path.

        The returned file is complete on disk; the caller owns it and must
        delete it once it has been sent.
        """
        self.reports_dir.mkdir(parents=True, exist_ok=True)
        pdf_path = self.reports_dir / report_filename()

        pdf = self.render(result, image)
        try:
            pdf.output(str(pdf_path))
        except Exception:
            remove_file(pdf_path)
            raise

        logger.info(f"Report written to {pdf_path}")
        return pdf_path
