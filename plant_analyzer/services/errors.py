# plant_analyzer/services/errors.py


class VisionClientError(RuntimeError):
    """The vision model client could not be configured (e.g. missing API key)."""


class InvalidModelResponseError(ValueError):
    """The model answered but without candidates[0].content.parts[0].text."""


class ReportGenerationError(RuntimeError):
    """The PDF report could not be produced from the submitted data."""
