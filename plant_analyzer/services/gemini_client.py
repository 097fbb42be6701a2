import logging
from typing import Any, Optional

import google.generativeai as genai

from plant_analyzer.core.config import Settings
from plant_analyzer.services.errors import InvalidModelResponseError, VisionClientError

logger = logging.getLogger(__name__)


def _field(obj: Any, name: str) -> Any:
    """Read ``name`` from an SDK object or from a plain dict."""
    if obj is None:
        return None
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


def _first(items: Any) -> Any:
    if not items:
        return None
    try:
        return items[0]
    except (IndexError, KeyError, TypeError):
        return None


def extract_first_text(response: Any) -> str:
    """
    Return ``response.candidates[0].content.parts[0].text``.

    Raises:
        InvalidModelResponseError: if any level is missing or the text is empty.
            Other candidates/parts are never consulted.
    """
    candidate = _first(_field(response, "candidates"))
    content = _field(candidate, "content")
    part = _first(_field(content, "parts"))
    text = _field(part, "text")
    if not isinstance(text, str) or not text:
        raise InvalidModelResponseError("Invalid response from AI.")
    return text


class GeminiVisionClient:
    def __init__(self, settings: Settings):
        """
        Client for the Gemini vision model.

        Args:
            settings: provides the API key, model name and the fixed prompt.
        """
        self.settings = settings
        self._model: Optional[genai.GenerativeModel] = None

    def _get_model(self) -> genai.GenerativeModel:
        if self._model is not None:
            return self._model

        api_key = self.settings.api_key
        if not api_key:
            raise VisionClientError("Gemini API key is required. Set API_KEY or GEMINI_API_KEY.")

        genai.configure(api_key=api_key)
        self._model = genai.GenerativeModel(self.settings.gemini_model)
        logger.info(f"Gemini client configured for model {self.settings.gemini_model}")
        return self._model

    async def analyze_image(self, data: bytes, mime_type: str) -> str:
        """Send the prompt plus the inline image and return the first text part."""
        model = self._get_model()
        response = await model.generate_content_async(
            [
                {
                    "role": "user",
                    "parts": [
                        {"text": self.settings.analysis_prompt},
                        {"inline_data": {"mime_type": mime_type, "data": data}},
                    ],
                }
            ]
        )
        return extract_first_text(response)
