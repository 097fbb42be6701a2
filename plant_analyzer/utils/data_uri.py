# plant_analyzer/utils/data_uri.py

import base64
import binascii
import re
from typing import Optional, Tuple

from plant_analyzer.services.errors import ReportGenerationError

_DATA_URI_PREFIX_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,", re.IGNORECASE)


def encode_data_uri(data: bytes, mime_type: str) -> str:
    """Return ``data:<mime_type>;base64,<payload>`` for the given bytes."""
    b64 = base64.b64encode(data).decode("utf-8")
    return f"data:{mime_type};base64,{b64}"


def decode_data_uri(uri: str) -> Tuple[Optional[str], bytes]:
    """
    Decode a base64 data URI into ``(mime_type, bytes)``.

    A bare base64 payload without the ``data:`` prefix is accepted too, in
    which case the mime type is ``None``.
    """
    mime_type = None
    payload = (uri or "").strip()
    m = _DATA_URI_PREFIX_RE.match(payload)
    if m:
        mime_type = m.group("mime").lower()
        payload = payload[m.end():]

    payload = "".join(payload.split())
    if not payload:
        raise ReportGenerationError("Image data URI has no payload")
    try:
        return mime_type, base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ReportGenerationError(f"Image data URI is not valid base64: {e}") from e
