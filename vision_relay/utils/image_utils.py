import base64
import binascii
from typing import Optional, Tuple

from ..config.constants import (
    ALLOWED_MIME_TYPES,
    DEFAULT_MIME_TYPE,
    MAX_UPLOAD_BYTES,
    MSG_FILE_TOO_LARGE,
    MSG_INVALID_BASE64,
    MSG_INVALID_FILE_TYPE,
    MSG_NO_IMAGE_DATA,
    MSG_NO_IMAGE_FILE,
)
from ..errors import ValidationError
from ..services.vision_service import AnalysisRequest


def split_data_uri(image_base64: str) -> Tuple[str, Optional[str]]:
    """
    Splits an optional `data:<mime>;base64,` header off a base64 string.
    Only the part after the first comma is kept as payload; a string without
    a comma is returned unchanged.
    Returns:
        (payload, mime_type): `mime_type` is None when the header names no media type.
    """
    if ',' not in image_base64:
        return image_base64, None

    header, payload = image_base64.split(',', 1)
    mime_type = None
    if header.startswith('data:'):
        mime_type = header[len('data:'):].split(';', 1)[0].strip().lower() or None
    return payload, mime_type


def request_from_upload(file, prompt: Optional[str] = None) -> AnalysisRequest:
    """
    Validates an uploaded file (werkzeug `FileStorage`) and wraps it for the vision service.
    Raises:
        ValidationError: No file, disallowed MIME type, oversized or empty file.
    """
    if not file:
        raise ValidationError(MSG_NO_IMAGE_FILE)
    if file.mimetype not in ALLOWED_MIME_TYPES:
        raise ValidationError(MSG_INVALID_FILE_TYPE)

    # Read one byte past the cap so oversize files are detected without buffering them whole
    image_bytes = file.stream.read(MAX_UPLOAD_BYTES + 1)
    if len(image_bytes) > MAX_UPLOAD_BYTES:
        raise ValidationError(MSG_FILE_TOO_LARGE)

    return AnalysisRequest(image_bytes, prompt, file.mimetype)


def request_from_base64(image_base64, prompt: Optional[str] = None) -> AnalysisRequest:
    """
    Validates a base64 image string, optionally prefixed with a data-URI header.
    The text after the header is kept as received and forwarded upstream unchanged;
    it only has to decode once whitespace is dropped and missing padding is restored.
    Raises:
        ValidationError: Missing, non-string or undecodable image data.
    """
    if not image_base64:
        raise ValidationError(MSG_NO_IMAGE_DATA)
    if not isinstance(image_base64, str):
        raise ValidationError(MSG_INVALID_BASE64)

    payload, mime_type = split_data_uri(image_base64)
    compact = "".join(payload.split())
    compact += "=" * (-len(compact) % 4)
    try:
        image_bytes = base64.b64decode(compact, validate=True)
    except (binascii.Error, ValueError):
        raise ValidationError(MSG_INVALID_BASE64)

    if mime_type not in ALLOWED_MIME_TYPES:
        mime_type = DEFAULT_MIME_TYPE
    return AnalysisRequest(image_bytes, prompt, mime_type, image_base64=payload)
