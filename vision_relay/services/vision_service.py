import base64
from dataclasses import dataclass
from typing import Optional

import requests
import structlog

from ..config.constants import (
    DEFAULT_MIME_TYPE,
    DEFAULT_PROMPT,
    DEFAULT_VISION_API_URL,
    DEFAULT_VISION_MODEL,
    MSG_API_KEY_MISSING,
    MSG_EMPTY_IMAGE,
    MSG_UPSTREAM_FALLBACK,
    VISION_IMAGE_DETAIL,
    VISION_MAX_TOKENS,
    VISION_TEMPERATURE,
)
from ..errors import UpstreamError, ValidationError

logger = structlog.get_logger()


@dataclass
class AnalysisRequest:
    image_bytes: bytes
    prompt: Optional[str] = None
    mime_type: str = DEFAULT_MIME_TYPE
    # Base64 text as received from the client, forwarded upstream unchanged
    image_base64: Optional[str] = None

    def __post_init__(self):
        if not self.image_bytes:
            raise ValidationError(MSG_EMPTY_IMAGE)
        # Non-string or blank prompts mean "use the default instruction"
        if not isinstance(self.prompt, str) or not self.prompt.strip():
            self.prompt = None


@dataclass
class AnalysisResult:
    description: str
    prompt_tokens: int
    completion_tokens: int

    @property
    def usage(self) -> dict:
        return {
            "prompt_tokens": self.prompt_tokens,
            "completion_tokens": self.completion_tokens,
        }


def build_payload(
    image_bytes: bytes,
    prompt: Optional[str],
    mime_type: str,
    model: str,
    image_base64: Optional[str] = None,
) -> dict:
    """
    Builds the chat-completions request body for one image.
    Args:
        image_bytes (bytes): Raw image content.
        prompt (str | None): Instruction for the model. Falls back to `DEFAULT_PROMPT`.
        mime_type (str): Media type written into the image data URL.
        model (str): Upstream model identifier.
        image_base64 (str | None): Already-encoded image text. Used as-is instead of encoding `image_bytes`.
    Returns:
        payload (dict): JSON-serializable request body.
    """
    image_data = image_base64 or base64.b64encode(image_bytes).decode("ascii")
    return {
        "model": model,
        "messages": [
            {
                "role": "user",
                "content": [
                    {
                        "type": "image_url",
                        "image_url": {
                            "url": f"data:{mime_type};base64,{image_data}",
                            "detail": VISION_IMAGE_DETAIL,
                        },
                    },
                    {"type": "text", "text": prompt or DEFAULT_PROMPT},
                ],
            }
        ],
        "max_tokens": VISION_MAX_TOKENS,
        "temperature": VISION_TEMPERATURE,
    }


def parse_completion(data: dict) -> AnalysisResult:
    """
    Pulls the first completion text and the token counters out of an upstream reply.
    Raises `KeyError`, `IndexError` or `TypeError` when the reply is malformed.
    """
    usage = data["usage"]
    return AnalysisResult(
        description=data["choices"][0]["message"]["content"],
        prompt_tokens=int(usage["prompt_tokens"]),
        completion_tokens=int(usage["completion_tokens"]),
    )


def upstream_error_message(response: Optional[requests.Response]) -> str:
    """
    Returns the `error.message` reported by the upstream body, or the generic fallback.
    """
    if response is None:
        return MSG_UPSTREAM_FALLBACK
    try:
        message = response.json()["error"]["message"]
    except (ValueError, KeyError, TypeError):
        return MSG_UPSTREAM_FALLBACK
    return message if isinstance(message, str) and message else MSG_UPSTREAM_FALLBACK


def analyze_image(
    image_bytes: bytes,
    prompt: Optional[str] = None,
    mime_type: str = DEFAULT_MIME_TYPE,
    *,
    api_key: Optional[str],
    model: str = DEFAULT_VISION_MODEL,
    api_url: str = DEFAULT_VISION_API_URL,
    timeout: Optional[float] = None,
    image_base64: Optional[str] = None,
) -> AnalysisResult:
    """
    Sends one image to the vision API and returns its description and token usage.
    Args:
        image_bytes (bytes): Raw image content, already validated by the caller.
        prompt (str | None): Custom instruction. The default inspection prompt is used when empty.
        mime_type (str): Media type of the image.
        api_key (str | None): Bearer credential for the vision API.
        model (str): Upstream model identifier.
        api_url (str): Chat-completions endpoint.
        timeout (float | None): Seconds to wait for the upstream reply. None waits until the call completes or fails.
        image_base64 (str | None): Client-supplied base64 text, forwarded unchanged when given.
    Returns:
        result (AnalysisResult): Description text plus prompt/completion token counts.
    Raises:
        UpstreamError: Missing credential, network failure, non-2xx status or malformed reply.
    """
    if not api_key:
        raise UpstreamError(MSG_API_KEY_MISSING)

    payload = build_payload(image_bytes, prompt, mime_type, model, image_base64)
    headers = {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }

    try:
        response = requests.post(api_url, json=payload, headers=headers, timeout=timeout)
        response.raise_for_status()
        result = parse_completion(response.json())
    except requests.RequestException as e:
        failed = e.response
        if failed is not None:
            logger.error(f"Vision API error ({failed.status_code}): {failed.text}")
        else:
            logger.error(f"Vision API error: {e}")
        raise UpstreamError(upstream_error_message(failed)) from e
    except (ValueError, KeyError, IndexError, TypeError) as e:
        logger.error(f"Malformed vision API response: {e!r}")
        raise UpstreamError(MSG_UPSTREAM_FALLBACK) from e

    logger.debug(f"Vision API usage: {result.usage}")
    return result
