import logging
from typing import Any

import httpx

from resume_chat.core.config import Settings

logger = logging.getLogger(__name__)


def _token_text(token: Any) -> str:
    if isinstance(token, str):
        return token
    if isinstance(token, dict):
        for key in ("word", "text", "label"):
            value = token.get(key)
            if isinstance(value, str) and value:
                return value
    return ""


def flatten_layout_output(payload: Any) -> str:
    """Turn a layout-model response into plain text.

    Supported shapes are ``{"tokens": [...]}``, ``{"text": "..."}`` and a
    bare list of token objects; anything else flattens to "".
    """
    if isinstance(payload, dict):
        if isinstance(payload.get("tokens"), list):
            tokens = payload["tokens"]
        elif isinstance(payload.get("text"), str):
            return payload["text"].strip()
        else:
            return ""
    elif isinstance(payload, list):
        tokens = payload
    else:
        return ""
    return " ".join(t for t in (_token_text(token) for token in tokens) if t).strip()


async def extract_layout_text(
    image_data: str,
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> str | None:
    """Send a base64 page image to the layout model and return its text.

    Returns None when the model is not configured or the call fails for
    any reason; callers then parse the decoded text instead.
    """
    if not settings.layout_enabled or not image_data:
        return None

    url = f"{settings.huggingface_api_url.rstrip('/')}/{settings.layout_model}"
    try:
        async with httpx.AsyncClient(
            timeout=settings.layout_timeout_seconds, transport=transport
        ) as client:
            response = await client.post(
                url,
                headers={"Authorization": f"Bearer {settings.huggingface_api_key}"},
                json={"inputs": image_data},
            )
            response.raise_for_status()
            payload = response.json()
    except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
        logger.warning("Layout model request failed, using decoded text: %s", e)
        return None

    text = flatten_layout_output(payload)
    return text or None
