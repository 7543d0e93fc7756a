"""Debug helpers for logging Reve API traffic.

reve-ai v0.1.0
"""

from __future__ import annotations

import re
from typing import Any, Mapping

# Body fields that always carry base64 image payloads
IMAGE_FIELDS = frozenset({"image", "reference_image", "reference_images"})

_BASE64_RE = re.compile(r"^[A-Za-z0-9+/=]+$")


def summarize_payload(value: Any) -> str:
    return f"<base64:{len(value)} chars>"


def sanitize_body(data: Any, key: str | None = None) -> Any:
    """Replace image payloads in a request/response body with short summaries."""
    if isinstance(data, dict):
        return {k: sanitize_body(v, k) for k, v in data.items()}
    if isinstance(data, list):
        return [sanitize_body(item, key) for item in data]
    if isinstance(data, str):
        if key in IMAGE_FIELDS and data:
            return summarize_payload(data)
        if len(data) > 100 and _BASE64_RE.match(data[:100]):
            return summarize_payload(data)
    return data


def sanitize_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Mask the bearer token in request headers."""
    return {
        k: ("Bearer ***" if k.lower() == "authorization" else v)
        for k, v in headers.items()
    }
