"""Response error extraction for load test observability.

Parses Storefront API error responses into human-readable messages. Every
error body has the shape ``{"success": false, "error": "msg", ...context}``;
request-schema violations also carry a ``details`` list from pydantic.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response

CONTEXT_KEYS = ("productId", "available", "requested", "inCart", "sessionId", "orderId")


def extract_error_detail(response: Response) -> str:
    """Extract a human-readable error message from an API error response.

    Returns a compact string suitable for Locust failure messages and log lines.
    Gracefully handles unparseable bodies and missing fields.
    """
    try:
        body = response.json()
    except Exception:
        # Not JSON, return raw text, truncated
        text = getattr(response, "text", "") or ""
        return text[:300] or "(empty response body)"

    if not isinstance(body, dict):
        return str(body)[:300]

    if "error" in body:
        context = ", ".join(f"{k}={body[k]}" for k in CONTEXT_KEYS if k in body)
        message = str(body["error"])
        return f"{message} ({context})" if context else message

    # Unknown shape, stringify and truncate
    return str(body)[:300]
