"""
HTTP error formatting for user-facing messages.
"""

from __future__ import annotations

import requests


def format_request_exception(exc: requests.RequestException) -> str:
    """
    Summarise a requests failure without echoing headers or bodies.
    """
    response = getattr(exc, "response", None)
    if response is not None:
        reason = response.reason or ""
        return f"HTTP {response.status_code} {reason}".strip()
    if isinstance(exc, requests.Timeout):
        return "request timed out"
    if isinstance(exc, requests.ConnectionError):
        return "connection failed"
    return exc.__class__.__name__
