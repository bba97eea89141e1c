"""
Submissions API Client

Thin HTTP client for `/api/submissions`, for scripts that seed or export
predictions against a deployed instance.
"""
import logging
from typing import Any, Dict, Optional

import requests

from core.config import settings

logger = logging.getLogger(__name__)

SUBMISSIONS_PATH = "/api/submissions"


class SubmissionsClientError(Exception):
    """Non-2xx response from the submissions API."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def _url(base_url: str) -> str:
    return base_url.rstrip("/") + SUBMISSIONS_PATH


def fetch_data(base_url: str, character: str = "Deniusth", limit: int = 1000) -> Dict[str, Any]:
    """
    Load submissions and monthly aggregates for `character`.

    Returns:
        {"submissions": [...], "aggregates": [...]}
    """
    response = requests.get(
        _url(base_url),
        params={"character": character, "limit": limit},
        headers={"Cache-Control": "no-store"},
        timeout=settings.EXTERNAL_API_TIMEOUT,
    )
    if not response.ok:
        raise SubmissionsClientError(f"Failed to load: {response.status_code}", response.status_code)
    return response.json()


def post_submission(base_url: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    """POST one prediction; returns `{"ok": true, "submission": {...}}`."""
    response = requests.post(
        _url(base_url),
        json=payload,
        timeout=settings.EXTERNAL_API_TIMEOUT,
    )
    if not response.ok:
        message = response.text
        logger.warning(f"Submission rejected ({response.status_code}): {message}")
        raise SubmissionsClientError(message or "Failed to submit", response.status_code)
    return response.json()
