from __future__ import annotations


class PiwikClientError(Exception):
    """Base client error."""


class PiwikApiError(PiwikClientError):
    """Piwik replied with ``{"result": "error", "message": ...}``."""

    def __init__(self, message: str, payload: dict | None = None):
        super().__init__(message)
        self.message = message
        self.payload = payload or {}
