from __future__ import annotations

import json
from typing import Any

from .errors import PiwikApiError


def is_error(payload: Any) -> bool:
    return isinstance(payload, dict) and payload.get("result") == "error"


def decode(body: str) -> Any:
    """Parse a JSON body returned by :class:`PiwikClient`.

    Raises:
        PiwikApiError: the body is a Piwik error payload.
        ValueError: the body is not JSON.
    """
    payload = json.loads(body)
    if is_error(payload):
        message = str(payload.get("message") or "Piwik API error")
        raise PiwikApiError(message, payload)
    return payload
