from __future__ import annotations

import logging
import re

import httpx

logger = logging.getLogger(__name__)

USER_AGENT = "piwik-client/0.1.0"

_SECRET_PARAM_RE = re.compile(r"(?<=[?&])(token_auth|password|md5Password)=[^&]*")


def redact_url(url: str) -> str:
    return _SECRET_PARAM_RE.sub(lambda m: f"{m.group(1)}=***", url)


class Transport:
    """Blocking GET over a single ``httpx.Client``.

    Errors raised by httpx are not caught: a failed request propagates as the
    original ``httpx`` exception. The status code is not inspected.
    """

    def __init__(
            self,
            client: httpx.Client | None = None,
            *,
            http_transport: httpx.BaseTransport | None = None,
    ):
        if client is None:
            client = httpx.Client(
                headers={"User-Agent": USER_AGENT},
                follow_redirects=True,
                transport=http_transport,
            )
        self._client = client

    def close(self) -> None:
        self._client.close()

    def get(self, url: str) -> str:
        logger.debug("GET %s", redact_url(url))
        r = self._client.get(url)
        logger.debug("HTTP %s (%d bytes)", r.status_code, len(r.content))
        return r.text
