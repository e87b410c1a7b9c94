from __future__ import annotations

import hashlib
from typing import Any, Mapping
from urllib.parse import quote_plus

from .config_types import ClientConfig

API_MODULE = "API"


def md5_hex(value: str) -> str:
    return hashlib.md5(value.encode("utf-8")).hexdigest()


def build_query(args: Mapping[str, Any]) -> str:
    """Join ``key=value`` pairs with ``&``, encoding values only."""
    return "&".join(f"{name}={quote_plus(str(value))}" for name, value in args.items())


def build_url(base_url: str, args: Mapping[str, Any]) -> str:
    return f"{base_url}?{build_query(args)}"


def build_endpoint_url(cfg: ClientConfig, method: str, args: Mapping[str, Any]) -> str:
    """Full Reporting API URL for ``method``.

    Caller arguments come first. The fixed keys are merged in afterwards, so a
    caller key named ``module``, ``method``, ``format`` or ``token_auth`` keeps
    its position but takes the fixed value.
    """
    params: dict[str, Any] = {
        **args,
        **{
            "module": API_MODULE,
            "method": method,
            "format": cfg.format,
            "token_auth": cfg.token_auth,
        },
    }
    return build_url(cfg.base_url, params)
