from __future__ import annotations

import hashlib
from urllib.parse import parse_qs, urlsplit

import httpx
import pytest

from piwik_client import PiwikClient, Transport


def _client_with_body(body: str, *, token: str = "OLD", fmt: str = "xml"):
    seen: list[httpx.URL] = []

    def _handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url)
        return httpx.Response(200, text=body)

    transport = Transport(httpx.Client(transport=httpx.MockTransport(_handler)))
    return PiwikClient("http://x/piwik", token, fmt, transport=transport), seen


def test_token_from_credentials_sets_value() -> None:
    client, seen = _client_with_body('{"value":"abc"}')
    client.set_token_auth_from_credentials("bob", "secret")

    assert client.token_auth == "abc"
    params = parse_qs(urlsplit(str(seen[0])).query, keep_blank_values=True)
    assert params["method"] == ["UsersManager.getTokenAuth"]
    assert params["userLogin"] == ["bob"]
    assert params["md5Password"] == [hashlib.md5(b"secret").hexdigest()]
    assert params["format"] == ["json"]
    assert params["token_auth"] == ["OLD"]


def test_token_lookup_does_not_change_live_format() -> None:
    client, _ = _client_with_body('{"value":"abc"}')
    client.set_token_auth_from_credentials("bob", "secret")
    assert client.format == "xml"


def test_token_from_credentials_with_hashed_password() -> None:
    client, seen = _client_with_body('{"value":"abc"}')
    client.set_token_auth_from_credentials("bob", "0123abcd", password_is_clear=False)
    params = parse_qs(urlsplit(str(seen[0])).query)
    assert params["md5Password"] == ["0123abcd"]


@pytest.mark.parametrize(
    "body",
    [
        '{"result":"error","message":"bad login"}',
        "not json at all",
        "[1, 2]",
        '{"value": null}',
        '{"value": false}',
        "",
    ],
)
def test_token_kept_when_no_value(body: str) -> None:
    client, _ = _client_with_body(body)
    client.set_token_auth_from_credentials("bob", "secret")
    assert client.token_auth == "OLD"


def test_transport_error_propagates() -> None:
    def _handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    transport = Transport(httpx.Client(transport=httpx.MockTransport(_handler)))
    client = PiwikClient("http://x/piwik", "OLD", transport=transport)
    with pytest.raises(httpx.ConnectError):
        client.set_token_auth_from_credentials("bob", "secret")
    assert client.token_auth == "OLD"
