from __future__ import annotations

import json
import logging
from dataclasses import replace
from types import TracebackType
from typing import Any, Iterable, Mapping

from .config_types import ClientConfig
from .methods import resolve_method
from .query import build_endpoint_url, build_url, md5_hex
from .transport import Transport

logger = logging.getLogger(__name__)


class PiwikClient:
    """Client for the Piwik (Matomo) Reporting API.

    Every ``Module_Action`` method sends a GET request for the remote method
    ``Module.Action`` and returns the raw response body. Error payloads such as
    ``{"result": "error", "message": "..."}`` are returned like any other body;
    see :mod:`piwik_client.responses` to decode them.

    Reference: http://developer.piwik.org/api-reference/reporting-api

    The configuration is an immutable :class:`ClientConfig`. The setters swap
    it for a modified copy, which is not synchronized: share a client across
    threads only if nobody changes its settings meanwhile.
    """

    def __init__(
            self,
            base_url: str,
            token_auth: str = "",
            format: str = "json",
            *,
            transport: Transport | None = None,
    ):
        self._cfg = ClientConfig(base_url=base_url, token_auth=token_auth, format=format)
        self._t = transport or Transport()

    @classmethod
    def from_config(cls, cfg: ClientConfig, *, transport: Transport | None = None) -> PiwikClient:
        return cls(cfg.base_url, cfg.token_auth, cfg.format, transport=transport)

    def __enter__(self) -> PiwikClient:
        return self

    def __exit__(
            self,
            exc_type: type[BaseException] | None,
            exc_val: BaseException | None,
            exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        self._t.close()

    # --- settings ---
    @property
    def config(self) -> ClientConfig:
        return self._cfg

    @property
    def base_url(self) -> str:
        return self._cfg.base_url

    @base_url.setter
    def base_url(self, value: str) -> None:
        self._cfg = replace(self._cfg, base_url=value)

    @property
    def token_auth(self) -> str:
        return self._cfg.token_auth

    @token_auth.setter
    def token_auth(self, value: str) -> None:
        self._cfg = replace(self._cfg, token_auth=value)

    @property
    def format(self) -> str:
        return self._cfg.format

    @format.setter
    def format(self, value: str) -> None:
        self._cfg = replace(self._cfg, format=value)

    def set_token_auth_from_credentials(
            self,
            login: str,
            password: str,
            password_is_clear: bool = True,
    ) -> None:
        """Fetch the auth token of ``login`` and use it for later requests.

        The lookup always runs with the JSON format, whatever this client is
        set to. If Piwik does not answer with a string ``value`` field
        (wrong credentials, unreadable body, null value) the current token
        is kept and nothing is raised.
        """
        lookup = PiwikClient.from_config(replace(self._cfg, format="json"), transport=self._t)
        md5_password = md5_hex(password) if password_is_clear else password
        body = lookup.UsersManager_getTokenAuth(login, md5_password)
        try:
            data = json.loads(body)
        except ValueError:
            logger.debug("token lookup for %s returned non-JSON body", login)
            return
        token = data.get("value") if isinstance(data, dict) else None
        if isinstance(token, str):
            self.token_auth = token
        else:
            logger.debug("token lookup for %s returned no value", login)

    # --- requests ---
    def endpoint_url(self, method: str, args: Mapping[str, Any] | None = None) -> str:
        return build_endpoint_url(self._cfg, method, args or {})

    def call(self, method: str, args: Mapping[str, Any] | None = None) -> str:
        """Call any Reporting API method by its ``Module.Action`` name."""
        return self._t.get(self.endpoint_url(method, args))

    def _ask(self, operation: str, args: Mapping[str, Any]) -> str:
        return self.call(resolve_method(operation), args)

    def get_logme_url(
            self,
            login: str,
            password: str,
            redirect_url: str = "",
            id_site: int | str = 0,
            password_is_clear: bool = True,
    ) -> str:
        """URL logging a browser into Piwik with the 'logme' feature.

        See http://piwik.org/faq/how-to/faq_30/. ``url`` is only added for a
        non-empty ``redirect_url`` and ``idSite`` only for a non-zero
        ``id_site``. Nothing is requested.
        """
        args: dict[str, Any] = {
            "module": "Login",
            "action": "logme",
            "login": login,
            "password": md5_hex(password) if password_is_clear else password,
        }
        if redirect_url:
            args["url"] = redirect_url
        site = int(id_site) if id_site else 0
        if site:
            args["idSite"] = site
        return build_url(self._cfg.base_url, args)

    # --- SitesManager ---
    def SitesManager_getAllSites(self) -> str:
        return self._ask("SitesManager_getAllSites", {})

    def SitesManager_getAllSitesId(self) -> str:
        return self._ask("SitesManager_getAllSitesId", {})

    def SitesManager_getSitesIdFromSiteUrl(self, url: str) -> str:
        return self._ask("SitesManager_getSitesIdFromSiteUrl", {"url": url})

    # --- UsersManager ---
    def UsersManager_addUser(
            self,
            user_login: str,
            password: str,
            email: str,
            alias: str | None = None,
    ) -> str:
        """Create a Piwik user.

        Returns a body like ``{"result": "success|error", "message": ...}``.
        """
        args: dict[str, Any] = {
            "userLogin": user_login,
            "password": password,
            "email": email,
        }
        if alias:
            args["alias"] = alias
        return self._ask("UsersManager_addUser", args)

    def UsersManager_getUser(self, user_login: str) -> str:
        return self._ask("UsersManager_getUser", {"userLogin": user_login})

    def UsersManager_updateUser(
            self,
            user_login: str,
            password: str | None = None,
            email: str | None = None,
            alias: str | None = None,
    ) -> str:
        """Update a Piwik user. Empty fields are left untouched remotely."""
        args: dict[str, Any] = {"userLogin": user_login}
        if password:
            args["password"] = password
        if email:
            args["email"] = email
        if alias:
            args["alias"] = alias
        return self._ask("UsersManager_updateUser", args)

    def UsersManager_deleteUser(self, user_login: str) -> str:
        return self._ask("UsersManager_deleteUser", {"userLogin": user_login})

    def UsersManager_getTokenAuth(self, user_login: str, md5_password: str) -> str:
        return self._ask(
            "UsersManager_getTokenAuth",
            {"userLogin": user_login, "md5Password": md5_password},
        )

    def UsersManager_setUserAccess(self, user_login: str, access: str, id_sites: Iterable[int | str]) -> str:
        """Grant ``access`` ('view', 'admin' or 'noaccess') on ``id_sites``."""
        return self._ask(
            "UsersManager_setUserAccess",
            {
                "userLogin": user_login,
                "access": access,
                "idSites": ",".join(str(s) for s in id_sites),
            },
        )

    def UsersManager_getUsersSitesFromAccess(self, access: str) -> str:
        return self._ask("UsersManager_getUsersSitesFromAccess", {"access": access})

    def UsersManager_getUsersAccessFromSite(self, id_site: int | str) -> str:
        return self._ask("UsersManager_getUsersAccessFromSite", {"idSite": int(id_site)})

    def UsersManager_getUsersWithSiteAccess(self, id_site: int | str, access: str) -> str:
        return self._ask(
            "UsersManager_getUsersWithSiteAccess",
            {"idSite": int(id_site), "access": access},
        )

    def UsersManager_getSitesAccessFromUser(self, user_login: str) -> str:
        return self._ask("UsersManager_getSitesAccessFromUser", {"userLogin": user_login})

    def UsersManager_userExists(self, user_login: str) -> str:
        """Body is ``{"value": true|false}`` in JSON."""
        return self._ask("UsersManager_userExists", {"userLogin": user_login})
