from __future__ import annotations

# Local operation names, written ``Module_Action``.
OPERATIONS: tuple[str, ...] = (
    "SitesManager_getAllSites",
    "SitesManager_getAllSitesId",
    "SitesManager_getSitesIdFromSiteUrl",
    "UsersManager_addUser",
    "UsersManager_getUser",
    "UsersManager_updateUser",
    "UsersManager_deleteUser",
    "UsersManager_getTokenAuth",
    "UsersManager_setUserAccess",
    "UsersManager_getUsersSitesFromAccess",
    "UsersManager_getUsersAccessFromSite",
    "UsersManager_getUsersWithSiteAccess",
    "UsersManager_getSitesAccessFromUser",
    "UsersManager_userExists",
)


def to_remote_method(operation: str) -> str:
    module, sep, action = operation.partition("_")
    if not sep or not module or not action:
        raise ValueError(f"Operation name must look like Module_Action: {operation!r}")
    return f"{module}.{action}"


REMOTE_METHODS: dict[str, str] = {op: to_remote_method(op) for op in OPERATIONS}


def resolve_method(operation: str) -> str:
    try:
        return REMOTE_METHODS[operation]
    except KeyError:
        raise KeyError(f"Unknown Piwik operation: {operation}") from None
