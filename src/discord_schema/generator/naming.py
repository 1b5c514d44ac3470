"""Endpoint naming: (namespace, title, method, path) -> hierarchical name.

The action suffix comes from the first matching rule in ``ACTION_RULES``;
the stem comes from the path with its variables removed. For example
``POST /channels/{channel_id}/messages`` becomes ``channels/messages/create``.
"""

import logging
import re
from collections.abc import Callable

from discord_schema.errors import NamingConflictError
from discord_schema.parser.base import Endpoint

logger = logging.getLogger(__name__)

ActionRule = Callable[[str, str, str], str | None]

CUSTOM_ACTIONS_BY_TITLE = {
    "Start Thread without Message": "empty/create",
    "Create Group DM": "group/create",
    "Create Guild from Guild Template": "createFrom",
    "Modify Guild Role Positions": "positions/update",
}

UNLISTED_SEGMENTS = ("public", "private")
TOKEN_SUFFIX = " with Token"


def _custom_title(title: str, method: str, path: str) -> str | None:
    return CUSTOM_ACTIONS_BY_TITLE.get(title)


def _title_prefix(prefix: str, action: str) -> ActionRule:
    def rule(title: str, method: str, path: str) -> str | None:
        return action if title.startswith(prefix) else None
    return rule


def _delete_all(title: str, method: str, path: str) -> str | None:
    if not title.startswith("Delete All "):
        return None
    match = re.search(r"\{([^{}]*)\}$", path)
    if match:
        return f"{match.group(1)}/destroy"
    return "destroy/all"


def _is_single_resource(path: str) -> bool:
    end = path.split("/")[-1]
    return (
        path.endswith("}")
        or path.endswith("}/permissions")
        or "." in end
        or (not end.endswith("s") and end not in UNLISTED_SEGMENTS)
    )


def _by_method(title: str, method: str, path: str) -> str | None:
    if method == "GET":
        return "retrieve" if _is_single_resource(path) else "list"
    if method == "POST":
        return "create"
    if method in ("PUT", "PATCH"):
        if title.startswith("Add "):
            return "create"
        if title.startswith("Sync "):
            return "sync"
        return "update"
    if method == "DELETE":
        return "destroy"
    return ""


ACTION_RULES: list[ActionRule] = [
    _custom_title,
    _title_prefix("Search ", ""),
    _title_prefix("Execute ", "execute"),
    _title_prefix("Bulk Overwrite ", "bulkOverwrite"),
    _title_prefix("Batch Edit ", "batchEdit"),
    _delete_all,
    _by_method,
]


def endpoint_action(title: str, method: str, path: str) -> str:
    method = method.upper()
    action = ""
    for rule in ACTION_RULES:
        result = rule(title, method, path)
        if result is not None:
            action = result
            break
    if title.endswith(TOKEN_SUFFIX):
        action = f"token/{action}"
    return action


def _camel_case_hyphen(match: re.Match) -> str:
    return match.group(1) + match.group(2).upper()


def name_stem(path: str, action: str) -> str:
    """Turn a path template and an action into a slash-separated name."""
    name = re.sub(r"/\{[^/]*\}", "/", path)
    name = name.replace("@", "")
    name = re.sub(r"([^/])-([^/])", _camel_case_hyphen, name)
    name = re.sub(r"\.json$", "/data", name)
    name = re.sub(r"\.png$", "/image", name)
    name = "/".join(name.split("/")[1:] + [action])
    name = re.sub(r"/+", "/", name).strip("/")
    if name.startswith("applications/"):
        name = name.split("/", 1)[1]
    return name


def endpoint_name(namespace: str, title: str, method: str, path: str) -> str:
    if namespace == "interactions":
        path = re.sub(r"^/webhooks/", "/interactions/", path)
    action = endpoint_action(title, method, path)
    return name_stem(path, action)


def name_endpoints(endpoints: list[Endpoint]) -> list[Endpoint]:
    """Assign every endpoint its name, failing on the first duplicate."""
    seen: dict[str, str] = {}
    for endpoint in endpoints:
        name = endpoint_name(endpoint.namespace, endpoint.title, endpoint.method, endpoint.url)
        logger.debug("Named %s %s (%s) -> %s", endpoint.method, endpoint.url, endpoint.title, name)
        if name in seen:
            raise NamingConflictError(name, endpoint.url, seen[name])
        seen[name] = endpoint.url
        endpoint.name = name
    return endpoints
