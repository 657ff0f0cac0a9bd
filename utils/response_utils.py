"""Reduce verbose GitHub Projects V2 payloads to the minimal form returned by the tools.

The projections are total over dicts: keys missing from the input stay
missing, `None` values are dropped and falsy values such as `False` are kept.
"""
from __future__ import annotations

import json
from typing import Any, Mapping

from core.errors import SerializationError

MINIMAL_USER_KEYS = ("login", "id", "profile_url", "avatar_url")

MINIMAL_PROJECT_KEYS = (
    "id",
    "node_id",
    "owner",
    "creator",
    "title",
    "description",
    "public",
    "closed_at",
    "created_at",
    "updated_at",
    "deleted_at",
    "number",
    "short_description",
    "deleted_by",
)

MINIMAL_PROJECT_ITEM_KEYS = (
    "id",
    "node_id",
    "title",
    "description",
    "project_node_id",
    "content_node_id",
    "project_url",
    "content_type",
    "creator",
    "created_at",
    "updated_at",
    "archived_at",
    "item_url",
    "fields",
)

PROJECT_FIELD_KEYS = ("id", "node_id", "name", "data_type", "url", "options", "created_at", "updated_at")

ITEM_FIELD_VALUE_KEYS = ("id", "name", "data_type", "value")

_USER_KEYS = {"owner", "creator", "deleted_by"}


def _pick(full: Mapping[str, Any], keys: tuple[str, ...]) -> dict[str, Any]:
    return {key: full[key] for key in keys if full.get(key) is not None}


def minimal_user(full: Any) -> dict[str, Any] | None:
    if not full or not isinstance(full, Mapping):
        return None
    user = {
        "login": full.get("login"),
        "id": full.get("id"),
        "profile_url": full.get("html_url"),
        "avatar_url": full.get("avatar_url"),
    }
    user = {key: value for key, value in user.items() if value not in (None, "")}
    return user or None


def _with_users(projected: dict[str, Any]) -> dict[str, Any]:
    for key in projected.keys() & _USER_KEYS:
        user = minimal_user(projected[key])
        if user is None:
            del projected[key]
        else:
            projected[key] = user
    return projected


def minimal_project(full: Mapping[str, Any]) -> dict[str, Any]:
    return _with_users(_pick(full, MINIMAL_PROJECT_KEYS))


def minimal_project_item(full: Mapping[str, Any]) -> dict[str, Any]:
    """Project an item, flattening each returned field value to id/name/data_type/value."""
    projected = _with_users(_pick(full, MINIMAL_PROJECT_ITEM_KEYS))
    fields = projected.pop("fields", None)
    if fields and isinstance(fields, list):
        entries = [field for field in fields if field and isinstance(field, Mapping)]
        projected["fields"] = [_pick(field, ITEM_FIELD_VALUE_KEYS) for field in entries]
    return projected


def project_field(full: Mapping[str, Any]) -> dict[str, Any]:
    projected = _pick(full, PROJECT_FIELD_KEYS)
    if not projected.get("options"):
        projected.pop("options", None)
    return projected


def expect_list(data: Any, what: str) -> list[dict[str, Any]]:
    """Return `data` if it is a JSON array of objects."""
    if data is None:
        return []
    if not isinstance(data, list) or not all(isinstance(entry, dict) for entry in data):
        raise SerializationError(f"failed to decode {what}: expected a JSON array of objects")
    return data


def expect_object(data: Any, what: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise SerializationError(f"failed to decode {what}: expected a JSON object")
    return data


def to_json(obj: Any) -> str:
    try:
        return json.dumps(obj)
    except (TypeError, ValueError) as e:
        raise SerializationError(f"failed to marshal response: {e}") from e
