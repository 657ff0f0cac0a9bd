"""Request bodies for the mutating project item operations."""
from __future__ import annotations

from typing import Any, Mapping

from core.errors import ValidationError
from core.models import (
    ContentKind,
    FieldUpdate,
    FieldValue,
    FieldValueKind,
    ItemCreationRequest,
)

_ITEM_TYPES = {
    "issue": ContentKind.ISSUE,
    "pull_request": ContentKind.PULL_REQUEST,
}


def decode_field_value(value: Any) -> FieldValue:
    """Tag a raw JSON value; objects and arrays are not valid field values."""
    if value is None:
        return FieldValue(FieldValueKind.NULL)
    if isinstance(value, bool):
        return FieldValue(FieldValueKind.BOOL, value)
    if isinstance(value, (int, float)):
        return FieldValue(FieldValueKind.NUMBER, value)
    if isinstance(value, str):
        return FieldValue(FieldValueKind.STRING, value)
    raise ValidationError("updated_field.value must be a string, number, boolean or null")


def build_field_update(raw: Any) -> FieldUpdate:
    """Validate the `updated_field` argument and return the FieldUpdate it describes.

    `{"id": 123, "value": null}` is valid and means "clear the field"; only a
    missing `value` key is rejected.
    """
    if not isinstance(raw, Mapping):
        raise ValidationError("updated_field must be an object")

    if "id" not in raw:
        raise ValidationError("updated_field.id is required")
    field_id = raw["id"]
    if isinstance(field_id, bool) or not isinstance(field_id, (int, float)):
        raise ValidationError("updated_field.id must be a number")
    if isinstance(field_id, float) and not field_id.is_integer():
        raise ValidationError("updated_field.id must be an integer")

    if "value" not in raw:
        raise ValidationError("updated_field.value is required")

    return FieldUpdate(field_id=int(field_id), value=decode_field_value(raw["value"]))


def field_update_payload(update: FieldUpdate) -> dict[str, Any]:
    # the API takes a batch of field updates; the tool always sends exactly one
    return {"fields": [{"id": update.field_id, "value": update.value.to_json()}]}


def normalize_item_type(item_type: str) -> ContentKind:
    try:
        return _ITEM_TYPES[item_type.lower()]
    except KeyError:
        raise ValidationError("item_type must be either 'issue' or 'pull_request'") from None


def new_item_payload(request: ItemCreationRequest) -> dict[str, Any]:
    return {"id": request.content_id, "type": request.content_kind.value}
