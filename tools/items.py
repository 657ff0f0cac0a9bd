from typing import Any, Mapping
import httpx
import logging
from core.client import invoke
from core.errors import MissingParameterError, in_band_errors
from core.models import ItemCreationRequest
from utils import (
    DEFAULT_PER_PAGE,
    ITEMS,
    FieldSelection,
    Filter,
    Pagination,
    compose,
    locate,
    optional_int,
    optional_string,
    optional_string_array,
    owner_ref,
    require_int,
    require_string,
)
from utils.payloads import build_field_update, field_update_payload, new_item_payload, normalize_item_type
from utils.response_utils import expect_list, expect_object, minimal_project_item, to_json
from tools._params import FIELD_SELECTION, PER_PAGE, PROJECT_NUMBER, owner_params

logger = logging.getLogger(__name__)

LIST_ITEMS_FAILED = "failed to list project items"
GET_ITEM_FAILED = "failed to get project item"
ADD_ITEM_FAILED = "failed to add a project item"
UPDATE_ITEM_FAILED = "failed to update a project item"
DELETE_ITEM_FAILED = "failed to delete a project item"

ITEM_DELETED = "project item successfully deleted"


@in_band_errors
async def list_project_items(arguments: Mapping[str, Any], client: httpx.AsyncClient) -> str:
    """List the items of a project.

    Field values are only returned for the field IDs listed in `fields`; the
    API otherwise includes the title field alone.
    """
    owner = owner_ref(arguments)
    project_number = require_int(arguments, "project_number")
    per_page = optional_int(arguments, "per_page", DEFAULT_PER_PAGE)
    query = optional_string(arguments, "query")
    fields = optional_string_array(arguments, "fields")

    url = compose(
        locate(owner, project_number, ITEMS),
        Pagination(per_page),
        Filter(query),
        FieldSelection(fields),
    )
    data = await invoke(client, "GET", url, expected_status=httpx.codes.OK, failure=LIST_ITEMS_FAILED)
    return to_json([minimal_project_item(item) for item in expect_list(data, "project items")])


@in_band_errors
async def get_project_item(arguments: Mapping[str, Any], client: httpx.AsyncClient) -> str:
    owner = owner_ref(arguments)
    project_number = require_int(arguments, "project_number")
    item_id = require_int(arguments, "item_id")
    fields = optional_string_array(arguments, "fields")

    url = compose(locate(owner, project_number, ITEMS, item_id), FieldSelection(fields))
    data = await invoke(client, "GET", url, expected_status=httpx.codes.OK, failure=GET_ITEM_FAILED)
    return to_json(minimal_project_item(expect_object(data, "project item")))


@in_band_errors
async def add_project_item(arguments: Mapping[str, Any], client: httpx.AsyncClient) -> str:
    """Add an existing issue or pull request to a project."""
    owner = owner_ref(arguments)
    project_number = require_int(arguments, "project_number")
    item_id = require_int(arguments, "item_id")
    content_kind = normalize_item_type(require_string(arguments, "item_type"))
    request = ItemCreationRequest(content_id=item_id, content_kind=content_kind)

    url = locate(owner, project_number, ITEMS)
    data = await invoke(
        client,
        "POST",
        url,
        expected_status=httpx.codes.CREATED,
        failure=ADD_ITEM_FAILED,
        body=new_item_payload(request),
    )
    logger.info(f"Added {content_kind.value} {item_id} to project {project_number} of {owner.name}")
    return to_json(minimal_project_item(expect_object(data, "project item")))


@in_band_errors
async def update_project_item(arguments: Mapping[str, Any], client: httpx.AsyncClient) -> str:
    """Set (or clear, with a null value) one field value on a project item."""
    owner = owner_ref(arguments)
    project_number = require_int(arguments, "project_number")
    item_id = require_int(arguments, "item_id")
    if arguments.get("updated_field") is None:
        raise MissingParameterError("updated_field")
    update = build_field_update(arguments["updated_field"])

    url = locate(owner, project_number, ITEMS, item_id)
    data = await invoke(
        client,
        "PATCH",
        url,
        expected_status=httpx.codes.OK,
        failure=UPDATE_ITEM_FAILED,
        body=field_update_payload(update),
    )
    logger.info(f"Updated field {update.field_id} on item {item_id} of project {project_number}")
    return to_json(minimal_project_item(expect_object(data, "project item")))


@in_band_errors
async def delete_project_item(arguments: Mapping[str, Any], client: httpx.AsyncClient) -> str:
    owner = owner_ref(arguments)
    project_number = require_int(arguments, "project_number")
    item_id = require_int(arguments, "item_id")

    url = locate(owner, project_number, ITEMS, item_id)
    await invoke(client, "DELETE", url, expected_status=httpx.codes.NO_CONTENT, failure=DELETE_ITEM_FAILED)
    logger.info(f"Deleted item {item_id} from project {project_number} of {owner.name}")
    return ITEM_DELETED


ITEM_ID = {"type": "number", "required": True, "description": "The item's ID."}


def get_tools() -> dict[str, Any]:
    return {
        "list_project_items": {
            "func": list_project_items,
            "title": "List project items",
            "description": "List Project items for a user or org",
            "read_only": True,
            "params": {
                **owner_params(),
                "project_number": PROJECT_NUMBER,
                "query": {"type": "string", "required": False, "description": "Search query to filter items"},
                "per_page": PER_PAGE,
                "fields": FIELD_SELECTION,
            },
        },
        "get_project_item": {
            "func": get_project_item,
            "title": "Get project item",
            "description": "Get a specific Project item for a user or org",
            "read_only": True,
            "params": {**owner_params(), "project_number": PROJECT_NUMBER, "item_id": ITEM_ID, "fields": FIELD_SELECTION},
        },
        "add_project_item": {
            "func": add_project_item,
            "title": "Add project item",
            "description": "Add a specific Project item for a user or org",
            "read_only": False,
            "params": {
                **owner_params(),
                "project_number": PROJECT_NUMBER,
                "item_type": {
                    "type": "string",
                    "required": True,
                    "enum": ["issue", "pull_request"],
                    "description": "The item's type, either issue or pull_request.",
                },
                "item_id": {
                    "type": "number",
                    "required": True,
                    "description": "The numeric ID of the issue or pull request to add to the project.",
                },
            },
        },
        "update_project_item": {
            "func": update_project_item,
            "title": "Update project item",
            "description": "Update a specific Project item for a user or org",
            "read_only": False,
            "params": {
                **owner_params(),
                "project_number": PROJECT_NUMBER,
                "item_id": {
                    "type": "number",
                    "required": True,
                    "description": "The unique identifier of the project item. This is not the issue or pull request ID.",
                },
                "updated_field": {
                    "type": "object",
                    "required": True,
                    "description": "Object consisting of the ID of the project field to update and the new value "
                    'for the field. To clear the field, set "value" to null. Example: {"id": 123456, "value": "New Value"}',
                },
            },
        },
        "delete_project_item": {
            "func": delete_project_item,
            "title": "Delete project item",
            "description": "Delete a specific Project item for a user or org",
            "read_only": False,
            "params": {
                **owner_params(),
                "project_number": PROJECT_NUMBER,
                "item_id": {
                    "type": "number",
                    "required": True,
                    "description": "The internal project item ID to delete from the project (not the issue or pull request ID).",
                },
            },
        },
    }
