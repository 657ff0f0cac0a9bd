from typing import Any, Mapping
import httpx
from core.client import invoke
from core.errors import in_band_errors
from utils import DEFAULT_PER_PAGE, FIELDS, Pagination, compose, locate, optional_int, owner_ref, require_int
from utils.response_utils import expect_list, expect_object, project_field, to_json
from tools._params import PER_PAGE, PROJECT_NUMBER, owner_params

LIST_FIELDS_FAILED = "failed to list project fields"
GET_FIELD_FAILED = "failed to get project field"


@in_band_errors
async def list_project_fields(arguments: Mapping[str, Any], client: httpx.AsyncClient) -> str:
    """List the fields (columns) defined on a project, with their IDs, data types and options."""
    owner = owner_ref(arguments)
    project_number = require_int(arguments, "project_number")
    per_page = optional_int(arguments, "per_page", DEFAULT_PER_PAGE)

    url = compose(locate(owner, project_number, FIELDS), Pagination(per_page))
    data = await invoke(client, "GET", url, expected_status=httpx.codes.OK, failure=LIST_FIELDS_FAILED)
    return to_json([project_field(field) for field in expect_list(data, "project fields")])


@in_band_errors
async def get_project_field(arguments: Mapping[str, Any], client: httpx.AsyncClient) -> str:
    owner = owner_ref(arguments)
    project_number = require_int(arguments, "project_number")
    field_id = require_int(arguments, "field_id")

    url = locate(owner, project_number, FIELDS, field_id)
    data = await invoke(client, "GET", url, expected_status=httpx.codes.OK, failure=GET_FIELD_FAILED)
    return to_json(project_field(expect_object(data, "project field")))


def get_tools() -> dict[str, Any]:
    return {
        "list_project_fields": {
            "func": list_project_fields,
            "title": "List project fields",
            "description": "List Project fields for a user or org",
            "read_only": True,
            "params": {**owner_params(), "project_number": PROJECT_NUMBER, "per_page": PER_PAGE},
        },
        "get_project_field": {
            "func": get_project_field,
            "title": "Get project field",
            "description": "Get Project field for a user or org",
            "read_only": True,
            "params": {
                **owner_params(),
                "project_number": PROJECT_NUMBER,
                "field_id": {"type": "number", "required": True, "description": "The field's id."},
            },
        },
    }
