from typing import Any, Mapping
import httpx
from core.client import invoke
from core.errors import in_band_errors
from utils import DEFAULT_PER_PAGE, Filter, Pagination, compose, locate, optional_int, optional_string, owner_ref, require_int
from utils.response_utils import expect_list, expect_object, minimal_project, to_json
from tools._params import PER_PAGE, PROJECT_NUMBER, owner_params

LIST_PROJECTS_FAILED = "failed to list projects"
GET_PROJECT_FAILED = "failed to get project"


@in_band_errors
async def list_projects(arguments: Mapping[str, Any], client: httpx.AsyncClient) -> str:
    """List Projects V2 boards owned by a user or organization, optionally filtered by `query`."""
    owner = owner_ref(arguments)
    query = optional_string(arguments, "query")
    per_page = optional_int(arguments, "per_page", DEFAULT_PER_PAGE)

    url = compose(locate(owner), Pagination(per_page), Filter(query))
    data = await invoke(client, "GET", url, expected_status=httpx.codes.OK, failure=LIST_PROJECTS_FAILED)
    return to_json([minimal_project(project) for project in expect_list(data, "projects")])


@in_band_errors
async def get_project(arguments: Mapping[str, Any], client: httpx.AsyncClient) -> str:
    project_number = require_int(arguments, "project_number")
    owner = owner_ref(arguments)

    url = locate(owner, project_number)
    data = await invoke(client, "GET", url, expected_status=httpx.codes.OK, failure=GET_PROJECT_FAILED)
    return to_json(minimal_project(expect_object(data, "project")))


def get_tools() -> dict[str, Any]:
    return {
        "list_projects": {
            "func": list_projects,
            "title": "List projects",
            "description": "List Projects for a user or org",
            "read_only": True,
            "params": {
                **owner_params(),
                "query": {
                    "type": "string",
                    "required": False,
                    "description": "Filter projects by a search query (matches title and description)",
                },
                "per_page": PER_PAGE,
            },
        },
        "get_project": {
            "func": get_project,
            "title": "Get project",
            "description": "Get Project for a user or org",
            "read_only": True,
            "params": {"project_number": PROJECT_NUMBER, **owner_params()},
        },
    }
