import json

import httpx
import pytest

from tools.items import (
    ITEM_DELETED,
    add_project_item,
    delete_project_item,
    get_project_item,
    list_project_items,
    update_project_item,
)
from conftest import boom, project_item, respond

ARGS = {"owner": "octo-org", "owner_type": "org", "project_number": 123}
ITEM_ARGS = {**ARGS, "item_id": 42}


async def test_list_project_items_end_to_end(mock_api):
    api = mock_api(respond(200, [project_item(1), project_item(2)]))
    result = await list_project_items(ARGS, api.client)
    assert not result.is_error
    items = json.loads(result.text)
    assert len(items) == 2
    request = api.last_request
    assert request.method == "GET"
    assert request.url.path == "/orgs/octo-org/projectsV2/123/items"
    assert request.url.params.get_list("fields") == []
    assert request.url.params["per_page"] == "30"


async def test_list_project_items_with_fields(mock_api):
    fields = [{"id": 123, "name": "Status", "data_type": "single_select", "value": "Todo"}]
    api = mock_api(respond(200, [project_item(fields=fields)]))
    result = await list_project_items({**ARGS, "fields": ["123", "456", "789"]}, api.client)
    items = json.loads(result.text)
    assert items[0]["fields"] == fields
    assert api.last_request.url.params.get_list("fields") == ["123", "456", "789"]


async def test_list_project_items_with_query_and_per_page(mock_api):
    def handler(request: httpx.Request) -> httpx.Response:
        params = request.url.params
        if params.get("per_page") == "50" and params.get("q") == "bug":
            return httpx.Response(200, json=[project_item()])
        return httpx.Response(400, content=b'{"message":"unexpected query params"}')

    api = mock_api(handler)
    result = await list_project_items({**ARGS, "per_page": 50, "query": "bug"}, api.client)
    assert not result.is_error
    assert len(json.loads(result.text)) == 1


async def test_list_project_items_rejects_non_string_fields(mock_api):
    api = mock_api(respond(200, []))
    result = await list_project_items({**ARGS, "fields": [123]}, api.client)
    assert result.is_error
    assert "fields" in result.text
    assert api.requests == []


async def test_list_project_items_api_error(mock_api):
    api = mock_api(boom())
    result = await list_project_items(ARGS, api.client)
    assert result.is_error
    assert result.text == 'failed to list project items: {"message":"boom"}'


async def test_list_project_items_transport_error(mock_api):
    def handler(request):
        raise httpx.ConnectError("no route to host", request=request)

    api = mock_api(handler)
    result = await list_project_items(ARGS, api.client)
    assert result.is_error
    assert result.text == "failed to list project items: no route to host"


async def test_get_project_item(mock_api):
    api = mock_api(respond(200, project_item(42)))
    result = await get_project_item({**ITEM_ARGS, "fields": ["7"]}, api.client)
    item = json.loads(result.text)
    assert item["id"] == 42
    assert item["content_type"] == "Issue"
    assert api.last_request.url.path == "/orgs/octo-org/projectsV2/123/items/42"
    assert api.last_request.url.params.get_list("fields") == ["7"]
    assert "per_page" not in api.last_request.url.params


async def test_get_project_item_api_error(mock_api):
    api = mock_api(boom())
    result = await get_project_item(ITEM_ARGS, api.client)
    assert "failed to get project item" in result.text
    assert '{"message":"boom"}' in result.text


@pytest.mark.parametrize("item_type, canonical", [("issue", "Issue"), ("pull_request", "PullRequest"), ("ISSUE", "Issue")])
async def test_add_project_item(mock_api, item_type, canonical):
    api = mock_api(respond(201, project_item(9)))
    result = await add_project_item({**ARGS, "item_type": item_type, "item_id": 1001}, api.client)
    assert not result.is_error
    assert json.loads(result.text)["id"] == 9
    request = api.last_request
    assert request.method == "POST"
    assert request.url.path == "/orgs/octo-org/projectsV2/123/items"
    assert json.loads(request.content) == {"id": 1001, "type": canonical}


async def test_add_project_item_rejects_unknown_type_before_request(mock_api):
    api = mock_api(respond(201, project_item()))
    result = await add_project_item({**ARGS, "item_type": "draft_issue", "item_id": 1}, api.client)
    assert result.is_error
    assert result.text == "item_type must be either 'issue' or 'pull_request'"
    assert api.requests == []


async def test_add_project_item_expects_created(mock_api):
    api = mock_api(respond(200, project_item()))
    result = await add_project_item({**ARGS, "item_type": "issue", "item_id": 1}, api.client)
    assert result.is_error
    assert result.text.startswith("failed to add a project item")


async def test_update_project_item(mock_api):
    api = mock_api(respond(200, project_item(42)))
    result = await update_project_item({**ITEM_ARGS, "updated_field": {"id": 101, "value": "In Progress"}}, api.client)
    assert not result.is_error
    request = api.last_request
    assert request.method == "PATCH"
    assert request.url.path == "/orgs/octo-org/projectsV2/123/items/42"
    assert json.loads(request.content) == {"fields": [{"id": 101, "value": "In Progress"}]}


async def test_update_project_item_clears_with_null(mock_api):
    api = mock_api(respond(200, project_item(42)))
    result = await update_project_item({**ITEM_ARGS, "updated_field": {"id": 101, "value": None}}, api.client)
    assert not result.is_error
    body = json.loads(api.last_request.content)
    assert body == {"fields": [{"id": 101, "value": None}]}
    assert "value" in body["fields"][0]


@pytest.mark.parametrize(
    "updated_field, message",
    [
        ("nope", "updated_field must be an object"),
        ({"value": 1}, "updated_field.id is required"),
        ({"id": "101", "value": 1}, "updated_field.id must be a number"),
        ({"id": 101}, "updated_field.value is required"),
    ],
)
async def test_update_project_item_validation(mock_api, updated_field, message):
    api = mock_api(respond(200, project_item()))
    result = await update_project_item({**ITEM_ARGS, "updated_field": updated_field}, api.client)
    assert result.is_error
    assert result.text == message
    assert api.requests == []


async def test_update_project_item_api_error(mock_api):
    api = mock_api(respond(422, content=b'{"message":"Validation Failed"}'))
    result = await update_project_item({**ITEM_ARGS, "updated_field": {"id": 101, "value": "x"}}, api.client)
    assert result.text == 'failed to update a project item: {"message":"Validation Failed"}'


async def test_delete_project_item(mock_api):
    api = mock_api(respond(204))
    result = await delete_project_item(ITEM_ARGS, api.client)
    assert not result.is_error
    assert result.text == ITEM_DELETED == "project item successfully deleted"
    assert api.last_request.method == "DELETE"
    assert api.last_request.url.path == "/orgs/octo-org/projectsV2/123/items/42"


async def test_delete_project_item_api_error(mock_api):
    api = mock_api(boom())
    result = await delete_project_item(ITEM_ARGS, api.client)
    assert result.is_error
    assert "failed to delete a project item" in result.text
    assert '{"message":"boom"}' in result.text


OPERATIONS = [
    (get_project_item, ITEM_ARGS),
    (add_project_item, {**ARGS, "item_type": "issue", "item_id": 1}),
    (update_project_item, {**ITEM_ARGS, "updated_field": {"id": 1, "value": "x"}}),
    (delete_project_item, ITEM_ARGS),
    (list_project_items, ARGS),
]


@pytest.mark.parametrize("operation, args", OPERATIONS)
async def test_missing_required_parameters(mock_api, operation, args):
    for missing in args:
        api = mock_api(respond(200, project_item()))
        partial = {key: value for key, value in args.items() if key != missing}
        result = await operation(partial, api.client)
        assert result.is_error
        assert result.text == f"missing required parameter: {missing}"
        assert api.requests == []
