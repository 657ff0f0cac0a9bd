"""Argument metadata shared by the project tools.

`server.py` turns each entry into a parameter of the registered tool so MCP
clients receive a JSON schema. Keys: `type` (JSON schema type), `required`,
`description` and optionally `enum` or `items`.
"""

OWNER_TYPE = {
    "type": "string",
    "required": True,
    "enum": ["user", "org"],
    "description": "Owner type",
}

OWNER = {
    "type": "string",
    "required": True,
    "description": "If owner_type == user it is the handle for the GitHub user account. "
    "If owner_type == org it is the name of the organization. The name is not case sensitive.",
}

PROJECT_NUMBER = {"type": "number", "required": True, "description": "The project's number."}

PER_PAGE = {"type": "number", "required": False, "description": "Number of results per page (max 100, default: 30)"}

FIELD_SELECTION = {
    "type": "array",
    "required": False,
    "items": {"type": "string"},
    "description": 'Specific list of field IDs to include in the response (e.g. ["102589", "985201", "169875"]). '
    "If not provided, only the title field is included.",
}


def owner_params() -> dict:
    return {"owner_type": OWNER_TYPE, "owner": OWNER}
