from __future__ import annotations

from core.models import OwnerKind, OwnerRef

ITEMS = "items"
FIELDS = "fields"

_PREFIXES = {
    OwnerKind.USER: "users",
    OwnerKind.ORG: "orgs",
}


def locate(
    owner: OwnerRef,
    project_number: int | None = None,
    collection: str | None = None,
    member_id: int | None = None,
) -> str:
    """Build the Projects V2 path for an owner, optionally narrowed to a project,
    its items or fields collection, and one member of that collection.

    e.g. ``orgs/octo-org/projectsV2/123/items/42``
    """
    if collection is not None and collection not in (ITEMS, FIELDS):
        raise ValueError(f"unknown project collection: {collection}")
    if collection is not None and project_number is None:
        raise ValueError("a project collection needs a project number")
    if member_id is not None and collection is None:
        raise ValueError("a member id needs a project collection")

    segments = [_PREFIXES[owner.kind], owner.name, "projectsV2"]
    if project_number is not None:
        segments.append(str(project_number))
    if collection is not None:
        segments.append(collection)
    if member_id is not None:
        segments.append(str(member_id))
    return "/".join(segments)
