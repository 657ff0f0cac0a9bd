"""Per-call value objects passed between the projects tool layers."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class OwnerKind(str, Enum):
    USER = "user"
    ORG = "org"


@dataclass(frozen=True)
class OwnerRef:
    kind: OwnerKind
    name: str


class FieldValueKind(str, Enum):
    STRING = "string"
    NUMBER = "number"
    BOOL = "bool"
    NULL = "null"


@dataclass(frozen=True)
class FieldValue:
    """A project field value decoded once from its raw JSON form."""

    kind: FieldValueKind
    raw: Any = None

    def to_json(self) -> Any:
        return None if self.kind is FieldValueKind.NULL else self.raw


@dataclass(frozen=True)
class FieldUpdate:
    field_id: int
    value: FieldValue


class ContentKind(str, Enum):
    ISSUE = "Issue"
    PULL_REQUEST = "PullRequest"


@dataclass(frozen=True)
class ItemCreationRequest:
    content_id: int
    content_kind: ContentKind


@dataclass(frozen=True)
class ToolResult:
    """Text delivered to the MCP client; `is_error` marks in-band failures."""

    text: str
    is_error: bool = False
