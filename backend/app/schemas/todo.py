"""Todo Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - title <= 200 chars and description <= 1000 chars, checked BEFORE trimming
    - TodoUpdate accepts only title/description/completed, and at least one of them
    - TodoUpdate.completed is a strict bool (no "true"/1 coercion, explicit null rejected)
    - description null is accepted and becomes ""
    - Blank titles pass TodoCreate/TodoUpdate untouched — the store rejects them

Design Decisions:
    - extra="forbid" on TodoUpdate gives the allowed-field whitelist for free
    - TodoResponse serializes created_at as createdAt (wire name kept for clients)
"""

from datetime import datetime
from typing import Annotated, Any

from pydantic import (
    BaseModel, ConfigDict, Field, StrictBool, field_validator, model_validator,
)

from app.core.domain_types import (
    MAX_BULK_IDS, MAX_DESCRIPTION_LENGTH, MAX_TITLE_LENGTH, MAX_TODO_ID,
)
from app.core.todo import Todo

TodoIdParam = Annotated[int, Field(ge=1, le=MAX_TODO_ID)]


def _strip_or_empty(v: str | None) -> str:
    return v.strip() if v else ""


class TodoCreate(BaseModel):
    """Todo creation — validates types and lengths, trims whitespace."""
    title: str = Field(max_length=MAX_TITLE_LENGTH)
    description: str | None = Field("", max_length=MAX_DESCRIPTION_LENGTH)

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        return v.strip()

    @field_validator("description")
    @classmethod
    def strip_description(cls, v: str | None) -> str:
        return _strip_or_empty(v)


class TodoUpdate(BaseModel):
    """Partial update — only supplied fields reach the store."""
    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(None, max_length=MAX_TITLE_LENGTH)
    description: str | None = Field(None, max_length=MAX_DESCRIPTION_LENGTH)
    completed: StrictBool | None = None

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str | None) -> str | None:
        return v.strip() if v is not None else None

    @field_validator("completed")
    @classmethod
    def reject_null_completed(cls, v: bool | None) -> bool:
        if v is None:
            raise ValueError("Completed status must be a boolean")
        return v

    @field_validator("description")
    @classmethod
    def strip_description(cls, v: str | None) -> str:
        return _strip_or_empty(v)

    @model_validator(mode="after")
    def require_some_field(self):
        if not self.model_fields_set:
            raise ValueError("No valid fields provided for update")
        return self

    def to_changes(self) -> dict[str, Any]:
        """Mapping of the fields the client actually sent."""
        return self.model_dump(exclude_unset=True)


class TodoReplace(BaseModel):
    """Full replacement (PUT) — title required, other fields defaulted."""
    title: str = Field(max_length=MAX_TITLE_LENGTH)
    description: str | None = Field("", max_length=MAX_DESCRIPTION_LENGTH)
    completed: bool = False

    @field_validator("title")
    @classmethod
    def require_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Title is required for complete replacement")
        return v

    @field_validator("description")
    @classmethod
    def strip_description(cls, v: str | None) -> str:
        return _strip_or_empty(v)

    def to_changes(self) -> dict[str, Any]:
        return self.model_dump()


class BulkIdsRequest(BaseModel):
    """Bulk toggle/delete body."""
    ids: list[TodoIdParam] = Field(min_length=1, max_length=MAX_BULK_IDS)


class TodoResponse(BaseModel):
    """Public todo representation."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    completed: bool
    created_at: datetime = Field(serialization_alias="createdAt")

    @classmethod
    def serialize(cls, todo: Todo) -> dict:
        return cls.model_validate(todo).model_dump(mode="json", by_alias=True)


def serialize_todos(todos: list[Todo]) -> list[dict]:
    return [TodoResponse.serialize(t) for t in todos]
