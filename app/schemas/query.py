from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FilterClause(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    field: str = Field(alias="PropertyName")
    op: str = Field(alias="Operator")
    value: str | None = Field(default=None, alias="Value")

    @field_validator("value", mode="before")
    @classmethod
    def _stringify_value(cls, value: Any) -> Any:
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (int, float)):
            return str(value)
        return value


class QueryRequest(BaseModel):
    filters: str | None = None
    search_term: str | None = None
    sort_field: str | None = None
    sort_order: str | None = "asc"
    page_number: int = 1
    page_size: int = 10


class CreatedResponse(BaseModel):
    id: str


class StatusResponse(BaseModel):
    status: bool
