"""Pydantic models for Notion query results and normalized reminders."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

UNTITLED = "Untitled"


class RawPage(BaseModel):
    """A page object as returned by the database query endpoint.

    Only ``id``, ``url`` and ``properties`` are kept; the property values stay
    untyped and are navigated by the extractor.
    """

    model_config = ConfigDict(extra="ignore")

    id: str = ""
    url: str = ""
    properties: dict[str, Any] = Field(default_factory=dict)

    # JSON null reads as the zero value
    @field_validator("id", "url", mode="before")
    @classmethod
    def null_str(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("properties", mode="before")
    @classmethod
    def null_properties(cls, value: Any) -> Any:
        return {} if value is None else value


class QueryResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    results: list[RawPage] = Field(default_factory=list)

    @field_validator("results", mode="before")
    @classmethod
    def null_results(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, list):
            return [{} if page is None else page for page in value]
        return value


class Reminder(BaseModel):
    """One pending item, normalized for display."""

    title: str = UNTITLED
    created: str = ""
    priority: str = ""
    category: str = ""
    url: str = ""

    def one_line(self) -> str:
        line = f"{self.title} (from {self.created})"
        return line + self.priority + self.category
