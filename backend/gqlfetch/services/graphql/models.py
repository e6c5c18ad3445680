"""Pydantic models for GraphQL requests and responses."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator


class GraphQLRequest(BaseModel):
    """A single GraphQL operation sent over HTTP POST."""

    query: str
    variables: dict[str, Any] | None = None
    operation_name: str | None = None

    @field_validator("query")
    @classmethod
    def query_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("query must not be blank")
        return v

    def to_payload(self) -> dict[str, Any]:
        """Build the JSON body, omitting unset optional members."""
        payload: dict[str, Any] = {"query": self.query}
        if self.variables is not None:
            payload["variables"] = self.variables
        if self.operation_name:
            payload["operationName"] = self.operation_name
        return payload


class GraphQLErrorDetail(BaseModel):
    """One entry of the response `errors` list."""

    message: str
    locations: list[dict[str, Any]] | None = None
    path: list[str | int] | None = None
    extensions: dict[str, Any] | None = None

    def __str__(self) -> str:
        if self.path:
            return f"{self.message} (path: {'.'.join(str(p) for p in self.path)})"
        return self.message


class GraphQLResponse(BaseModel):
    data: Any = None
    errors: list[GraphQLErrorDetail] = Field(default_factory=list)
    extensions: dict[str, Any] | None = None
    status_code: int = 200
    elapsed_ms: float = 0.0

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @classmethod
    def from_payload(
        cls,
        payload: dict[str, Any],
        status_code: int = 200,
        elapsed_ms: float = 0.0,
    ) -> GraphQLResponse:
        raw_errors = payload.get("errors") or []
        if not isinstance(raw_errors, list):
            raise ValueError(
                f"'errors' must be a list, got {type(raw_errors).__name__}"
            )
        errors = [_parse_error(e) for e in raw_errors]
        return cls(
            data=payload.get("data"),
            errors=errors,
            extensions=payload.get("extensions"),
            status_code=status_code,
            elapsed_ms=elapsed_ms,
        )


def _parse_error(raw: Any) -> GraphQLErrorDetail:
    if not isinstance(raw, dict):
        return GraphQLErrorDetail(message=str(raw))
    return GraphQLErrorDetail(
        message=str(raw.get("message", "Unknown GraphQL error")),
        locations=raw.get("locations"),
        path=raw.get("path"),
        extensions=raw.get("extensions"),
    )
