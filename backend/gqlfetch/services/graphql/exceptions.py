"""Custom exceptions for GraphQL client."""

from typing import Any


class GraphQLClientError(Exception):
    """Base exception for GraphQL client errors."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class GraphQLAuthError(GraphQLClientError):
    """Authentication or authorization failed (401/403)."""

    pass


class GraphQLHTTPError(GraphQLClientError):
    """Unexpected non-2xx HTTP response."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_text: str = "",
    ):
        super().__init__(message, status_code=status_code)
        self.response_text = response_text


class GraphQLRateLimitError(GraphQLClientError):
    """Rate limit exceeded (429)."""

    pass


class GraphQLServerError(GraphQLClientError):
    """Server-side error (5xx)."""

    pass


class GraphQLNetworkError(GraphQLClientError):
    """Connection could not be established."""

    pass


class GraphQLResponseError(GraphQLClientError):
    """Response body is not a GraphQL JSON object."""

    pass


class GraphQLQueryError(GraphQLClientError):
    """Server returned GraphQL errors for the query."""

    def __init__(
        self,
        message: str,
        errors: list[Any] | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message, status_code=status_code)
        self.errors = errors or []
