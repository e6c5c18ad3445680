"""GraphQL-over-HTTP client service."""

from .client import GraphQLClient, create_graphql_client
from .config import DEFAULT_ENDPOINT_URL, GraphQLConfig
from .exceptions import (
    GraphQLAuthError,
    GraphQLClientError,
    GraphQLHTTPError,
    GraphQLNetworkError,
    GraphQLQueryError,
    GraphQLRateLimitError,
    GraphQLResponseError,
    GraphQLServerError,
)
from .models import GraphQLErrorDetail, GraphQLRequest, GraphQLResponse

__all__ = [
    "GraphQLClient",
    "create_graphql_client",
    "GraphQLConfig",
    "DEFAULT_ENDPOINT_URL",
    "GraphQLClientError",
    "GraphQLAuthError",
    "GraphQLHTTPError",
    "GraphQLRateLimitError",
    "GraphQLServerError",
    "GraphQLNetworkError",
    "GraphQLResponseError",
    "GraphQLQueryError",
    "GraphQLRequest",
    "GraphQLResponse",
    "GraphQLErrorDetail",
]
