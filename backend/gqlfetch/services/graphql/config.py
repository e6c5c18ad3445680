"""Configuration for GraphQL client."""

from pydantic import BaseModel, Field

DEFAULT_ENDPOINT_URL = "http://127.0.0.1:8080/graphql"


class GraphQLConfig(BaseModel):
    """Configuration for GraphQL client."""

    endpoint_url: str = DEFAULT_ENDPOINT_URL
    timeout_seconds: float = 30.0
    max_connections: int = 10
    max_keepalive_connections: int = 5

    # Retry settings
    max_retries: int = 3
    backoff_factor: float = 1.0

    headers: dict[str, str] = Field(default_factory=dict)
    raise_on_errors: bool = False
