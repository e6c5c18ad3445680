"""Async GraphQL-over-HTTP client with retry logic and error handling."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any

import httpx

from .config import GraphQLConfig
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
from .models import GraphQLRequest, GraphQLResponse

logger = logging.getLogger(__name__)


class GraphQLClient:
    """Async client that POSTs GraphQL operations to a single endpoint."""

    def __init__(
        self,
        config: GraphQLConfig | None = None,
        endpoint_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.config = config or GraphQLConfig()

        if endpoint_url:
            self.config = self.config.model_copy(update={"endpoint_url": endpoint_url})

        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        logger.info(f"Initialized GraphQLClient (endpoint={self.config.endpoint_url})")

    async def __aenter__(self) -> GraphQLClient:
        limits = httpx.Limits(
            max_connections=self.config.max_connections,
            max_keepalive_connections=self.config.max_keepalive_connections,
        )
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            **self.config.headers,
        }
        self._client = httpx.AsyncClient(
            timeout=self.config.timeout_seconds,
            limits=limits,
            headers=headers,
            transport=self._transport,
        )
        return self

    async def __aexit__(
        self,
        exc_type: type | None,
        exc_val: Exception | None,
        exc_tb: Any,
    ) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None
            logger.info("Closed GraphQLClient")

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            raise RuntimeError(
                "GraphQLClient must be used as async context manager"
            )
        return self._client

    def _backoff(self, attempt: int) -> float:
        return self.config.backoff_factor * (2 ** attempt)

    def _decode(self, response: httpx.Response) -> dict[str, Any]:
        try:
            payload = response.json()
        except ValueError as e:
            raise GraphQLResponseError(
                f"Response is not valid JSON: {e}",
                status_code=response.status_code,
            )

        if not isinstance(payload, dict):
            raise GraphQLResponseError(
                f"Expected a JSON object, got {type(payload).__name__}",
                status_code=response.status_code,
            )
        return payload

    async def _post(self, payload: dict[str, Any]) -> tuple[dict[str, Any], int, float]:
        """POST the payload, retrying 429/5xx and timeouts."""
        max_retries = max(1, self.config.max_retries)
        last_error: Exception | None = None
        last_status: int | None = None
        start_time = time.perf_counter()

        for attempt in range(max_retries):
            is_last = attempt == max_retries - 1
            try:
                logger.debug(
                    f"POST {self.config.endpoint_url} "
                    f"(attempt {attempt + 1}/{max_retries})"
                )
                response = await self.client.post(
                    self.config.endpoint_url,
                    json=payload,
                )
            except httpx.TimeoutException as e:
                last_error = e
                last_status = None
                if not is_last:
                    wait_time = self._backoff(attempt)
                    logger.warning(f"Timeout, retrying in {wait_time}s...")
                    await asyncio.sleep(wait_time)
                continue
            except httpx.RequestError as e:
                logger.error(f"Network error: {e}")
                raise GraphQLNetworkError(
                    f"Could not reach {self.config.endpoint_url}: {e}"
                ) from e

            status = response.status_code

            if status in (401, 403):
                raise GraphQLAuthError(
                    f"Authentication failed ({status})", status_code=status
                )
            elif status == 429 or status >= 500:
                last_error = GraphQLClientError(
                    f"HTTP {status}: {response.text[:200]}", status_code=status
                )
                last_status = status
                if not is_last:
                    wait_time = self._backoff(attempt)
                    if status == 429:
                        logger.warning(f"Rate limited, waiting {wait_time}s...")
                    else:
                        logger.warning(
                            f"Server error {status}, retrying in {wait_time}s..."
                        )
                    await asyncio.sleep(wait_time)
                continue
            elif status >= 400:
                # Servers commonly report query validation failures as 400
                # with a regular GraphQL error body.
                try:
                    payload_out = self._decode(response)
                except GraphQLResponseError:
                    payload_out = {}
                if "errors" in payload_out:
                    elapsed_ms = (time.perf_counter() - start_time) * 1000
                    return payload_out, status, elapsed_ms
                raise GraphQLHTTPError(
                    f"Unexpected HTTP status {status}",
                    status_code=status,
                    response_text=response.text,
                )

            elapsed_ms = (time.perf_counter() - start_time) * 1000
            return self._decode(response), status, elapsed_ms

        message = f"Request failed after {max_retries} attempts: {last_error}"
        if last_status == 429:
            raise GraphQLRateLimitError(message, status_code=429)
        if last_status is not None:
            raise GraphQLServerError(message, status_code=last_status)
        raise GraphQLClientError(message)

    async def execute(
        self,
        query: str,
        variables: dict[str, Any] | None = None,
        operation_name: str | None = None,
        raise_on_errors: bool | None = None,
    ) -> GraphQLResponse:
        """Execute a GraphQL operation.

        Args:
            query: GraphQL document
            variables: Optional variables for the operation
            operation_name: Operation to run when the document holds several
            raise_on_errors: Raise GraphQLQueryError when the response carries
                GraphQL errors. Defaults to the client config.
        """
        request = GraphQLRequest(
            query=query,
            variables=variables,
            operation_name=operation_name,
        )

        payload, status_code, elapsed_ms = await self._post(request.to_payload())
        try:
            response = GraphQLResponse.from_payload(
                payload, status_code=status_code, elapsed_ms=elapsed_ms
            )
        except ValueError as e:
            raise GraphQLResponseError(
                f"Malformed GraphQL response: {e}", status_code=status_code
            ) from e

        if response.has_errors:
            summary = "; ".join(str(e) for e in response.errors)
            should_raise = (
                raise_on_errors
                if raise_on_errors is not None
                else self.config.raise_on_errors
            )
            if should_raise:
                raise GraphQLQueryError(
                    f"GraphQL errors: {summary}",
                    errors=response.errors,
                    status_code=status_code,
                )
            logger.warning(f"Response contains {len(response.errors)} error(s): {summary}")

        logger.info(
            f"GraphQL request completed (status={status_code}, "
            f"elapsed={elapsed_ms:.1f}ms)"
        )
        return response


def create_graphql_client(
    endpoint_url: str | None = None,
    config: GraphQLConfig | None = None,
) -> GraphQLClient:
    return GraphQLClient(config=config, endpoint_url=endpoint_url)
