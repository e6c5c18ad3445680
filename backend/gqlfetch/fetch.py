"""Run a single GraphQL request and print its data."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import httpx
from pydantic import BaseModel

from gqlfetch.config import Settings
from gqlfetch.services.graphql import GraphQLClient, GraphQLResponse
from gqlfetch.timing import timed

logger = logging.getLogger(__name__)

FETCH_TIMER_LABEL = "fetch"


class FetchResult(BaseModel):
    """Outcome of one run."""

    label: str
    response: GraphQLResponse
    elapsed_ms: float

    @property
    def data(self) -> Any:
        return self.response.data


async def run_fetch(
    settings: Settings,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    output: Callable[[Any], None] = print,
) -> FetchResult:
    """Send the configured request, pass its data to output and log timing.

    Client errors propagate to the caller; the timer is stopped either way.
    """
    request = settings.request
    config = settings.graphql.to_client_config()

    with timed(FETCH_TIMER_LABEL) as timer:
        async with GraphQLClient(config=config, transport=transport) as client:
            response = await client.execute(
                request.query,
                variables=request.variables,
                operation_name=request.operation_name,
            )
        output(response.data)

    return FetchResult(
        label=FETCH_TIMER_LABEL,
        response=response,
        elapsed_ms=timer.elapsed_ms,
    )
