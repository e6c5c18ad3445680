"""Tests for the run-once fetch procedure."""

import asyncio
import json
import logging

import httpx
import pytest

from gqlfetch.fetch import FETCH_TIMER_LABEL, run_fetch
from gqlfetch.services.graphql import GraphQLNetworkError


def test_prints_data_and_logs_timing(settings, make_transport, capsys, caplog) -> None:
    caplog.set_level(logging.INFO, logger="gqlfetch.timing")
    data = {"users": [{"name": "alice"}]}
    transport = make_transport(httpx.Response(200, json={"data": data}))

    result = asyncio.run(run_fetch(settings, transport=transport))

    assert result.data == data
    assert result.label == FETCH_TIMER_LABEL
    assert result.elapsed_ms >= result.response.elapsed_ms
    assert capsys.readouterr().out.strip() == str(data)
    assert any(r.getMessage().startswith("fetch: ") for r in caplog.records)

    body = json.loads(transport.requests[0].content)
    assert body == {"query": "{ users{name} }"}


def test_custom_output_receives_data(settings, make_transport) -> None:
    received = []
    transport = make_transport(httpx.Response(200, json={"data": {"ok": True}}))

    asyncio.run(run_fetch(settings, transport=transport, output=received.append))

    assert received == [{"ok": True}]


def test_errors_propagate_and_timer_still_logs(settings, make_transport, caplog) -> None:
    caplog.set_level(logging.INFO, logger="gqlfetch.timing")
    transport = make_transport(httpx.ConnectError("connection refused"))

    with pytest.raises(GraphQLNetworkError):
        asyncio.run(run_fetch(settings, transport=transport))

    assert any(r.getMessage().startswith("fetch: ") for r in caplog.records)
