"""Tests for the Linear GraphQL client."""

import asyncio

import httpx
import pytest

from mcp_linear.exceptions import (
    EntityNotFoundError,
    ErrorKind,
    LinearAPIError,
    LinearAuthenticationError,
)
from mcp_linear.linear.client import LinearClient
from mcp_linear.linear.config import LinearConfig
from tests.utils.graphql import FakeLinearAPI


def _client(handler, **config) -> LinearClient:
    config.setdefault("api_key", "lin_api_test_key")
    return LinearClient(
        config=LinearConfig(**config), transport=httpx.MockTransport(handler)
    )


@pytest.mark.anyio
async def test_execute_posts_query_with_api_key():
    fake = FakeLinearAPI({"Viewer": {"data": {"viewer": {"id": "user-1"}}}})
    client = LinearClient(
        config=LinearConfig(api_key="lin_api_test_key"), transport=fake.transport()
    )

    data = await client.execute("query Viewer { viewer { id } }")

    assert data == {"viewer": {"id": "user-1"}}
    assert fake.headers[0]["authorization"] == "lin_api_test_key"
    assert fake.headers[0]["content-type"] == "application/json"
    assert fake.requests[0]["variables"] == {}
    await client.aclose()


@pytest.mark.anyio
async def test_graphql_errors_raise_linear_api_error():
    client = _client(
        lambda request: httpx.Response(
            200,
            json={
                "errors": [
                    {
                        "message": "Argument Validation Error",
                        "extensions": {"userPresentableMessage": "Title is too long"},
                    }
                ]
            },
        )
    )

    with pytest.raises(LinearAPIError, match="Title is too long") as exc_info:
        await client.execute("query Foo { foo }")

    assert exc_info.value.kind == ErrorKind.EXTERNAL_API_FAILURE


@pytest.mark.anyio
@pytest.mark.parametrize("status_code", [401, 403])
async def test_http_auth_failures(status_code):
    client = _client(lambda request: httpx.Response(status_code, json={}))

    with pytest.raises(LinearAuthenticationError) as exc_info:
        await client.execute("query Foo { foo }")

    assert exc_info.value.status_code == status_code


@pytest.mark.anyio
async def test_graphql_authentication_error_code():
    client = _client(
        lambda request: httpx.Response(
            400,
            json={
                "errors": [
                    {
                        "message": "Authentication required",
                        "extensions": {"code": "AUTHENTICATION_ERROR"},
                    }
                ]
            },
        )
    )

    with pytest.raises(LinearAuthenticationError, match="Authentication required"):
        await client.execute("query Foo { foo }")


@pytest.mark.anyio
async def test_rate_limit_and_server_errors():
    client = _client(lambda request: httpx.Response(429, text="slow down"))
    with pytest.raises(LinearAPIError, match="rate limit"):
        await client.execute("query Foo { foo }")

    client = _client(lambda request: httpx.Response(502, text="bad gateway"))
    with pytest.raises(LinearAPIError, match="HTTP 502"):
        await client.execute("query Foo { foo }")

    client = _client(lambda request: httpx.Response(200, text="<html>"))
    with pytest.raises(LinearAPIError, match="not JSON"):
        await client.execute("query Foo { foo }")


@pytest.mark.anyio
async def test_network_errors_are_wrapped():
    def fail(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(LinearAPIError, match="Network error"):
        await _client(fail).execute("query Foo { foo }")

    def slow(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(LinearAPIError, match="timed out"):
        await _client(slow, timeout=5).execute("query Foo { foo }")


@pytest.mark.anyio
async def test_fetch_entity_null_result_is_not_found():
    fake = FakeLinearAPI({"Issue": {"data": {"issue": None}}})
    client = LinearClient(config=LinearConfig(api_key="k"), transport=fake.transport())

    with pytest.raises(EntityNotFoundError, match="Issue ENG-404 not found") as exc_info:
        await client.fetch_entity("issue", "Issue", "ENG-404", "id")

    assert exc_info.value.identifier == "ENG-404"
    assert fake.request_for("Issue")["variables"] == {"id": "ENG-404"}


@pytest.mark.anyio
async def test_fetch_entity_graphql_not_found_error():
    fake = FakeLinearAPI(
        {
            "Team": {
                "errors": [
                    {
                        "message": "Entity not found: Team",
                        "extensions": {"code": "INVALID_INPUT"},
                    }
                ]
            }
        }
    )
    client = LinearClient(config=LinearConfig(api_key="k"), transport=fake.transport())

    with pytest.raises(EntityNotFoundError, match="Team team-x not found"):
        await client.fetch_entity("team", "Team", "team-x", "id")


@pytest.mark.anyio
async def test_fetch_entity_other_errors_propagate():
    fake = FakeLinearAPI({"Team": {"errors": [{"message": "Internal failure"}]}})
    client = LinearClient(config=LinearConfig(api_key="k"), transport=fake.transport())

    with pytest.raises(LinearAPIError, match="Internal failure"):
        await client.fetch_entity("team", "Team", "team-x", "id")


@pytest.mark.anyio
async def test_mutate_unpacks_payload():
    fake = FakeLinearAPI(
        {"CreateThing": {"data": {"thingCreate": {"success": True, "thing": {"id": "t"}}}}}
    )
    client = LinearClient(config=LinearConfig(api_key="k"), transport=fake.transport())

    success, entity = await client.mutate(
        "mutation CreateThing { thingCreate { success thing { id } } }",
        {},
        "thingCreate",
        "thing",
    )

    assert success is True
    assert entity == {"id": "t"}


@pytest.mark.anyio
async def test_concurrency_is_bounded():
    in_flight = 0
    peak = 0

    async def handler(request: httpx.Request) -> httpx.Response:
        nonlocal in_flight, peak
        in_flight += 1
        peak = max(peak, in_flight)
        await asyncio.sleep(0.01)
        in_flight -= 1
        return httpx.Response(200, json={"data": {}})

    client = _client(handler, max_concurrency=2)

    await asyncio.gather(*(client.execute("query Foo { foo }") for _ in range(6)))

    assert peak == 2
