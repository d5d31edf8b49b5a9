"""Unit tests for response classification and transports."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from linear_gql.errors import GraphQLError, HttpStatusError, NoDataError, TransportError
from linear_gql.request import EnclaveTransport, HttpTransport, unwrap_response


# ---------------------------------------------------------------------------
# unwrap_response
# ---------------------------------------------------------------------------


class TestUnwrapResponse:
    def test_returns_data(self):
        assert unwrap_response({"data": {"viewer": {"id": "me"}}}) == {"viewer": {"id": "me"}}

    def test_all_error_messages_are_kept(self):
        with pytest.raises(GraphQLError) as excinfo:
            unwrap_response({"errors": [{"message": "a"}, {"message": "b"}], "data": None})
        assert excinfo.value.messages == ["a", "b"]
        assert str(excinfo.value) == "a; b"

    def test_errors_win_over_partial_data(self):
        with pytest.raises(GraphQLError):
            unwrap_response({"errors": [{"message": "x"}], "data": {"issue": None}})

    def test_empty_errors_list_is_ignored(self):
        assert unwrap_response({"errors": [], "data": {}}) == {}

    @pytest.mark.parametrize("body", [{}, {"data": None}, [], "nope"])
    def test_missing_data(self, body):
        with pytest.raises(NoDataError, match="No data in response"):
            unwrap_response(body)


# ---------------------------------------------------------------------------
# HttpTransport
# ---------------------------------------------------------------------------


def _transport(handler):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpTransport("lin_api_key", "https://linear.test/graphql", client=client)


@pytest.mark.asyncio
class TestHttpTransport:
    async def test_posts_query_with_api_key(self):
        seen = {}

        def handler(request):
            seen["auth"] = request.headers["Authorization"]
            seen["body"] = request.read()
            return httpx.Response(200, json={"data": {"ok": True}})

        transport = _transport(handler)
        assert await transport.execute("query Q { ok }", {"a": 1}) == {"ok": True}
        assert seen["auth"] == "lin_api_key"
        assert b'"variables":{"a":1}' in seen["body"].replace(b" ", b"")

    async def test_non_success_status(self):
        transport = _transport(lambda request: httpx.Response(401, text="Unauthorized"))
        with pytest.raises(HttpStatusError) as excinfo:
            await transport.execute("query Q { ok }")
        assert excinfo.value.status == 401
        assert str(excinfo.value) == "HTTP 401: Unauthorized"

    async def test_network_failure(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(TransportError, match="connection refused"):
            await _transport(handler).execute("query Q { ok }")

    async def test_undecodable_body(self):
        transport = _transport(lambda request: httpx.Response(200, text="<html>"))
        with pytest.raises(GraphQLError, match="Deserialization error"):
            await transport.execute("query Q { ok }")

    async def test_graphql_errors(self):
        transport = _transport(
            lambda request: httpx.Response(200, json={"errors": [{"message": "bad field"}]})
        )
        with pytest.raises(GraphQLError, match="bad field"):
            await transport.execute("query Q { ok }")

    async def test_injected_client_is_not_closed(self):
        client = MagicMock()
        client.aclose = AsyncMock()
        transport = HttpTransport("key", client=client)
        await transport.aclose()
        client.aclose.assert_not_awaited()


# ---------------------------------------------------------------------------
# EnclaveTransport
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
class TestEnclaveTransport:
    async def test_success(self):
        ctx = MagicMock()
        ctx.dispatch = AsyncMock(
            return_value=SimpleNamespace(
                success=True,
                response=SimpleNamespace(status=200, body={"data": {"ok": 1}}),
                error=None,
            )
        )
        with patch("linear_gql.request.get_context", return_value=ctx):
            assert await EnclaveTransport(MagicMock()).execute("query Q { ok }") == {"ok": 1}
        ctx.dispatch.assert_awaited_once()

    async def test_dispatch_failure(self):
        ctx = MagicMock()
        ctx.dispatch = AsyncMock(
            return_value=SimpleNamespace(
                success=False, response=None, error=SimpleNamespace(message="token expired")
            )
        )
        with patch("linear_gql.request.get_context", return_value=ctx):
            with pytest.raises(TransportError, match="token expired"):
                await EnclaveTransport(MagicMock()).execute("query Q { ok }")

    async def test_non_success_status_is_http_error(self):
        ctx = MagicMock()
        ctx.dispatch = AsyncMock(
            return_value=SimpleNamespace(
                success=True,
                response=SimpleNamespace(status=401, body="Unauthorized"),
                error=None,
            )
        )
        with patch("linear_gql.request.get_context", return_value=ctx):
            with pytest.raises(HttpStatusError) as excinfo:
                await EnclaveTransport(MagicMock()).execute("query Q { ok }")
        assert excinfo.value.status == 401
        assert str(excinfo.value) == "HTTP 401: Unauthorized"

    async def test_error_status_with_json_body(self):
        ctx = MagicMock()
        ctx.dispatch = AsyncMock(
            return_value=SimpleNamespace(
                success=True,
                response=SimpleNamespace(status=500, body={"errors": [{"message": "boom"}]}),
                error=None,
            )
        )
        with patch("linear_gql.request.get_context", return_value=ctx):
            with pytest.raises(HttpStatusError, match="HTTP 500: .*boom"):
                await EnclaveTransport(MagicMock()).execute("query Q { ok }")
