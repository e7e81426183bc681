"""
Тесты клиента Expo push API на httpx.MockTransport.
"""
import json

import httpx
import pytest

from app.core.exceptions import PushGatewayError
from app.schemas.notification import PushMessage
from app.services.push_gateway import PushGatewayClient

URL = "https://push.test/--/api/v2/push/send"


def _client(handler) -> PushGatewayClient:
    return PushGatewayClient(URL, timeout=5.0, transport=httpx.MockTransport(handler))


def _messages(n: int = 1) -> list[PushMessage]:
    return [
        PushMessage(to=f"ExponentPushToken[{i}]", title="T", body="B", data={"event_id": str(i)})
        for i in range(n)
    ]


class TestPushGatewayClient:

    @pytest.mark.asyncio
    async def test_posts_json_array(self):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["method"] = request.method
            captured["url"] = str(request.url)
            captured["body"] = json.loads(request.content)
            captured["content_type"] = request.headers["content-type"]
            return httpx.Response(200, json={"data": [{"status": "ok", "id": "a"}, {"status": "ok", "id": "b"}]})

        tickets = await _client(handler).send(_messages(2))

        assert captured["method"] == "POST"
        assert captured["url"] == URL
        assert captured["content_type"] == "application/json"
        assert captured["body"] == [
            {"to": "ExponentPushToken[0]", "sound": "default", "title": "T", "body": "B", "data": {"event_id": "0"}},
            {"to": "ExponentPushToken[1]", "sound": "default", "title": "T", "body": "B", "data": {"event_id": "1"}},
        ]
        assert [t.id for t in tickets] == ["a", "b"]

    @pytest.mark.asyncio
    async def test_non_success_status_raises(self):
        def handler(request):
            return httpx.Response(429, text="Too Many Requests")

        with pytest.raises(PushGatewayError) as exc_info:
            await _client(handler).send(_messages())

        assert exc_info.value.gateway_status == 429
        assert str(exc_info.value) == "Expo push failed"

    @pytest.mark.asyncio
    async def test_ticket_errors_do_not_raise(self):
        def handler(request):
            return httpx.Response(200, json={"data": [
                {"status": "ok", "id": "a"},
                {"status": "error", "message": "not registered", "details": {"error": "DeviceNotRegistered"}},
            ]})

        tickets = await _client(handler).send(_messages(2))

        assert [t.status for t in tickets] == ["ok", "error"]
        assert tickets[1].details == {"error": "DeviceNotRegistered"}

    @pytest.mark.asyncio
    async def test_non_json_success_body(self):
        def handler(request):
            return httpx.Response(200, text="ok")

        assert await _client(handler).send(_messages()) == []

    @pytest.mark.asyncio
    async def test_connection_error_propagates(self):
        def handler(request):
            raise httpx.ConnectError("unreachable", request=request)

        with pytest.raises(httpx.ConnectError):
            await _client(handler).send(_messages())


class TestParseTickets:

    def test_single_ticket_object(self):
        tickets = PushGatewayClient._parse_tickets({"data": {"status": "ok", "id": "x"}})
        assert [t.id for t in tickets] == ["x"]

    def test_unknown_ticket_skipped(self):
        tickets = PushGatewayClient._parse_tickets({"data": [{"status": "weird"}, {"status": "ok"}]})
        assert len(tickets) == 1

    def test_missing_data(self):
        assert PushGatewayClient._parse_tickets({"errors": []}) == []
        assert PushGatewayClient._parse_tickets(None) == []
