"""
HTTP клиент для Expo push API.
Все сообщения цикла уходят одним POST-запросом.
"""
import logging
from typing import Optional

import httpx

from app.core.config import settings
from app.core.exceptions import PushGatewayError
from app.schemas.notification import PushMessage, PushTicket

logger = logging.getLogger(__name__)


class PushGatewayClient:
    """Клиент push-шлюза."""

    def __init__(
        self,
        url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self.timeout = timeout
        self._transport = transport

    async def send(self, messages: list[PushMessage]) -> list[PushTicket]:
        """
        Отправляет пакет сообщений.

        Не-2xx ответ -> PushGatewayError. Сетевые ошибки httpx пробрасываются
        как есть. Тикеты с status=error только логируются.
        """
        payload = [m.model_dump() for m in messages]
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.post(
                self.url,
                json=payload,
                headers={"Accept": "application/json"},
            )

        try:
            body = response.json()
        except ValueError:
            body = None

        logger.info("Expo response status: %s", response.status_code)
        logger.debug("Expo response body: %s", body if body is not None else response.text)

        if not response.is_success:
            logger.error("Expo push failed: %s %s", response.status_code, response.text[:500])
            raise PushGatewayError(response.status_code, response.text)

        return self._parse_tickets(body)

    @staticmethod
    def _parse_tickets(body) -> list[PushTicket]:
        """Извлекает тикеты из {"data": [...]}; неизвестный формат -> []."""
        raw = body.get("data") if isinstance(body, dict) else None
        if isinstance(raw, dict):
            raw = [raw]
        if not isinstance(raw, list):
            return []

        tickets = []
        for item in raw:
            try:
                ticket = PushTicket.model_validate(item)
            except ValueError:
                logger.warning("Unrecognized push ticket: %s", item)
                continue
            if ticket.status == "error":
                logger.warning(
                    "Push ticket error: %s (details: %s)", ticket.message, ticket.details
                )
            tickets.append(ticket)
        return tickets


def get_push_gateway() -> PushGatewayClient:
    """Зависимость FastAPI: клиент шлюза из настроек."""
    return PushGatewayClient(settings.PUSH_GATEWAY_URL, settings.PUSH_GATEWAY_TIMEOUT)
