"""
Рассылка наступивших напоминаний.

Один цикл: выборка due-строк -> токены получателей -> один запрос в шлюз ->
пометка отправленных. Строка помечается только после успешного ответа шлюза,
поэтому любой сбой оставляет её в очереди на следующий цикл (at-least-once).
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from starlette.concurrency import run_in_threadpool

from app.core.config import settings
from app.core.utils import now_utc
from app.models.scheduled_notification import ScheduledNotification
from app.schemas.notification import NotificationPayload, PushMessage
from app.services.notification_store import NotificationStore
from app.services.push_gateway import PushGatewayClient

logger = logging.getLogger(__name__)


@dataclass
class DispatchResult:
    """Итог одного цикла."""
    processed_rows: int = 0
    sent_messages: int = 0
    updated_ids: list[str] = field(default_factory=list)


def build_messages(row: ScheduledNotification, tokens: list[str]) -> list[PushMessage]:
    """По одному сообщению на каждый токен (fan-out)."""
    raw = row.payload if isinstance(row.payload, dict) else {}
    payload = NotificationPayload.model_validate(raw)
    data = {
        **raw,
        "event_type": row.event_type,
        "event_id": row.event_id,
        "notif_type": row.notif_type,
    }
    return [
        PushMessage(
            to=token,
            sound="default",
            title=payload.message_title,
            body=payload.message_body,
            data=dict(data),
        )
        for token in tokens
    ]


class DispatchService:
    """Сервис рассылки due-напоминаний."""

    def __init__(
        self,
        store: NotificationStore,
        gateway: PushGatewayClient,
        batch_size: Optional[int] = None,
    ):
        self.store = store
        self.gateway = gateway
        self.batch_size = batch_size if batch_size is not None else settings.DISPATCH_BATCH_SIZE

    async def run_dispatch_cycle(self, now: Optional[datetime] = None) -> DispatchResult:
        """
        Выполняет один цикл рассылки.

        Ошибки хранилища и шлюза пробрасываются вызывающему; в этом случае
        ни одна строка не помечается отправленной. Синхронные вызовы хранилища
        выполняются в threadpool, чтобы не блокировать event loop.
        """
        now = now or now_utc()
        rows = await run_in_threadpool(self.store.fetch_due, self.batch_size, now)
        if not rows:
            logger.info("No due notifications")
            return DispatchResult()

        messages: list[PushMessage] = []
        ids_to_mark: list[str] = []
        tokens_by_user: dict[str, list[str]] = {}

        for row in rows:
            if row.user_id not in tokens_by_user:
                tokens_by_user[row.user_id] = await run_in_threadpool(
                    self.store.fetch_active_tokens, row.user_id
                )
            tokens = tokens_by_user[row.user_id]
            if not tokens:
                logger.info("No tokens for user %s, notification %s stays pending", row.user_id, row.id)
                continue

            messages.extend(build_messages(row, tokens))
            ids_to_mark.append(row.id)

        logger.info("Prepared %s push messages for %s rows", len(messages), len(ids_to_mark))

        if messages:
            await self.gateway.send(messages)

        await run_in_threadpool(self.store.mark_sent, ids_to_mark)

        return DispatchResult(
            processed_rows=len(rows),
            sent_messages=len(messages),
            updated_ids=ids_to_mark,
        )
