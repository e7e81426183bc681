"""
Доступ к таблицам scheduled_notifications и push_tokens для рассылки.

Три узкие операции: выборка due-строк, активные токены пользователя,
пакетная пометка отправленных.
"""
import logging
from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import MarkSentError
from app.core.utils import now_utc
from app.models.push_token import PushToken
from app.models.scheduled_notification import ScheduledNotification

logger = logging.getLogger(__name__)


def is_active_token(revoked) -> bool:
    """Активен, если revoked равен False или отсутствует (NULL)."""
    return revoked is None or revoked is False


class NotificationStore:
    """Хранилище очереди напоминаний поверх SQLAlchemy-сессии."""

    def __init__(self, db: Session):
        self.db = db

    def fetch_due(self, limit: int, now: datetime | None = None) -> list[ScheduledNotification]:
        """Неотправленные строки с scheduled_at <= now, старые первыми."""
        now = now or now_utc()
        rows = self.db.scalars(
            select(ScheduledNotification)
            .where(
                ScheduledNotification.sent.is_(False),
                ScheduledNotification.scheduled_at <= now,
            )
            .order_by(ScheduledNotification.scheduled_at.asc())
            .limit(limit)
        ).all()
        logger.info("fetch_due got %s rows", len(rows))
        return list(rows)

    def fetch_active_tokens(self, user_id: str) -> list[str]:
        """Токены пользователя без фильтра в SQL; revoked проверяется здесь."""
        result = self.db.execute(
            select(PushToken.expo_push_token, PushToken.revoked)
            .where(PushToken.user_id == user_id)
            .order_by(PushToken.id)
        ).all()
        tokens = [token for token, revoked in result if is_active_token(revoked)]
        logger.debug("Tokens for user %s: %s of %s active", user_id, len(tokens), len(result))
        return tokens

    def mark_sent(self, ids: list[str], now: datetime | None = None) -> None:
        """Одним UPDATE помечает строки отправленными и фиксирует транзакцию."""
        if not ids:
            return
        now = now or now_utc()
        try:
            self.db.execute(
                update(ScheduledNotification)
                .where(ScheduledNotification.id.in_(ids))
                .values(sent=True, sent_at=now)
                .execution_options(synchronize_session="fetch")
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("markAsSent error for %s rows: %s", len(ids), e)
            raise MarkSentError(ids, str(e)) from e
        logger.info("Marked %s notifications as sent", len(ids))
