"""
Сервис для просмотра очереди напоминаний и тестовых отправок.
"""
import logging
import uuid
from typing import Optional

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.utils import now_utc, sanitize_text
from app.models.scheduled_notification import ScheduledNotification
from app.services.notification_store import NotificationStore

logger = logging.getLogger(__name__)


class NotificationService:
    """Сервис для управления очередью напоминаний."""

    def __init__(self, db: Session):
        self.db = db

    def get_pending(self, limit: Optional[int] = None) -> list[ScheduledNotification]:
        """Строки, которые заберёт ближайший цикл рассылки."""
        store = NotificationStore(self.db)
        return store.fetch_due(limit or settings.DISPATCH_BATCH_SIZE)

    def create_test(
        self,
        user_id: str,
        title: Optional[str] = None,
        body: Optional[str] = None,
    ) -> ScheduledNotification:
        """Ставит в очередь тестовое напоминание, которое уже наступило."""
        payload = {}
        if title:
            payload["title"] = sanitize_text(title, max_length=200)
        if body:
            payload["body"] = sanitize_text(body)

        notification = ScheduledNotification(
            event_type="test",
            event_id=f"test-{uuid.uuid4()}",
            user_id=user_id,
            notif_type="test",
            scheduled_at=now_utc(),
            sent=False,
            payload=payload,
        )
        self.db.add(notification)
        self.db.flush()
        self.db.refresh(notification)
        logger.info("Scheduled test notification %s for user %s", notification.id, user_id)
        return notification
