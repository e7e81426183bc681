"""
Модель запланированного push-напоминания.
"""
import uuid
from datetime import datetime
from typing import Any, Optional

from sqlalchemy import String, DateTime, Boolean, JSON, Index
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base
from app.core.utils import now_utc


def _new_id() -> str:
    return str(uuid.uuid4())


class ScheduledNotification(Base):
    """Напоминание в очереди на отправку."""
    __tablename__ = "scheduled_notifications"
    __table_args__ = (
        Index("ix_scheduled_notifications_due", "sent", "scheduled_at"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    event_type: Mapped[str] = mapped_column(String, nullable=False)  # meeting, task, tour, test
    event_id: Mapped[str] = mapped_column(String, nullable=False)
    user_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    notif_type: Mapped[str] = mapped_column(String, nullable=False)  # morning, before_start, reminder, test
    scheduled_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    sent: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    sent_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    payload: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=now_utc)
