"""
Pydantic схемы для напоминаний и push-сообщений.
"""
from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_TITLE = "Upcoming event"
DEFAULT_BODY = "You have an upcoming event."


class NotificationPayload(BaseModel):
    """
    Свободный payload строки: title/body известны,
    всё остальное сохраняется как есть и уходит в data сообщения.
    """
    model_config = ConfigDict(extra="allow")

    title: Any = None
    body: Any = None

    @property
    def message_title(self) -> str:
        return self.title if isinstance(self.title, str) else DEFAULT_TITLE

    @property
    def message_body(self) -> str:
        return self.body if isinstance(self.body, str) else DEFAULT_BODY


class PushMessage(BaseModel):
    """Одно исходящее сообщение для Expo push API."""
    to: str
    sound: Optional[str] = "default"
    title: str
    body: str
    data: dict[str, Any] = Field(default_factory=dict)


class PushTicket(BaseModel):
    """Тикет из ответа шлюза (по одному на сообщение)."""
    model_config = ConfigDict(extra="allow")

    status: Literal["ok", "error"]
    id: Optional[str] = None
    message: Optional[str] = None
    details: Optional[dict[str, Any]] = None


class ScheduledNotificationResponse(BaseModel):
    """Схема ответа с данными напоминания."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    event_type: str
    event_id: str
    user_id: str
    notif_type: str
    scheduled_at: datetime
    sent: bool
    sent_at: Optional[datetime] = None
    payload: Optional[dict[str, Any]] = None


class NotificationListResponse(BaseModel):
    """Схема списка напоминаний."""
    items: list[ScheduledNotificationResponse]
    total: int


class NotificationTestCreate(BaseModel):
    """Запрос на тестовое напоминание пользователю."""
    user_id: str = Field(..., min_length=1)
    title: Optional[str] = Field(None, max_length=200)
    body: Optional[str] = Field(None, max_length=1000)


class DispatchResponse(BaseModel):
    """Итог цикла рассылки."""
    ok: bool = True
    processed_rows: int
    sent_messages: int
    updated_ids: list[str]


class EmptyDispatchResponse(BaseModel):
    """Ответ, когда очередь пуста."""
    ok: bool = True
    processed: int = 0
    message: str = "No due notifications"


class DispatchErrorResponse(BaseModel):
    ok: bool = False
    error: str
