"""
Модели SQLAlchemy: импортируем все, чтобы Base.metadata знал о таблицах.
"""
from app.models.scheduled_notification import ScheduledNotification  # noqa: F401
from app.models.push_token import PushToken  # noqa: F401
