"""
Модель push-токена устройства (Expo).
"""
from datetime import datetime
from typing import Optional

from sqlalchemy import Integer, String, DateTime, Boolean, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base
from app.core.utils import now_utc


class PushToken(Base):
    """Зарегистрированный токен устройства пользователя."""
    __tablename__ = "push_tokens"
    __table_args__ = (
        UniqueConstraint("user_id", "expo_push_token", name="uq_push_tokens_user_token"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    expo_push_token: Mapped[str] = mapped_column(String, nullable=False)
    # NULL считается активным токеном (исторический дефолт колонки)
    revoked: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=now_utc)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=now_utc, onupdate=now_utc
    )

    @property
    def is_active(self) -> bool:
        return self.revoked is None or self.revoked is False
