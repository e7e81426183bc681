"""
Pydantic схемы для push-токенов.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class PushTokenRegister(BaseModel):
    """Регистрация / отзыв токена устройства."""
    user_id: str = Field(..., min_length=1)
    expo_push_token: str = Field(..., min_length=1, max_length=255)


class PushTokenResponse(BaseModel):
    """Схема ответа с данными токена."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    expo_push_token: str
    revoked: Optional[bool] = None
    is_active: bool
    created_at: datetime


class PushTokenListResponse(BaseModel):
    items: list[PushTokenResponse]
    total: int
