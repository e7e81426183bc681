"""
API endpoints для регистрации push-токенов устройств.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.security import verify_api_key
from app.schemas.push_token import (
    PushTokenListResponse,
    PushTokenRegister,
    PushTokenResponse,
)
from app.services.push_token_service import PushTokenService

router = APIRouter(
    prefix="/push-tokens",
    tags=["push-tokens"],
    dependencies=[Depends(verify_api_key)],
)


@router.post("", response_model=PushTokenResponse, status_code=status.HTTP_201_CREATED)
def register_push_token(data: PushTokenRegister, db: Session = Depends(get_db)):
    """Зарегистрировать токен устройства пользователя."""
    service = PushTokenService(db)
    token = service.register(data.user_id, data.expo_push_token)
    return PushTokenResponse.model_validate(token)


@router.post("/revoke", response_model=PushTokenResponse)
def revoke_push_token(data: PushTokenRegister, db: Session = Depends(get_db)):
    """Отозвать токен (например, при выходе из аккаунта)."""
    service = PushTokenService(db)
    token = service.revoke(data.user_id, data.expo_push_token)
    return PushTokenResponse.model_validate(token)


@router.get("/{user_id}", response_model=PushTokenListResponse)
def list_push_tokens(user_id: str, db: Session = Depends(get_db)):
    """Все токены пользователя, включая отозванные."""
    service = PushTokenService(db)
    tokens = service.list_for_user(user_id)
    return PushTokenListResponse(
        items=[PushTokenResponse.model_validate(t) for t in tokens],
        total=len(tokens),
    )
