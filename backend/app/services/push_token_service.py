"""
Сервис для работы с push-токенами устройств.
"""
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import DuplicateError, NotFoundException
from app.core.utils import sanitize_text
from app.models.push_token import PushToken

logger = logging.getLogger(__name__)


class PushTokenService:
    """Регистрация и отзыв токенов."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, user_id: str, expo_push_token: str) -> PushToken | None:
        return (
            self.db.query(PushToken)
            .filter(
                PushToken.user_id == user_id,
                PushToken.expo_push_token == expo_push_token,
            )
            .first()
        )

    def list_for_user(self, user_id: str) -> list[PushToken]:
        """Все токены пользователя, включая отозванные."""
        return (
            self.db.query(PushToken)
            .filter(PushToken.user_id == user_id)
            .order_by(PushToken.id)
            .all()
        )

    def register(self, user_id: str, expo_push_token: str) -> PushToken:
        """
        Регистрирует токен устройства.
        Повторная регистрация отозванного токена снова делает его активным.
        """
        token_value = sanitize_text(expo_push_token, max_length=255)
        token = self.get(user_id, token_value)
        if token is None:
            token = PushToken(user_id=user_id, expo_push_token=token_value, revoked=False)
            self.db.add(token)
            logger.info("Registered push token for user %s", user_id)
        elif token.revoked:
            token.revoked = False
            logger.info("Reactivated push token for user %s", user_id)

        try:
            self.db.flush()
        except IntegrityError:
            # Параллельная регистрация того же токена успела раньше
            self.db.rollback()
            logger.warning("Duplicate push token registration for user %s", user_id)
            raise DuplicateError(f"Push token for user {user_id} is already registered")
        self.db.refresh(token)
        return token

    def revoke(self, user_id: str, expo_push_token: str) -> PushToken:
        """Помечает токен отозванным; рассылка его больше не использует."""
        token = self.get(user_id, expo_push_token)
        if token is None:
            raise NotFoundException("Push token for user", user_id)
        token.revoked = True
        self.db.flush()
        self.db.refresh(token)
        logger.info("Revoked push token %s for user %s", token.id, user_id)
        return token
