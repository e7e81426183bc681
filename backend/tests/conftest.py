"""
Тестовая инфраструктура: фикстуры для SQLite in-memory, FastAPI TestClient
и подменённого push-шлюза.
"""
import os

os.environ["API_KEY"] = "test-api-key"
os.environ["DATABASE_URL"] = "sqlite://"

import json
from datetime import timedelta

import httpx
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from app.core.database import Base, get_db
from app.core.utils import now_utc
from app.main import app as fastapi_app
from app.models.push_token import PushToken
from app.models.scheduled_notification import ScheduledNotification
from app.services.push_gateway import PushGatewayClient, get_push_gateway

GATEWAY_URL = "https://push.test/--/api/v2/push/send"


# SQLite in-memory с StaticPool: одна БД для всех connections
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(bind=engine)


@pytest.fixture(autouse=True)
def setup_database():
    """Создаёт все таблицы перед каждым тестом и удаляет после."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session() -> Session:
    """Фикстура тестовой сессии БД."""
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


class RecordingGateway:
    """
    Подмена Expo: запоминает каждый запрос и отвечает заданным статусом.
    """

    def __init__(self):
        self.requests: list[list[dict]] = []
        self.status_code = 200

    def handler(self, request: httpx.Request) -> httpx.Response:
        messages = json.loads(request.content)
        self.requests.append(messages)
        if self.status_code >= 400:
            return httpx.Response(self.status_code, json={"errors": [{"code": "PUSH_TOO_MANY_EXPERIENCE_IDS"}]})
        return httpx.Response(
            self.status_code,
            json={"data": [{"status": "ok", "id": f"ticket-{i}"} for i, _ in enumerate(messages)]},
        )

    def client(self) -> PushGatewayClient:
        return PushGatewayClient(GATEWAY_URL, transport=httpx.MockTransport(self.handler))

    @property
    def sent_messages(self) -> list[dict]:
        return [m for batch in self.requests for m in batch]


@pytest.fixture
def gateway() -> RecordingGateway:
    return RecordingGateway()


def _make_client(db_session: Session, gateway: RecordingGateway, headers: dict | None = None):
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    fastapi_app.dependency_overrides[get_db] = override_get_db
    fastapi_app.dependency_overrides[get_push_gateway] = gateway.client
    return TestClient(fastapi_app, raise_server_exceptions=False, headers=headers or {})


@pytest.fixture
def client_no_auth(db_session: Session, gateway: RecordingGateway) -> TestClient:
    """FastAPI TestClient БЕЗ API-ключа (для тестов безопасности)."""
    with _make_client(db_session, gateway) as c:
        yield c
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def client(db_session: Session, gateway: RecordingGateway) -> TestClient:
    """FastAPI TestClient с подменённой БД, шлюзом и API-ключом."""
    with _make_client(db_session, gateway, {"X-API-Key": "test-api-key"}) as c:
        yield c
    fastapi_app.dependency_overrides.clear()


# --- Вспомогательные функции для создания тестовых данных ---

def create_notification(
    db: Session,
    user_id: str = "u1",
    minutes_from_now: int = -5,
    payload: dict | None = None,
    sent: bool = False,
    **kwargs,
) -> ScheduledNotification:
    """Создаёт строку очереди; отрицательное смещение: уже наступила."""
    row = ScheduledNotification(
        event_type=kwargs.pop("event_type", "meeting"),
        event_id=kwargs.pop("event_id", "m1"),
        user_id=user_id,
        notif_type=kwargs.pop("notif_type", "before_start"),
        scheduled_at=now_utc() + timedelta(minutes=minutes_from_now),
        sent=sent,
        payload=payload,
        **kwargs,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def create_token(db: Session, user_id: str, token: str, revoked: bool | None = False) -> PushToken:
    """Создаёт push-токен пользователя."""
    row = PushToken(user_id=user_id, expo_push_token=token, revoked=revoked)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row
