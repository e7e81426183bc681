"""
Сервисный слой для бизнес-логики.
"""
from app.services.dispatch_service import DispatchService, DispatchResult
from app.services.notification_service import NotificationService
from app.services.notification_store import NotificationStore
from app.services.push_gateway import PushGatewayClient
from app.services.push_token_service import PushTokenService

__all__ = [
    "DispatchService",
    "DispatchResult",
    "NotificationService",
    "NotificationStore",
    "PushGatewayClient",
    "PushTokenService",
]
