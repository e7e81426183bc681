"""
API endpoints для очереди напоминаний и запуска рассылки.
"""
import logging

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.security import verify_api_key
from app.schemas.notification import (
    DispatchErrorResponse,
    DispatchResponse,
    EmptyDispatchResponse,
    NotificationListResponse,
    NotificationTestCreate,
    ScheduledNotificationResponse,
)
from app.services.dispatch_service import DispatchService
from app.services.notification_service import NotificationService
from app.services.notification_store import NotificationStore
from app.services.push_gateway import PushGatewayClient, get_push_gateway

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/notifications",
    tags=["notifications"],
    dependencies=[Depends(verify_api_key)],
)


@router.post(
    "/send-due",
    responses={
        200: {"model": DispatchResponse},
        500: {"model": DispatchErrorResponse},
    },
)
async def send_due_notifications(
    db: Session = Depends(get_db),
    gateway: PushGatewayClient = Depends(get_push_gateway),
):
    """
    Запускает один цикл рассылки наступивших напоминаний.

    Вызывается внешним планировщиком (cron). Любая ошибка цикла
    возвращается как 500 с {"ok": false, "error": ...}.
    """
    service = DispatchService(NotificationStore(db), gateway)
    try:
        result = await service.run_dispatch_cycle()
    except Exception as e:
        logger.exception("send-due-notifications error")
        try:
            db.rollback()
        except Exception as rollback_error:
            logger.error("Rollback after failed dispatch cycle failed: %s", rollback_error)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=DispatchErrorResponse(error=str(e) or e.__class__.__name__).model_dump(),
        )

    if result.processed_rows == 0:
        return EmptyDispatchResponse()

    return DispatchResponse(
        processed_rows=result.processed_rows,
        sent_messages=result.sent_messages,
        updated_ids=result.updated_ids,
    )


@router.get("/pending", response_model=NotificationListResponse)
def get_pending_notifications(
    limit: int | None = Query(None, ge=1, le=1000),
    db: Session = Depends(get_db),
):
    """Получить напоминания, которые заберёт ближайший цикл рассылки."""
    service = NotificationService(db)
    notifications = service.get_pending(limit)

    return NotificationListResponse(
        items=[ScheduledNotificationResponse.model_validate(n) for n in notifications],
        total=len(notifications),
    )


@router.post(
    "/test",
    response_model=ScheduledNotificationResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_test_notification(data: NotificationTestCreate, db: Session = Depends(get_db)):
    """Поставить в очередь тестовое напоминание (уйдёт в ближайшем цикле)."""
    service = NotificationService(db)
    notification = service.create_test(data.user_id, data.title, data.body)
    return ScheduledNotificationResponse.model_validate(notification)
