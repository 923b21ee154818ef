"""Notification (toast) endpoints."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response

from api.dependencies import get_stores
from models.api_responses import NotificationView
from stores import FarmStores


router = APIRouter()


@router.get("", response_model=List[NotificationView])
async def list_notifications(stores: FarmStores = Depends(get_stores)) -> List[NotificationView]:
    return [NotificationView(**n.to_dict()) for n in stores.notifier.active()]


@router.delete("/{notification_id}", status_code=204)
async def dismiss_notification(
    notification_id: str,
    stores: FarmStores = Depends(get_stores),
) -> Response:
    if not stores.notifier.dismiss(notification_id):
        raise HTTPException(status_code=404, detail=f"Notification {notification_id} not found")
    return Response(status_code=204)


@router.delete("", status_code=204)
async def clear_notifications(stores: FarmStores = Depends(get_stores)) -> Response:
    stores.notifier.clear()
    return Response(status_code=204)
