"""Order notification API endpoints.

Lets the order-management system push messages to LINE users:
- Order status updates to the customer
- New-order summaries to the shop admin
- A fixed test message for checking a user id
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from order_relay.line.client import DeliveryError
from order_relay.models import (
    AdminOrderNotificationRequest,
    OrderNotificationRequest,
    TestNotificationRequest,
)
from order_relay.notify.formatters import (
    TEST_NOTIFICATION,
    format_admin_order,
    format_order_status,
)

if TYPE_CHECKING:
    from order_relay.line.client import LineMessagingClient

logger = logging.getLogger(__name__)


def create_notify_router(
    messaging: LineMessagingClient,
    admin_user_id: str | None = None,
) -> APIRouter:
    """Create the notification API router."""
    router = APIRouter(prefix="/api")

    @router.post("/notify-order-status")
    async def notify_order_status(request: Request) -> JSONResponse:
        """Push an order status update to the ordering customer."""
        body = await _read_body(request, OrderNotificationRequest)
        if isinstance(body, JSONResponse):
            return body
        if not body.recipient_user_id:
            return _error("LINE User ID is required", status_code=400)

        text = format_order_status(body.status_code, body.order_number, body.order_total)
        try:
            await messaging.push(body.recipient_user_id, text)
        except DeliveryError as e:
            logger.exception("Order status notification failed for #%s", body.order_number)
            return _error("Failed to send notification", status_code=500, details=str(e))
        except Exception as e:
            logger.exception("Unexpected error notifying order #%s", body.order_number)
            return _error("Failed to send notification", status_code=500, details=str(e))

        logger.info("Order #%s status '%s' sent", body.order_number, body.status_code)
        return JSONResponse({"success": True})

    @router.post("/notify-admin-order")
    async def notify_admin_order(request: Request) -> JSONResponse:
        """Push a new-order summary to the configured admin."""
        if not admin_user_id:
            return _error("Admin LINE user ID is not configured", status_code=500)

        body = await _read_body(request, AdminOrderNotificationRequest)
        if isinstance(body, JSONResponse):
            return body
        if not body.order_id:
            return _error("Order ID is required", status_code=400)

        try:
            await messaging.push(admin_user_id, format_admin_order(body))
        except DeliveryError as e:
            logger.exception("Admin notification failed for order %s", body.order_id)
            return _error("Failed to send admin notification", status_code=500, details=str(e))
        except Exception as e:
            logger.exception("Unexpected error notifying admin of order %s", body.order_id)
            return _error("Failed to send admin notification", status_code=500, details=str(e))

        logger.info("Admin notified of order %s", body.order_id)
        return JSONResponse({"success": True})

    @router.post("/test-notification")
    async def test_notification(request: Request) -> JSONResponse:
        body = await _read_body(request, TestNotificationRequest)
        if isinstance(body, JSONResponse):
            return body
        if not body.recipient_user_id:
            return _error("LINE User ID is required", status_code=400)

        try:
            await messaging.push(body.recipient_user_id, TEST_NOTIFICATION)
        except Exception as e:
            logger.exception("Test notification failed")
            return _error(str(e), status_code=500)

        return JSONResponse({"success": True, "message": "Test notification sent"})

    return router


async def _read_body(request: Request, model: type[BaseModel]) -> Any:
    """Validate the JSON body, or return a ready 400 response."""
    try:
        data = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        data = {}
    if not isinstance(data, dict):
        data = {}

    try:
        return model.model_validate(data)
    except ValidationError as e:
        problems = [
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        ]
        return _error("Invalid request body", status_code=400, details=problems)


def _error(message: str, status_code: int, details: Any = None) -> JSONResponse:
    content: dict[str, Any] = {"success": False, "error": message}
    if details is not None:
        content["details"] = details
    return JSONResponse(content, status_code=status_code)
