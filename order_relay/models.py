"""Shared Pydantic data models for the order relay HTTP API."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

# --- Enums ---


class PaymentMethod(str, Enum):
    ONLINE = "online"
    CASH = "cash"
    OTHER = "other"


# --- Shop Models ---


class ShopStatus(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_open: bool


# --- Notification Requests ---


class OrderNotificationRequest(BaseModel):
    """Body of POST /api/notify-order-status."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    recipient_user_id: str | None = Field(default=None, alias="lineUserId")
    order_number: str = Field(default="", alias="orderNumber")
    status_code: str = Field(default="", alias="status")
    order_total: float | None = Field(default=None, alias="orderTotal")

    @field_validator("order_number", "status_code", mode="before")
    @classmethod
    def _coerce_str(cls, value: object) -> object:
        # Order numbers arrive as either JSON strings or integers.
        if value is None:
            return ""
        if isinstance(value, int | float) and not isinstance(value, bool):
            return str(value)
        return value


class OrderItem(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    quantity: int = 1
    size: str | None = None
    add_egg: bool = Field(default=False, alias="addEgg")
    note: str | None = None


class AdminOrderNotificationRequest(BaseModel):
    """Body of POST /api/notify-admin-order."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    order_id: str | None = Field(default=None, alias="orderId")
    customer_name: str | None = Field(default=None, alias="customerName")
    total_amount: float = Field(default=0, alias="totalAmount")
    items: list[OrderItem] | None = None
    customer_phone: str | None = Field(default=None, alias="customerPhone")
    order_note: str | None = Field(default=None, alias="orderNote")
    payment_method: PaymentMethod = Field(default=PaymentMethod.OTHER, alias="paymentMethod")
    slip_url: str | None = Field(default=None, alias="slipUrl")

    @field_validator("order_id", "customer_phone", mode="before")
    @classmethod
    def _coerce_to_str(cls, value: object) -> object:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("payment_method", mode="before")
    @classmethod
    def _fold_unknown_payment(cls, value: object) -> object:
        if value is None:
            return PaymentMethod.OTHER
        if isinstance(value, str) and value.lower() in {m.value for m in PaymentMethod}:
            return value.lower()
        return PaymentMethod.OTHER


class TestNotificationRequest(BaseModel):
    """Body of POST /api/test-notification."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    recipient_user_id: str | None = Field(default=None, alias="lineUserId")
