"""Text rendering for order notifications.

Both formatters are pure: the same input always renders the same text.
Required-field validation belongs to the HTTP handlers, not here.
"""

from __future__ import annotations

from order_relay.models import AdminOrderNotificationRequest, OrderItem, PaymentMethod

NO_ITEMS_PLACEHOLDER = "- ไม่มีรายการอาหาร -"
UNSPECIFIED = "ไม่ระบุ"
TEST_NOTIFICATION = "🔔 ทดสอบการแจ้งเตือนจากระบบร้านอาหาร\nหากได้รับข้อความนี้ แปลว่าระบบแจ้งเตือนทำงานปกติค่ะ ✅"

_ACCEPTED = {"accepted", "confirmed"}
_REJECTED = {"rejected", "declined"}
_PREPARING = {"preparing", "cooking"}
_READY = {"ready"}

_PAYMENT_LABELS = {
    PaymentMethod.ONLINE: "โอนเงิน / ชำระออนไลน์",
    PaymentMethod.CASH: "เงินสด",
    PaymentMethod.OTHER: "อื่นๆ",
}

# Sizes that need no annotation on an item line.
_DEFAULT_SIZES = {"", "normal", "regular", "ธรรมดา"}


def format_amount(amount: float | int) -> str:
    """Render a baht amount, dropping a zero fractional part (150.0 -> 150)."""
    if isinstance(amount, float) and amount.is_integer():
        return str(int(amount))
    return str(amount)


def format_order_status(
    status_code: str,
    order_number: str,
    order_total: float | None,
) -> str:
    """Map an order status code to the customer-facing notification text."""
    status = status_code.strip().lower()
    total_line = (
        f"\n💰 ยอดรวม: {format_amount(order_total)}฿" if order_total is not None else ""
    )

    if status in _ACCEPTED:
        return f"✅ ออเดอร์ #{order_number} ได้รับการยืนยันแล้ว!{total_line}"
    if status in _REJECTED:
        return f"❌ ออเดอร์ #{order_number} ถูกปฏิเสธ\nขออภัยในความไม่สะดวกค่ะ 🙏"
    if status in _PREPARING:
        return f"👨‍🍳 ออเดอร์ #{order_number} กำลังเตรียมอาหาร"
    if status in _READY:
        return f"🎉 ออเดอร์ #{order_number} พร้อมแล้ว! มารับได้เลยค่ะ 🍱{total_line}"
    return f"📋 สถานะออเดอร์ #{order_number}: {status_code}{total_line}"


def format_item(index: int, item: OrderItem) -> str:
    line = f"{index}. {item.name} x{item.quantity}"
    if item.size and item.size.strip().lower() not in _DEFAULT_SIZES:
        line += f" (ขนาด: {item.size.strip()})"
    if item.add_egg:
        line += " (เพิ่มไข่ดาว)"
    if item.note and item.note.strip():
        line += f" (หมายเหตุ: {item.note.strip()})"
    return line


def format_admin_order(request: AdminOrderNotificationRequest) -> str:
    """Render the new-order summary pushed to the shop admin."""
    lines = [
        "🛎️ มีออเดอร์ใหม่เข้ามา!",
        f"🧾 รหัสออเดอร์: {request.order_id}",
    ]
    if request.customer_name:
        lines.append(f"👤 ลูกค้า: {request.customer_name}")
    lines += [
        f"📞 เบอร์โทร: {request.customer_phone or UNSPECIFIED}",
        f"💰 ยอดรวม: {format_amount(request.total_amount)}฿",
        f"💳 ชำระเงิน: {_PAYMENT_LABELS[request.payment_method]}",
        "",
        "📋 รายการอาหาร:",
    ]

    if request.items:
        lines += [format_item(i, item) for i, item in enumerate(request.items, start=1)]
    else:
        lines.append(NO_ITEMS_PLACEHOLDER)

    if request.order_note and request.order_note.strip():
        lines += ["", f"📝 หมายเหตุ: {request.order_note.strip()}"]
    if request.slip_url:
        lines += ["", f"🧾 สลิปการโอน: {request.slip_url}"]

    return "\n".join(lines)
