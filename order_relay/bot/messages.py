"""Canned chat replies."""

from __future__ import annotations

ORDER_LINK_TEMPLATE = "กดที่ลิงก์นี้เพื่อสั่งอาหาร 🍛\n👉 {link}"

SHOP_CLOSED = "ตอนนี้ร้านปิดแล้วค่ะ 🛑\nโปรดกลับมาสั่งอีกครั้งเมื่อร้านเปิดนะคะ 😊"

SHOP_OPEN_TEMPLATE = "ตอนนี้ร้านเปิดอยู่ค่ะ ✅\nพิมพ์ '{order_trigger}' เพื่อสั่งอาหารได้เลย 😊"

STATUS_UNAVAILABLE = (
    "ขออภัยค่ะ ไม่สามารถตรวจสอบสถานะร้านได้ในขณะนี้ ⚠️\n"
    "กรุณาลองใหม่อีกครั้งภายหลังนะคะ"
)

HELP_TEMPLATE = (
    "พิมพ์คำว่า '{order_trigger}' เพื่อเข้าสู่หน้าเว็บไซต์สั่งอาหาร\n"
    "หรือพิมพ์ '{status_trigger}' เพื่อดูว่าร้านเปิดอยู่หรือไม่ครับ 😊"
)


def order_link(base_url: str, user_id: str) -> str:
    return f"{base_url}?lineUserId={user_id}"


def help_text(order_trigger: str, status_trigger: str) -> str:
    return HELP_TEMPLATE.format(order_trigger=order_trigger, status_trigger=status_trigger)
