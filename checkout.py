import os
from typing import List, Optional
from urllib.parse import quote

from schemas import OrderItem

WHATSAPP_NUMBER = os.getenv("WHATSAPP_NUMBER", "917010452495")


def order_total(items: List[OrderItem]) -> float:
    return round(sum(item.product.price * item.quantity for item in items), 2)


def _money(amount: float) -> str:
    return f"{amount:.2f}".rstrip("0").rstrip(".")


def _line(item: OrderItem) -> str:
    name = item.product.name
    if item.variant is not None:
        details = [d for d in (item.variant.ram, item.variant.storage, item.variant.color) if d]
        if details:
            name = f"{name} ({' / '.join(details)})"
    return f"{name} x{item.quantity} - ₹{_money(item.product.price * item.quantity)}"


def whatsapp_message(
    items: List[OrderItem],
    total: float,
    address: str,
    name: Optional[str] = None,
    phone: Optional[str] = None,
) -> str:
    lines = [f"Order from {name or 'Customer'}"]
    if phone:
        lines.append(f"Phone: {phone}")
    lines.append(f"Address: {address}")
    lines.append("")
    lines.append("Products:")
    lines.extend(_line(item) for item in items)
    lines.append("")
    lines.append(f"Total: ₹{_money(total)}")
    return "\n".join(lines)


def whatsapp_link(message: str, number: str = WHATSAPP_NUMBER) -> str:
    return f"https://wa.me/{number}?text={quote(message)}"
