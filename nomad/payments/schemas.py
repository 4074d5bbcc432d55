"""
Schemas for the store checkout.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, Field


class CartItem(BaseModel):
    """A validated cart line."""

    id: Optional[str] = None
    name: str
    price: float = Field(description="Unit price in dollars")
    description: str = ""
    quantity: int = Field(default=1, ge=1)


class CheckoutRequest(BaseModel):
    """Raw checkout body; items are validated by the endpoint."""

    items: Optional[Any] = None


class CheckoutResponse(BaseModel):
    sessionId: str


class StripeEnvironment(BaseModel):
    hasSecretKey: bool
    hasPublishableKey: bool
    hasWebhookSecret: bool
    secretKeyPrefix: str
    publishableKeyPrefix: str


class StripeConfigResponse(BaseModel):
    environment: StripeEnvironment


def is_valid_item(item: Any) -> bool:
    """An item needs a name and a non-zero numeric price."""
    if not isinstance(item, dict) or not item.get("name"):
        return False
    price = item.get("price")
    return isinstance(price, (int, float)) and not isinstance(price, bool) and price != 0


def parse_cart(items: Any) -> List[CartItem]:
    """Build CartItems; raises ValueError with a user-facing message."""
    if not isinstance(items, list):
        raise ValueError("Items array is required")
    if not items:
        raise ValueError("Cart cannot be empty")
    for item in items:
        if not is_valid_item(item):
            raise ValueError("Invalid item structure")
    return [
        CartItem(
            id=str(item["id"]) if item.get("id") is not None else None,
            name=item["name"],
            price=item["price"],
            description=item.get("description") or "",
            quantity=item.get("quantity") or 1,
        )
        for item in items
    ]
