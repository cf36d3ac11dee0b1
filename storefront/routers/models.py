"""Request models for the cart API."""
from typing import Any, Optional

from pydantic import BaseModel


class AddToCartRequest(BaseModel):
    product: dict[str, Any]
    size: Optional[dict[str, Any]] = None
    size_label: Optional[str] = None  # resolved from the product's size options


class UpdateCartItemRequest(BaseModel):
    quantity: int = 1
