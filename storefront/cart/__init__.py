"""Cart package: models, storage port, and engine."""
from .models import LineItem, Product, SizeOption
from .service import CartEngine, get_cart_engine
from .storage import (
    CartStorage,
    FileCartStorage,
    MemoryCartStorage,
    RedisCartStorage,
    get_cart_storage,
)

__all__ = [
    "LineItem",
    "Product",
    "SizeOption",
    "CartEngine",
    "get_cart_engine",
    "CartStorage",
    "FileCartStorage",
    "MemoryCartStorage",
    "RedisCartStorage",
    "get_cart_storage",
]
