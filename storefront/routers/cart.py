"""
Cart Router

JSON endpoints over the single CartEngine held on ``app.state``.
Handlers are async so mutations run on the event loop one at a time.
"""
from fastapi import APIRouter, HTTPException, Request

from storefront.cart import CartEngine, Product
from storefront.errors import CartStorageError, ERROR_CART_STORAGE_UNAVAILABLE
from storefront.logging import get_logger
from .models import AddToCartRequest, UpdateCartItemRequest

logger = get_logger(__name__)

router = APIRouter(prefix="/api/cart", tags=["cart"])


def _engine(request: Request) -> CartEngine:
    return request.app.state.cart_engine


def _storage_unavailable(e: CartStorageError) -> HTTPException:
    logger.error(f"Cart mutation not persisted: {e}")
    return HTTPException(status_code=503, detail=ERROR_CART_STORAGE_UNAVAILABLE)


@router.get("")
async def get_cart(request: Request):
    """Get the cart summary."""
    return _engine(request).summary()


@router.post("/items")
async def add_to_cart(body: AddToCartRequest, request: Request):
    """Add one unit of a product, optionally a size variant."""
    engine = _engine(request)
    size = body.size
    if size is None and body.size_label:
        option = Product.from_data(body.product).find_size(body.size_label)
        if option is None:
            raise HTTPException(status_code=400, detail=f"Unknown size: {body.size_label}")
        size = option
    try:
        engine.add(body.product, size)
    except CartStorageError as e:
        raise _storage_unavailable(e) from e
    return engine.summary()


@router.patch("/items/{index}")
async def update_cart_item(index: int, body: UpdateCartItemRequest, request: Request):
    """Set a line's quantity (minimum 1)."""
    engine = _engine(request)
    try:
        engine.update_quantity(index, body.quantity)
    except CartStorageError as e:
        raise _storage_unavailable(e) from e
    return engine.summary()


@router.delete("/items/{index}")
async def remove_cart_item(index: int, request: Request):
    """Remove a line from the cart."""
    engine = _engine(request)
    try:
        engine.remove(index)
    except CartStorageError as e:
        raise _storage_unavailable(e) from e
    return engine.summary()


@router.delete("")
async def clear_cart(request: Request):
    """Empty the cart."""
    engine = _engine(request)
    try:
        engine.clear()
    except CartStorageError as e:
        raise _storage_unavailable(e) from e
    return engine.summary()
