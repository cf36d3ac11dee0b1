"""
Storefront FastAPI Application

Wires the two independent components together:
- AdminGuardMiddleware in front of every request
- Cart API over a single CartEngine
"""
from typing import Callable, Optional

from fastapi import FastAPI
from starlette.requests import Request

from storefront import __version__
from storefront.cart import CartEngine
from storefront.cart.storage import CartStorage, get_cart_storage
from storefront.routers import cart_router
from storefront.routing import (
    AdminGuardMiddleware,
    DEFAULT_ROUTE_TABLE,
    RouteTable,
    SessionOracle,
    session_oracle_from_request,
)


def create_app(
    storage: Optional[CartStorage] = None,
    routes: RouteTable = DEFAULT_ROUTE_TABLE,
    oracle_factory: Callable[[Request], SessionOracle] = session_oracle_from_request,
) -> FastAPI:
    """Build the application. Storage defaults to CART_STORAGE_BACKEND."""
    app = FastAPI(title="Storefront", version=__version__)
    app.state.cart_engine = CartEngine(storage if storage is not None else get_cart_storage())

    app.add_middleware(AdminGuardMiddleware, routes=routes, oracle_factory=oracle_factory)
    app.include_router(cart_router)

    @app.get("/api/health")
    async def health_check():
        return {"status": "ok", "version": __version__}

    return app
