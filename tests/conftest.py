"""Pytest configuration and fixtures"""
import os
import pytest
from unittest.mock import Mock, AsyncMock

# Set test environment variables
os.environ.setdefault("CART_STORAGE_BACKEND", "memory")
os.environ.setdefault("SESSION_BACKEND", "memory")
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test_key")

from storefront.cart import CartEngine, MemoryCartStorage  # noqa: E402
from storefront.routing import Route, RouteCategory, RouteTable  # noqa: E402


@pytest.fixture
def memory_storage():
    """Empty in-memory durable slot"""
    return MemoryCartStorage()


@pytest.fixture
def cart_engine(memory_storage):
    """Cart engine over the in-memory slot"""
    return CartEngine(memory_storage, key="cart")


@pytest.fixture
def sample_product():
    """Product without size options"""
    return {
        "id": "p1",
        "category_id": "cat-1",
        "name": "Brigadeiro",
        "image_url": "https://cdn.test/brigadeiro.png",
        "base_price": 10,
        "has_size_options": False,
        "active": True,
    }


@pytest.fixture
def sized_product():
    """Product sold in 5 and 10 portion sizes"""
    return {
        "id": "p2",
        "category_id": "cat-1",
        "name": "Bolo de pote",
        "base_price": 12,
        "has_size_options": True,
        "size_5p_price": 25,
        "size_10p_price": 45,
        "active": True,
    }


@pytest.fixture
def route_table():
    """Small table with an '/admin' namespace"""
    return RouteTable(
        [
            Route("/", "home"),
            Route("/categoria/:slug", "category"),
            Route("/admin", "admin-login", RouteCategory.PUBLIC_WITHIN_PRIVILEGED_NAMESPACE),
            Route("/admin/recuperar", "admin-forgot", RouteCategory.PUBLIC_WITHIN_PRIVILEGED_NAMESPACE),
            Route("/admin/dashboard", "admin-dashboard", RouteCategory.PRIVILEGED),
        ],
        privileged_prefix="/admin",
        login_path="/admin",
    )


@pytest.fixture
def session_oracle():
    """Oracle reporting a live session"""
    oracle = Mock()
    oracle.get_session = AsyncMock(return_value={"user_id": "admin-1"})
    return oracle


@pytest.fixture
def no_session_oracle():
    """Oracle reporting no session"""
    oracle = Mock()
    oracle.get_session = AsyncMock(return_value=None)
    return oracle
