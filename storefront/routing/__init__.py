"""Routing package: route table, session oracles, navigation guard."""
from .guard import NavigationDecision, NavigationGuard
from .middleware import AdminGuardMiddleware
from .routes import (
    DEFAULT_ROUTE_TABLE,
    DEFAULT_ROUTES,
    Route,
    RouteCategory,
    RouteTable,
    normalize_path,
)
from .session import (
    MemorySessionOracle,
    SessionOracle,
    SupabaseSessionOracle,
    create_admin_session,
    revoke_admin_session,
    session_oracle_from_request,
    verify_admin_session_token,
)

__all__ = [
    "NavigationDecision",
    "NavigationGuard",
    "AdminGuardMiddleware",
    "DEFAULT_ROUTE_TABLE",
    "DEFAULT_ROUTES",
    "Route",
    "RouteCategory",
    "RouteTable",
    "normalize_path",
    "MemorySessionOracle",
    "SessionOracle",
    "SupabaseSessionOracle",
    "create_admin_session",
    "revoke_admin_session",
    "session_oracle_from_request",
    "verify_admin_session_token",
]
