"""
Admin Guard Middleware for FastAPI

Runs the navigation guard in front of every request and answers with a
redirect to the admin login page when a privileged path has no session.
The session oracle is only built for privileged paths, so public pages and
the cart API never depend on the session backend.
"""
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import RedirectResponse

from .guard import NavigationGuard
from .routes import RouteTable, DEFAULT_ROUTE_TABLE
from .session import SessionOracle, session_oracle_from_request


class AdminGuardMiddleware(BaseHTTPMiddleware):
    """Redirects unauthenticated requests for privileged paths."""

    def __init__(
        self,
        app,
        routes: RouteTable = DEFAULT_ROUTE_TABLE,
        oracle_factory: Callable[[Request], SessionOracle] = session_oracle_from_request,
    ):
        super().__init__(app)
        self.guard = NavigationGuard(routes)
        self.oracle_factory = oracle_factory

    async def dispatch(self, request: Request, call_next):
        decision = await self.guard.resolve(
            request.url.path,
            oracle_factory=lambda: self.oracle_factory(request),
        )
        if not decision.allowed:
            return RedirectResponse(decision.redirect_to, status_code=302)
        return await call_next(request)
