"""
Navigation guard for the admin namespace.

Every navigation is classified first; only PRIVILEGED targets wait on the
session oracle. Nothing is cached between navigations, so each privileged
attempt re-verifies.
"""
from dataclasses import dataclass
from typing import Callable, Optional

from storefront.logging import get_logger, sanitize_string_for_logging
from .routes import RouteCategory, RouteTable, DEFAULT_ROUTE_TABLE
from .session import SessionOracle

logger = get_logger(__name__)


@dataclass(frozen=True)
class NavigationDecision:
    """Outcome of a guard check: proceed, or redirect to another path."""
    allowed: bool
    redirect_to: Optional[str] = None

    @classmethod
    def proceed(cls) -> "NavigationDecision":
        return cls(allowed=True)

    @classmethod
    def redirect(cls, path: str) -> "NavigationDecision":
        return cls(allowed=False, redirect_to=path)


class NavigationGuard:
    """Gates route transitions against the classification table."""

    def __init__(self, routes: RouteTable = DEFAULT_ROUTE_TABLE):
        self.routes = routes

    async def resolve(
        self,
        path: str,
        oracle: Optional[SessionOracle] = None,
        *,
        oracle_factory: Optional[Callable[[], SessionOracle]] = None,
    ) -> NavigationDecision:
        """
        Decide whether navigation to ``path`` may proceed.

        Pass either a ready ``oracle`` or an ``oracle_factory``; the factory
        is only called for PRIVILEGED targets. Never raises: a missing
        oracle, a failing factory and a failing oracle all count as
        "no session".
        """
        category = self.routes.classify(path)
        if category is not RouteCategory.PRIVILEGED:
            return NavigationDecision.proceed()

        if await self._has_session(oracle, oracle_factory):
            return NavigationDecision.proceed()

        logger.info(
            f"No admin session for {sanitize_string_for_logging(path)}, "
            f"redirecting to {self.routes.login_path}"
        )
        return NavigationDecision.redirect(self.routes.login_path)

    async def _has_session(
        self,
        oracle: Optional[SessionOracle],
        oracle_factory: Optional[Callable[[], SessionOracle]],
    ) -> bool:
        try:
            if oracle is None and oracle_factory is not None:
                oracle = oracle_factory()
            if oracle is None:
                return False
            session = await oracle.get_session()
        except Exception as e:
            logger.warning(f"Session check failed, denying access: {e}")
            return False
        return session is not None
