"""Route classification table for navigation authorization."""
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from storefront import config
from storefront.errors import ERROR_LOGIN_PATH_PRIVILEGED


class RouteCategory(str, Enum):
    """Access category of a navigation target."""
    PUBLIC = "public"
    PRIVILEGED = "privileged"
    PUBLIC_WITHIN_PRIVILEGED_NAMESPACE = "public_within_privileged_namespace"


def normalize_path(path: str) -> str:
    """Drop query/fragment and trailing slashes; always start with '/'."""
    path = (path or "").split("#", 1)[0].split("?", 1)[0]
    path = "/" + path.strip("/")
    return path


@dataclass(frozen=True)
class Route:
    """
    A named path pattern. Segments starting with ':' match any single
    non-empty segment (e.g. '/categoria/:slug').
    """
    path: str
    name: str
    category: RouteCategory = RouteCategory.PUBLIC

    def matches(self, path: str) -> bool:
        pattern = normalize_path(self.path).split("/")
        parts = normalize_path(path).split("/")
        if len(pattern) != len(parts):
            return False
        return all(
            (p.startswith(":") and bool(s)) or p == s
            for p, s in zip(pattern, parts)
        )


class RouteTable:
    """
    Externally supplied path -> category mapping.

    Paths not listed fall back to the namespace rule: anything under
    ``privileged_prefix`` is PRIVILEGED, everything else PUBLIC.
    """

    def __init__(
        self,
        routes: Iterable[Route],
        privileged_prefix: str = config.ADMIN_PATH_PREFIX,
        login_path: str = config.ADMIN_LOGIN_PATH,
    ):
        self.routes: tuple[Route, ...] = tuple(routes)
        self.privileged_prefix = normalize_path(privileged_prefix)
        self.login_path = normalize_path(login_path)

        if self.classify(self.login_path) is RouteCategory.PRIVILEGED:
            raise ValueError(f"{ERROR_LOGIN_PATH_PRIVILEGED}: {self.login_path}")

    def find(self, path: str) -> Optional[Route]:
        return next((route for route in self.routes if route.matches(path)), None)

    def classify(self, path: str) -> RouteCategory:
        route = self.find(path)
        if route is not None:
            return route.category
        # Plain prefix match: '/adminx' is treated as privileged too
        if normalize_path(path).startswith(self.privileged_prefix):
            return RouteCategory.PRIVILEGED
        return RouteCategory.PUBLIC


DEFAULT_ROUTES = (
    Route("/", "home"),
    Route("/categoria/:slug", "category"),
    Route("/carrinho", "cart"),
    Route("/checkout", "checkout"),
    Route("/como-encomendar", "how-to-order"),
    Route("/termos", "terms"),

    Route(config.ADMIN_LOGIN_PATH, "admin-login", RouteCategory.PUBLIC_WITHIN_PRIVILEGED_NAMESPACE),
    Route(config.ADMIN_RECOVERY_PATH, "admin-forgot", RouteCategory.PUBLIC_WITHIN_PRIVILEGED_NAMESPACE),
    Route("/admin/dashboard", "admin-dashboard", RouteCategory.PRIVILEGED),
    Route("/admin/categorias", "admin-categories", RouteCategory.PRIVILEGED),
    Route("/admin/produtos", "admin-products", RouteCategory.PRIVILEGED),
    Route("/admin/pedidos", "admin-orders", RouteCategory.PRIVILEGED),
    Route("/admin/config", "admin-settings", RouteCategory.PRIVILEGED),
)

DEFAULT_ROUTE_TABLE = RouteTable(DEFAULT_ROUTES)
