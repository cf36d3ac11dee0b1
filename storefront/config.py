"""
Storefront configuration.

All settings come from environment variables and are read once on import.
"""
import os


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "")
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


# ==================== CART ====================

# memory | file | redis
CART_STORAGE_BACKEND = os.environ.get("CART_STORAGE_BACKEND", "file").lower()
CART_STORAGE_KEY = os.environ.get("CART_STORAGE_KEY", "cart")
CART_STORAGE_DIR = os.environ.get("CART_STORAGE_DIR", ".storefront")
# 0 disables expiry (Redis backend only)
CART_TTL_SECONDS = _env_int("CART_TTL_SECONDS", 0)

# ==================== ADMIN NAVIGATION ====================

ADMIN_PATH_PREFIX = os.environ.get("ADMIN_PATH_PREFIX", "/admin")
ADMIN_LOGIN_PATH = os.environ.get("ADMIN_LOGIN_PATH", "/admin")
ADMIN_RECOVERY_PATH = os.environ.get("ADMIN_RECOVERY_PATH", "/admin/recuperar")

# ==================== SESSIONS ====================

# supabase | memory
SESSION_BACKEND = os.environ.get("SESSION_BACKEND", "supabase").lower()
SESSION_COOKIE_NAME = os.environ.get("SESSION_COOKIE_NAME", "sb-access-token")
ADMIN_SESSION_DAYS = _env_int("ADMIN_SESSION_DAYS", 7)

# ==================== EXTERNAL SERVICES ====================

SUPABASE_URL = os.environ.get("SUPABASE_URL", "")
SUPABASE_ANON_KEY = os.environ.get("SUPABASE_ANON_KEY", "")

UPSTASH_REDIS_REST_URL = os.environ.get("UPSTASH_REDIS_REST_URL", "")
UPSTASH_REDIS_REST_TOKEN = os.environ.get("UPSTASH_REDIS_REST_TOKEN", "")
