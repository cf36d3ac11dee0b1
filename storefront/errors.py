"""
Common Error Constants

Centralized error messages shared by the cart engine and HTTP layer.
"""

# Cart errors
ERROR_CART_STORAGE_UNAVAILABLE = "Cart storage unavailable"
ERROR_UNKNOWN_STORAGE_BACKEND = "Unknown cart storage backend"

# Routing errors
ERROR_LOGIN_PATH_PRIVILEGED = "Login path must not require a session"

# Session errors
ERROR_UNKNOWN_SESSION_BACKEND = "Unknown session backend"


class CartStorageError(Exception):
    """Raised when the durable cart slot cannot be read or written."""
