"""
Session oracles: answer "does a valid admin session exist?".

Production uses Supabase Auth (SESSION_BACKEND=supabase); the admin login
itself happens in the Supabase-hosted flow, not in this app.

The in-memory store (SESSION_BACKEND=memory) is for tests and local runs.
No HTTP endpoint issues its tokens: call ``create_admin_session`` from code
running in the same process (a test fixture or a startup hook) and send the
token as the session cookie or a ``Bearer`` header. Tokens live only as long
as the process.
"""
import secrets
from datetime import datetime, timezone, timedelta
from typing import Any, Dict, Optional, Protocol

from starlette.requests import Request

from storefront import config
from storefront.db import get_supabase
from storefront.errors import ERROR_UNKNOWN_SESSION_BACKEND


class SessionOracle(Protocol):
    """External collaborator; only presence/absence of a session matters."""

    async def get_session(self) -> Optional[Any]:
        ...


class SupabaseSessionOracle:
    """Checks an access token against Supabase Auth."""

    def __init__(self, access_token: Optional[str], client=None):
        self.access_token = access_token
        self._client = client

    async def get_session(self) -> Optional[Any]:
        if not self.access_token:
            return None
        client = self._client or await get_supabase()
        response = await client.auth.get_user(self.access_token)
        if response is None:
            return None
        return response.user or None


# ==================== IN-MEMORY ADMIN SESSIONS ====================

_admin_sessions: Dict[str, dict] = {}


def create_admin_session(user_id: str, email: str = "") -> str:
    """Create a new admin session and return the token."""
    session_token = secrets.token_urlsafe(32)
    now = datetime.now(timezone.utc)
    _admin_sessions[session_token] = {
        "user_id": str(user_id),
        "email": email,
        "created_at": now.isoformat(),
        "expires_at": (now + timedelta(days=config.ADMIN_SESSION_DAYS)).isoformat(),
    }
    return session_token


def verify_admin_session_token(token: Optional[str]) -> Optional[dict]:
    """Verify an admin session token and return session data."""
    if not token:
        return None
    session = _admin_sessions.get(token)
    if not session:
        return None

    expires_at = datetime.fromisoformat(session["expires_at"])
    if datetime.now(timezone.utc) > expires_at:
        del _admin_sessions[token]
        return None

    return session


def revoke_admin_session(token: str) -> bool:
    return _admin_sessions.pop(token, None) is not None


class MemorySessionOracle:
    """Oracle over the in-process admin session store."""

    def __init__(self, token: Optional[str]):
        self.token = token

    async def get_session(self) -> Optional[dict]:
        return verify_admin_session_token(self.token)


# ==================== REQUEST BINDING ====================

def extract_session_token(request: Request) -> Optional[str]:
    """Session token from the session cookie or an Authorization: Bearer header."""
    token = request.cookies.get(config.SESSION_COOKIE_NAME)
    if token:
        return token
    authorization = request.headers.get("authorization", "")
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return None


def session_oracle_from_request(request: Request, backend: Optional[str] = None) -> SessionOracle:
    """Build the configured oracle (SESSION_BACKEND) for this request."""
    backend = (backend or config.SESSION_BACKEND).lower()
    token = extract_session_token(request)
    if backend == "supabase":
        return SupabaseSessionOracle(token)
    if backend == "memory":
        return MemorySessionOracle(token)
    raise ValueError(f"{ERROR_UNKNOWN_SESSION_BACKEND}: {backend}")
