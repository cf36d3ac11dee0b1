"""Tests for session oracles"""
import pytest
from datetime import datetime, timezone, timedelta
from unittest.mock import Mock, AsyncMock

from starlette.requests import Request

from storefront.routing import session as session_module
from storefront.routing import (
    MemorySessionOracle,
    SupabaseSessionOracle,
    create_admin_session,
    revoke_admin_session,
    session_oracle_from_request,
    verify_admin_session_token,
)
from storefront.routing.session import extract_session_token


def _request(headers=None):
    raw = [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()]
    return Request({"type": "http", "method": "GET", "path": "/", "headers": raw})


@pytest.fixture
def supabase_client():
    """Mock Supabase client"""
    client = Mock()
    client.auth.get_user = AsyncMock(return_value=Mock(user=Mock(id="admin-1")))
    return client


class TestAdminSessions:
    """Tests for the in-memory admin session store."""

    def test_create_and_verify(self):
        """Test a new token verifies"""
        token = create_admin_session("admin-1", "admin@test.dev")

        session = verify_admin_session_token(token)
        assert session["user_id"] == "admin-1"
        assert session["email"] == "admin@test.dev"

    def test_unknown_token(self):
        """Test unknown and empty tokens"""
        assert verify_admin_session_token("nope") is None
        assert verify_admin_session_token(None) is None

    def test_expired_token_is_dropped(self):
        """Test expiry removes the session"""
        token = create_admin_session("admin-1")
        past = datetime.now(timezone.utc) - timedelta(seconds=1)
        session_module._admin_sessions[token]["expires_at"] = past.isoformat()

        assert verify_admin_session_token(token) is None
        assert token not in session_module._admin_sessions

    def test_revoke(self):
        """Test revoking a session"""
        token = create_admin_session("admin-1")

        assert revoke_admin_session(token) is True
        assert verify_admin_session_token(token) is None
        assert revoke_admin_session(token) is False

    @pytest.mark.asyncio
    async def test_memory_oracle(self):
        """Test oracle presence/absence"""
        token = create_admin_session("admin-1")

        assert await MemorySessionOracle(token).get_session() is not None
        assert await MemorySessionOracle("nope").get_session() is None
        assert await MemorySessionOracle(None).get_session() is None


class TestSupabaseSessionOracle:
    """Tests for the Supabase Auth oracle."""

    @pytest.mark.asyncio
    async def test_valid_token(self, supabase_client):
        """Test a user behind the token means a session"""
        session = await SupabaseSessionOracle("jwt", client=supabase_client).get_session()

        assert session.id == "admin-1"
        supabase_client.auth.get_user.assert_awaited_once_with("jwt")

    @pytest.mark.asyncio
    async def test_no_token_skips_supabase(self, supabase_client):
        """Test missing token is no session without a network call"""
        assert await SupabaseSessionOracle(None, client=supabase_client).get_session() is None
        supabase_client.auth.get_user.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_no_user(self, supabase_client):
        """Test empty response means no session"""
        supabase_client.auth.get_user = AsyncMock(return_value=None)

        assert await SupabaseSessionOracle("jwt", client=supabase_client).get_session() is None

    @pytest.mark.asyncio
    async def test_errors_propagate(self, supabase_client):
        """Test auth errors reach the guard (which fails closed)"""
        supabase_client.auth.get_user = AsyncMock(side_effect=RuntimeError("invalid JWT"))

        with pytest.raises(RuntimeError):
            await SupabaseSessionOracle("jwt", client=supabase_client).get_session()


class TestRequestBinding:
    """Tests for reading the token from a request."""

    def test_token_from_cookie(self):
        """Test the session cookie"""
        request = _request({"Cookie": "sb-access-token=abc"})

        assert extract_session_token(request) == "abc"

    def test_token_from_bearer_header(self):
        """Test Authorization: Bearer"""
        request = _request({"Authorization": "Bearer xyz"})

        assert extract_session_token(request) == "xyz"

    def test_no_token(self):
        """Test missing or malformed credentials"""
        assert extract_session_token(_request()) is None
        assert extract_session_token(_request({"Authorization": "Basic xyz"})) is None
        assert extract_session_token(_request({"Authorization": "Bearer "})) is None

    def test_backend_selection(self):
        """Test SESSION_BACKEND choices"""
        request = _request({"Authorization": "Bearer xyz"})

        supabase_oracle = session_oracle_from_request(request, backend="supabase")
        memory_oracle = session_oracle_from_request(request, backend="memory")

        assert isinstance(supabase_oracle, SupabaseSessionOracle)
        assert supabase_oracle.access_token == "xyz"
        assert isinstance(memory_oracle, MemorySessionOracle)
        with pytest.raises(ValueError):
            session_oracle_from_request(request, backend="ldap")
