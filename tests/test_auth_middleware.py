"""Unit tests for session authentication."""

import hashlib
from types import SimpleNamespace

import pytest
from unittest.mock import AsyncMock, MagicMock
from bson import ObjectId

from language_restrict.middleware.auth import AuthMiddleware
from language_restrict.services.auth.session_manager import SessionManager
from language_restrict.services.auth.token_hasher import TokenHasher


# ─────────────────────────────────────────────────────────────────
# Fixtures
# ─────────────────────────────────────────────────────────────────


@pytest.fixture
def sample_user():
    return {
        "_id": ObjectId(),
        "status": "active",
        "profile": {"preferredLanguage": "sv"},
        "sessions": [
            {"tokenHash": "other"},
            {"tokenHash": TokenHasher.hash_token("abc123")},
        ],
    }


@pytest.fixture
def session_manager(mock_db):
    return SessionManager(db=mock_db)


def make_request(authorization=None):
    headers = {"Authorization": authorization} if authorization else {}
    return MagicMock(headers=headers, state=SimpleNamespace())


# ─────────────────────────────────────────────────────────────────
# SessionManager
# ─────────────────────────────────────────────────────────────────


@pytest.mark.asyncio
class TestSessionManager:
    async def test_validate_session_returns_matching_session(self, session_manager, mock_collection, sample_user):
        mock_collection.find_one.return_value = sample_user
        token_hash = TokenHasher.hash_token("abc123")

        user, session = await session_manager.validate_session(token_hash)

        assert user is sample_user
        assert session == {"tokenHash": token_hash}
        query = mock_collection.find_one.call_args[0][0]
        assert query["sessions"]["$elemMatch"]["tokenHash"] == token_hash
        assert "$gt" in query["sessions"]["$elemMatch"]["expiresAt"]

    async def test_validate_session_unknown(self, session_manager, mock_collection):
        mock_collection.find_one.return_value = None
        assert await session_manager.validate_session("missing") is None

    async def test_update_last_active(self, session_manager, mock_collection, sample_user):
        await session_manager.update_last_active(str(sample_user["_id"]), "hash")

        call_args = mock_collection.update_one.call_args[0]
        assert call_args[0] == {"_id": sample_user["_id"], "sessions.tokenHash": "hash"}
        assert "sessions.$.lastActiveAt" in call_args[1]["$set"]


# ─────────────────────────────────────────────────────────────────
# AuthMiddleware
# ─────────────────────────────────────────────────────────────────


@pytest.mark.asyncio
class TestAuthMiddleware:
    async def test_attaches_user(self, sample_user):
        manager = MagicMock()
        manager.validate_session = AsyncMock(return_value=(sample_user, sample_user["sessions"][1]))
        manager.update_last_active = AsyncMock()
        request = make_request("Bearer abc123")

        user = await AuthMiddleware(manager).optional_auth(request)

        assert user is sample_user
        assert request.state.user is sample_user
        manager.validate_session.assert_awaited_once_with(hashlib.sha256(b"abc123").hexdigest())
        manager.update_last_active.assert_awaited_once()

    @pytest.mark.parametrize("header", [None, "Basic abc123", "Bearer", "Bearer a b"])
    async def test_ignores_missing_or_malformed_header(self, header):
        manager = MagicMock()
        manager.validate_session = AsyncMock()
        request = make_request(header)

        assert await AuthMiddleware(manager).optional_auth(request) is None
        assert not hasattr(request.state, "user")
        manager.validate_session.assert_not_called()

    async def test_suspended_user_stays_anonymous(self, sample_user):
        sample_user["status"] = "suspended"
        manager = MagicMock()
        manager.validate_session = AsyncMock(return_value=(sample_user, sample_user["sessions"][1]))
        manager.update_last_active = AsyncMock()
        request = make_request("Bearer abc123")

        assert await AuthMiddleware(manager).optional_auth(request) is None
        assert not hasattr(request.state, "user")
        manager.update_last_active.assert_not_called()

    async def test_call_passes_request_on(self):
        manager = MagicMock()
        manager.validate_session = AsyncMock(return_value=None)
        request = make_request("Bearer stale")
        call_next = AsyncMock(return_value="response")

        assert await AuthMiddleware(manager)(request, call_next) == "response"
        call_next.assert_awaited_once_with(request)
