"""
Authentication middleware.

Resolves the bearer session token, when one is sent, and attaches the
acting user to the request. Selection endpoints also serve anonymous
requests, so a missing or invalid token is not an error.
"""

import logging
from typing import Callable, Optional

from fastapi import Request

from language_restrict.services.auth.session_manager import SessionManager
from language_restrict.services.auth.token_hasher import TokenHasher

logger = logging.getLogger(__name__)


class AuthMiddleware:
    """
    Middleware that validates the session and attaches the user to the request.
    """

    def __init__(self, session_manager: SessionManager):
        """
        Initialize AuthMiddleware.

        Args:
            session_manager: For session validation
        """
        self._session_manager = session_manager

    async def __call__(self, request: Request, call_next: Callable):
        await self.optional_auth(request)
        return await call_next(request)

    async def optional_auth(self, request: Request) -> Optional[dict]:
        """
        Attach user if authenticated, but don't require it.

        Args:
            request: HTTP request object

        Returns:
            User dict if authenticated, None otherwise

        Side Effects:
            - Updates session.lastActiveAt
            - Attaches user to request.state.user
            - Attaches current session to request.state.session
        """
        token = self._extract_token(request)

        if not token:
            return None

        token_hash = TokenHasher.hash_token(token)
        result = await self._session_manager.validate_session(token_hash)

        if not result:
            logger.debug("Ignoring invalid or expired session token")
            return None

        user, session = result

        if user.get("status") == "suspended":
            return None

        await self._session_manager.update_last_active(
            str(user["_id"]),
            token_hash
        )

        request.state.user = user
        request.state.session = session

        return user

    def _extract_token(self, request: Request) -> Optional[str]:
        """
        Extract bearer token from Authorization header.

        Expected format: "Authorization: Bearer <token>"
        """
        auth_header = request.headers.get("Authorization")

        if not auth_header:
            return None

        parts = auth_header.split()

        if len(parts) != 2:
            return None

        scheme, token = parts

        if scheme.lower() != "bearer":
            return None

        return token
