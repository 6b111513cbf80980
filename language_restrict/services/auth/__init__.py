"""Session authentication services."""

from language_restrict.services.auth.session_manager import SessionManager
from language_restrict.services.auth.token_hasher import TokenHasher

__all__ = ["SessionManager", "TokenHasher"]
