"""
Session token hashing.

Session tokens are only ever stored and looked up by their hash.
"""

import hashlib


class TokenHasher:
    """
    Handles token hashing.
    """

    @staticmethod
    def hash_token(token: str) -> str:
        """
        Create SHA-256 hash of a token.

        Args:
            token: Plain token string from the Authorization header

        Returns:
            Hex-encoded SHA-256 hash
        """
        return hashlib.sha256(token.encode()).hexdigest()
