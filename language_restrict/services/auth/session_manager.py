"""
Session lookup for the acting user.

Sessions are embedded in the user document's ``sessions`` array as
``{tokenHash, expiresAt, lastActiveAt}``. This service only reads them;
issuing sessions belongs to the service that owns user accounts.
"""

import logging
from datetime import datetime, timezone
from typing import Optional, Tuple

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase

logger = logging.getLogger(__name__)


class SessionManager:
    """
    Resolves session token hashes to users.
    """

    def __init__(self, db: AsyncIOMotorDatabase):
        """
        Initialize SessionManager.

        Args:
            db: MongoDB database holding the users collection
        """
        self._users_collection = db["users"]

    async def validate_session(
        self,
        token_hash: str
    ) -> Optional[Tuple[dict, dict]]:
        """
        Find user and session by token hash.

        Args:
            token_hash: SHA-256 hash of session token

        Returns:
            tuple of (user_dict, session_dict) if valid, None if not found or expired
        """
        now = datetime.now(timezone.utc)

        user = await self._users_collection.find_one({
            "sessions": {
                "$elemMatch": {
                    "tokenHash": token_hash,
                    "expiresAt": {"$gt": now}
                }
            }
        })

        if not user:
            return None

        session = next(
            (s for s in user.get("sessions", []) if s.get("tokenHash") == token_hash),
            None
        )
        if not session:
            return None

        return user, session

    async def update_last_active(
        self,
        user_id: str,
        token_hash: str
    ) -> None:
        """
        Update the lastActiveAt timestamp for a session.

        Args:
            user_id: MongoDB user ID
            token_hash: Hash of the session token to update
        """
        await self._users_collection.update_one(
            {
                "_id": ObjectId(user_id),
                "sessions.tokenHash": token_hash
            },
            {
                "$set": {"sessions.$.lastActiveAt": datetime.now(timezone.utc)}
            }
        )
