"""
AttemptRepository - MongoDB access for attempts collection.
"""

import uuid
from datetime import datetime, timezone

from motor.motor_asyncio import AsyncIOMotorDatabase

from app.models.attempt import Attempt, AttemptCreate


class AttemptRepository:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["attempts"]

    async def create(self, attempt_data: AttemptCreate) -> Attempt:
        attempt_doc = {
            "id": uuid.uuid4().hex,
            "uid": attempt_data.uid,
            "score": attempt_data.score,
            "created_at": datetime.now(timezone.utc),
        }

        await self.collection.insert_one(attempt_doc)
        return Attempt(**attempt_doc)

    async def count_for_user(self, uid: str, limit: int = 0) -> int:
        """Count a user's attempts, stopping at `limit` when given."""
        kwargs = {"limit": limit} if limit else {}
        return await self.collection.count_documents({"uid": uid}, **kwargs)

    async def has_attempts(self, uid: str) -> bool:
        return await self.count_for_user(uid, limit=1) > 0
