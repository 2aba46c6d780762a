"""
EmailVerificationRepository - MongoDB access for email_verifications collection.

One document per user (keyed by uid); a new token replaces the previous one.
"""

from datetime import datetime, timezone
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from app.models.email_verification import EmailVerification


class EmailVerificationRepository:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["email_verifications"]

    async def get_by_token(self, token: str) -> Optional[EmailVerification]:
        doc = await self.collection.find_one({"token": token})
        return EmailVerification(**doc) if doc else None

    async def replace_token(
        self,
        uid: str,
        email: str,
        token: str,
        expires_at: datetime
    ) -> EmailVerification:
        """Store a fresh token for the user, discarding any previous one."""
        doc = {
            "_id": uid,
            "email": email,
            "token": token,
            "created_at": datetime.now(timezone.utc),
            "expires_at": expires_at,
            "verified": False,
        }

        await self.collection.replace_one({"_id": uid}, doc, upsert=True)
        return EmailVerification(**doc)

    async def mark_verified(self, uid: str) -> None:
        await self.collection.update_one(
            {"_id": uid},
            {"$set": {"verified": True, "verified_at": datetime.now(timezone.utc)}}
        )
