"""
UserRepository - MongoDB access for users collection.
"""

from datetime import datetime, timezone
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from app.models.user import User
from app.models.rivalry import RivalryUser

RIVALRY_PROJECTION = {"name": 1, "school": 1, "team": 1, "score": 1}


class UserRepository:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["users"]

    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Get user by ID."""
        doc = await self.collection.find_one({"_id": user_id})
        return User(**doc) if doc else None

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email."""
        doc = await self.collection.find_one({"email": email})
        return User(**doc) if doc else None

    async def get_by_share_code(self, share_code: str) -> Optional[User]:
        """Get the referrer that owns a share code."""
        doc = await self.collection.find_one({"share_code": share_code})
        return User(**doc) if doc else None

    async def get_referred_by(self, share_code: str) -> list[User]:
        """All users that signed up with the given share code."""
        docs = await self.collection.find(
            {"referred_by_code": share_code}
        ).to_list(length=None)
        return [User(**doc) for doc in docs]

    async def get_rivalry_snapshot(self) -> list[RivalryUser]:
        """
        Read every user with the fields the rivalry rankings need.

        Order is the natural collection order, which is what ties fall back to.
        """
        docs = await self.collection.find({}, RIVALRY_PROJECTION).to_list(length=None)
        return [RivalryUser(**doc) for doc in docs]

    async def upsert_signup(
        self,
        user_id: str,
        email: str,
        share_code: str,
        referred_by_code: Optional[str] = None
    ) -> None:
        """
        Create the user on first signup, or reset verification on a repeated one.

        Share code and referrer are only written on insert so a second signup
        never changes the code other players already shared.
        """
        now = datetime.now(timezone.utc)

        await self.collection.update_one(
            {"_id": user_id},
            {
                "$set": {
                    "email": email,
                    "email_verified": False,
                },
                "$setOnInsert": {
                    "share_code": share_code,
                    "referred_by_code": referred_by_code,
                    "bonus_attempts": 0,
                    "created_at": now,
                },
            },
            upsert=True
        )

    async def mark_email_verified(self, user_id: str) -> None:
        now = datetime.now(timezone.utc)
        await self.collection.update_one(
            {"_id": user_id},
            {"$set": {"email_verified": True, "email_verified_at": now}}
        )

    async def mark_referral_validated(self, user_id: str) -> None:
        now = datetime.now(timezone.utc)
        await self.collection.update_one(
            {"_id": user_id},
            {"$set": {"referral_validated": True, "referral_validated_at": now}}
        )

    async def claim_referral_reward(self, user_id: str) -> bool:
        """
        Flag the referred user as rewarded.

        Returns False if someone already claimed it, so the referrer is
        only paid once per referred user.
        """
        result = await self.collection.update_one(
            {"_id": user_id, "referral_rewarded": {"$ne": True}},
            {"$set": {"referral_rewarded": True}}
        )
        return result.modified_count == 1

    async def add_bonus_attempts(self, user_id: str, amount: int) -> None:
        await self.collection.update_one(
            {"_id": user_id},
            {"$inc": {"bonus_attempts": amount}}
        )

    async def exists(self, user_id: str) -> bool:
        """Check if user exists."""
        count = await self.collection.count_documents({"_id": user_id}, limit=1)
        return count > 0
