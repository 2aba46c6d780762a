"""
AttemptService - Records game attempts.

Attempts are stored as history and feed the referral rules only. They
never touch users.score, school or team: those rivalry fields are
written by the game backend, and the rivalry endpoints read them as is.
"""

from motor.motor_asyncio import AsyncIOMotorDatabase

from app.models.attempt import Attempt, AttemptCreate
from app.repositories.attempt_repository import AttemptRepository
from app.repositories.user_repository import UserRepository
from app.services.referral_service import ReferralService


class AttemptServiceError(Exception):
    pass


class UserNotFoundError(AttemptServiceError):
    pass


class AttemptService:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.attempt_repo = AttemptRepository(db)
        self.user_repo = UserRepository(db)
        self.referral_service = ReferralService(db)

    async def record_attempt(self, attempt_data: AttemptCreate) -> Attempt:
        """
        Save an attempt. The user's first attempt may complete a referral.

        Raises: UserNotFoundError
        """
        if not await self.user_repo.exists(attempt_data.uid):
            raise UserNotFoundError(f"User {attempt_data.uid} not found")

        attempt = await self.attempt_repo.create(attempt_data)

        if await self.attempt_repo.count_for_user(attempt_data.uid, limit=2) == 1:
            await self.referral_service.handle_first_game_attempt(attempt_data.uid)

        return attempt
