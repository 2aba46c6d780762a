"""
Unit tests for ReferralService
"""

import pytest
from unittest.mock import AsyncMock
from pymongo.errors import ServerSelectionTimeoutError

from app.models.user import User
from app.services.referral_service import (
    ReferralService,
    BONUS_ATTEMPTS_PER_REFERRAL,
    build_milestones,
)


@pytest.fixture
def service(mock_db):
    service = ReferralService(mock_db)
    service.user_repo = AsyncMock()
    service.attempt_repo = AsyncMock()
    return service


class TestIsReferralValid:
    """Test suite for the referral validity rules."""

    @pytest.mark.asyncio
    async def test_user_not_found(self, service):
        service.user_repo.get_by_id.return_value = None

        result = await service.is_referral_valid("ghost")

        assert result.valid is False
        assert result.status == "not_found"

    @pytest.mark.asyncio
    async def test_email_not_verified(self, service, sample_user):
        service.user_repo.get_by_id.return_value = sample_user

        result = await service.is_referral_valid(sample_user.id)

        assert result.valid is False
        assert result.reason == "Email not verified"
        assert result.status == "pending_verification"
        service.attempt_repo.has_attempts.assert_not_called()

    @pytest.mark.asyncio
    async def test_no_game_attempts(self, service, sample_user):
        sample_user.email_verified = True
        service.user_repo.get_by_id.return_value = sample_user
        service.attempt_repo.has_attempts.return_value = False

        result = await service.is_referral_valid(sample_user.id)

        assert result.valid is False
        assert result.status == "pending_gameplay"

    @pytest.mark.asyncio
    async def test_valid_referral(self, service, sample_user):
        sample_user.email_verified = True
        service.user_repo.get_by_id.return_value = sample_user
        service.attempt_repo.has_attempts.return_value = True

        result = await service.is_referral_valid(sample_user.id)

        assert result.valid is True
        assert result.status == "active"

    @pytest.mark.asyncio
    async def test_database_error_is_reported(self, service):
        service.user_repo.get_by_id.side_effect = ServerSelectionTimeoutError("down")

        result = await service.is_referral_valid("uid")

        assert result.valid is False
        assert result.status == "error"
        assert result.error == "down"


class TestReferralCounts:
    """Test suite for referral counts and milestones."""

    @pytest.mark.asyncio
    async def test_referrer_without_share_code(self, service):
        service.user_repo.get_by_id.return_value = User(_id="r")

        summary = await service.get_valid_referral_count("r")

        assert summary.total == 0
        assert summary.details == []

    @pytest.mark.asyncio
    async def test_counts_valid_and_pending(self, service, sample_referrer):
        referred = [
            User(_id="a", email="a@example.com", email_verified=True),
            User(_id="b", email="b@example.com", email_verified=True),
            User(_id="c", email="c@example.com", email_verified=False),
        ]
        users = {u.id: u for u in referred + [sample_referrer]}

        service.user_repo.get_by_id.side_effect = lambda uid: users.get(uid)
        service.user_repo.get_referred_by.return_value = referred
        service.attempt_repo.has_attempts.side_effect = lambda uid: uid == "a"

        summary = await service.get_valid_referral_count(sample_referrer.id)

        assert summary.valid == 1
        assert summary.pending == 2
        assert summary.total == 3
        assert [d.status for d in summary.details] == [
            "active", "pending_gameplay", "pending_verification"
        ]
        service.user_repo.get_referred_by.assert_awaited_once_with("REFR01")

    @pytest.mark.asyncio
    async def test_milestones(self, service, sample_referrer):
        referred = [User(_id=f"u{i}", email_verified=True) for i in range(12)]
        users = {u.id: u for u in referred + [sample_referrer]}

        service.user_repo.get_by_id.side_effect = lambda uid: users.get(uid)
        service.user_repo.get_referred_by.return_value = referred
        service.attempt_repo.has_attempts.return_value = True

        result = await service.check_referral_milestones(sample_referrer.id)

        assert result.valid_referrals == 12
        assert result.pending_referrals == 0
        assert result.bonus_attempts == 12 * BONUS_ATTEMPTS_PER_REFERRAL
        assert result.milestones["tier1"].reached is True
        assert result.milestones["tier1"].progress == 10
        assert result.milestones["tier2"].reached is False
        assert result.milestones["tier2"].remaining == 13
        assert result.eligible_for_rewards is True

    def test_build_milestones_from_zero(self):
        milestones = build_milestones(0)

        assert milestones["tier1"].threshold == 10
        assert milestones["tier1"].reward == 25
        assert milestones["tier1"].remaining == 10
        assert milestones["tier2"].threshold == 25
        assert milestones["tier2"].reward == 50
        assert milestones["tier2"].progress == 0


class TestValidateAndReward:
    """Test suite for on-demand validation and referrer rewards."""

    @pytest.mark.asyncio
    async def test_validate_referral_marks_user(self, service, sample_user):
        sample_user.email_verified = True
        service.user_repo.get_by_id.return_value = sample_user
        service.attempt_repo.has_attempts.return_value = True

        result = await service.validate_referral(sample_user.id)

        assert result.valid is True
        service.user_repo.mark_referral_validated.assert_awaited_once_with(sample_user.id)

    @pytest.mark.asyncio
    async def test_validate_referral_invalid_does_not_mark(self, service, sample_user):
        service.user_repo.get_by_id.return_value = sample_user

        result = await service.validate_referral(sample_user.id)

        assert result.valid is False
        service.user_repo.mark_referral_validated.assert_not_called()

    @pytest.mark.asyncio
    async def test_email_verified_awards_referrer(self, service, sample_user, sample_referrer):
        sample_user.email_verified = True
        service.user_repo.get_by_id.return_value = sample_user
        service.user_repo.get_by_share_code.return_value = sample_referrer
        service.user_repo.claim_referral_reward.return_value = True
        service.attempt_repo.has_attempts.return_value = True

        awarded = await service.handle_email_verified(sample_user.id)

        assert awarded is True
        service.user_repo.get_by_share_code.assert_awaited_once_with("REFR01")
        service.user_repo.add_bonus_attempts.assert_awaited_once_with(
            sample_referrer.id, BONUS_ATTEMPTS_PER_REFERRAL
        )

    @pytest.mark.asyncio
    async def test_verified_before_playing_waits_for_first_attempt(self, service, sample_user):
        sample_user.email_verified = True
        service.user_repo.get_by_id.return_value = sample_user
        service.attempt_repo.has_attempts.return_value = False

        awarded = await service.handle_email_verified(sample_user.id)

        assert awarded is False
        service.user_repo.add_bonus_attempts.assert_not_called()

    @pytest.mark.asyncio
    async def test_first_attempt_awards_referrer(self, service, sample_user, sample_referrer):
        sample_user.email_verified = True
        service.user_repo.get_by_id.return_value = sample_user
        service.user_repo.get_by_share_code.return_value = sample_referrer
        service.user_repo.claim_referral_reward.return_value = True
        service.attempt_repo.has_attempts.return_value = True

        assert await service.handle_first_game_attempt(sample_user.id) is True

    @pytest.mark.asyncio
    async def test_reward_is_paid_once(self, service, sample_user, sample_referrer):
        sample_user.email_verified = True
        service.user_repo.get_by_id.return_value = sample_user
        service.user_repo.get_by_share_code.return_value = sample_referrer
        service.user_repo.claim_referral_reward.return_value = False
        service.attempt_repo.has_attempts.return_value = True

        awarded = await service.handle_first_game_attempt(sample_user.id)

        assert awarded is False
        service.user_repo.add_bonus_attempts.assert_not_called()

    @pytest.mark.asyncio
    async def test_user_without_referrer(self, service):
        service.user_repo.get_by_id.return_value = User(_id="x", email_verified=True)

        assert await service.handle_email_verified("x") is False
        service.user_repo.get_by_share_code.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_share_code(self, service, sample_user):
        sample_user.email_verified = True
        service.user_repo.get_by_id.return_value = sample_user
        service.user_repo.get_by_share_code.return_value = None
        service.attempt_repo.has_attempts.return_value = True

        assert await service.handle_email_verified(sample_user.id) is False
        service.user_repo.claim_referral_reward.assert_not_called()
