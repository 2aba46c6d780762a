"""
EmailVerificationService - Signup with email verification.

Flow:
1. signup: validate email, create/find user, store token, send link
2. verify_email: consume token, mark user verified, run referral rewards
3. resend_verification: new token for a user still unverified
"""

import logging
import secrets
import string
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from app.core.config import get_settings
from app.models.email_verification import SignupResult
from app.repositories.user_repository import UserRepository
from app.repositories.email_verification_repository import EmailVerificationRepository
from app.services.email_sender import BrevoEmailSender
from app.services.email_validation import validate_email, is_disposable_email_api
from app.services.referral_service import ReferralService

logger = logging.getLogger(__name__)

SHARE_CODE_ALPHABET = string.ascii_uppercase + string.digits
SHARE_CODE_LENGTH = 6


class EmailVerificationError(Exception):
    """Base exception for email verification errors."""
    code = "VERIFICATION_FAILED"


class InvalidEmailError(EmailVerificationError):
    code = "INVALID_EMAIL"

    def __init__(self, message: str, suggestion: Optional[str] = None):
        super().__init__(message)
        self.suggestion = suggestion


class DisposableEmailError(EmailVerificationError):
    code = "DISPOSABLE_EMAIL"


class EmailAlreadyRegisteredError(EmailVerificationError):
    code = "EMAIL_EXISTS"


class UserNotFoundError(EmailVerificationError):
    code = "USER_NOT_FOUND"


class InvalidTokenError(EmailVerificationError):
    code = "INVALID_TOKEN"


class AlreadyVerifiedError(EmailVerificationError):
    code = "ALREADY_VERIFIED"


class ExpiredTokenError(EmailVerificationError):
    code = "EXPIRED_TOKEN"


def generate_verification_token() -> str:
    return secrets.token_hex(32)


def generate_verification_link(token: str, base_url: Optional[str] = None) -> str:
    base_url = base_url or get_settings().base_url
    return f"{base_url.rstrip('/')}/verify-email?token={token}"


def generate_share_code() -> str:
    return "".join(secrets.choice(SHARE_CODE_ALPHABET) for _ in range(SHARE_CODE_LENGTH))


def normalize_email(email: str) -> str:
    return email.strip().lower()


class EmailVerificationService:
    def __init__(self, db: AsyncIOMotorDatabase, sender: Optional[BrevoEmailSender] = None):
        self.settings = get_settings()
        self.user_repo = UserRepository(db)
        self.verification_repo = EmailVerificationRepository(db)
        self.referral_service = ReferralService(db)
        self.sender = sender or BrevoEmailSender(
            api_key=self.settings.brevo_api_key,
            sender_name=self.settings.email_sender_name,
            sender_address=self.settings.email_sender_address,
            ttl_hours=self.settings.verification_token_ttl_hours,
        )

    async def _issue_token(self, uid: str, email: str) -> bool:
        """Store a new token for the user and email the link."""
        token = generate_verification_token()
        expires_at = datetime.now(timezone.utc) + timedelta(
            hours=self.settings.verification_token_ttl_hours
        )

        await self.verification_repo.replace_token(uid, email, token, expires_at)

        link = generate_verification_link(token, self.settings.base_url)
        return await self.sender.send_verification_email(email, link)

    async def signup(self, email: str, referral_code: Optional[str] = None) -> SignupResult:
        """
        Register an email and send its verification link.

        Signing up again with an unverified email resends the link.
        Raises: InvalidEmailError, DisposableEmailError, EmailAlreadyRegisteredError
        """
        email = normalize_email(email)

        validation = validate_email(email)
        if not validation.valid:
            raise InvalidEmailError(", ".join(validation.errors), validation.suggestion)

        if await is_disposable_email_api(email, self.settings.abstract_api_key):
            raise DisposableEmailError(
                "Disposable email addresses are not allowed. Please use a permanent email address."
            )

        user = await self.user_repo.get_by_email(email)

        if user is not None and user.email_verified:
            raise EmailAlreadyRegisteredError("Email already registered and verified")

        if user is None:
            uid = uuid.uuid4().hex
            logger.info(f"✅ Created new user: {uid}")
        else:
            uid = user.id
            logger.info(f"User {uid} exists but not verified, resending email...")

        await self.user_repo.upsert_signup(
            uid,
            email,
            share_code=generate_share_code(),
            referred_by_code=referral_code
        )

        email_sent = await self._issue_token(uid, email)
        if not email_sent:
            logger.error(f"❌ Failed to send verification email to {email}")

        return SignupResult(uid=uid, email_sent=email_sent)

    async def verify_email(self, token: str) -> str:
        """
        Consume a verification token. Returns the verified user's id.

        Raises: InvalidTokenError, AlreadyVerifiedError, ExpiredTokenError
        """
        verification = await self.verification_repo.get_by_token(token)

        if verification is None:
            raise InvalidTokenError("Invalid or expired verification link")

        if verification.verified:
            raise AlreadyVerifiedError("Email already verified")

        expires_at = verification.expires_at
        if expires_at.tzinfo is None:
            # Mongo devuelve fechas naive (en UTC)
            expires_at = expires_at.replace(tzinfo=timezone.utc)

        if datetime.now(timezone.utc) > expires_at:
            raise ExpiredTokenError("Verification link has expired. Please request a new one.")

        await self.verification_repo.mark_verified(verification.uid)
        await self.user_repo.mark_email_verified(verification.uid)

        await self.referral_service.handle_email_verified(verification.uid)

        return verification.uid

    async def resend_verification(self, email: str) -> bool:
        """
        Send a new verification link. Returns whether the email went out.

        Raises: UserNotFoundError, AlreadyVerifiedError
        """
        email = normalize_email(email)

        user = await self.user_repo.get_by_email(email)
        if user is None:
            raise UserNotFoundError(f"No account found for {email}")

        if user.email_verified:
            raise AlreadyVerifiedError("Email already verified")

        return await self._issue_token(user.id, email)
