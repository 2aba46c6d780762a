from .user_repository import UserRepository
from .attempt_repository import AttemptRepository
from .email_verification_repository import EmailVerificationRepository

__all__ = [
    "UserRepository",
    "AttemptRepository",
    "EmailVerificationRepository",
]
