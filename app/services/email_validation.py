"""
Email validation: format, typo suggestions and disposable domains.

Everything here is local except is_disposable_email_api, which asks the
Abstract email-validation API and falls back to the local list.
"""

import logging
import re
from typing import Optional

import httpx
from rapidfuzz.distance import Levenshtein

from app.models.email_verification import EmailValidationResult

logger = logging.getLogger(__name__)

ABSTRACT_API_URL = "https://emailvalidation.abstractapi.com/v1/"

# RFC 5322 (simplificada)
EMAIL_REGEX = re.compile(
    r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*$"
)

MAX_EMAIL_LENGTH = 254  # RFC 5321
MAX_LOCAL_LENGTH = 64
MAX_DOMAIN_LENGTH = 253

# Typos further than this are not considered the same domain
MAX_TYPO_DISTANCE = 2

COMMON_DOMAINS = [
    "gmail.com", "yahoo.com", "hotmail.com", "outlook.com",
    "icloud.com", "me.com", "aol.com", "protonmail.com",
    "live.com", "msn.com", "comcast.net", "verizon.net",
    "att.net", "sbcglobal.net", "cox.net", "mail.com",
]

DISPOSABLE_DOMAINS = {
    # Temp email services
    "10minutemail.com", "10minutemail.net", "throwaway.email",
    "guerrillamail.com", "guerrillamail.net", "sharklasers.com",
    "grr.la", "guerrillamailblock.com", "pokemail.net", "spam4.me",
    "tempmail.com", "tempmail.net", "temp-mail.org", "tempmailaddress.com",
    "mailinator.com", "trashmail.com", "getnada.com", "maildrop.cc",
    "yopmail.com", "yopmail.fr", "cool.fr.nf", "jetable.fr.nf",
    "nospam.ze.tc", "nomail.xl.cx", "mega.zik.dj", "speed.1s.fr",
    "courriel.fr.nf", "moncourrier.fr.nf", "monemail.fr.nf",
    "monmail.fr.nf", "hide.biz.st", "mymail.infos.st",

    # Known generators
    "mailsac.com", "mintemail.com", "fakeinbox.com", "throwawaymail.com",
    "spamgourmet.com", "incognitomail.com", "anonymbox.com",
    "deadaddress.com", "emailondeck.com", "fakeinbox.net",
    "getairmail.com", "gishpuppy.com", "mytrashmail.com",
    "mt2015.com", "thankyou2010.com", "trash-mail.com",
    "trbvm.com", "wegwerfmail.de", "wegwerfemail.de",
}


def _split(email: str) -> tuple[str, str]:
    local, _, domain = email.partition("@")
    return local, domain


def is_valid_email_format(email: Optional[str]) -> bool:
    if not email or not isinstance(email, str):
        return False

    if len(email) > MAX_EMAIL_LENGTH or "@" not in email:
        return False

    local, domain = _split(email)

    if not local or len(local) > MAX_LOCAL_LENGTH:
        return False
    if local.startswith(".") or local.endswith(".") or ".." in local:
        return False

    if not domain or len(domain) > MAX_DOMAIN_LENGTH:
        return False
    if domain.startswith(".") or domain.endswith(".") or ".." in domain:
        return False

    return EMAIL_REGEX.match(email) is not None


def levenshtein_distance(a: str, b: str) -> int:
    """Edit distance between two strings (insert, delete, substitute)."""
    return Levenshtein.distance(a, b)


def suggest_domain(email: Optional[str]) -> Optional[str]:
    """
    Suggest a corrected address when the domain looks like a typo
    of a common provider (e.g. user@gmial.com -> user@gmail.com).
    """
    if not email or "@" not in email:
        return None

    local, domain = _split(email)
    domain = domain.lower()

    best_match = None
    best_distance = MAX_TYPO_DISTANCE + 1

    for common in COMMON_DOMAINS:
        distance = levenshtein_distance(domain, common)
        if 0 < distance < best_distance:
            best_distance = distance
            best_match = common

    if best_match:
        return f"{local}@{best_match}"

    return None


def is_disposable_email(email: Optional[str]) -> bool:
    if not email or "@" not in email:
        return False

    _, domain = _split(email)
    return domain.lower() in DISPOSABLE_DOMAINS


async def is_disposable_email_api(email: str, api_key: Optional[str] = None) -> bool:
    """
    Disposable check through the Abstract API.

    Falls back to the local list when there's no API key or the API fails.
    """
    if not api_key:
        logger.warning("⚠️ No API key for disposable email check, using local list")
        return is_disposable_email(email)

    try:
        async with httpx.AsyncClient(timeout=5.0) as client:
            response = await client.get(
                ABSTRACT_API_URL,
                params={"api_key": api_key, "email": email}
            )
            response.raise_for_status()
            data = response.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.warning(f"⚠️ Disposable email API error, using local list: {e}")
        return is_disposable_email(email)

    return (data.get("is_disposable_email") or {}).get("value") is True


def validate_email(email: Optional[str]) -> EmailValidationResult:
    """Full local validation: format, typo suggestion and disposable domain."""
    result = EmailValidationResult(email=email)

    if not is_valid_email_format(email):
        result.errors.append("Invalid email format")
        return result

    result.suggestion = suggest_domain(email)

    if is_disposable_email(email):
        result.errors.append("Disposable email addresses are not allowed")
        return result

    result.valid = True
    return result
