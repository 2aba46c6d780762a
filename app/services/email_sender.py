"""
BrevoEmailSender - Transactional emails through the Brevo HTTP API.
"""

import logging
from typing import Optional

import httpx

logger = logging.getLogger(__name__)

BREVO_SEND_URL = "https://api.brevo.com/v3/smtp/email"

VERIFICATION_SUBJECT = "Verify Your Sky Fall Account"

VERIFICATION_TEMPLATE = """\
<!DOCTYPE html>
<html>
<body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333;">
  <div style="max-width: 600px; margin: 0 auto; padding: 20px;">
    <h1 style="background: #2563eb; color: white; padding: 30px; text-align: center; border-radius: 8px;">
      🎮 Welcome to Sky Fall!
    </h1>
    <h2>Verify Your Email Address</h2>
    <p>Thanks for signing up! Please verify your email address to start playing and earning rewards.</p>
    <p style="text-align: center;">
      <a href="{link}" style="display: inline-block; padding: 14px 32px; background: #2563eb; color: white; text-decoration: none; border-radius: 8px; font-weight: bold;">Verify Email Address</a>
    </p>
    <p style="font-size: 14px; color: #6b7280;">Or copy and paste this link:<br>{link}</p>
    <p style="color: #dc2626; font-weight: bold;">⚠️ This link expires in {ttl_hours} hours.</p>
    <p style="text-align: center; color: #6b7280; font-size: 14px;">
      If you didn't create this account, you can safely ignore this email.
    </p>
  </div>
</body>
</html>
"""


class BrevoEmailSender:
    def __init__(
        self,
        api_key: Optional[str],
        sender_name: str,
        sender_address: str,
        ttl_hours: int = 24
    ):
        self.api_key = api_key
        self.sender_name = sender_name
        self.sender_address = sender_address
        self.ttl_hours = ttl_hours

    async def send_verification_email(self, email: str, verification_link: str) -> bool:
        """
        Send the verification link.

        Returns False instead of raising: a failed email must not break signup.
        """
        if not self.api_key:
            logger.error("❌ BREVO_API_KEY not set, verification email not sent")
            return False

        payload = {
            "sender": {"name": self.sender_name, "email": self.sender_address},
            "to": [{"email": email, "name": email.split("@")[0]}],
            "subject": VERIFICATION_SUBJECT,
            "htmlContent": VERIFICATION_TEMPLATE.format(
                link=verification_link,
                ttl_hours=self.ttl_hours
            ),
        }

        try:
            async with httpx.AsyncClient(timeout=10.0) as client:
                response = await client.post(
                    BREVO_SEND_URL,
                    json=payload,
                    headers={"accept": "application/json", "api-key": self.api_key}
                )
        except httpx.HTTPError as e:
            logger.error(f"❌ Error sending verification email: {e}")
            return False

        if response.is_success:
            logger.info(f"✅ Verification email sent to: {email}")
            return True

        logger.error(f"❌ Brevo rejected email. Status: {response.status_code}, Response: {response.text}")
        return False
