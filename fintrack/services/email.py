"""
Email service using SendGrid.

Falls back to console logging if SendGrid is not configured.
"""

import logging
from typing import Optional

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail, Email, To, Content

from fintrack.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()

_LAYOUT = """
<!DOCTYPE html>
<html>
<head>
    <style>
        body {{ font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; line-height: 1.6; color: #1f2937; }}
        .container {{ max-width: 600px; margin: 0 auto; padding: 20px; }}
        .button {{ display: inline-block; padding: 12px 24px; background-color: #059669; color: white; text-decoration: none; border-radius: 6px; font-weight: 500; }}
        .footer {{ margin-top: 30px; font-size: 12px; color: #6b7280; }}
    </style>
</head>
<body>
    <div class="container">
        <h1>{heading}</h1>
        {body}
        <p style="margin: 30px 0;">
            <a href="{action_url}" class="button">{action_label}</a>
        </p>
        <p class="footer">{footer}</p>
    </div>
</body>
</html>
"""


class EmailService:
    """Email service with SendGrid integration."""

    def __init__(self):
        self.api_key = settings.sendgrid_api_key
        self.from_email = settings.sendgrid_from_email
        self.from_name = settings.sendgrid_from_name
        self.frontend_url = settings.frontend_url
        self.client = None

        if self.api_key:
            self.client = SendGridAPIClient(self.api_key)

    def _send_email(self, to_email: str, subject: str, html_content: str) -> bool:
        """
        Send an email.

        Returns:
            True if sent (or logged in console mode), False on delivery failure
        """
        if not self.client:
            logger.info(
                f"[EMAIL - Console Mode]\n"
                f"To: {to_email}\n"
                f"Subject: {subject}\n"
                f"Content:\n{html_content}\n"
            )
            return True

        try:
            message = Mail(
                from_email=Email(self.from_email, self.from_name),
                to_emails=To(to_email),
                subject=subject,
                html_content=Content("text/html", html_content),
            )
            response = self.client.send(message)
        except Exception as e:
            logger.error(f"Error sending email to {to_email}: {e}")
            return False

        if 200 <= response.status_code < 300:
            logger.info(f"Email sent successfully to {to_email}")
            return True

        logger.error(f"Failed to send email: {response.status_code} - {response.body}")
        return False

    def send_welcome_email(self, to_email: str, first_name: Optional[str] = None) -> bool:
        """Send a welcome email after signup."""
        greeting = f"Hi {first_name}!" if first_name else "Welcome!"
        html_content = _LAYOUT.format(
            heading=greeting,
            body=(
                f"<p>Your {settings.app_name} account is ready.</p>"
                "<p>Start by recording this month's income and expenses, then set a "
                "budget for the categories you want to keep an eye on.</p>"
            ),
            action_url=f"{self.frontend_url}/",
            action_label="Open your dashboard",
            footer="You are receiving this email because you signed up for an account.",
        )
        return self._send_email(to_email, f"Welcome to {settings.app_name}", html_content)

    def send_password_reset_email(self, to_email: str, token: str) -> bool:
        """Send a password reset link."""
        reset_url = f"{self.frontend_url}/reset-password?token={token}"
        html_content = _LAYOUT.format(
            heading="Reset Your Password",
            body=(
                f"<p>We received a request to reset the password for your "
                f"{settings.app_name} account.</p>"
                f'<p style="word-break: break-all; color: #6b7280;">{reset_url}</p>'
            ),
            action_url=reset_url,
            action_label="Reset Password",
            footer=(
                f"This link will expire in {settings.password_reset_token_expire_hours} hours.<br>"
                "If you didn't request a password reset, you can safely ignore this email."
            ),
        )
        return self._send_email(to_email, f"Reset your {settings.app_name} password", html_content)


_email_service: Optional[EmailService] = None


def get_email_service() -> EmailService:
    """Get the email service singleton."""
    global _email_service
    if _email_service is None:
        _email_service = EmailService()
    return _email_service
