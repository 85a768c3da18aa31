"""Outgoing email."""

from ..config import settings
from .service import EmailService


def get_email_service() -> EmailService:
    """Create the email service from settings."""
    return EmailService(
        api_key=settings.mailgun_api_key,
        domain=settings.mailgun_domain,
        from_name=settings.mailgun_from_name,
        timeout=settings.mailgun_timeout_seconds,
    )


__all__ = ["EmailService", "get_email_service"]
