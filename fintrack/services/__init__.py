"""
Application services module.
"""

from fintrack.services.email import EmailService, get_email_service

__all__ = ["EmailService", "get_email_service"]
