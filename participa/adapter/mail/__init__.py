"""Outbound email adapter."""

from .mailer import OutboxMailer, SentMail, SmtpMailer

__all__ = ["OutboxMailer", "SentMail", "SmtpMailer"]
