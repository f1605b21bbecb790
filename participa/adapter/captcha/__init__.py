"""Captcha adapter."""

from .recaptcha import RecaptchaVerifier, StaticCaptchaVerifier

__all__ = ["RecaptchaVerifier", "StaticCaptchaVerifier"]
