"""Errors raised while wiring the application."""


class ConfigurationError(Exception):
    """Settings or providers are missing or inconsistent.

    Raised at startup or on first use of the misconfigured component.
    """
