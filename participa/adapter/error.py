"""Errors raised by adapters to external systems."""


class AdapterError(Exception):
    """An external system could not be used."""


class ProviderError(AdapterError):
    """An identity provider or the captcha service failed or answered badly.

    Mapped to a 502 or to an error redirect at the HTTP edge, never to a
    domain outcome.
    """
