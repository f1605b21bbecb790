"""Base class for domain services."""


class Service:
    """Marker base for the account domain services.

    Services hold the rules that span accounts, identities, tokens and
    sessions; they are request scoped and never hold per-user state.
    """
