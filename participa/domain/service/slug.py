"""Username slugs and placeholder emails.

Both are pure, deterministic functions with no I/O.
"""

import hashlib
import re
import unicodedata

from participa.domain.value import AuthProvider
from participa.domain.value.types import USERNAME_MAX_LENGTH

PLACEHOLDER_LOCAL_PART = "omniauth"
PLACEHOLDER_DOMAIN_PREFIX = "participacion"
PLACEHOLDER_TLD = "com"

_PLACEHOLDER_PATTERN = re.compile(
    rf"^{PLACEHOLDER_LOCAL_PART}@{PLACEHOLDER_DOMAIN_PREFIX}-[a-z0-9-]+\.{PLACEHOLDER_TLD}$"
)


def slugify(display_name: str, max_length: int = USERNAME_MAX_LENGTH) -> str:
    """Convert a display name to a URL-safe username candidate.

    - Transliterates accented characters to ASCII ("Peña" -> "pena")
    - Converts to lowercase
    - Replaces runs of whitespace/punctuation with a single hyphen
    - Strips leading/trailing hyphens
    - Truncates to ``max_length`` characters

    Idempotent: ``slugify(slugify(x)) == slugify(x)``.

    Args:
        display_name: Name to slugify
        max_length: Maximum slug length

    Returns:
        Slug string (may be empty if the name has no usable characters)
    """
    ascii_name = (
        unicodedata.normalize("NFKD", display_name)
        .encode("ascii", "ignore")
        .decode("ascii")
    )
    slug = re.sub(r"[^a-z0-9]+", "-", ascii_name.lower()).strip("-")
    # Truncation may cut right after a hyphen
    return slug[:max_length].rstrip("-")


def placeholder_email(external_id: str, provider: AuthProvider) -> str:
    """Synthesize the stand-in email for a provider identity without one.

    Format: ``omniauth@participacion-<external_id>-<provider>.com``.
    External IDs that are not already slug-safe get a digest suffix so two
    distinct IDs never map to the same address.

    Args:
        external_id: Provider-scoped external ID
        provider: Identity provider

    Returns:
        Deterministic placeholder email
    """
    local_id = slugify(external_id, max_length=40)
    if local_id != external_id:
        digest = hashlib.sha256(external_id.encode("utf-8")).hexdigest()[:12]
        local_id = f"{local_id}-{digest}" if local_id else digest
    return (
        f"{PLACEHOLDER_LOCAL_PART}@{PLACEHOLDER_DOMAIN_PREFIX}-"
        f"{local_id}-{provider.value}.{PLACEHOLDER_TLD}"
    )


def is_placeholder_email(email: str) -> bool:
    """Check whether an email was produced by ``placeholder_email``."""
    return bool(_PLACEHOLDER_PATTERN.match(email.strip().lower()))
