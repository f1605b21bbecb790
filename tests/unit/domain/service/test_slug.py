"""Unit tests for username slugs and placeholder emails."""

import pytest

from participa.domain.service import is_placeholder_email, placeholder_email, slugify
from participa.domain.value import AuthProvider, Username
from participa.domain.value.types import USERNAME_MAX_LENGTH


class TestSlugify:
    """Tests for slugify()."""

    @pytest.mark.parametrize(
        "display_name, expected",
        [
            ("manuela", "manuela"),
            ("Manuela Carmena", "manuela-carmena"),
            ("  Peña   Ñúñez ", "pena-nunez"),
            ("Ana_Botella!!", "ana-botella"),
            ("--hyphens--everywhere--", "hyphens-everywhere"),
            ("", ""),
            ("日本語", ""),
        ],
    )
    def test_slugify(self, display_name, expected):
        assert slugify(display_name) == expected

    @pytest.mark.parametrize(
        "display_name", ["Manuela Carmena", "Peña", "a--b", "ALL CAPS 2024", "x" * 100]
    )
    def test_slugify_is_idempotent(self, display_name):
        """Slugifying a slug returns it unchanged."""
        once = slugify(display_name)
        assert slugify(once) == once

    def test_slugify_truncates_without_trailing_hyphen(self):
        slug = slugify("a" * 59 + " b", max_length=60)

        assert len(slug) <= 60
        assert not slug.endswith("-")

    def test_default_length_fits_a_username(self):
        slug = slugify("Manuela " * 20)

        assert len(slug) <= USERNAME_MAX_LENGTH
        assert Username(slug).root == slug

    def test_slugify_is_deterministic(self):
        assert slugify("Manuela Carmena") == slugify("Manuela Carmena")


class TestPlaceholderEmail:
    """Tests for placeholder_email() and is_placeholder_email()."""

    def test_placeholder_email_format(self):
        email = placeholder_email("12345", AuthProvider.TWITTER)

        assert email == "omniauth@participacion-12345-twitter.com"
        assert is_placeholder_email(email)

    def test_placeholder_email_is_deterministic(self):
        assert placeholder_email("12345", AuthProvider.TWITTER) == placeholder_email(
            "12345", AuthProvider.TWITTER
        )

    def test_placeholder_email_differs_by_provider(self):
        assert placeholder_email("12345", AuthProvider.TWITTER) != placeholder_email(
            "12345", AuthProvider.FACEBOOK
        )

    def test_unsafe_external_ids_do_not_collide(self):
        """IDs that slugify alike still get distinct placeholders."""
        first = placeholder_email("Abc_1", AuthProvider.GOOGLE)
        second = placeholder_email("abc-1", AuthProvider.GOOGLE)

        assert first != second
        assert is_placeholder_email(first)
        assert is_placeholder_email(second)

    @pytest.mark.parametrize(
        "email", ["manuela@madrid.es", "omniauth@example.com", "someone@participacion.com"]
    )
    def test_real_emails_are_not_placeholders(self, email):
        assert not is_placeholder_email(email)
