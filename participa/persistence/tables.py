"""SQLAlchemy table definitions for Participa accounts.

These table definitions are used by the SQLAlchemy Core repositories.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    Column,
    ForeignKey,
    Index,
    MetaData,
    String,
    Table,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# ACCOUNTS TABLE (Provider-agnostic)
# ============================================================================
accounts_table = Table(
    "accounts",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("username", String(60), nullable=False),  # Slug form
    Column("email", String(255), nullable=False),  # Normalized, may be a placeholder
    Column("email_confirmed", Boolean, nullable=False, server_default="false"),
    Column("confirmed_at", TIMESTAMP(timezone=True), nullable=True),
    Column("password_hash", String(255), nullable=True),  # NULL for provider-only
    Column("signup_state", String(40), nullable=False),
    Column("terms_accepted_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("username", name="uq_accounts_username"),
    UniqueConstraint("email", name="uq_accounts_email"),
)

# ============================================================================
# IDENTITIES TABLE (Third-party provider links)
# ============================================================================
identities_table = Table(
    "identities",
    metadata,
    Column("id", UUID, primary_key=True),
    Column(
        "account_id", UUID, ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False
    ),
    Column("provider", String(50), nullable=False),  # 'twitter', 'facebook', ...
    Column("external_id", String(255), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint(
        "provider", "external_id", name="uq_identities_provider_external_id"
    ),
    UniqueConstraint("account_id", "provider", name="uq_identities_account_provider"),
)

# ============================================================================
# AUTH TOKENS TABLE (Confirmation and password reset)
# ============================================================================
auth_tokens_table = Table(
    "auth_tokens",
    metadata,
    Column("id", UUID, primary_key=True),
    Column(
        "account_id", UUID, ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False
    ),
    Column("purpose", String(20), nullable=False),
    Column("token_hash", String(64), nullable=False),  # SHA-256 hex
    Column("expires_at", TIMESTAMP(timezone=True), nullable=False),
    Column("used_at", TIMESTAMP(timezone=True), nullable=True),
    Column("superseded_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("token_hash", name="uq_auth_tokens_token_hash"),
)

Index(
    "idx_auth_tokens_account_purpose",
    auth_tokens_table.c.account_id,
    auth_tokens_table.c.purpose,
)

# ============================================================================
# SESSIONS TABLE
# ============================================================================
sessions_table = Table(
    "sessions",
    metadata,
    Column("id", UUID, primary_key=True),
    Column(
        "account_id", UUID, ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("refreshed_at", TIMESTAMP(timezone=True), nullable=False),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=False),
)

Index("idx_sessions_account_id", sessions_table.c.account_id)
