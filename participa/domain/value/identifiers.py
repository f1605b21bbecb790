"""Strongly typed identifiers for domain entities.

Using NewType prevents mixing up different entity IDs.
"""

from typing import NewType
from uuid import UUID

AccountId = NewType("AccountId", UUID)
IdentityId = NewType("IdentityId", UUID)
AuthTokenId = NewType("AuthTokenId", UUID)
SessionId = NewType("SessionId", UUID)
