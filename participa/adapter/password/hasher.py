"""Argon2 password hashing via passlib."""

from passlib.context import CryptContext

from participa.domain.service.password_service import PasswordHasher


class PasslibPasswordHasher(PasswordHasher):
    """Hashes passwords with Argon2; older schemes are accepted and marked deprecated."""

    def __init__(self) -> None:
        self.context = CryptContext(schemes=["argon2"], deprecated="auto")

    def hash(self, password: str) -> str:
        return self.context.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        return self.context.verify(password, password_hash)
