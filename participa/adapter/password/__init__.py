"""Password hashing adapter."""

from .hasher import PasslibPasswordHasher

__all__ = ["PasslibPasswordHasher"]
