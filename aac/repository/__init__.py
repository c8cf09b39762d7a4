"""Architecture storage."""

from .memory import InMemoryArchitectureRepository

__all__ = ["InMemoryArchitectureRepository"]
