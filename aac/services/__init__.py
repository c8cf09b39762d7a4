"""Application services."""

from .architecture_service import ArchitectureService

__all__ = ["ArchitectureService"]
