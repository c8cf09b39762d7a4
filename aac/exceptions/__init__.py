"""Exception classes for the Architecture-as-Code model service."""

from .exceptions import (
    ArchitectureLoadError,
    ArchitectureNotFoundError,
    ArchitectureValidationError,
    ModelLoadError,
    log_exception,
)

__all__ = [
    "ArchitectureLoadError",
    "ArchitectureNotFoundError",
    "ArchitectureValidationError",
    "ModelLoadError",
    "log_exception",
]
