"""
Custom exceptions for the Architecture-as-Code model service.

Parsing and mapping degrade gracefully on malformed content, so these
exceptions only cover catastrophic input (unreadable files) and the
service-level operations built on top of the loaded model.
"""

from datetime import datetime, timezone
from typing import List, Optional


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class ModelLoadError(Exception):
    """
    Raised when a model file cannot be read.

    The loader catches this per file so that one unreadable file never
    aborts loading of its siblings.
    """

    def __init__(self, message: str, model_path: Optional[str] = None):
        """
        Initialize model load error.

        Args:
            message: Error message
            model_path: Path to the model file that failed to load
        """
        super().__init__(message)
        self.model_path = model_path
        self.timestamp = _utc_timestamp()

    def __str__(self):
        base = super().__str__()
        if self.model_path:
            return f"{base} | Path: {self.model_path}"
        return base


class ArchitectureValidationError(Exception):
    """
    Raised when an architecture fails validation on save.

    Carries the list of ValidationError entries so callers can render them.
    """

    def __init__(self, message: str, errors: Optional[List] = None):
        super().__init__(message)
        self.errors = errors or []
        self.timestamp = _utc_timestamp()

    def __str__(self):
        codes = ", ".join(error.code for error in self.errors[:5])
        if codes:
            return f"{super().__str__()} | Errors: {codes}"
        return super().__str__()


class ArchitectureLoadError(Exception):
    """Raised when loaded architectures cannot be stored."""

    def __init__(self, message: str, architecture_uid: Optional[str] = None):
        super().__init__(message)
        self.architecture_uid = architecture_uid
        self.timestamp = _utc_timestamp()


class ArchitectureNotFoundError(Exception):
    """Raised when an architecture uid is not present in the repository."""

    def __init__(self, architecture_uid: str):
        super().__init__(f"Architecture not found: {architecture_uid}")
        self.architecture_uid = architecture_uid
        self.timestamp = _utc_timestamp()


# Convenience function for error logging
def log_exception(exception: Exception, logger, context: dict = None):
    """
    Log exception with full context.

    Args:
        exception: Exception to log
        logger: Logger instance
        context: Optional context dictionary
    """
    error_type = type(exception).__name__

    log_data = {
        "error_type": error_type,
        "error_message": str(exception),
        "timestamp": _utc_timestamp()
    }

    if context:
        log_data.update(context)

    if hasattr(exception, 'timestamp'):
        log_data["exception_timestamp"] = exception.timestamp

    if isinstance(exception, ModelLoadError):
        log_data["model_path"] = exception.model_path

    elif isinstance(exception, ArchitectureValidationError):
        log_data["error_codes"] = [error.code for error in exception.errors]

    elif isinstance(exception, (ArchitectureLoadError, ArchitectureNotFoundError)):
        log_data["architecture_uid"] = exception.architecture_uid

    logger.error(f"Exception occurred: {error_type}", extra=log_data)
