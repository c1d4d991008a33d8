"""
Custom exceptions for the alpha-crop package.

Provides a hierarchy of exceptions for the errors that can occur while
loading images, reading configuration and running the crop command.
"""

from typing import Optional, Any


class AlphaCropError(Exception):
    """Base exception for all alpha-crop errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} (Details: {details_str})"
        return self.message


class ConfigurationError(AlphaCropError):
    """Raised when there are configuration-related errors."""
    pass


class ValidationError(AlphaCropError):
    """Raised when input validation fails."""
    pass


class ProcessingError(AlphaCropError):
    """Raised when image processing operations fail."""

    def __init__(self, message: str, processor: Optional[str] = None,
                 image_path: Optional[str] = None, **kwargs: Any) -> None:
        details = kwargs
        if processor:
            details["processor"] = processor
        if image_path:
            details["image_path"] = image_path
        super().__init__(message, details)


class ImageLoadError(ProcessingError):
    """Raised when an image cannot be loaded or is invalid."""
    pass


class ImageSaveError(ProcessingError):
    """Raised when an image cannot be saved."""
    pass


class ActionError(AlphaCropError):
    """Raised when an action cannot be registered, recorded or replayed."""

    def __init__(self, message: str, action: Optional[str] = None, **kwargs: Any) -> None:
        details = kwargs
        if action:
            details["action"] = action
        super().__init__(message, details)
