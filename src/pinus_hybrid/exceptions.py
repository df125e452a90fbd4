# src/pinus_hybrid/exceptions.py
"""Custom exceptions for Pinus Hybrid."""
from typing import Optional


class PinusError(Exception):
    """Base exception for Pinus Hybrid."""


class EmptyTrainingSetError(PinusError):
    """Raised when classification or evaluation runs without training samples."""


class InvalidKError(PinusError):
    """Raised when the neighbor count k is not usable."""


class ValidationError(PinusError):
    """Raised when a sample, query point or score map fails validation."""


class ConfigurationError(PinusError):
    """Raised when configuration is invalid."""


class DatasetLoadError(PinusError):
    """Raised when a training or test file cannot be loaded."""

    def __init__(self, message: str, path: Optional[str] = None, row: Optional[int] = None):
        self.path = path
        self.row = row
        where = ""
        if path is not None:
            where = f"{path}"
            if row is not None:
                where += f", row {row}"
            where = f" ({where})"
        super().__init__(f"{message}{where}")
