"""Exceptions raised while loading encounter definitions."""


class DataError(Exception):
    """Base exception for the data layer."""


class DataLoadError(DataError):
    """Raised when a definition file is missing or is not valid JSON."""


class DataValidationError(DataError):
    """Raised when definition content does not match the expected schema."""


class DataReferenceError(DataError):
    """Raised when a definition points at something it does not provide."""
