"""Exceptions raised while loading master data."""


class DataError(Exception):
    """Base exception for the master-data layer."""


class DataLoadError(DataError):
    """Raised when a definition file is missing or is not valid JSON."""


class DataValidationError(DataError):
    """Raised when a definition record has the wrong shape or an unknown tag."""


class DataReferenceError(DataError):
    """Raised when a record points at a skill, condition or enemy that does not exist."""
