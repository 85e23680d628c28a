"""Custom exceptions for creative distribution."""


class CreativeSplitError(Exception):
    """Base exception for creative distribution."""
    pass


class InvalidInputError(CreativeSplitError):
    """Raised when user input is invalid."""
    pass


class ExportError(CreativeSplitError):
    """Raised when a CSV export cannot be produced."""
    pass
