# app/errors.py


class TypesprintError(Exception):
    """Base class for errors raised by the application."""


class ResultsLogError(TypesprintError):
    """Raised when a finished session cannot be written to the results log."""
