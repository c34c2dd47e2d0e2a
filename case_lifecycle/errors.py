"""Exceptions raised by the case lifecycle engine."""


class CaseLifecycleError(Exception):
    """Base class for all case lifecycle errors."""


class InvalidStatusError(CaseLifecycleError, TypeError):
    """Raised when an object handed in from outside is not a usable status."""


class ResponsesExhaustedError(CaseLifecycleError):
    """Raised when a scripted responder is asked for more keys than it holds."""


class OptionsFileError(CaseLifecycleError):
    """Raised when an options file does not hold a mapping of settings."""
