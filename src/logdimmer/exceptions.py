"""Custom exceptions for the LogDimmer application."""


class LogDimmerException(Exception):
    """Base exception for all LogDimmer errors."""

    pass


class ConfigurationError(LogDimmerException):
    """Raised when there is a configuration error."""

    pass


class InvalidColorError(ConfigurationError):
    """Raised when a color is neither "#RRGGBB" nor "default"."""

    pass


class SettingsPersistenceError(LogDimmerException):
    """Raised when settings cannot be written to disk."""

    pass
