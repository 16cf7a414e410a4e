"""
Engine Errors
"""


class ConfigurationError(ValueError):
    """Raised when a puzzle cannot be initialized from the given input."""
