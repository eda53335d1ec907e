"""Exception classes for goteo.

Parsing never raises: malformed Markdown degrades to paragraphs and plain
text. Errors exist only for invalid configuration and engine misuse.
"""

from __future__ import annotations


class GoteoError(Exception):
    """Base exception for all goteo errors."""

    pass


class ConfigError(GoteoError, ValueError):
    """Invalid configuration value.

    Raised when a StreamConfig is built with values the engine cannot
    run with.
    """

    def __init__(self, field: str, message: str) -> None:
        """Initialize config error.

        Args:
            field: Name of the offending config field
            message: Description of the problem
        """
        self.field = field
        super().__init__(f"{field}: {message}")


class StreamError(GoteoError):
    """Streaming engine misuse, such as starting a session on a closed engine."""

    pass
