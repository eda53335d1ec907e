"""Configuration for goteo.

Two frozen dataclasses:

- ParseConfig: read by the block segmenter. Lives in a ContextVar so one
  caller can change it without affecting parses in other threads or tasks.
- StreamConfig: passed explicitly to a StreamingEngine. Validated on
  construction.

Usage:
    from goteo.config import ParseConfig, parse_config_context

    with parse_config_context(ParseConfig(default_language="text")):
        doc = parse("```\\nraw\\n```")

    engine = StreamingEngine(StreamConfig(chunk_size=4, interval_ms=15))

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, fields
from typing import Any

from goteo.errors import ConfigError

DEFAULT_LANGUAGE = "plaintext"
DEFAULT_CHUNK_SIZE = 2
DEFAULT_INTERVAL_MS = 30


def _known_fields(cls: type, config_dict: dict[str, Any]) -> dict[str, Any]:
    valid_fields = {f.name for f in fields(cls)}
    return {k: v for k, v in config_dict.items() if k in valid_fields}


@dataclass(frozen=True, slots=True)
class ParseConfig:
    """Immutable parse configuration.

    Attributes:
        default_language: Language tag given to code fences whose opening
            marker carries none.

    """

    default_language: str = DEFAULT_LANGUAGE

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "ParseConfig":
        """Create ParseConfig from a dictionary, ignoring unknown keys.

        Example:
            >>> ParseConfig.from_dict({"default_language": "text", "x": 1})
            ParseConfig(default_language='text')

        """
        return cls(**_known_fields(cls, config_dict))


@dataclass(frozen=True, slots=True)
class StreamConfig:
    """Immutable streaming configuration.

    Attributes:
        chunk_size: Characters (code units) added to the delivered prefix
            on every tick. Must be at least 1.
        interval_ms: Delay between ticks in milliseconds. Must not be
            negative.

    Raises:
        ConfigError: If either value is out of range.

    """

    chunk_size: int = DEFAULT_CHUNK_SIZE
    interval_ms: float = DEFAULT_INTERVAL_MS

    def __post_init__(self) -> None:
        if isinstance(self.chunk_size, bool) or not isinstance(self.chunk_size, int):
            raise ConfigError("chunk_size", f"expected int, got {self.chunk_size!r}")
        if self.chunk_size < 1:
            raise ConfigError("chunk_size", f"must be >= 1, got {self.chunk_size}")
        if self.interval_ms < 0:
            raise ConfigError("interval_ms", f"must be >= 0, got {self.interval_ms}")

    @property
    def interval(self) -> float:
        """Tick interval in seconds."""
        return self.interval_ms / 1000

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "StreamConfig":
        """Create StreamConfig from a dictionary, ignoring unknown keys.

        Example:
            >>> StreamConfig.from_dict({"chunk_size": 8}).interval_ms
            30

        """
        return cls(**_known_fields(cls, config_dict))


# Module-level default config (reused, never recreated)
_DEFAULT_PARSE_CONFIG: ParseConfig = ParseConfig()

_parse_config: ContextVar[ParseConfig] = ContextVar(
    "parse_config",
    default=_DEFAULT_PARSE_CONFIG,
)


def get_parse_config() -> ParseConfig:
    """Get the parse configuration active in the current context."""
    return _parse_config.get()


def set_parse_config(config: ParseConfig) -> None:
    """Set parse configuration for the current context."""
    _parse_config.set(config)


def reset_parse_config() -> None:
    """Reset the current context to the default parse configuration."""
    _parse_config.set(_DEFAULT_PARSE_CONFIG)


@contextmanager
def parse_config_context(config: ParseConfig) -> Iterator[None]:
    """Use ``config`` for the duration of the block.

    Restores the previous config even if the block raises.

    Example:
        >>> with parse_config_context(ParseConfig(default_language="sh")):
        ...     get_parse_config().default_language
        'sh'

    """
    previous = _parse_config.get()
    _parse_config.set(config)
    try:
        yield
    finally:
        _parse_config.set(previous)


__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "DEFAULT_INTERVAL_MS",
    "DEFAULT_LANGUAGE",
    "ParseConfig",
    "StreamConfig",
    "get_parse_config",
    "parse_config_context",
    "reset_parse_config",
    "set_parse_config",
]
