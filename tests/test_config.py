"""Tests for ParseConfig (ContextVar-scoped) and StreamConfig (validated)."""

from threading import Thread

import pytest

from goteo import (
    ConfigError,
    GoteoError,
    ParseConfig,
    StreamConfig,
    get_parse_config,
    parse,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from goteo.nodes import FencedCode


class TestParseConfig:
    """ParseConfig frozen dataclass and context functions."""

    def teardown_method(self) -> None:
        reset_parse_config()

    def test_default_values(self) -> None:
        assert ParseConfig().default_language == "plaintext"
        assert get_parse_config() == ParseConfig()

    def test_immutability(self) -> None:
        config = ParseConfig()
        with pytest.raises(AttributeError):
            config.default_language = "x"  # type: ignore[misc]

    def test_set_and_reset(self) -> None:
        set_parse_config(ParseConfig(default_language="text"))
        assert get_parse_config().default_language == "text"
        reset_parse_config()
        assert get_parse_config().default_language == "plaintext"

    def test_context_manager_restores_on_error(self) -> None:
        with pytest.raises(RuntimeError):
            with parse_config_context(ParseConfig(default_language="text")):
                raise RuntimeError("boom")
        assert get_parse_config().default_language == "plaintext"

    def test_config_reaches_parser(self) -> None:
        with parse_config_context(ParseConfig(default_language="console")):
            fence = parse("```\n$ ls\n```").children[0]
        assert isinstance(fence, FencedCode)
        assert fence.language == "console"

    def test_thread_isolation(self) -> None:
        """Config set in one thread does not leak into another."""
        set_parse_config(ParseConfig(default_language="main"))
        seen: list[str] = []

        def worker() -> None:
            set_parse_config(ParseConfig(default_language="worker"))
            seen.append(get_parse_config().default_language)

        thread = Thread(target=worker)
        thread.start()
        thread.join()

        assert seen == ["worker"]
        assert get_parse_config().default_language == "main"

    def test_from_dict_ignores_unknown_keys(self) -> None:
        config = ParseConfig.from_dict({"default_language": "md", "unknown_key": 1})
        assert config == ParseConfig(default_language="md")


class TestStreamConfig:
    """StreamConfig defaults and validation."""

    def test_defaults(self) -> None:
        config = StreamConfig()
        assert config.chunk_size == 2
        assert config.interval_ms == 30
        assert config.interval == pytest.approx(0.03)

    def test_from_dict(self) -> None:
        config = StreamConfig.from_dict({"chunk_size": 5, "interval_ms": 0, "speed": "fast"})
        assert config == StreamConfig(chunk_size=5, interval_ms=0)

    @pytest.mark.parametrize("chunk_size", [0, -1])
    def test_chunk_size_must_be_positive(self, chunk_size: int) -> None:
        with pytest.raises(ConfigError, match="chunk_size"):
            StreamConfig(chunk_size=chunk_size)

    @pytest.mark.parametrize("chunk_size", [1.5, "2", True])
    def test_chunk_size_must_be_int(self, chunk_size: object) -> None:
        with pytest.raises(ConfigError, match="expected int"):
            StreamConfig(chunk_size=chunk_size)  # type: ignore[arg-type]

    def test_negative_interval(self) -> None:
        with pytest.raises(ConfigError, match="interval_ms"):
            StreamConfig(interval_ms=-1)

    def test_config_error_hierarchy(self) -> None:
        """ConfigError is both a GoteoError and a ValueError."""
        with pytest.raises(ValueError):
            StreamConfig(chunk_size=0)
        with pytest.raises(GoteoError):
            StreamConfig(chunk_size=0)

    def test_error_records_field(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            StreamConfig(interval_ms=-5)
        assert exc_info.value.field == "interval_ms"
