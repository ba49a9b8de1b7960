"""Tests for ContextVar-based parse configuration."""

import pytest

from orger import Parser, parse
from orger.config import (
    DEFAULT_TODO_KEYWORDS,
    ParseConfig,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from orger.nodes import Paragraph, Table


class TestParseConfig:
    """The immutable config object."""

    def test_defaults(self) -> None:
        config = ParseConfig()
        assert config.strict is False
        assert config.todo_keywords == frozenset({"TODO", "DONE"})
        assert config.plugins == ()
        assert config.parse_inline_formatting
        assert config.parse_links
        assert config.parse_tables
        assert config.parse_code_blocks
        assert config.parse_lists

    def test_frozen(self) -> None:
        config = ParseConfig()
        with pytest.raises(AttributeError):
            config.strict = True  # type: ignore[misc]

    def test_from_dict_camel_case(self) -> None:
        config = ParseConfig.from_dict(
            {"todoKeywords": ["TODO", "WAIT"], "parseTables": False, "strict": True}
        )
        assert config.todo_keywords == frozenset({"TODO", "WAIT"})
        assert config.parse_tables is False
        assert config.strict is True

    def test_from_dict_ignores_unknown(self) -> None:
        assert ParseConfig.from_dict({"unknown_key": 1}) == ParseConfig()

    def test_with_todo_keywords(self) -> None:
        config = ParseConfig().with_todo_keywords("WAIT", "CANCELED")
        assert config.todo_keywords == DEFAULT_TODO_KEYWORDS | {"WAIT", "CANCELED"}


class TestConfigContext:
    """Setting, resetting and scoping the active config."""

    def test_default(self) -> None:
        reset_parse_config()
        assert get_parse_config() == ParseConfig()

    def test_set_and_reset(self) -> None:
        try:
            set_parse_config(ParseConfig(strict=True))
            assert get_parse_config().strict is True
        finally:
            reset_parse_config()
        assert get_parse_config().strict is False

    def test_context_restores(self) -> None:
        with parse_config_context(ParseConfig(parse_tables=False)):
            assert isinstance(Parser("| a |").parse().children[0], Paragraph)
        assert isinstance(Parser("| a |").parse().children[0], Table)

    def test_context_restores_on_error(self) -> None:
        with pytest.raises(RuntimeError), parse_config_context(ParseConfig(strict=True)):
            raise RuntimeError("boom")
        assert get_parse_config().strict is False

    def test_parser_snapshots_config(self) -> None:
        """A Parser keeps the config active when it was constructed."""
        with parse_config_context(ParseConfig(parse_tables=False)):
            parser = Parser("| a |")
        assert parser.config.parse_tables is False
        assert isinstance(parser.parse().children[0], Paragraph)

    def test_parse_with_config_does_not_leak(self) -> None:
        parse("x", config=ParseConfig(strict=True))
        assert get_parse_config().strict is False
