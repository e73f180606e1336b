"""Tests for tokenizer configuration building."""

import pytest
from pydantic import ValidationError

from tokensplit.core.tokenizer import (
    DEFAULT_DELIMITERS,
    DEFAULT_QUALIFIERS,
    ConfigurationError,
    TokenizerConfig,
    build_config,
)
from tokensplit.core.tokenizer.models import parse_charset


class TestDefaults:
    """Tests for default option values."""

    def test_default_values(self) -> None:
        """Test the documented defaults."""
        config = TokenizerConfig()
        assert config.delimiters == frozenset({" ", "\t"})
        assert config.qualifiers == frozenset({'"'})
        assert config.escape_chars == frozenset()
        assert config.double_qualifier_is_escape is True
        assert config.span is False
        assert config.group_lines is False
        assert config.ignore_consecutive_delimiters is False
        assert config.line_delimiter == "\r\n"

    def test_consecutive_delimiters_flag_is_inverse(self) -> None:
        """Test the derived empty-token flag."""
        assert TokenizerConfig().consecutive_delimiters_produce_empty_tokens
        config = build_config(ignore_consecutive_delimiters=True)
        assert not config.consecutive_delimiters_produce_empty_tokens

    def test_frozen(self) -> None:
        """Test that configuration cannot be mutated."""
        config = TokenizerConfig()
        with pytest.raises(ValidationError):
            config.span = True  # type: ignore[misc]


class TestCharacterSets:
    """Tests for character-set options."""

    def test_string_is_split_into_characters(self) -> None:
        """Test that each character of a string is a member."""
        assert build_config(delimiters=",;").delimiters == frozenset({",", ";"})

    def test_list_elements_are_unioned(self) -> None:
        """Test that all characters of all elements are members."""
        config = build_config(qualifiers=["'", '"`'])
        assert config.qualifiers == frozenset({"'", '"', "`"})

    def test_duplicates_collapse(self) -> None:
        """Test set semantics."""
        assert build_config(delimiters=[",,", ","]).delimiters == frozenset({","})

    def test_empty_delimiters_keep_default(self) -> None:
        """Test that empty delimiter input keeps the default set."""
        assert build_config(delimiters="").delimiters == DEFAULT_DELIMITERS
        assert build_config(delimiters=[]).delimiters == DEFAULT_DELIMITERS

    def test_empty_qualifiers_keep_default(self) -> None:
        """Test that empty qualifier input keeps the default set."""
        assert build_config(qualifiers=[""]).qualifiers == DEFAULT_QUALIFIERS

    def test_empty_escape_means_none(self) -> None:
        """Test that empty escape input means no escape characters."""
        assert build_config(escape_chars="").escape_chars == frozenset()

    def test_is_helpers(self) -> None:
        """Test membership helpers."""
        config = build_config(delimiters=",", escape_chars="\\")
        assert config.is_delimiter(",")
        assert not config.is_delimiter(" ")
        assert config.is_qualifier('"')
        assert config.is_escape("\\")

    def test_parse_charset_direct(self) -> None:
        """Test the charset parser on its own."""
        assert parse_charset(("ab", "c"), "opt") == frozenset("abc")


class TestInvalidOptions:
    """Tests for precondition violations."""

    @pytest.mark.parametrize("option", ["delimiters", "qualifiers", "escape_chars"])
    def test_none_rejected(self, option: str) -> None:
        """Test that None fails fast with the option name."""
        with pytest.raises(ConfigurationError) as exc_info:
            build_config(**{option: None})
        assert exc_info.value.option == option

    def test_non_string_element_rejected(self) -> None:
        """Test that list elements must be strings."""
        with pytest.raises(ConfigurationError):
            build_config(delimiters=[",", 1])

    def test_wrong_type_rejected(self) -> None:
        """Test that a non-string scalar is rejected."""
        with pytest.raises(ConfigurationError):
            build_config(qualifiers=5)

    def test_unknown_option_rejected(self) -> None:
        """Test that typos in option names are reported."""
        with pytest.raises(ConfigurationError) as exc_info:
            build_config(delimiter=",")
        assert exc_info.value.option == "delimiter"

    def test_none_line_delimiter_rejected(self) -> None:
        """Test that the line delimiter must be a string."""
        with pytest.raises(ConfigurationError):
            build_config(line_delimiter=None)

    def test_configuration_error_is_value_error(self) -> None:
        """Test that callers can catch ValueError."""
        with pytest.raises(ValueError):
            build_config(delimiters=None)
