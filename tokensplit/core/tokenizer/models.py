"""
Tokenizer data models.

CRITICAL DESIGN DECISIONS:
- TokenizerConfig is frozen; it is built once per session and shared read-only
- Character-set options accept a string or a list of strings; every character
  of every element becomes a member of the set
- Empty delimiter/qualifier input keeps the default set, empty escape input
  means "no escape characters"
- Quote state is a tagged variant (Unquoted | Quoted), never a nullable char
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from pydantic import BaseModel, Field, ValidationError, ValidationInfo, field_validator

from .errors import ConfigurationError

# =============================================================================
# Defaults
# =============================================================================

DEFAULT_DELIMITERS = frozenset(" \t")
DEFAULT_QUALIFIERS = frozenset('"')
DEFAULT_LINE_DELIMITER = "\r\n"

# Characters that end a physical line. Not configurable.
EOL_CHARS = frozenset("\r\n")

_CHARSET_DEFAULTS: dict[str, frozenset[str]] = {
    "delimiters": DEFAULT_DELIMITERS,
    "qualifiers": DEFAULT_QUALIFIERS,
    "escape_chars": frozenset(),
}


def parse_charset(value: Any, option: str) -> frozenset[str]:
    """
    Realize a character-set option.

    Args:
        value: A string, or a list/tuple/set of strings
        option: Option name used in error messages

    Returns:
        Union of all characters found in all elements

    Raises:
        ValueError: If value is None or contains non-string elements
    """
    if value is None:
        raise ValueError(f"{option} must not be None")

    if isinstance(value, str):
        elements: list[Any] = [value]
    elif isinstance(value, (list, tuple, set, frozenset)):
        elements = list(value)
    else:
        raise ValueError(f"{option} must be a string or a list of strings, got {type(value).__name__}")

    chars: set[str] = set()
    for element in elements:
        if not isinstance(element, str):
            raise ValueError(f"{option} elements must be strings, got {type(element).__name__}")
        chars.update(element)

    return frozenset(chars)


# =============================================================================
# Configuration
# =============================================================================


class TokenizerConfig(BaseModel, frozen=True):
    """Immutable tokenizer options."""

    delimiters: frozenset[str] = Field(
        default=DEFAULT_DELIMITERS,
        description="Characters separating tokens outside of quotes",
    )
    qualifiers: frozenset[str] = Field(
        default=DEFAULT_QUALIFIERS,
        description="Characters that open and close a quoted token",
    )
    escape_chars: frozenset[str] = Field(
        default_factory=frozenset,
        description="Characters that make a following qualifier literal",
    )
    double_qualifier_is_escape: bool = Field(
        default=True,
        description="Two consecutive qualifiers inside quotes embed one literal qualifier",
    )
    span: bool = Field(
        default=False,
        description="Quoted tokens may continue across line boundaries",
    )
    group_lines: bool = Field(
        default=False,
        description="Collect tokens into one LineGroup per logical line",
    )
    ignore_consecutive_delimiters: bool = Field(
        default=False,
        description="Adjacent delimiters do not produce empty tokens",
    )
    line_delimiter: str = Field(
        default=DEFAULT_LINE_DELIMITER,
        description="Text injected into a spanning token between input lines",
    )

    model_config = {"frozen": True, "extra": "forbid"}

    @field_validator("delimiters", "qualifiers", "escape_chars", mode="before")
    @classmethod
    def _realize_charset(cls, value: Any, info: ValidationInfo) -> frozenset[str]:
        field = info.field_name or "charset"
        chars = parse_charset(value, field)
        return chars or _CHARSET_DEFAULTS[field]

    @property
    def consecutive_delimiters_produce_empty_tokens(self) -> bool:
        """Whether adjacent delimiters yield an empty token between them."""
        return not self.ignore_consecutive_delimiters

    def is_delimiter(self, char: str) -> bool:
        return char in self.delimiters

    def is_qualifier(self, char: str) -> bool:
        return char in self.qualifiers

    def is_escape(self, char: str) -> bool:
        return char in self.escape_chars


def build_config(**options: Any) -> TokenizerConfig:
    """
    Build an immutable configuration from raw option values.

    Character-set options (delimiters, qualifiers, escape_chars) accept a
    string or a list of strings. Omitted options keep their defaults.

    Raises:
        ConfigurationError: If an option is None, of the wrong type, or unknown
    """
    try:
        return TokenizerConfig(**options)
    except ValidationError as e:
        first = e.errors()[0]
        option = ".".join(str(part) for part in first["loc"]) or None
        raise ConfigurationError(first["msg"], option=option) from None


# =============================================================================
# Quote state
# =============================================================================


@dataclass(frozen=True)
class Unquoted:
    """Scanning outside of any quoted token."""


@dataclass(frozen=True)
class Quoted:
    """Inside a quoted token opened by ``qualifier``."""

    qualifier: str


QuoteState = Union[Unquoted, Quoted]

UNQUOTED = Unquoted()


# =============================================================================
# Output
# =============================================================================


class LineGroup(BaseModel, frozen=True):
    """
    Tokens of one logical input line.

    When a quoted token spans physical lines, every line it touches belongs
    to the same group, so start_line and end_line may differ.
    """

    tokens: tuple[str, ...] = Field(default=())
    start_line: int = Field(ge=1, description="First physical line (1-indexed)")
    end_line: int = Field(ge=1, description="Last physical line (1-indexed)")

    model_config = {"frozen": True}

    def __len__(self) -> int:
        return len(self.tokens)


TokenizerResult = Union[str, LineGroup]
