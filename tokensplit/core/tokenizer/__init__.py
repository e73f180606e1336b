"""
Tokenizer Core.

Public API for splitting text into delimiter/qualifier-aware tokens.

Usage:
    from tokensplit.core.tokenizer import build_config, tokenize

    config = build_config(delimiters=",", group_lines=True)
    for group in tokenize(config, ['a,"b,c"', "d,e"]):
        print(group.tokens)

API Functions:
    tokenize(config, lines) -> Iterator[str | LineGroup]
    tokenize_text(text, config) -> list[str | LineGroup]
    tokenize_file(path, config) -> Iterator[str | LineGroup]
    tokenize_stream(stream, config) -> Iterator[str | LineGroup]
    build_config(**options) -> TokenizerConfig
    get_preset(name) -> Preset | None
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

from .engine import Tokenizer
from .errors import ConfigurationError, TokenizerError, TokenizerStateError
from .models import (
    DEFAULT_DELIMITERS,
    DEFAULT_LINE_DELIMITER,
    DEFAULT_QUALIFIERS,
    LineGroup,
    Quoted,
    QuoteState,
    TokenizerConfig,
    TokenizerResult,
    Unquoted,
    build_config,
)
from .presets import (
    Preset,
    PresetRegistry,
    get_preset,
    get_registry,
    load_preset_from_yaml,
    reset_registry,
)


def tokenize(
    config: TokenizerConfig | None,
    lines: Iterable[str] | str,
) -> Iterator[TokenizerResult]:
    """
    Tokenize a sequence of input lines lazily.

    Each element of ``lines`` is one input line; a single string is treated
    as one line (it may contain EOL characters).

    Args:
        config: Tokenizer configuration (defaults to TokenizerConfig())
        lines: Input lines, in order

    Yields:
        Token strings, or LineGroup records when config.group_lines is set
    """
    if isinstance(lines, str):
        lines = [lines]

    tokenizer = Tokenizer(config)
    for line in lines:
        yield from tokenizer.feed(line)
    yield from tokenizer.finish()


def tokenize_text(text: str, config: TokenizerConfig | None = None) -> list[TokenizerResult]:
    """
    Tokenize a complete text eagerly.

    The text is scanned as one input line, so embedded CR/LF characters are
    handled by the character dispatch rather than the line boundary.
    """
    return list(tokenize(config, [text]))


def iter_physical_lines(stream: TextIO) -> Iterator[str]:
    """Yield physical lines from a text stream without their line endings."""
    for line in stream:
        yield line.rstrip("\r\n")


def tokenize_stream(
    stream: TextIO,
    config: TokenizerConfig | None = None,
) -> Iterator[TokenizerResult]:
    """
    Tokenize a text stream line by line.

    Line endings are stripped; the configured line delimiter is what a
    spanning quoted token receives at each boundary.
    """
    yield from tokenize(config, iter_physical_lines(stream))


def tokenize_file(
    path: Path | str,
    config: TokenizerConfig | None = None,
    *,
    encoding: str = "utf-8",
) -> Iterator[TokenizerResult]:
    """
    Tokenize a text file line by line.

    The path is checked when the function is called; the file is opened
    and read lazily as results are consumed.

    Raises:
        FileNotFoundError: If file does not exist
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    return _tokenize_path(path, config, encoding)


def _tokenize_path(
    path: Path,
    config: TokenizerConfig | None,
    encoding: str,
) -> Iterator[TokenizerResult]:
    # newline="" keeps CR-only line endings recognisable as line breaks
    with path.open(encoding=encoding, errors="replace", newline="") as f:
        yield from tokenize_stream(f, config)


# =============================================================================
# Public API Exports
# =============================================================================

__all__ = [
    "DEFAULT_DELIMITERS",
    "DEFAULT_LINE_DELIMITER",
    "DEFAULT_QUALIFIERS",
    # Errors
    "ConfigurationError",
    # Models
    "LineGroup",
    "Preset",
    "PresetRegistry",
    "QuoteState",
    "Quoted",
    # Engine
    "Tokenizer",
    "TokenizerConfig",
    "TokenizerError",
    "TokenizerResult",
    "TokenizerStateError",
    "Unquoted",
    # Main functions
    "build_config",
    "get_preset",
    "get_registry",
    "iter_physical_lines",
    "load_preset_from_yaml",
    "reset_registry",
    "tokenize",
    "tokenize_file",
    "tokenize_stream",
    "tokenize_text",
]
