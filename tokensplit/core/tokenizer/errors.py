"""
Tokenizer error types.

The engine itself never fails on malformed text. These errors only signal
precondition violations: an invalid configuration, or misuse of a
finished engine.
"""

from __future__ import annotations


class TokenizerError(Exception):
    """Base class for all tokenizer errors."""

    def __init__(self, message: str, line: int | None = None, column: int | None = None) -> None:
        self.message = message
        self.line = line
        self.column = column
        if line is not None and column is not None:
            super().__init__(f"Line {line}, column {column}: {message}")
        else:
            super().__init__(message)


class ConfigurationError(TokenizerError, ValueError):
    """Invalid tokenizer option supplied while building a configuration."""

    def __init__(self, message: str, option: str | None = None) -> None:
        self.option = option
        text = f"{option}: {message}" if option else message
        super().__init__(text)


class TokenizerStateError(TokenizerError, RuntimeError):
    """Engine used after it has been finalized."""
