"""
CLI context and configuration.

Collects command-line options, resolves them against a preset and builds the
tokenizer configuration.
"""

from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from tokensplit.core.tokenizer import PresetRegistry, TokenizerConfig


class ExitCode(IntEnum):
    """CLI exit codes following Unix conventions."""

    SUCCESS = 0  # Input tokenized
    FATAL = 2  # Input could not be read
    USAGE = 64  # Command line usage error
    CONFIG = 78  # Configuration error


LINE_DELIMITER_NAMES = {
    "crlf": "\r\n",
    "lf": "\n",
    "cr": "\r",
}


class CliContext(BaseModel):
    """Shared context for CLI commands."""

    # Output settings
    format: str = Field(default="terminal")
    color: bool = Field(default=True)
    verbose: bool = Field(default=False)

    # Tokenizer settings
    preset: str = Field(default="default")
    delimiters: list[str] | None = Field(default=None)
    qualifiers: list[str] | None = Field(default=None)
    escape_chars: list[str] | None = Field(default=None)
    span: bool | None = Field(default=None)
    group_lines: bool | None = Field(default=None)
    ignore_consecutive: bool | None = Field(default=None)
    double_qualifier: bool | None = Field(default=None)
    line_delimiter: str | None = Field(default=None)

    model_config = {"frozen": False}

    def overrides(self) -> dict[str, Any]:
        """Options given explicitly on the command line."""
        options: dict[str, Any] = {}

        if self.delimiters:
            options["delimiters"] = self.delimiters
        if self.qualifiers:
            options["qualifiers"] = self.qualifiers
        if self.escape_chars:
            options["escape_chars"] = self.escape_chars

        # Unset flags keep the preset value
        if self.span is not None:
            options["span"] = self.span
        if self.group_lines is not None:
            options["group_lines"] = self.group_lines
        if self.ignore_consecutive is not None:
            options["ignore_consecutive_delimiters"] = self.ignore_consecutive
        if self.double_qualifier is not None:
            options["double_qualifier_is_escape"] = self.double_qualifier

        if self.line_delimiter is not None:
            options["line_delimiter"] = LINE_DELIMITER_NAMES.get(
                self.line_delimiter.lower(), self.line_delimiter
            )

        return options

    def build_config(self, registry: PresetRegistry) -> TokenizerConfig:
        """
        Resolve the preset and apply command-line overrides.

        Raises:
            KeyError: If the preset is unknown
            ConfigurationError: If the resulting options are invalid
        """
        return registry.get_config(self.preset, **self.overrides())
