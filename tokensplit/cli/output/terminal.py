"""
Terminal output adapter.

Renders tokens one per line, line-groups as bracketed token lists with
their line span. Colors are applied only when writing to a TTY.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TextIO

from tokensplit.cli.output.base import OutputAdapter, OutputFormat
from tokensplit.core.tokenizer import LineGroup

if TYPE_CHECKING:
    from collections.abc import Iterable

    from tokensplit.core.tokenizer import Preset, TokenizerConfig, TokenizerResult


class TerminalOutput(OutputAdapter):
    """Terminal output with ANSI colors."""

    format = OutputFormat.TERMINAL

    def __init__(self, stream: TextIO | None = None, color: bool = True):
        super().__init__(stream=stream, color=color)
        self._use_color = color and self._is_tty()

    def _is_tty(self) -> bool:
        """Check if output is a TTY."""
        return hasattr(self.stream, "isatty") and self.stream.isatty()

    def render_result(self, result: "TokenizerResult") -> str:
        """Render a token verbatim, or a line-group with its line span."""
        if not isinstance(result, LineGroup):
            return result

        if result.start_line == result.end_line:
            span = f"L{result.start_line}"
        else:
            span = f"L{result.start_line}-{result.end_line}"

        tokens = " ".join(self._style(f"[{token}]", "green") for token in result.tokens)
        return f"{self._style(span, 'dim')}: {tokens}"

    def render_config(self, config: "TokenizerConfig") -> str:
        """Render configuration as aligned key/value lines."""
        rows = [
            ("delimiters", self._charset(config.delimiters)),
            ("qualifiers", self._charset(config.qualifiers)),
            ("escape_chars", self._charset(config.escape_chars)),
            ("double_qualifier_is_escape", str(config.double_qualifier_is_escape)),
            ("span", str(config.span)),
            ("group_lines", str(config.group_lines)),
            ("ignore_consecutive_delimiters", str(config.ignore_consecutive_delimiters)),
            ("line_delimiter", repr(config.line_delimiter)),
        ]
        width = max(len(name) for name, _ in rows)
        return "\n".join(f"{self._style(name.ljust(width), 'bold')}  {value}" for name, value in rows)

    def render_presets(self, presets: "Iterable[Preset]") -> str:
        """Render preset listing."""
        lines: list[str] = ["Available presets:", ""]
        for preset in presets:
            base_info = f" (extends: {preset.base})" if preset.base else ""
            lines.append(f"  {self._style(preset.id, 'bold')}{base_info}")
            lines.append(f"    {preset.label}")
        return "\n".join(lines)

    @staticmethod
    def _charset(chars: frozenset[str]) -> str:
        if not chars:
            return "(none)"
        return " ".join(repr(c) for c in sorted(chars))

    def _style(self, text: str, style: str) -> str:
        """Apply style to text if colors are enabled."""
        if not self._use_color:
            return text

        # ANSI color codes
        codes = {
            "bold": "\033[1m",
            "dim": "\033[2m",
            "green": "\033[32m",
        }
        reset = "\033[0m"

        code = codes.get(style, "")
        if code:
            return f"{code}{text}{reset}"
        return text
