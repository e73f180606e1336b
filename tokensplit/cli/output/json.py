"""
JSON output adapter.

Renders results as JSON Lines (one JSON document per token or line-group)
for machine processing.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, TextIO

from tokensplit.cli.output.base import OutputAdapter, OutputFormat
from tokensplit.core.tokenizer import LineGroup

if TYPE_CHECKING:
    from collections.abc import Iterable

    from tokensplit.core.tokenizer import Preset, TokenizerConfig, TokenizerResult


class JsonOutput(OutputAdapter):
    """JSON output adapter."""

    format = OutputFormat.JSON

    def __init__(self, stream: TextIO | None = None, color: bool = False, indent: int | None = None):
        super().__init__(stream=stream, color=False)  # Never colorize JSON
        self.indent = indent

    def render_result(self, result: "TokenizerResult") -> str:
        """Render a token as a JSON string, a line-group as an object."""
        if isinstance(result, LineGroup):
            return json.dumps(self._group_to_dict(result), indent=self.indent, ensure_ascii=False)
        return json.dumps(result, ensure_ascii=False)

    def render_config(self, config: "TokenizerConfig") -> str:
        """Render configuration as JSON."""
        return json.dumps(self._config_to_dict(config), indent=self.indent or 2, ensure_ascii=False)

    def render_presets(self, presets: "Iterable[Preset]") -> str:
        """Render preset listing as JSON."""
        output = [
            {
                "id": preset.id,
                "label": preset.label,
                "base": preset.base,
                "options": preset.options,
                "source": str(preset.source) if preset.source else None,
            }
            for preset in presets
        ]
        return json.dumps(output, indent=self.indent or 2, ensure_ascii=False)

    def _group_to_dict(self, group: LineGroup) -> dict[str, Any]:
        """Convert line-group to dictionary."""
        return {
            "tokens": list(group.tokens),
            "start_line": group.start_line,
            "end_line": group.end_line,
        }

    def _config_to_dict(self, config: "TokenizerConfig") -> dict[str, Any]:
        """Convert configuration to dictionary with sorted character sets."""
        return {
            "delimiters": sorted(config.delimiters),
            "qualifiers": sorted(config.qualifiers),
            "escape_chars": sorted(config.escape_chars),
            "double_qualifier_is_escape": config.double_qualifier_is_escape,
            "span": config.span,
            "group_lines": config.group_lines,
            "ignore_consecutive_delimiters": config.ignore_consecutive_delimiters,
            "line_delimiter": config.line_delimiter,
        }
