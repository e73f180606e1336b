"""
Output adapter base classes.

Defines the interface for output adapters.
"""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from collections.abc import Iterable

    from tokensplit.core.tokenizer import Preset, TokenizerConfig, TokenizerResult


class OutputFormat(Enum):
    """Supported output formats."""

    TERMINAL = "terminal"
    JSON = "json"


class OutputAdapter(ABC):
    """Base class for output adapters."""

    format: OutputFormat

    def __init__(self, stream: TextIO | None = None, color: bool = True):
        self.stream = stream or sys.stdout
        self.color = color

    @abstractmethod
    def render_result(self, result: TokenizerResult) -> str:
        """Render one token or line-group to string."""
        pass

    @abstractmethod
    def render_config(self, config: TokenizerConfig) -> str:
        """Render a resolved configuration to string."""
        pass

    @abstractmethod
    def render_presets(self, presets: Iterable[Preset]) -> str:
        """Render a preset listing to string."""
        pass

    def write(self, content: str) -> None:
        """Write content to stream."""
        self.stream.write(content)
        if not content.endswith("\n"):
            self.stream.write("\n")
        self.stream.flush()

    def render_and_write(self, results: Iterable[TokenizerResult]) -> int:
        """Render and write results as they arrive; return how many were written."""
        count = 0
        for result in results:
            self.write(self.render_result(result))
            count += 1
        return count


def get_output_adapter(
    format: OutputFormat | str,
    stream: TextIO | None = None,
    color: bool = True,
) -> OutputAdapter:
    """Get an output adapter by format."""
    if isinstance(format, str):
        format = OutputFormat(format)

    if format == OutputFormat.TERMINAL:
        from tokensplit.cli.output.terminal import TerminalOutput

        return TerminalOutput(stream=stream, color=color)
    elif format == OutputFormat.JSON:
        from tokensplit.cli.output.json import JsonOutput

        return JsonOutput(stream=stream, color=color)
    else:
        raise ValueError(f"Unknown output format: {format}")
