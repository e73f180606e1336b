"""
Output adapters for CLI.

Provides different output formats: terminal, JSON lines.
"""

from tokensplit.cli.output.base import OutputAdapter, OutputFormat, get_output_adapter
from tokensplit.cli.output.json import JsonOutput
from tokensplit.cli.output.terminal import TerminalOutput

__all__ = [
    "JsonOutput",
    "OutputAdapter",
    "OutputFormat",
    "TerminalOutput",
    "get_output_adapter",
]
