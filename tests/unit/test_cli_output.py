"""Tests for CLI output adapters."""

import io
import json

import pytest

from tokensplit.cli.output import (
    JsonOutput,
    OutputFormat,
    TerminalOutput,
    get_output_adapter,
)
from tokensplit.core.tokenizer import LineGroup, Preset, TokenizerConfig, build_config


def make_group(*tokens: str, start: int = 1, end: int = 1) -> LineGroup:
    """Create a test line-group."""
    return LineGroup(tokens=tokens, start_line=start, end_line=end)


class TestTerminalOutput:
    """Tests for TerminalOutput."""

    def test_render_token(self) -> None:
        """Test that tokens are rendered verbatim."""
        output = TerminalOutput(color=False)
        assert output.render_result("Two Three") == "Two Three"

    def test_render_group(self) -> None:
        """Test rendering a single-line group."""
        output = TerminalOutput(color=False)
        assert output.render_result(make_group("a", "")) == "L1: [a] []"

    def test_render_spanning_group(self) -> None:
        """Test that multi-line groups show their line span."""
        output = TerminalOutput(color=False)
        assert output.render_result(make_group("a", start=2, end=4)).startswith("L2-4:")

    def test_no_color_when_not_tty(self) -> None:
        """Test that colors are only used for TTYs."""
        output = TerminalOutput(stream=io.StringIO(), color=True)
        assert "\033[" not in output.render_result(make_group("a"))

    def test_render_config(self, default_config: TokenizerConfig) -> None:
        """Test rendering a configuration."""
        result = TerminalOutput(color=False).render_config(default_config)
        assert "escape_chars" in result
        assert "(none)" in result
        assert "'\\r\\n'" in result

    def test_render_presets(self) -> None:
        """Test rendering a preset listing."""
        presets = [Preset(id="csv", label="Comma", base="default")]
        result = TerminalOutput(color=False).render_presets(presets)
        assert "csv (extends: default)" in result
        assert "Comma" in result


class TestJsonOutput:
    """Tests for JsonOutput."""

    def test_render_token(self) -> None:
        """Test that tokens are JSON strings."""
        assert json.loads(JsonOutput().render_result('a"b')) == 'a"b'

    def test_render_group(self) -> None:
        """Test that groups are JSON objects."""
        parsed = json.loads(JsonOutput().render_result(make_group("a", "b", start=1, end=2)))
        assert parsed == {"tokens": ["a", "b"], "start_line": 1, "end_line": 2}

    def test_render_config(self) -> None:
        """Test that character sets are sorted lists."""
        config = build_config(delimiters=";,", escape_chars="\\")
        parsed = json.loads(JsonOutput().render_config(config))
        assert parsed["delimiters"] == [",", ";"]
        assert parsed["escape_chars"] == ["\\"]
        assert parsed["span"] is False

    def test_render_and_write(self) -> None:
        """Test streaming results as JSON lines."""
        stream = io.StringIO()
        count = JsonOutput(stream=stream).render_and_write(["a", make_group("b")])
        assert count == 2
        lines = stream.getvalue().splitlines()
        assert json.loads(lines[0]) == "a"
        assert json.loads(lines[1])["tokens"] == ["b"]


class TestGetOutputAdapter:
    """Tests for the adapter factory."""

    def test_by_enum(self) -> None:
        """Test getting adapters by enum."""
        assert isinstance(get_output_adapter(OutputFormat.TERMINAL), TerminalOutput)
        assert isinstance(get_output_adapter(OutputFormat.JSON), JsonOutput)

    def test_by_string(self) -> None:
        """Test getting adapters by name."""
        assert isinstance(get_output_adapter("json"), JsonOutput)

    def test_unknown(self) -> None:
        """Test that unknown names are rejected."""
        with pytest.raises(ValueError):
            get_output_adapter("xml")
