"""Tests for file and stream tokenization."""

import io
from pathlib import Path

import pytest

from tokensplit.core.tokenizer import (
    LineGroup,
    TokenizerConfig,
    build_config,
    iter_physical_lines,
    tokenize_file,
    tokenize_stream,
)


class TestPhysicalLines:
    """Tests for iter_physical_lines."""

    def test_strips_line_endings(self) -> None:
        """Test that CR, LF and CR LF endings are stripped."""
        stream = io.StringIO("a\r\nb\rc\nd", newline="")
        assert list(iter_physical_lines(stream)) == ["a", "b", "c", "d"]


class TestTokenizeStream:
    """Tests for tokenize_stream."""

    def test_stream_tokens(self, default_config: TokenizerConfig) -> None:
        """Test tokenizing a text stream."""
        stream = io.StringIO('a "b c"\nd\n')
        assert list(tokenize_stream(stream, default_config)) == ["a", "b c", "d"]

    def test_stream_span_uses_line_delimiter(self, grouping_config: TokenizerConfig) -> None:
        """Test that spanning tokens get the configured delimiter, not the file's ending."""
        stream = io.StringIO('x "one\r\ntwo" y\r\nz\r\n', newline="")
        assert list(tokenize_stream(stream, grouping_config)) == [
            LineGroup(tokens=("x", "one\ntwo", "y"), start_line=1, end_line=2),
            LineGroup(tokens=("z",), start_line=3, end_line=3),
        ]


class TestTokenizeFile:
    """Tests for tokenize_file."""

    def test_file_tokens(self, sample_file: Path) -> None:
        """Test tokenizing a file with a comma configuration."""
        config = build_config(delimiters=",")
        assert list(tokenize_file(sample_file, config)) == [
            "name",
            "note",
            "alice",
            "says, hi",
            "bob",
            "",
        ]

    def test_file_span(self, spanning_file: Path) -> None:
        """Test that a field spans the CR LF separated physical lines."""
        config = build_config(delimiters=",", span=True)
        assert list(tokenize_file(spanning_file, config)) == ["1", "first\r\nsecond", "2", "third"]

    def test_file_not_found(self, tmp_path: Path) -> None:
        """Test that a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            tokenize_file(tmp_path / "missing.txt")

    def test_file_read_lazily(self, sample_file: Path) -> None:
        """Test that the file is only opened once results are consumed."""
        results = tokenize_file(sample_file, build_config(delimiters=","))
        sample_file.unlink()
        with pytest.raises(FileNotFoundError):
            next(results)
