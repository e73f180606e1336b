"""
Pytest configuration and fixtures for tokensplit tests.

Provides fixtures for:
- Sample input files written to a temporary directory
- Common test utilities
"""

from __future__ import annotations

from pathlib import Path

import pytest

from tokensplit.core.tokenizer import TokenizerConfig, build_config

# =============================================================================
# Input File Fixtures
# =============================================================================


@pytest.fixture
def sample_file(tmp_path: Path) -> Path:
    """Small comma separated file with a quoted field and a trailing empty field."""
    path = tmp_path / "sample.csv"
    path.write_text('name,note\nalice,"says, hi"\nbob,,\n', encoding="utf-8")
    return path


@pytest.fixture
def spanning_file(tmp_path: Path) -> Path:
    """File whose second field spans two physical lines (CR LF endings)."""
    path = tmp_path / "spanning.csv"
    path.write_bytes(b'1,"first\r\nsecond"\r\n2,third\r\n')
    return path


# =============================================================================
# Utility Fixtures
# =============================================================================


@pytest.fixture
def default_config() -> TokenizerConfig:
    """Return the default tokenizer configuration."""
    return TokenizerConfig()


@pytest.fixture
def grouping_config() -> TokenizerConfig:
    """Return a configuration that groups lines and lets quotes span them."""
    return build_config(group_lines=True, span=True, line_delimiter="\n")
