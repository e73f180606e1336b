"""
tokensplit: configurable delimiter/qualifier-aware tokenizer.

A library and CLI tool for splitting lines of text into tokens with
pluggable delimiters, quoting characters and escapes, optionally grouping
tokens per line and letting quoted tokens span lines.

Usage:
    from tokensplit.core.tokenizer import tokenize, build_config
    tokens = list(tokenize(build_config(delimiters=","), ['a,"b,c"']))
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
