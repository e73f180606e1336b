"""
tokensplit core library.

This package contains the core functionality:
- tokenizer: configuration, presets and the tokenizer engine
"""

__all__: list[str] = []
