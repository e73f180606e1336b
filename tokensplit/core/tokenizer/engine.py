"""
Character-stream tokenizer engine.

The engine is a push-driven state machine. The caller feeds input lines one
at a time; each line is scanned character by character in one of two modes:

- Unquoted: delimiters complete tokens, EOL characters complete tokens and
  line-groups, a qualifier at the start of a token opens a quoted token.
- Quoted: everything is literal until the active qualifier closes the token.
  Doubled or escaped qualifiers embed a literal qualifier. Without span, an
  EOL closes the token leniently.

Malformed input never raises. Unterminated quotes are flushed as tokens and
text between a closing qualifier and the next delimiter is discarded.
"""

from __future__ import annotations

import logging
from collections import deque

from .errors import TokenizerStateError
from .models import (
    EOL_CHARS,
    UNQUOTED,
    LineGroup,
    Quoted,
    QuoteState,
    TokenizerConfig,
    TokenizerResult,
)

logger = logging.getLogger(__name__)


class Tokenizer:
    """
    Single-use tokenizer for one input session.

    Usage:
        tokenizer = Tokenizer(config)
        for line in lines:
            results.extend(tokenizer.feed(line))
        results.extend(tokenizer.finish())
    """

    def __init__(self, config: TokenizerConfig | None = None) -> None:
        self.config = config or TokenizerConfig()

        self._token: list[str] = []
        self._token_blank = True  # buffer is empty or whitespace-only
        self._quote: QuoteState = UNQUOTED
        self._group: list[str] = []
        self._output: deque[TokenizerResult] = deque()

        # Physical line bookkeeping (1-indexed)
        self._line_no = 1
        self._token_start_line = 1
        self._group_start_line = 1
        self._last_char = ""
        self._lines_fed = 0
        self._finished = False

    # =========================================================================
    # Public API
    # =========================================================================

    @property
    def in_quotes(self) -> bool:
        """Whether a quoted token is open."""
        return isinstance(self._quote, Quoted)

    @property
    def line_no(self) -> int:
        """Current physical line number."""
        return self._line_no

    @property
    def finished(self) -> bool:
        return self._finished

    def feed(self, line: str) -> list[TokenizerResult]:
        """
        Scan one input line.

        The line may itself contain EOL characters. Between two fed lines a
        line boundary is applied: a spanning quoted token receives the
        configured line delimiter, anything else is completed.

        Args:
            line: Next input line

        Returns:
            Tokens or line-groups completed while scanning this line

        Raises:
            TokenizerStateError: If finish() was already called
        """
        if self._finished:
            raise TokenizerStateError("Cannot feed a finished tokenizer", line=self._line_no, column=0)
        if not isinstance(line, str):
            raise TypeError(f"Input lines must be str, got {type(line).__name__}")

        if self._lines_fed:
            self._cross_line_boundary()
        self._lines_fed += 1

        length = len(line)
        i = 0
        while i < length:
            if isinstance(self._quote, Quoted):
                i = self._scan_quoted(line, i, self._quote.qualifier)
            else:
                i = self._scan_unquoted(line, i)

        if line:
            self._last_char = line[-1]
        else:
            self._last_char = ""

        return self._drain()

    def finish(self) -> list[TokenizerResult]:
        """
        Flush the trailing token and line-group.

        Returns:
            Remaining results

        Raises:
            TokenizerStateError: If called twice
        """
        if self._finished:
            raise TokenizerStateError("Tokenizer already finished", line=self._line_no, column=0)
        self._finished = True

        if isinstance(self._quote, Quoted):
            logger.debug(
                "Unterminated %r-quoted token at end of input (started line %d)",
                self._quote.qualifier,
                self._token_start_line,
            )
        self._complete_token()
        self._complete_group()
        return self._drain()

    # =========================================================================
    # Character dispatch
    # =========================================================================

    def _scan_unquoted(self, line: str, i: int) -> int:
        """Process line[i] outside of quotes; return the next cursor."""
        char = line[i]
        config = self.config

        if self._token_blank and config.is_qualifier(char):
            self._open_quote(char)
        elif config.is_delimiter(char):
            self._complete_token(force=config.consecutive_delimiters_produce_empty_tokens)
        elif char in EOL_CHARS:
            self._complete_token()
            self._complete_group()
            self._advance_line(line, i)
        else:
            self._append(char)

        return i + 1

    def _scan_quoted(self, line: str, i: int, qualifier: str) -> int:
        """Process line[i] inside a token quoted by ``qualifier``; return the next cursor."""
        char = line[i]
        config = self.config
        length = len(line)

        if char in EOL_CHARS and not config.span:
            logger.debug(
                "Quoted token closed by end of line %d without closing %r",
                self._line_no,
                qualifier,
            )
            self._complete_token(force=True)
            self._complete_group()
            while i < length and line[i] in EOL_CHARS:
                self._advance_line(line, i)
                i += 1
            return i

        next_char = line[i + 1] if i + 1 < length else None
        if next_char == qualifier and (
            config.is_escape(char) or (char == qualifier and config.double_qualifier_is_escape)
        ):
            self._append(qualifier)
            return i + 2

        if char == qualifier:
            self._complete_token(force=True)
            return self._skip_garbage(line, i + 1)

        if char in EOL_CHARS:
            self._advance_line(line, i)
        self._append(char)
        return i + 1

    def _skip_garbage(self, line: str, i: int) -> int:
        """
        Discard text after a closing qualifier.

        Skips up to (not including) the next delimiter or EOL, then consumes
        exactly one delimiter if it directly follows.
        """
        config = self.config
        length = len(line)
        start = i

        while i < length and line[i] not in EOL_CHARS and not config.is_delimiter(line[i]):
            i += 1

        if i > start:
            logger.debug(
                "Discarded %r after closing qualifier on line %d",
                line[start:i],
                self._line_no,
            )

        if i < length and config.is_delimiter(line[i]):
            i += 1
        return i

    def _cross_line_boundary(self) -> None:
        """Apply the boundary between two fed lines."""
        if isinstance(self._quote, Quoted) and self.config.span:
            self._token.extend(self.config.line_delimiter)
        else:
            # Same as reaching an EOL character
            self._complete_token(force=isinstance(self._quote, Quoted))
            self._complete_group()

        if self._last_char not in EOL_CHARS:
            self._line_no += 1

    # =========================================================================
    # Buffer primitives
    # =========================================================================

    def _open_quote(self, qualifier: str) -> None:
        self._quote = Quoted(qualifier)
        self._token.clear()
        self._token_blank = True
        self._token_start_line = self._line_no

    def _append(self, char: str) -> None:
        if not self._token and not isinstance(self._quote, Quoted):
            self._token_start_line = self._line_no
        self._token.append(char)
        self._token_blank = self._token_blank and char.isspace()

    def _advance_line(self, line: str, i: int) -> None:
        """Count the EOL character at line[i]; CR LF counts once."""
        previous = line[i - 1] if i > 0 else self._last_char
        if not (line[i] == "\n" and previous == "\r"):
            self._line_no += 1

    def _complete_token(self, force: bool = False) -> None:
        """
        Complete the current token.

        An empty buffer is only emitted when ``force`` is set (at-delimiter
        semantics, or a quoted token that was explicitly opened).
        """
        if self._token or force:
            if self._token or isinstance(self._quote, Quoted):
                start_line = self._token_start_line
            else:
                start_line = self._line_no
            self._emit("".join(self._token), start_line)

        self._token.clear()
        self._token_blank = True
        self._quote = UNQUOTED

    def _emit(self, token: str, start_line: int) -> None:
        if self.config.group_lines:
            if not self._group:
                self._group_start_line = start_line
            self._group.append(token)
        else:
            self._output.append(token)

    def _complete_group(self) -> None:
        if self.config.group_lines and self._group:
            self._output.append(
                LineGroup(
                    tokens=tuple(self._group),
                    start_line=self._group_start_line,
                    end_line=self._line_no,
                )
            )
            self._group.clear()

    def _drain(self) -> list[TokenizerResult]:
        results = list(self._output)
        self._output.clear()
        return results
