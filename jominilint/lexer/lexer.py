"""Lexer."""

from __future__ import annotations

from dataclasses import dataclass

from jominilint.diagnostics.codes import LEXER_UNTERMINATED_STRING, DiagnosticSpec
from jominilint.lexer.tokens import LexToken, TokenFlags, TokenKind
from jominilint.text import TextRange, slice_text_range

# Characters that end a bare word.
_WORD_BREAKS = frozenset(" \t\r\n{}=<>!?#\"")


@dataclass(frozen=True, slots=True)
class LexError:
    spec: DiagnosticSpec
    range: TextRange


class Lexer:
    """Lossless lexer that emits trivia and non-trivia tokens."""

    def __init__(self, source: str) -> None:
        self._source = source
        self._position = 0
        self._after_newline = False
        self._current_start = 0
        self._current_flags = TokenFlags.NONE
        self._errors: list[LexError] = []

    @property
    def source(self) -> str:
        """Original source text."""
        return self._source

    @property
    def errors(self) -> list[LexError]:
        """Problems found while lexing, as (spec, range) pairs."""
        return self._errors

    @property
    def is_eof(self) -> bool:
        return self._position >= len(self._source)

    def next_token(self) -> LexToken:
        self._current_start = self._position
        self._current_flags = TokenFlags.NONE

        if self.is_eof:
            return LexToken(TokenKind.EOF, TextRange.empty(self._position), self._current_flags)

        kind = self._lex_token()
        if self._after_newline:
            self._current_flags |= TokenFlags.PRECEDING_LINE_BREAK
        if kind == TokenKind.NEWLINE:
            self._after_newline = True
        elif not kind.is_trivia:
            self._after_newline = False

        return LexToken(kind, TextRange(self._current_start, self._position), self._current_flags)

    def lex(self) -> list[LexToken]:
        tokens: list[LexToken] = []
        while True:
            token = self.next_token()
            tokens.append(token)
            if token.kind == TokenKind.EOF:
                break
        return tokens

    def _lex_token(self) -> TokenKind:
        ch = self._current_char()

        if ch in "\r\n":
            self._consume_newline()
            return TokenKind.NEWLINE
        if ch in " \t":
            self._consume_whitespaces()
            return TokenKind.WHITESPACE

        if ch == "#":
            return self._lex_comment()

        if ch == '"':
            return self._lex_string()

        # Two-character comparators
        next_ch = self._peek_char()
        if next_ch == "=":
            double = {
                "=": TokenKind.EQUAL_EQUAL,
                "!": TokenKind.NOT_EQUAL,
                "<": TokenKind.LESS_THAN_OR_EQUAL,
                ">": TokenKind.GREATER_THAN_OR_EQUAL,
                "?": TokenKind.QUESTION_EQUAL,
            }.get(ch)
            if double is not None:
                self._advance(2)
                return double

        if ch == "=":
            self._advance(1)
            return TokenKind.EQUAL
        if ch == "<":
            self._advance(1)
            return TokenKind.LESS_THAN
        if ch == ">":
            self._advance(1)
            return TokenKind.GREATER_THAN
        if ch == "{":
            self._advance(1)
            return TokenKind.LBRACE
        if ch == "}":
            self._advance(1)
            return TokenKind.RBRACE

        if ch in _WORD_BREAKS:
            # Lone `!` or `?`: preserve bytes as SKIPPED for recovery.
            self._advance(1)
            return TokenKind.SKIPPED

        return self._lex_word()

    def _lex_comment(self) -> TokenKind:
        # Consume until end of line, do not consume the newline itself.
        self._advance(1)
        while not self.is_eof:
            if self._current_char() in "\r\n":
                break
            self._advance(1)
        return TokenKind.COMMENT

    def _lex_string(self) -> TokenKind:
        self._advance(1)
        self._current_flags |= TokenFlags.WAS_QUOTED
        closed = False

        while not self.is_eof:
            ch = self._current_char()
            if ch == '"':
                self._advance(1)
                closed = True
                break
            if ch == "\\":
                self._current_flags |= TokenFlags.HAS_ESCAPE
                self._advance(2 if self._position + 1 < len(self._source) else 1)
                continue
            self._advance(1)

        if not closed:
            self._errors.append(
                LexError(LEXER_UNTERMINATED_STRING, TextRange(self._current_start, self._position))
            )
        return TokenKind.STRING

    def _lex_word(self) -> TokenKind:
        while not self.is_eof and self._current_char() not in _WORD_BREAKS:
            self._advance(1)
        return TokenKind.WORD

    def _consume_whitespaces(self) -> None:
        while not self.is_eof and self._current_char() in " \t":
            self._advance(1)

    def _consume_newline(self) -> None:
        if self._current_char() == "\r" and self._peek_char() == "\n":
            self._advance(2)
        else:
            self._advance(1)

    def _current_char(self) -> str:
        if self.is_eof:
            return "\0"
        return self._source[self._position]

    def _peek_char(self, ahead: int = 1) -> str:
        index = self._position + ahead
        if index >= len(self._source):
            return "\0"
        return self._source[index]

    def _advance(self, steps: int) -> None:
        self._position += steps


def token_text(source: str, token: LexToken) -> str:
    """Get the text of a token from the source string based on its range."""
    if token.kind == TokenKind.EOF:
        return ""
    return slice_text_range(source, token.range)


def scalar_text(source: str, token: LexToken) -> str:
    """Token text with the quotes of a quoted scalar removed."""
    text = token_text(source, token)
    if token.flags & TokenFlags.WAS_QUOTED:
        text = text[1:-1] if len(text) >= 2 and text.endswith('"') else text[1:]
    return text


def dump_tokens(tokens: list[LexToken], source: str) -> list[str]:
    """Render a token list with kind, range, flags and text for debugging."""
    return [
        f"{i:03d} {tok.kind.name:<22} range={tok.range.as_tuple()} flags={tok.flags!r} text={token_text(source, tok)!r}"
        for i, tok in enumerate(tokens)
    ]
