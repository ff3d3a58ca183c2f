"""Recursive descent grammar from lexer tokens to the block model."""

from __future__ import annotations

from jominilint.block.model import Block, BlockItem, Comparator, Field
from jominilint.block.token import FileKind, Loc, Token
from jominilint.diagnostics.codes import (
    PARSER_EXPECTED_VALUE,
    PARSER_EXTRA_RBRACE,
    PARSER_MISSING_RBRACE,
    PARSER_UNEXPECTED_TOKEN,
)
from jominilint.diagnostics.sink import DiagnosticSink
from jominilint.lexer import LexToken, Lexer, TokenKind, scalar_text, token_text
from jominilint.parser.options import ParserOptions
from jominilint.text import LineIndex

_COLOR_TAGS = frozenset({"rgb", "hsv", "hsv360"})


class Parser:
    """Parses one file. Problems are reported to the sink and parsing continues."""

    def __init__(
        self,
        source: str,
        *,
        path: str,
        kind: FileKind,
        sink: DiagnosticSink,
        options: ParserOptions | None = None,
    ) -> None:
        self._source = source
        self._path = path
        self._kind = kind
        self._sink = sink
        self._options = options or ParserOptions()
        self._lines = LineIndex(source)
        lexer = Lexer(source)
        self._tokens = [token for token in lexer.lex() if not token.kind.is_trivia]
        self._position = 0
        for error in lexer.errors:
            sink.report(error.spec, self._loc_at(error.range.start))

    def parse_file(self) -> Block:
        items = self._parse_items(open_loc=None)
        return Block(items, Loc(self._path, kind=self._kind))

    @property
    def _current(self) -> LexToken:
        return self._tokens[self._position]

    def _bump(self) -> LexToken:
        token = self._tokens[self._position]
        if token.kind != TokenKind.EOF:
            self._position += 1
        return token

    def _loc_at(self, offset: int) -> Loc:
        line, column = self._lines.line_col(offset)
        return Loc(self._path, line, column, self._kind)

    def _make_token(self, token: LexToken) -> Token:
        return Token(scalar_text(self._source, token), self._loc_at(token.range.start))

    def _parse_items(self, open_loc: Loc | None) -> tuple[BlockItem, ...]:
        items: list[BlockItem] = []
        while True:
            token = self._current
            kind = token.kind
            if kind == TokenKind.EOF:
                if open_loc is not None and not self._options.allow_missing_rbrace:
                    self._sink.report(PARSER_MISSING_RBRACE, open_loc)
                break
            if kind == TokenKind.RBRACE:
                self._bump()
                if open_loc is not None:
                    break
                if not self._options.allow_extra_rbrace:
                    self._sink.report(PARSER_EXTRA_RBRACE, self._loc_at(token.range.start))
                continue
            if kind == TokenKind.LBRACE:
                self._bump()
                items.append(self._parse_block(token, tag=None))
                continue
            if kind.is_scalar:
                items.append(self._parse_statement())
                continue
            self._bump()
            self._sink.report(
                PARSER_UNEXPECTED_TOKEN,
                self._loc_at(token.range.start),
                text=token_text(self._source, token),
            )
        return tuple(items)

    def _parse_statement(self) -> BlockItem:
        key_token = self._bump()
        key = self._make_token(key_token)
        current = self._current
        cmp = current.kind.comparator
        if cmp is not None:
            self._bump()
            value = self._parse_value()
            if value is None:
                self._sink.report(
                    PARSER_EXPECTED_VALUE,
                    self._loc_at(current.range.start),
                    cmp=cmp.value,
                )
                return key
            return Field(key, cmp, value)
        if current.kind == TokenKind.LBRACE:
            # `key { ... }` is accepted as `key = { ... }`.
            self._bump()
            return Field(key, Comparator.EQ, self._parse_block(current, tag=None))
        return key

    def _parse_value(self) -> Token | Block | None:
        token = self._current
        if token.kind == TokenKind.LBRACE:
            self._bump()
            return self._parse_block(token, tag=None)
        if not token.kind.is_scalar:
            return None
        self._bump()
        value = self._make_token(token)
        following = self._current
        if token.kind == TokenKind.WORD and following.kind == TokenKind.LBRACE and (
            not following.has_preceding_line_break() or value.text in _COLOR_TAGS
        ):
            # Tagged block such as `rgb { 255 0 0 }`. A `{` on a later line starts a loose block instead.
            self._bump()
            return self._parse_block(following, tag=value)
        return value

    def _parse_block(self, open_token: LexToken, tag: Token | None) -> Block:
        open_loc = self._loc_at(open_token.range.start)
        items = self._parse_items(open_loc=open_loc)
        return Block(items, open_loc, tag)
