"""Lexer."""

from jominilint.lexer.lexer import LexError, Lexer, dump_tokens, scalar_text, token_text
from jominilint.lexer.tokens import LexToken, TokenFlags, TokenKind

__all__ = [
    "LexError",
    "LexToken",
    "Lexer",
    "TokenFlags",
    "TokenKind",
    "dump_tokens",
    "scalar_text",
    "token_text",
]
