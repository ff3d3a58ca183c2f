"""Script tree model: tokens, locations and blocks."""

from jominilint.block.model import (
    BV,
    Assignment,
    Block,
    BlockItem,
    Comparator,
    Definition,
    DefinitionItem,
    Field,
    Keyword,
    bv_loc,
)
from jominilint.block.token import FileKind, Loc, Token

__all__ = [
    "BV",
    "Assignment",
    "Block",
    "BlockItem",
    "Comparator",
    "Definition",
    "DefinitionItem",
    "Field",
    "FileKind",
    "Keyword",
    "Loc",
    "Token",
    "bv_loc",
]
