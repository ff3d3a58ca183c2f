"""Immutable script tree: blocks, fields and scalar-or-block values."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import StrEnum

from jominilint.block.token import Loc, Token


class Comparator(StrEnum):
    EQ = "="
    EQ_EQ = "=="
    NOT_EQ = "!="
    LT = "<"
    GT = ">"
    LE = "<="
    GE = ">="
    QUESTION_EQ = "?="

    @property
    def is_equality(self) -> bool:
        return self in (Comparator.EQ, Comparator.EQ_EQ, Comparator.QUESTION_EQ)

    @property
    def is_ordering(self) -> bool:
        return self in (Comparator.LT, Comparator.GT, Comparator.LE, Comparator.GE)


@dataclass(frozen=True, slots=True)
class Block:
    """Ordered sequence of items between braces, or the top level of a file.

    `tag` is set for tagged blocks such as `rgb { 1 2 3 }`.
    """

    items: tuple[BlockItem, ...]
    loc: Loc
    tag: Token | None = None

    def iter_fields(self) -> Iterator[Field]:
        for item in self.items:
            if isinstance(item, Field):
                yield item

    def iter_values(self) -> Iterator[Token]:
        for item in self.items:
            if isinstance(item, Token):
                yield item

    def iter_blocks(self) -> Iterator[Block]:
        for item in self.items:
            if isinstance(item, Block):
                yield item

    def iter_definitions(self) -> Iterator[DefinitionItem]:
        for item in self.items:
            match item:
                case Token():
                    yield Keyword(item)
                case Block():
                    yield Keyword(Token("{", item.loc))
                case Field(key=key, cmp=cmp, value=Token() as value):
                    yield Assignment(key, cmp, value)
                case Field(key=key, value=Block() as value):
                    yield Definition(key, value)

    def get_fields(self, key: str) -> list[Field]:
        return [field for field in self.iter_fields() if field.key.text == key]

    def get_field(self, key: str) -> BV | None:
        """Value of the last occurrence of `key`."""
        found: BV | None = None
        for field in self.iter_fields():
            if field.key.text == key:
                found = field.value
        return found

    def get_key(self, key: str) -> Token | None:
        found: Token | None = None
        for field in self.iter_fields():
            if field.key.text == key:
                found = field.key
        return found

    def get_field_value(self, key: str) -> Token | None:
        value = self.get_field(key)
        return value if isinstance(value, Token) else None

    def get_field_block(self, key: str) -> Block | None:
        value = self.get_field(key)
        return value if isinstance(value, Block) else None

    def get_field_bool(self, key: str) -> bool | None:
        value = self.get_field_value(key)
        if value is None or not value.is_bool():
            return None
        return value.text == "yes"

    def has_key(self, key: str) -> bool:
        return any(field.key.text == key for field in self.iter_fields())

    def first_item_is_value(self) -> bool:
        return bool(self.items) and isinstance(self.items[0], Token)


@dataclass(frozen=True, slots=True)
class Field:
    key: Token
    cmp: Comparator
    value: BV


type BV = Token | Block
type BlockItem = Field | Token | Block


@dataclass(frozen=True, slots=True)
class Keyword:
    token: Token


@dataclass(frozen=True, slots=True)
class Assignment:
    key: Token
    cmp: Comparator
    value: Token


@dataclass(frozen=True, slots=True)
class Definition:
    key: Token
    block: Block


type DefinitionItem = Keyword | Assignment | Definition


def bv_loc(bv: BV) -> Loc:
    match bv:
        case Token(loc=loc):
            return loc
        case Block(loc=loc):
            return loc


__all__ = [
    "BV",
    "Assignment",
    "Block",
    "BlockItem",
    "Comparator",
    "Definition",
    "DefinitionItem",
    "Field",
    "Keyword",
    "bv_loc",
]
