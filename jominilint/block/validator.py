"""Per-block field consumption tracking.

A `Validator` wraps one block for one validation pass. Every accessor claims
the key it reads; when the validator finishes, anything nobody claimed is
reported as unknown. Use it as a context manager so `finish` always runs:

    with Validator(block, data) as vd:
        vd.require("picture")
        vd.field_item("picture", Item.FILE)
        vd.field_bool("major")
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from types import TracebackType
from typing import TYPE_CHECKING

from jominilint.block.model import BV, Block, Comparator, Field
from jominilint.block.token import Token
from jominilint.context import ScopeContext
from jominilint.diagnostics.codes import (
    FIELD_ADVICE,
    FIELD_BANNED,
    FIELD_EXCESS_DECIMALS,
    FIELD_EXPECTED_BLOCK,
    FIELD_EXPECTED_BOOL,
    FIELD_EXPECTED_CHOICE,
    FIELD_EXPECTED_INTEGER,
    FIELD_EXPECTED_NUMBER,
    FIELD_EXPECTED_VALUE,
    FIELD_LOOSE_BLOCK,
    FIELD_LOOSE_VALUE,
    FIELD_MISSING,
    FIELD_MISSING_WARN,
    FIELD_REPEATED,
    FIELD_UNEXPECTED_COMPARATOR,
    FIELD_UNKNOWN,
)
from jominilint.diagnostics.sink import DiagnosticSink
from jominilint.item import Item
from jominilint.scopes import Scopes

if TYPE_CHECKING:
    from jominilint.everything import Everything


class Validator:
    """Claims and checks the fields of one block."""

    def __init__(self, block: Block, data: Everything) -> None:
        self._block = block
        self._data = data
        self._claimed = [False] * len(block.items)
        self._finished = False

    def __enter__(self) -> Validator:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if exc_type is None:
            self.finish()

    @property
    def block(self) -> Block:
        return self._block

    @property
    def data(self) -> Everything:
        return self._data

    @property
    def sink(self) -> DiagnosticSink:
        return self._data.sink

    # -------------------------
    # Claiming
    # -------------------------

    def _claim(self, key: str) -> list[Field]:
        fields: list[Field] = []
        for index, item in enumerate(self._block.items):
            if isinstance(item, Field) and item.key.text == key:
                self._claimed[index] = True
                fields.append(item)
        return fields

    def _claim_single(self, key: str) -> Field | None:
        fields = self._claim(key)
        if not fields:
            return None
        for field in fields[1:]:
            self.sink.report(FIELD_REPEATED, field.key, key=key)
        return fields[-1]

    def _check_eq(self, field: Field) -> None:
        if field.cmp != Comparator.EQ:
            self.sink.report(FIELD_UNEXPECTED_COMPARATOR, field.key, cmp=field.cmp.value)

    def _expect_value(self, field: Field) -> Token | None:
        self._check_eq(field)
        match field.value:
            case Token() as token:
                return token
            case Block() as block:
                self.sink.report(FIELD_EXPECTED_VALUE, block)
                return None

    def _expect_block(self, field: Field) -> Block | None:
        self._check_eq(field)
        match field.value:
            case Block() as block:
                return block
            case Token() as token:
                self.sink.report(FIELD_EXPECTED_BLOCK, token)
                return None

    # -------------------------
    # Presence
    # -------------------------

    def require(self, key: str) -> bool:
        """Report a missing field once. Does not claim the key."""
        if self._block.has_key(key):
            return True
        self.sink.report(FIELD_MISSING, self._block, key=key)
        return False

    def require_warn(self, key: str) -> bool:
        if self._block.has_key(key):
            return True
        self.sink.report(FIELD_MISSING_WARN, self._block, key=key)
        return False

    def advice_field(self, key: str, message: str) -> None:
        for field in self._claim(key):
            self.sink.report(FIELD_ADVICE, field.key, text=message)

    def ban_field(self, key: str, where: str) -> None:
        """Claim `key` and report each occurrence as misplaced."""
        for field in self._claim(key):
            self.sink.report(FIELD_BANNED, field.key, key=key, where=where)

    # -------------------------
    # Scalars
    # -------------------------

    def field(self, key: str) -> BV | None:
        field = self._claim_single(key)
        if field is None:
            return None
        self._check_eq(field)
        return field.value

    def field_any_cmp(self, key: str) -> Field | None:
        """Like `field`, for keys such as `count >= 2` that take any comparator."""
        return self._claim_single(key)

    def field_value(self, key: str) -> Token | None:
        field = self._claim_single(key)
        if field is None:
            return None
        return self._expect_value(field)

    def field_bool(self, key: str) -> bool | None:
        token = self.field_value(key)
        if token is None:
            return None
        if not token.is_bool():
            self.sink.report(FIELD_EXPECTED_BOOL, token)
            return None
        return token.text == "yes"

    def field_integer(self, key: str) -> int | None:
        token = self.field_value(key)
        if token is None:
            return None
        return self.expect_integer(token)

    def field_numeric(self, key: str) -> float | None:
        token = self.field_value(key)
        if token is None:
            return None
        return self.expect_number(token)

    def field_choice(self, key: str, choices: Sequence[str]) -> Token | None:
        token = self.field_value(key)
        if token is not None and token.text not in choices:
            self.sink.report(FIELD_EXPECTED_CHOICE, token, choices=", ".join(choices))
        return token

    def field_values(self, key: str) -> list[Token]:
        """Every value of a key that may repeat, such as `flag = x`."""
        tokens: list[Token] = []
        for field in self._claim(key):
            token = self._expect_value(field)
            if token is not None:
                tokens.append(token)
        return tokens

    def field_item(self, key: str, item: Item) -> Token | None:
        token = self.field_value(key)
        if token is not None:
            self._data.verify_exists(item, token)
        return token

    def field_items(self, key: str, item: Item) -> list[Token]:
        """Like `field_item` for a key that may repeat."""
        tokens: list[Token] = []
        for field in self._claim(key):
            token = self._expect_value(field)
            if token is not None:
                self._data.verify_exists(item, token)
                tokens.append(token)
        return tokens

    def field_list(self, key: str, item: Item | None = None) -> list[Token] | None:
        """`key = { a b c }`, optionally checking each entry as an item."""
        block = self.field_block(key)
        if block is None:
            return None
        with Validator(block, self._data) as vd:
            tokens = vd.values()
        if item is not None:
            for token in tokens:
                self._data.verify_exists(item, token)
        return tokens

    def expect_number(self, token: Token) -> float | None:
        if token.starts_with("@"):
            return None
        number = token.get_number()
        if number is None:
            self.sink.report(FIELD_EXPECTED_NUMBER, token)
            return None
        if token.has_excess_decimals():
            self.sink.report(FIELD_EXCESS_DECIMALS, token)
        return number

    def expect_integer(self, token: Token) -> int | None:
        if token.starts_with("@"):
            return None
        number = token.get_integer()
        if number is None:
            self.sink.report(FIELD_EXPECTED_INTEGER, token)
        return number

    # -------------------------
    # Blocks and callbacks
    # -------------------------

    def field_block(self, key: str) -> Block | None:
        field = self._claim_single(key)
        if field is None:
            return None
        return self._expect_block(field)

    def field_validated(self, key: str, validate: Callable[[BV, Everything], None]) -> BV | None:
        value = self.field(key)
        if value is not None:
            validate(value, self._data)
        return value

    def field_validated_bvs(self, key: str, validate: Callable[[BV, Everything], None]) -> None:
        for field in self._claim(key):
            self._check_eq(field)
            validate(field.value, self._data)

    def field_validated_block(self, key: str, validate: Callable[[Block, Everything], None]) -> Block | None:
        block = self.field_block(key)
        if block is not None:
            validate(block, self._data)
        return block

    def field_validated_key_block(
        self,
        key: str,
        validate: Callable[[Token, Block, Everything], None],
    ) -> Block | None:
        field = self._claim_single(key)
        if field is None:
            return None
        block = self._expect_block(field)
        if block is not None:
            validate(field.key, block, self._data)
        return block

    def field_blocks(self, key: str, validate: Callable[[Block, Everything], None]) -> list[Block]:
        """A block-valued key that may repeat; each occurrence is validated."""
        blocks: list[Block] = []
        for field in self._claim(key):
            block = self._expect_block(field)
            if block is not None:
                validate(block, self._data)
                blocks.append(block)
        return blocks

    # -------------------------
    # Scoped values
    # -------------------------

    def field_script_value(self, key: str, sc: ScopeContext) -> BV | None:
        from jominilint.data.scriptvalues import validate_script_value

        value = self.field(key)
        if value is not None:
            validate_script_value(value, self._data, sc)
        return value

    def fields_script_value(self, key: str, sc: ScopeContext) -> None:
        from jominilint.data.scriptvalues import validate_script_value

        for field in self._claim(key):
            self._check_eq(field)
            validate_script_value(field.value, self._data, sc)

    def field_script_value_rooted(self, key: str, scopes: Scopes) -> BV | None:
        """A script value evaluated in its own context rooted at `scopes`."""
        from jominilint.data.scriptvalues import validate_script_value

        field = self._claim_single(key)
        if field is None:
            return None
        self._check_eq(field)
        validate_script_value(field.value, self._data, self._data.new_context(scopes, field.key))
        return field.value

    def field_target(self, key: str, sc: ScopeContext, outscopes: Scopes) -> Token | None:
        from jominilint.trigger import validate_target

        token = self.field_value(key)
        if token is not None:
            validate_target(token, self._data, sc, outscopes)
        return token

    def field_target_ok_this(self, key: str, sc: ScopeContext, outscopes: Scopes) -> Token | None:
        from jominilint.trigger import validate_target_ok_this

        token = self.field_value(key)
        if token is not None:
            validate_target_ok_this(token, self._data, sc, outscopes)
        return token

    # -------------------------
    # Iteration over what is left
    # -------------------------

    def values(self) -> list[Token]:
        tokens: list[Token] = []
        for index, item in enumerate(self._block.items):
            if isinstance(item, Token):
                self._claimed[index] = True
                tokens.append(item)
        return tokens

    def blocks(self) -> list[Block]:
        blocks: list[Block] = []
        for index, item in enumerate(self._block.items):
            if isinstance(item, Block):
                self._claimed[index] = True
                blocks.append(item)
        return blocks

    def unknown_fields(self) -> Iterator[Field]:
        """Yield each unclaimed field in source order, claiming it."""
        for index, item in enumerate(self._block.items):
            if self._claimed[index] or not isinstance(item, Field):
                continue
            self._claimed[index] = True
            yield item

    def unknown_value_fields(self) -> Iterator[tuple[Token, Token]]:
        for field in self.unknown_fields():
            value = self._expect_value(field)
            if value is not None:
                yield field.key, value

    def unknown_block_fields(self) -> Iterator[tuple[Token, Block]]:
        for field in self.unknown_fields():
            block = self._expect_block(field)
            if block is not None:
                yield field.key, block

    def finish(self) -> None:
        """Report every item no accessor claimed. Safe to call more than once."""
        if self._finished:
            return
        self._finished = True
        reported: set[str] = set()
        for index, item in enumerate(self._block.items):
            if self._claimed[index]:
                continue
            match item:
                case Field(key=key):
                    if key.text not in reported:
                        reported.add(key.text)
                        self.sink.report(FIELD_UNKNOWN, key, key=key.text)
                case Token():
                    self.sink.report(FIELD_LOOSE_VALUE, item, text=item.text)
                case Block():
                    self.sink.report(FIELD_LOOSE_BLOCK, item)


__all__ = ["Validator"]
