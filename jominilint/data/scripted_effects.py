"""Scripted effects: named, reusable blocks of effects."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from jominilint.block.model import Block
from jominilint.block.token import Token
from jominilint.context import ScopeContext
from jominilint.data.macros import has_parameters
from jominilint.db import CallCache, Db
from jominilint.effect import validate_normal_effect
from jominilint.item import Item
from jominilint.scopes import Scopes
from jominilint.tooltipped import Tooltipped

if TYPE_CHECKING:
    from jominilint.everything import Everything


@dataclass(slots=True)
class ScriptedEffect:
    cache: CallCache = field(default_factory=CallCache)

    @classmethod
    def add(cls, db: Db, key: Token, block: Block) -> None:
        db.add(Item.SCRIPTED_EFFECT, key, block, cls())

    def validate(self, key: Token, block: Block, data: Everything) -> None:
        sc = ScopeContext.new_unrooted(Scopes.all(), key, data.sink)
        self.validate_call(key, block, key, data, sc)

    def validate_call(self, key: Token, block: Block, caller: Token, data: Everything, sc: ScopeContext) -> None:
        if has_parameters(block) or self.cache.check_compat(caller, sc):
            return
        ours = ScopeContext.new_unrooted(Scopes.all(), key, data.sink)
        self.cache.insert(caller.loc, ours.copy())
        validate_normal_effect(block, data, ours, Tooltipped.YES)
        sc.expect_compatibility(ours, caller)
        self.cache.insert(caller.loc, ours)


__all__ = ["ScriptedEffect"]
