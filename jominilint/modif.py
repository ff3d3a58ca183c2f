"""Modifier blocks: the numeric `modif = value` fields of traits and static modifiers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from jominilint.block.model import Block
from jominilint.block.validator import Validator
from jominilint.diagnostics.codes import MODIF_WRONG_KIND
from jominilint.scopes import Scopes
from jominilint.tables.modifs import AI_PERSONALITY_MODIFS, MODIFS, ModifKinds, modifs_for

if TYPE_CHECKING:
    from jominilint.everything import Everything


def validate_modifs(block: Block, data: Everything, kinds: ModifKinds, vd: Validator) -> None:
    """Claim and check every modif in `block` that is valid for `kinds`.

    A modif that exists but belongs to other kinds is reported here; keys that
    are not modifs at all are left for the caller's validator.
    """
    for name in modifs_for(kinds):
        vd.field_numeric(name)
    if kinds & ModifKinds.CHARACTER:
        for name in AI_PERSONALITY_MODIFS:
            vd.field_script_value_rooted(name, Scopes.NONE)

    for name, valid in MODIFS.items():
        if valid & kinds:
            continue
        key = block.get_key(name)
        if key is None:
            continue
        data.sink.report(MODIF_WRONG_KIND, key, key=name, valid=valid.to_text(), kinds=kinds.to_text())
        vd.field_numeric(name)


__all__ = ["validate_modifs"]
