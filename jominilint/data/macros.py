"""Detection of `$PARAM$` substitutions in scripted blocks."""

from __future__ import annotations

from jominilint.block.model import Block, Field
from jominilint.block.token import Token


def has_parameters(block: Block) -> bool:
    """Whether any token in `block` contains a `$PARAM$` placeholder.

    Such blocks are only meaningful after substitution at each call site, so
    they are not validated on their own.
    """
    for item in block.items:
        match item:
            case Token(text=text) if "$" in text:
                return True
            case Field(key=key, value=value):
                if "$" in key.text:
                    return True
                if isinstance(value, Token) and "$" in value.text:
                    return True
                if isinstance(value, Block) and has_parameters(value):
                    return True
            case Block() if has_parameters(item):
                return True
    return False


__all__ = ["has_parameters"]
