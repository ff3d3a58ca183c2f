"""Small reporting helpers shared by the content kinds."""

from __future__ import annotations

from jominilint.block.token import Token
from jominilint.diagnostics.codes import ITEM_REDEFINED, ITEM_REDEFINED_WARN
from jominilint.diagnostics.sink import DiagnosticSink


def dup_error(sink: DiagnosticSink, key: Token, other: Token, label: str) -> None:
    """Warn that `key` replaces an earlier definition at `other`."""
    sink.report(
        ITEM_REDEFINED_WARN,
        key,
        related=[(other, f"the other {label} is here")],
        item=label,
        name=key.text,
    )


def dup_assert_error(sink: DiagnosticSink, key: Token, other: Token, label: str) -> None:
    """Error for a duplicate within one tier, where the engine keeps only one of them."""
    sink.report(
        ITEM_REDEFINED,
        key,
        related=[(other, f"the other {label} is here")],
        item=label,
    )


__all__ = ["dup_assert_error", "dup_error"]
