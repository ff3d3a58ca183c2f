"""Centralized script cases and helpers used across the test modules."""

from __future__ import annotations

import textwrap
from collections.abc import Mapping
from dataclasses import dataclass

from jominilint.block.token import FileKind, Loc, Token
from jominilint.config import LintConfig
from jominilint.context import ScopeContext
from jominilint.effect import validate_normal_effect
from jominilint.everything import Everything
from jominilint.fileset import AssetRegistry
from jominilint.parser import parse_text
from jominilint.scopes import Scopes
from jominilint.tooltipped import Tooltipped
from jominilint.trigger import validate_normal_trigger


@dataclass(frozen=True, slots=True)
class ScriptCase:
    name: str
    source: str
    strict_should_parse_cleanly: bool = True


def dedent(text: str) -> str:
    return textwrap.dedent(text).lstrip()


PARSER_CASES: tuple[ScriptCase, ...] = (
    ScriptCase(
        name="simple_assignments",
        source=dedent(
            """
            # this is a comment
            a = 1
            b = "hello" # inline comment
            # comment block start
            # comment block end
            """
        ),
    ),
    ScriptCase(name="repeated_key_is_valid", source='a = 1\nb = "hello"\na = 2\n'),
    ScriptCase(
        name="common_scalar_examples",
        source=dedent(
            """
            aaa=foo
            bbb=-1
            ccc=1.000
            ddd=yes
            eee=no
            fff="foo"
            ggg=1821.1.1
            """
        ),
    ),
    ScriptCase(name="multiple_pairs_per_line", source="a=1 b=2 c=3\n"),
    ScriptCase(
        name="operator_variants",
        source=dedent(
            """
            intrigue >= high_skill_rating
            age > 16
            count < 2
            scope:attacker.primary_title.tier <= tier_county
            a != b
            start_date == 1066.9.15
            c:RUS ?= this
            """
        ),
    ),
    ScriptCase(
        name="nested_blocks",
        source=dedent(
            """
            my_decision = {
                is_shown = {
                    OR = { is_adult = yes is_ruler = yes }
                }
                effect = { add_gold = 100 }
            }
            """
        ),
    ),
    ScriptCase(name="value_list", source="provinces = { 1 2 3 }\n"),
    ScriptCase(name="empty_block", source="a = {}\n"),
    ScriptCase(name="tagged_color_blocks", source="color = rgb { 100 200 150 }\ncolor = hsv { 0.43 0.86 0.61 }\n"),
    ScriptCase(name="implicit_block_assignment", source="foo{bar=qux}\n"),
    ScriptCase(name="macro_and_parameter_words", source="value = @[1-x]\namount = $COUNT$\n"),
    ScriptCase(name="loose_values_and_blocks", source="{ a b } 1 2\n"),
    ScriptCase(name="lone_bang_is_skipped", source="[[!skill] $SKILL$ ]\n"),
    ScriptCase(name="crlf_line_endings", source="a = 1\r\nb = { c = d }\r\n"),
    ScriptCase(name="extra_closing_brace", source="a = 1 }\n", strict_should_parse_cleanly=False),
    ScriptCase(name="missing_closing_brace", source="a = { b = 1\n", strict_should_parse_cleanly=False),
    ScriptCase(name="missing_value", source="a =\n", strict_should_parse_cleanly=False),
    ScriptCase(name="comparator_without_key", source="== b\n", strict_should_parse_cleanly=False),
    ScriptCase(name="unterminated_string", source='a = "oops\n', strict_should_parse_cleanly=False),
)


# -------------------------
# Project helpers
# -------------------------


TEST_TOKEN = Token("test", Loc("test.txt", 1, 1))


def make_data(
    texts: Mapping[str, str] | None = None,
    *,
    vanilla_texts: Mapping[str, str] | None = None,
    config: LintConfig | None = None,
    assets: AssetRegistry | None = None,
) -> Everything:
    """Build a project from in-memory files without validating it."""
    data = Everything(config=config, assets=assets)
    if vanilla_texts:
        data.load_texts({path: dedent(text) for path, text in vanilla_texts.items()}, FileKind.VANILLA)
    if texts:
        data.load_texts({path: dedent(text) for path, text in texts.items()})
    return data


def lint_codes(
    texts: Mapping[str, str],
    *,
    vanilla_texts: Mapping[str, str] | None = None,
    config: LintConfig | None = None,
    assets: AssetRegistry | None = None,
) -> list[str]:
    data = make_data(texts, vanilla_texts=vanilla_texts, config=config, assets=assets)
    data.validate_all()
    return data.sink.codes()


def localization_text(language: str, *keys: str) -> str:
    lines = [f"l_{language}:"]
    lines.extend(f' {key}:0 "{key}"' for key in keys)
    return "\n".join(lines) + "\n"


def run_trigger(
    source: str,
    *,
    root: Scopes = Scopes.CHARACTER,
    data: Everything | None = None,
    tooltipped: Tooltipped = Tooltipped.YES,
    strict: bool = True,
) -> Everything:
    data = data if data is not None else Everything()
    block = parse_text(dedent(source), sink=data.sink)
    sc = ScopeContext(root, TEST_TOKEN, data.sink, strict=strict)
    validate_normal_trigger(block, data, sc, tooltipped)
    return data


def run_effect(
    source: str,
    *,
    root: Scopes = Scopes.CHARACTER,
    data: Everything | None = None,
    tooltipped: Tooltipped = Tooltipped.YES,
    strict: bool = True,
) -> Everything:
    data = data if data is not None else Everything()
    block = parse_text(dedent(source), sink=data.sink)
    sc = ScopeContext(root, TEST_TOKEN, data.sink, strict=strict)
    validate_normal_effect(block, data, sc, tooltipped)
    return data

