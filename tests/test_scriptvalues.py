from jominilint.block.token import FileKind
from jominilint.config import LintConfig
from jominilint.context import ScopeContext
from jominilint.data.scriptvalues import Accumulation, validate_script_value
from jominilint.everything import Everything
from jominilint.parser import parse_text
from jominilint.scopes import Scopes
from tests._shared_cases import TEST_TOKEN, lint_codes, make_data, run_trigger

PATH = "common/script_values/v.txt"


def _value_codes(body: str) -> list[str]:
    return lint_codes({PATH: f"v = {body}\n"})


def test_valid_script_values() -> None:
    for body in (
        "5",
        "yes",
        "{ 1 10 }",
        "{ value = 5 add = 2 multiply = 3 }",
        "{ value = age if = { limit = { is_adult = yes } multiply = 2 } }",
        "{ every_vassal = { add = 1 } }",
        "{ value = 10 min = 1 max = 100 round = yes }",
        "{ value = 1 if = { limit = { is_adult = yes } add = 1 }"
        " else_if = { limit = { is_ai = yes } add = 2 } else = { add = 3 } }",
    ):
        assert _value_codes(body) == [], body


def test_script_value_grammar_errors() -> None:
    cases = (
        ("{ multiply = 2 }", ["VALUE_NOTHING_YET"]),
        ("{ value = 1 value = 2 }", ["VALUE_OVERWRITE"]),
        ("{ 1 2 3 }", ["VALUE_INVALID_RANGE"]),
        ("{ value = 1 if = { add = 1 } }", ["FIELD_MISSING_WARN"]),
        ("{ value = 1 else_if = { limit = { always = yes } add = 1 } }", ["ELSE_IF_WITHOUT_IF"]),
        ("{ any_vassal = { add = 1 } }", ["ITERATOR_NOT_ALLOWED"]),
        ("{ fixed_range = { min = 1 } }", ["FIELD_MISSING"]),
        ("{ value = 1 round = sometimes }", ["FIELD_EXPECTED_BOOL"]),
        ("{ value = 1 fixed_range = 5 }", ["VALUE_OVERWRITE", "FIELD_EXPECTED_BLOCK"]),
    )
    for body, expected in cases:
        assert _value_codes(body) == expected, body


def test_else_with_limit_lets_another_branch_follow() -> None:
    body = """{
        value = 1
        if = { limit = { always = yes } add = 1 }
        else = { limit = { always = no } add = 2 }
        else_if = { limit = { always = yes } add = 3 }
    }"""

    assert _value_codes(body) == ["ELSE_WITH_LIMIT"]


def test_mutually_recursive_script_values_terminate() -> None:
    assert lint_codes({PATH: "a = { value = b }\nb = { value = a }\n"}) == []


def test_recursive_script_values_report_once_per_call_site() -> None:
    texts = {PATH: "sv_left = { value = gold add = sv_right }\nsv_right = { value = sv_left }\n"}

    data = run_trigger("sv_left > 5\nsv_right > 5", root=Scopes.PROVINCE, data=make_data(texts))

    assert data.sink.codes() == ["SCOPE_INCOMPATIBLE", "SCOPE_INCOMPATIBLE"]
    assert [d.loc.line for d in data.sink.diagnostics] == [1, 2]


def test_duplicate_script_values() -> None:
    texts = {
        "common/script_values/a.txt": "v = 1\n",
        "common/script_values/b.txt": "v = 2\n",
    }
    assert lint_codes(texts) == ["ITEM_REDEFINED_WARN"]

    data = make_data({PATH: "v = 2\n"}, vanilla_texts={PATH: "v = 1\n"})
    data.validate_all()
    assert data.sink.codes() == []
    value = data.script_values.get("v")
    assert value is not None and value.key.loc.kind == FileKind.MOD


def test_mod_script_value_wins_regardless_of_load_order() -> None:
    data = Everything()
    data.load_texts({PATH: "v = 2\n"}, FileKind.MOD)
    data.load_texts({PATH: "v = 1\n"}, FileKind.VANILLA)

    value = data.script_values.get("v")
    assert value is not None and value.key.loc.kind == FileKind.MOD
    assert data.sink.codes() == []


def test_script_value_call_checks_inferred_scope() -> None:
    texts = {PATH: "gold_value = { value = gold }\n"}

    data = run_trigger("gold_value > 5", root=Scopes.PROVINCE, data=make_data(texts))
    assert data.sink.codes() == ["SCOPE_INCOMPATIBLE"]

    data = run_trigger("gold_value > 5", root=Scopes.CHARACTER, data=make_data(texts))
    assert data.sink.codes() == []


def test_scope_override_replaces_inferred_scope() -> None:
    config = LintConfig(scope_override={"gold_value": Scopes.PROVINCE})
    data = make_data({PATH: "gold_value = { value = gold }\n"}, config=config)

    run_trigger("gold_value > 5", root=Scopes.PROVINCE, data=data)

    assert data.sink.codes() == []


def test_validate_script_value_reports_accumulation() -> None:
    data = Everything()
    block = parse_text(
        "a = 5\nb = { if = { limit = { always = yes } value = 1 } }\nc = { multiply = 2 }\n",
        sink=data.sink,
    )

    def accumulation(name: str) -> Accumulation:
        bv = block.get_field(name)
        assert bv is not None
        sc = ScopeContext.new_unrooted(Scopes.all(), TEST_TOKEN, data.sink)
        return validate_script_value(bv, data, sc)

    assert accumulation("a") is Accumulation.SET
    assert accumulation("b") is Accumulation.MAYBE_SET
    assert accumulation("c") is Accumulation.NOT_SET
    assert data.sink.codes() == ["VALUE_NOTHING_YET"]
