import pytest

from jominilint.block.model import Block
from jominilint.block.validator import Validator
from jominilint.everything import Everything
from jominilint.item import Item
from jominilint.parser import parse_text
from tests._shared_cases import make_data


def _block(source: str, data: Everything) -> Block:
    return parse_text(source, sink=data.sink)


def test_validator_reports_unclaimed_fields_on_exit() -> None:
    data = Everything()
    block = _block("a = 1\nb = 2\nb = 3\n{ }\nloose", data)

    with Validator(block, data) as vd:
        assert vd.field_value("a") is not None

    assert data.sink.codes() == ["FIELD_UNKNOWN", "FIELD_LOOSE_BLOCK", "FIELD_LOOSE_VALUE"]
    assert data.sink.diagnostics[0].message == "found unknown field `b`"


def test_validator_finish_runs_once_and_not_after_errors() -> None:
    data = Everything()
    block = _block("a = 1", data)

    vd = Validator(block, data)
    vd.finish()
    vd.finish()
    assert data.sink.codes() == ["FIELD_UNKNOWN"]

    other = Everything()
    with pytest.raises(RuntimeError):
        with Validator(_block("a = 1", other), other):
            raise RuntimeError("boom")
    assert other.sink.codes() == []


def test_validator_repeated_single_field() -> None:
    data = Everything()

    with Validator(_block("a = 1\na = 2", data), data) as vd:
        token = vd.field_value("a")

    assert token is not None and token.text == "2"
    assert data.sink.codes() == ["FIELD_REPEATED"]


def test_validator_field_values_allows_repeats() -> None:
    data = Everything()

    with Validator(_block("flag = a\nflag = b", data), data) as vd:
        tokens = vd.field_values("flag")

    assert [token.text for token in tokens] == ["a", "b"]
    assert data.sink.codes() == []


def test_validator_scalar_checks() -> None:
    data = Everything()
    block = _block("b = maybe\ni = 1.5\nn = x\nd = 0.1234567\nc = @constant\nok = 12", data)

    with Validator(block, data) as vd:
        assert vd.field_bool("b") is None
        assert vd.field_integer("i") is None
        assert vd.field_numeric("n") is None
        assert vd.field_numeric("d") == pytest.approx(0.1234567)
        assert vd.field_numeric("c") is None
        assert vd.field_integer("ok") == 12

    assert data.sink.codes() == [
        "FIELD_EXPECTED_BOOL",
        "FIELD_EXPECTED_INTEGER",
        "FIELD_EXPECTED_NUMBER",
        "FIELD_EXCESS_DECIMALS",
    ]


def test_validator_shape_and_comparator_checks() -> None:
    data = Everything()
    block = _block("a = { }\nb = 1\nc > 2", data)

    with Validator(block, data) as vd:
        assert vd.field_value("a") is None
        assert vd.field_block("b") is None
        vd.field_value("c")

    assert data.sink.codes() == ["FIELD_EXPECTED_VALUE", "FIELD_EXPECTED_BLOCK", "FIELD_UNEXPECTED_COMPARATOR"]


def test_validator_require_does_not_claim() -> None:
    data = Everything()

    with Validator(_block("picture = x", data), data) as vd:
        assert vd.require("picture")
        assert not vd.require("title")
        assert not vd.require_warn("desc")

    assert data.sink.codes() == ["FIELD_MISSING", "FIELD_MISSING_WARN", "FIELD_UNKNOWN"]
    assert [d.severity for d in data.sink] == ["error", "warning", "error"]


def test_validator_choice_ban_and_advice() -> None:
    data = Everything()
    block = _block("category = silly\npercent = 0.5\nai_check_interval = 12", data)

    with Validator(block, data) as vd:
        vd.field_choice("category", ("personality", "education"))
        vd.ban_field("percent", "`any_` lists")
        vd.advice_field("ai_check_interval", "not needed if ai_goal = yes")

    assert data.sink.codes() == ["FIELD_EXPECTED_CHOICE", "FIELD_BANNED", "FIELD_ADVICE"]
    assert data.sink.diagnostics[0].message == "expected one of personality, education"
    assert data.sink.diagnostics[2].message == "not needed if ai_goal = yes"


def test_validator_field_list_checks_items() -> None:
    data = make_data({"common/traits/t.txt": "brave = { }"})
    block = _block("opposites = { brave craven }", data)

    with Validator(block, data) as vd:
        tokens = vd.field_list("opposites", Item.TRAIT)

    assert tokens is not None
    assert [token.text for token in tokens] == ["brave", "craven"]
    assert data.sink.codes() == ["ITEM_MISSING"]
    assert data.sink.diagnostics[0].message == "trait `craven` is not defined"


def test_validator_leftover_iteration_claims() -> None:
    data = Everything()
    block = _block("a = 1\nb = { }\nc = 2", data)

    with Validator(block, data) as vd:
        vd.field_value("a")
        keys = [key.text for key, _ in vd.unknown_value_fields()]

    assert keys == ["c"]
    assert data.sink.codes() == ["FIELD_EXPECTED_VALUE"]
