from pathlib import Path

from jominilint.block.model import Assignment, Block, Comparator, Definition, Field, Keyword
from jominilint.block.token import FileKind, Loc, Token
from jominilint.diagnostics import DiagnosticSink
from jominilint.fileset import FileEntry
from jominilint.parser import ParseMode, ParserOptions, parse_file, parse_text
from tests._shared_cases import PARSER_CASES


def _codes(source: str, mode: ParseMode = ParseMode.STRICT) -> list[str]:
    sink = DiagnosticSink()
    parse_text(source, sink=sink, options=ParserOptions.for_mode(mode))
    return sink.codes()


def test_parser_shared_cases_strict() -> None:
    for case in PARSER_CASES:
        codes = _codes(case.source)
        assert (not codes) == case.strict_should_parse_cleanly, (case.name, codes)


def test_parser_fields_and_nested_blocks() -> None:
    block = parse_text("a = 1\nb = { c = d }\n")

    first, second = block.items
    assert isinstance(first, Field)
    assert first.key.text == "a"
    assert first.cmp is Comparator.EQ
    assert isinstance(first.value, Token)
    assert first.value.text == "1"

    assert isinstance(second, Field)
    assert isinstance(second.value, Block)
    assert [field.key.text for field in second.value.iter_fields()] == ["c"]


def test_parser_locations() -> None:
    block = parse_text("a = 1\n  b = {\n  }\n", path="common/traits/x.txt", kind=FileKind.VANILLA)

    fields = list(block.iter_fields())
    assert block.loc == Loc("common/traits/x.txt", kind=FileKind.VANILLA)
    assert fields[1].key.loc == Loc("common/traits/x.txt", 2, 3, FileKind.VANILLA)
    assert isinstance(fields[1].value, Block)
    assert fields[1].value.loc == Loc("common/traits/x.txt", 2, 7, FileKind.VANILLA)


def test_parser_tagged_block() -> None:
    block = parse_text("color = rgb { 1 2 3 }")

    value = block.get_field("color")
    assert isinstance(value, Block)
    assert value.tag is not None and value.tag.text == "rgb"
    assert [token.text for token in value.iter_values()] == ["1", "2", "3"]


def test_parser_brace_on_next_line_starts_a_loose_block() -> None:
    block = parse_text("b = 3\n{ }\ncolor = hsv\n{ 0.5 0.5 1 }\n")

    first, second, third = block.items
    assert isinstance(first, Field)
    assert first.value == Token("3", Loc("x"))
    assert isinstance(second, Block)
    assert second.tag is None
    assert isinstance(third, Field)
    assert isinstance(third.value, Block)
    assert third.value.tag is not None and third.value.tag.text == "hsv"


def test_parser_implicit_block_assignment() -> None:
    block = parse_text("foo{bar=qux}")

    (field,) = block.items
    assert isinstance(field, Field)
    assert field.key.text == "foo"
    assert field.cmp is Comparator.EQ
    assert isinstance(field.value, Block)
    assert field.value.get_field_value("bar") == Token("qux", Loc("x"))


def test_parser_comparators() -> None:
    block = parse_text("age >= 16\nc:RUS ?= this\n")

    first, second = block.iter_fields()
    assert first.cmp is Comparator.GE
    assert first.cmp.is_ordering
    assert second.cmp is Comparator.QUESTION_EQ
    assert second.cmp.is_equality


def test_parser_key_without_comparator_is_a_loose_value() -> None:
    sink = DiagnosticSink()
    block = parse_text("a b = c", sink=sink)

    assert isinstance(block.items[0], Token)
    assert isinstance(block.items[1], Field)
    assert sink.codes() == []


def test_parser_strips_quotes_and_bom() -> None:
    block = parse_text('\ufeffname = "My Mod"')

    (field,) = block.iter_fields()
    assert field.key.loc.column == 1
    assert isinstance(field.value, Token)
    assert field.value.text == "My Mod"


def test_parser_extra_rbrace_strict_and_permissive() -> None:
    assert _codes("a = 1 }") == ["PARSER_EXTRA_RBRACE"]
    assert _codes("a = 1 }", ParseMode.PERMISSIVE) == []


def test_parser_missing_rbrace_strict_and_permissive() -> None:
    sink = DiagnosticSink()
    block = parse_text("a = { b = 1", sink=sink)

    assert sink.codes() == ["PARSER_MISSING_RBRACE"]
    assert sink.diagnostics[0].loc == Loc("<memory>", 1, 5)
    inner = block.get_field_block("a")
    assert inner is not None and inner.has_key("b")

    assert _codes("a = { b = 1", ParseMode.PERMISSIVE) == []


def test_parser_expected_value() -> None:
    assert _codes("a = \n") == ["PARSER_EXPECTED_VALUE"]
    assert _codes("a = }") == ["PARSER_EXPECTED_VALUE", "PARSER_EXTRA_RBRACE"]


def test_parser_unexpected_token() -> None:
    sink = DiagnosticSink()
    parse_text("== b", sink=sink)

    assert sink.codes() == ["PARSER_UNEXPECTED_TOKEN"]
    assert sink.diagnostics[0].message == "Unexpected `==`."


def test_parser_unterminated_string_keeps_value() -> None:
    sink = DiagnosticSink()
    block = parse_text('a = "oops', sink=sink)

    assert sink.codes() == ["LEXER_UNTERMINATED_STRING"]
    assert block.get_field_value("a") == Token("oops", Loc("x"))


def test_parser_iter_definitions() -> None:
    block = parse_text("a = 1\nb = { }\n{ }\nloose\n")

    assert [type(item) for item in block.iter_definitions()] == [Assignment, Definition, Keyword, Keyword]


def test_parse_file_reads_utf8_with_bom(tmp_path: Path) -> None:
    fullpath = tmp_path / "brave.txt"
    fullpath.write_bytes("\ufeffbrave = { }\n".encode())
    sink = DiagnosticSink()

    block = parse_file(FileEntry("common/traits/brave.txt", FileKind.VANILLA, fullpath), sink)

    assert block is not None
    (field,) = block.iter_fields()
    assert field.key.loc == Loc("common/traits/brave.txt", 1, 1, FileKind.VANILLA)
    assert sink.codes() == []


def test_parse_file_reports_read_errors(tmp_path: Path) -> None:
    bad = tmp_path / "bad.txt"
    bad.write_bytes(b"a = \xff\n")
    sink = DiagnosticSink()

    assert parse_file(FileEntry("common/bad.txt", FileKind.MOD, bad), sink) is None
    assert parse_file(FileEntry("common/gone.txt", FileKind.MOD, tmp_path / "gone.txt"), sink) is None

    assert sink.codes() == ["READ_ERROR", "READ_ERROR"]
    assert sink.diagnostics[0].message == "could not read file: not valid UTF-8"
    assert sink.diagnostics[1].loc == Loc("common/gone.txt")


def test_block_repeated_keys_and_nested_blocks() -> None:
    block = parse_text("{ x }\na = 1\na = 2\nloose\n")

    assert [field.value.text for field in block.get_fields("a") if isinstance(field.value, Token)] == ["1", "2"]
    value = block.get_field("a")
    assert isinstance(value, Token)
    assert value.text == "2"
    assert [[token.text for token in inner.iter_values()] for inner in block.iter_blocks()] == [["x"]]
    assert [token.text for token in block.iter_values()] == ["loose"]
    assert block.get_fields("b") == []
