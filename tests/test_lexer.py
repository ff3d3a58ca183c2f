from jominilint.block.model import Comparator
from jominilint.lexer import LexToken, Lexer, TokenFlags, TokenKind, dump_tokens, scalar_text, token_text
from tests._shared_cases import PARSER_CASES


def _significant(source: str) -> list[LexToken]:
    return [token for token in Lexer(source).lex() if not token.kind.is_trivia]


def _kinds(source: str) -> list[TokenKind]:
    return [token.kind for token in _significant(source)]


def _texts(source: str) -> list[str]:
    return [token_text(source, token) for token in _significant(source) if token.kind != TokenKind.EOF]


def test_lexer_is_lossless_for_shared_cases() -> None:
    for case in PARSER_CASES:
        tokens = Lexer(case.source).lex()
        assert "".join(token_text(case.source, token) for token in tokens) == case.source, case.name
        assert tokens[-1].kind == TokenKind.EOF, case.name


def test_lexer_comparators() -> None:
    assert _kinds("a = b == c != d < e > f <= g >= h ?= i") == [
        TokenKind.WORD,
        TokenKind.EQUAL,
        TokenKind.WORD,
        TokenKind.EQUAL_EQUAL,
        TokenKind.WORD,
        TokenKind.NOT_EQUAL,
        TokenKind.WORD,
        TokenKind.LESS_THAN,
        TokenKind.WORD,
        TokenKind.GREATER_THAN,
        TokenKind.WORD,
        TokenKind.LESS_THAN_OR_EQUAL,
        TokenKind.WORD,
        TokenKind.GREATER_THAN_OR_EQUAL,
        TokenKind.WORD,
        TokenKind.QUESTION_EQUAL,
        TokenKind.WORD,
        TokenKind.EOF,
    ]


def test_token_kind_comparator_mapping() -> None:
    assert TokenKind.NOT_EQUAL.comparator is Comparator.NOT_EQ
    assert TokenKind.QUESTION_EQUAL.comparator is Comparator.QUESTION_EQ
    assert TokenKind.WORD.comparator is None
    assert TokenKind.COMMENT.is_trivia
    assert TokenKind.STRING.is_scalar


def test_lexer_words_keep_chains_macros_and_dashes_together() -> None:
    source = "scope:actor.liege -1.5 @[1-x] $COUNT$ 1066.9.15 character|province missing-localization"
    assert _texts(source) == source.split(" ")


def test_lexer_word_stops_at_comparator() -> None:
    assert _texts("a>=b") == ["a", ">=", "b"]
    assert _texts("gold<5") == ["gold", "<", "5"]


def test_lexer_quoted_string() -> None:
    source = 'name = "a # b"'
    tokens = _significant(source)

    assert [token.kind for token in tokens] == [TokenKind.WORD, TokenKind.EQUAL, TokenKind.STRING, TokenKind.EOF]
    assert tokens[2].flags & TokenFlags.WAS_QUOTED
    assert scalar_text(source, tokens[2]) == "a # b"


def test_lexer_string_escape_sets_flag() -> None:
    source = 'a = "say \\"hi\\""'
    tokens = _significant(source)

    assert [token.kind for token in tokens] == [TokenKind.WORD, TokenKind.EQUAL, TokenKind.STRING, TokenKind.EOF]
    assert tokens[2].flags & TokenFlags.HAS_ESCAPE


def test_lexer_unterminated_string_is_reported() -> None:
    lexer = Lexer('a = "oops')
    tokens = lexer.lex()

    assert [error.spec.code for error in lexer.errors] == ["LEXER_UNTERMINATED_STRING"]
    assert tokens[-2].kind == TokenKind.STRING
    assert scalar_text(lexer.source, tokens[-2]) == "oops"


def test_lexer_comment_is_trivia() -> None:
    source = "a = 1 # note\nb = 2"
    tokens = Lexer(source).lex()

    comments = [token for token in tokens if token.kind == TokenKind.COMMENT]
    assert [token_text(source, token) for token in comments] == ["# note"]
    assert _kinds(source) == [
        TokenKind.WORD,
        TokenKind.EQUAL,
        TokenKind.WORD,
        TokenKind.WORD,
        TokenKind.EQUAL,
        TokenKind.WORD,
        TokenKind.EOF,
    ]


def test_lexer_marks_preceding_line_break() -> None:
    tokens = _significant("a = 1\nb = 2")

    assert [token.has_preceding_line_break() for token in tokens[:-1]] == [False, False, False, True, False, False]


def test_lexer_crlf_is_one_newline() -> None:
    source = "a\r\nb"
    tokens = Lexer(source).lex()

    assert [token.kind for token in tokens] == [TokenKind.WORD, TokenKind.NEWLINE, TokenKind.WORD, TokenKind.EOF]
    assert token_text(source, tokens[1]) == "\r\n"


def test_lexer_lone_bang_and_question_are_skipped() -> None:
    for source in ("a ! b", "a ? b"):
        kinds = [token.kind for token in Lexer(source).lex()]
        assert kinds == [
            TokenKind.WORD,
            TokenKind.WHITESPACE,
            TokenKind.SKIPPED,
            TokenKind.WHITESPACE,
            TokenKind.WORD,
            TokenKind.EOF,
        ], source


def test_dump_tokens_renders_one_line_per_token() -> None:
    source = "a=1"
    lines = dump_tokens(Lexer(source).lex(), source)

    assert len(lines) == 4
    assert lines[0].startswith("000 WORD")
    assert "text='a'" in lines[0]
    assert lines[-1].startswith("003 EOF")
