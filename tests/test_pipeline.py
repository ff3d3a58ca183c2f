from pathlib import Path

from jominilint.block.token import FileKind
from jominilint.config import LintConfig
from jominilint.diagnostics import ErrorKey
from jominilint.pipeline import run_lint, run_lint_texts

DECISION_PATH = "common/decisions/my_decisions.txt"


def _write(root: Path, path: str, text: str) -> None:
    fullpath = root / path
    fullpath.parent.mkdir(parents=True, exist_ok=True)
    fullpath.write_text(text, encoding="utf-8")


def test_run_lint_texts_reports_errors() -> None:
    result = run_lint_texts({DECISION_PATH: "my_decision = { is_shown = { is_coastal = yes } }"})

    assert [d.code for d in result.diagnostics] == ["FIELD_MISSING", "SCOPE_MISMATCH"]
    assert result.has_errors is True
    assert result.data.config == LintConfig()


def test_run_lint_texts_filters_by_config() -> None:
    texts = {DECISION_PATH: "my_decision = { is_shown = { is_coastal = yes } }"}

    result = run_lint_texts(texts, config=LintConfig(min_severity="error"))
    assert [d.code for d in result.diagnostics] == ["FIELD_MISSING"]

    result = run_lint_texts(texts, config=LintConfig(ignore=frozenset({ErrorKey.FIELD_MISSING})))
    assert [d.code for d in result.diagnostics] == ["SCOPE_MISMATCH"]
    assert result.has_errors is False


def test_run_lint_texts_hides_vanilla_problems_by_default() -> None:
    vanilla = {"common/traits/00_traits.txt": "brave = { category = silly }"}

    result = run_lint_texts({}, vanilla_texts_by_path=vanilla)
    assert result.diagnostics == []
    assert len(result.data.sink) == 1

    result = run_lint_texts({}, vanilla_texts_by_path=vanilla, config=LintConfig(report_vanilla=True))
    assert [d.code for d in result.diagnostics] == ["FIELD_EXPECTED_CHOICE"]
    assert result.diagnostics[0].loc.kind is FileKind.VANILLA


def test_run_lint_texts_sorts_by_location() -> None:
    texts = {
        "common/traits/b.txt": "brave = { swagger = 1 }",
        "common/decisions/a.txt": "my_decision = { }",
    }

    result = run_lint_texts(texts)

    assert [d.loc.path for d in result.diagnostics] == ["common/decisions/a.txt", "common/traits/b.txt"]


def test_run_lint_on_disk(tmp_path: Path) -> None:
    game = tmp_path / "game"
    mod = tmp_path / "mod"
    _write(game, "gfx/interface/illustrations/decisions/decision_misc.dds", "")
    _write(game, "common/traits/00_traits.txt", "brave = { category = personality }\n")
    _write(
        mod,
        DECISION_PATH,
        'my_decision = {\n    picture = "gfx/interface/illustrations/decisions/decision_misc.dds"\n'
        "    is_shown = { has_trait = brave }\n"
        "}\n"
        "other_decision = {\n"
        '    picture = "gfx/missing.dds"\n'
        "}\n",
    )

    result = run_lint(mod_root=mod, vanilla_root=game)

    assert [d.code for d in result.diagnostics] == ["FILE_MISSING"]
    assert result.diagnostics[0].message == "file `gfx/missing.dds` does not exist"
    assert result.data.fileset.exists(DECISION_PATH)


def test_mod_file_replaces_vanilla_file(tmp_path: Path) -> None:
    game = tmp_path / "game"
    mod = tmp_path / "mod"
    _write(game, "common/traits/00_traits.txt", "brave = { category = silly }\n")
    _write(mod, "common/traits/00_traits.txt", "brave = { category = personality }\n")

    result = run_lint(mod_root=mod, vanilla_root=game, config=LintConfig(report_vanilla=True))

    assert result.diagnostics == []
    assert result.data.sink.codes() == []


def test_run_lint_reads_mod_config(tmp_path: Path) -> None:
    _write(tmp_path, "jominilint.conf", "ignore = { field-missing }\n")
    _write(tmp_path, DECISION_PATH, "my_decision = { }\n")

    result = run_lint(mod_root=tmp_path)

    assert result.diagnostics == []
    assert result.data.config.ignore == frozenset({ErrorKey.FIELD_MISSING})


def test_run_lint_reports_missing_config_path(tmp_path: Path) -> None:
    result = run_lint(mod_root=tmp_path, config_path=tmp_path / "nope.conf")

    assert [d.code for d in result.diagnostics] == ["READ_ERROR"]
    assert result.data.config == LintConfig()


def test_run_lint_reports_unreadable_script(tmp_path: Path) -> None:
    fullpath = tmp_path / "common" / "traits" / "bad.txt"
    fullpath.parent.mkdir(parents=True)
    fullpath.write_bytes(b"brave = { good = \xff }\n")

    result = run_lint(mod_root=tmp_path)

    assert [d.code for d in result.diagnostics] == ["READ_ERROR"]
    assert result.diagnostics[0].loc.path == "common/traits/bad.txt"
