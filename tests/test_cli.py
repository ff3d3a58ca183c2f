from pathlib import Path

import pytest

from jominilint.cli import build_parser, main


def _mod(tmp_path: Path, decisions: str) -> Path:
    path = tmp_path / "mod" / "common" / "decisions" / "d.txt"
    path.parent.mkdir(parents=True)
    path.write_text(decisions, encoding="utf-8")
    return tmp_path / "mod"


def test_cli_rejects_missing_directory(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main([str(tmp_path / "nowhere"), "--no-progress"])

    assert code == 2
    assert "is not a directory" in capsys.readouterr().err


def test_cli_clean_mod(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    mod = _mod(tmp_path, 'my_decision = { picture = "gfx/d.dds" }\n')
    (mod / "gfx").mkdir()
    (mod / "gfx" / "d.dds").write_bytes(b"")

    code = main([str(mod), "--no-progress"])

    assert code == 0
    assert capsys.readouterr().out.strip().endswith("0 errors, 0 warnings, 0 advice")


def test_cli_reports_errors(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    mod = _mod(tmp_path, "my_decision = { is_shown = { is_coastal = yes } }\n")

    code = main([str(mod), "--no-progress"])

    out = capsys.readouterr().out
    assert code == 1
    assert "error(field-missing): required field `picture` missing" in out
    assert "--> [MOD] common/decisions/d.txt:1:" in out
    assert out.strip().endswith("1 errors, 1 warnings, 0 advice")


def test_cli_min_severity(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    mod = _mod(tmp_path, "my_decision = { is_shown = { is_coastal = yes } }\n")

    main([str(mod), "--no-progress", "--min-severity", "error"])

    assert capsys.readouterr().out.strip().endswith("1 errors, 0 warnings, 0 advice")


def test_cli_permissive_flag(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    mod = _mod(tmp_path, 'my_decision = { picture = "gfx/d.dds" }\n}\n')
    (mod / "gfx").mkdir()
    (mod / "gfx" / "d.dds").write_bytes(b"")

    assert main([str(mod), "--no-progress"]) == 1
    capsys.readouterr()
    assert main([str(mod), "--no-progress", "--permissive"]) == 0


def test_cli_parser_defaults() -> None:
    args = build_parser().parse_args(["mod"])

    assert args.mod_root == Path("mod")
    assert args.game_root is None
    assert args.min_severity is None
    assert args.show_vanilla is None
    assert args.permissive is None
