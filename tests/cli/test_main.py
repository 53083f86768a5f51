# Copyright 2026 Phasec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the phasec CLI entry point."""

import json
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from phasec.cli.main import main

# ###############
# Helpers
# ###############

HELLO = 'program P { function main() { print("hi"); return 0; } }\n'
REDECLARED = "program P {\n  function main() {\n    var x: int = 5;\n    var x: int = 6;\n  }\n}\n"


def _run(monkeypatch: pytest.MonkeyPatch, *argv: str) -> int:
    """Invoke main() with *argv* and return its exit code."""
    monkeypatch.setattr(sys, "argv", ["phasec", *argv])
    with pytest.raises(SystemExit) as exc_info:
        main()
    return exc_info.value.code


def _source(tmp_path: Path, text: str = HELLO, name: str = "hello.pc") -> Path:
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


# ###############
# Public Interface
# ###############


def test_main_no_args_prints_help_and_exits(monkeypatch: pytest.MonkeyPatch) -> None:
    """main() with no subcommand prints help and exits with code 0."""
    assert _run(monkeypatch) == 0


# -------- init tests --------


def test_init_writes_default_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """init creates .phasec.yaml in the specified directory."""
    assert _run(monkeypatch, "init", str(tmp_path)) == 0
    content = (tmp_path / ".phasec.yaml").read_text()
    assert "scan-mode: flat" in content
    assert "optimize: true" in content


def test_init_default_directory_uses_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    assert _run(monkeypatch, "init") == 0
    assert (tmp_path / ".phasec.yaml").exists()


def test_init_fails_if_config_already_exists(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / ".phasec.yaml").write_text("optimize: false\n")
    assert _run(monkeypatch, "init", str(tmp_path)) == 1
    assert (tmp_path / ".phasec.yaml").read_text() == "optimize: false\n"


def test_init_fails_if_directory_does_not_exist(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    assert _run(monkeypatch, "init", str(tmp_path / "nonexistent")) == 1


# -------- compile tests --------


def test_compile_prints_assembly_by_default(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    assert _run(monkeypatch, "compile", str(_source(tmp_path))) == 0
    out = capsys.readouterr().out
    assert out.startswith("# Data section\n")
    assert 'str_0: .asciiz "hi"' in out
    assert ".globl main" in out


@pytest.mark.parametrize(
    ("phase", "expected_line"),
    [
        ("tokens", "1:0\tKEYWORD\tprogram"),
        ("tree", "  Function: main"),
        ("symbols", "main@global\tfunction\tline 1"),
        ("ir", "EVAL(0) -> t0"),
        ("optimized", 'PRINT_STR("hi")'),
    ],
)
def test_compile_phase_output(
    phase: str,
    expected_line: str,
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    assert _run(monkeypatch, "compile", str(_source(tmp_path)), "--phase", phase) == 0
    assert expected_line in capsys.readouterr().out.splitlines()


def test_compile_all_phases_has_headings(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    assert _run(monkeypatch, "compile", str(_source(tmp_path)), "--phase", "all") == 0
    out = capsys.readouterr().out
    for phase in ("tokens", "tree", "symbols", "ir", "optimized", "asm"):
        assert f"== {phase} ==" in out


def test_compile_json_writes_artifact(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    output = tmp_path / "hello.json"
    assert _run(monkeypatch, "compile", str(_source(tmp_path)), "--json", "-o", str(output)) == 0
    obj = json.loads(output.read_text())
    assert obj["tree"]["value"] == "P"
    assert "sections" in obj


def test_compile_warns_about_semantic_errors(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Semantic errors are warnings for compile; code is still produced."""
    assert _run(monkeypatch, "compile", str(_source(tmp_path, REDECLARED))) == 0
    captured = capsys.readouterr()
    assert "Variable 'x' already declared in scope 'global.main'" in captured.err
    assert "main:" in captured.out


def test_compile_reports_diagnostics(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    source = _source(tmp_path, "program P { stray function f() { } }")
    assert _run(monkeypatch, "compile", str(source), "--diagnostics") == 0
    assert "Note [parser] 1:12:" in capsys.readouterr().err


def test_compile_missing_source(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    assert _run(monkeypatch, "compile", str(tmp_path / "missing.pc")) == 1
    assert "Error" in capsys.readouterr().err


def test_compile_uses_config_beside_source(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    (tmp_path / ".phasec.yaml").write_text("scan-mode: nested\n")
    source = _source(tmp_path, "program P { function f() { if (a) { x = 1; } } }")
    assert _run(monkeypatch, "compile", str(source), "--phase", "ir") == 0
    assert "ASSIGN(1) -> x" in capsys.readouterr().out


def test_compile_invalid_config(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    config = tmp_path / "custom.yaml"
    config.write_text("scan-mode: sideways\n")
    assert _run(monkeypatch, "compile", str(_source(tmp_path)), "--config", str(config)) == 1
    assert "scan-mode" in capsys.readouterr().err


# -------- check tests --------


def test_check_clean_source(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    assert _run(monkeypatch, "check", str(_source(tmp_path))) == 0
    assert "No issues found (1 symbol(s))." in capsys.readouterr().out


def test_check_reports_redeclaration(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    assert _run(monkeypatch, "check", str(_source(tmp_path, REDECLARED))) == 1
    assert "Error: Variable 'x' already declared" in capsys.readouterr().err


# -------- build tests --------


def test_build_writes_outputs_next_to_source(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    source = _source(tmp_path)
    assert _run(monkeypatch, "build", str(source)) == 0
    assert (tmp_path / "build" / "hello.s").exists()
    assert (tmp_path / "build" / "hello.phasec.json").exists()
    assert "hello.pc: compiled" in capsys.readouterr().out


def test_build_output_directory_is_relative_to_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_dir = tmp_path / "project"
    config_dir.mkdir()
    config = config_dir / ".phasec.yaml"
    config.write_text("output-directory: asm\n")
    source = _source(tmp_path)
    assert _run(monkeypatch, "build", str(source), "--config", str(config)) == 0
    assert (config_dir / "asm" / "hello.s").exists()


def test_build_missing_source(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    assert _run(monkeypatch, "build", str(tmp_path / "missing.pc")) == 1


def test_verbose_flag_is_accepted(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    assert _run(monkeypatch, "-v", "check", str(_source(tmp_path))) == 0


def test_build_recovers_from_corrupt_artifact(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    source = _source(tmp_path)
    assert _run(monkeypatch, "build", str(source)) == 0
    (tmp_path / "build" / "hello.phasec.json").write_text("{truncated")
    capsys.readouterr()

    assert _run(monkeypatch, "build", str(source)) == 0
    assert "hello.pc: compiled" in capsys.readouterr().out


def test_build_rebuilds_after_config_edit(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    source = _source(tmp_path)
    assert _run(monkeypatch, "build", str(source)) == 0
    (tmp_path / ".phasec.yaml").write_text("optimize: false\n")
    capsys.readouterr()

    assert _run(monkeypatch, "build", str(source)) == 0
    assert "hello.pc: compiled" in capsys.readouterr().out


# -------- heading colour tests --------


def _fake_chalk() -> MagicMock:
    fake = MagicMock()
    fake.blue.side_effect = lambda text: f"\x1b[34m{text}\x1b[39m"
    return fake


def test_all_phases_written_to_file_are_plain(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Headings in an output file carry no terminal escape codes."""
    monkeypatch.setattr("phasec.cli.main.chalk", _fake_chalk())
    output = tmp_path / "phases.txt"
    assert _run(monkeypatch, "compile", str(_source(tmp_path)), "--phase", "all", "-o", str(output)) == 0
    content = output.read_text()
    assert "\x1b" not in content
    assert "== tokens ==" in content.splitlines()


def test_all_phases_on_stdout_are_coloured(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.setattr("phasec.cli.main.chalk", _fake_chalk())
    assert _run(monkeypatch, "compile", str(_source(tmp_path)), "--phase", "all") == 0
    assert "\x1b[34m== asm ==\x1b[39m" in capsys.readouterr().out
