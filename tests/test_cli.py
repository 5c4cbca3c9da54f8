from pathlib import Path

import pytest

from texlogpy.cli import main


def _write_log(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "main.log"
    path.write_text(text, encoding="utf-8")
    return path


def test_cli_text_report_and_exit_code(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    log = _write_log(tmp_path, "(./main.tex\n! Emergency stop.\n)\n")

    exit_code = main([str(log), "--no-filesystem"])

    out = capsys.readouterr().out
    assert exit_code == 1
    assert "./main.tex: error: Emergency stop." in out
    assert "1 error(s), 0 warning(s), 0 bad box(es)" in out


def test_cli_min_severity_filters(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    log = _write_log(tmp_path, "LaTeX Warning: Only a warning on input line 2.\n")

    exit_code = main([str(log), "--no-filesystem", "--min-severity", "error"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "Only a warning" not in out


def test_cli_html_report(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    log = _write_log(tmp_path, "LaTeX Warning: Only a warning on input line 2.\n")

    exit_code = main([str(log), "--no-filesystem", "--format", "html", "--sort-by", "occurrence"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert out.startswith("<html><body>Errors: 0, Warnings: 1, Bad boxes: 0<hr/>")


def test_cli_missing_log(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main([str(tmp_path / "absent.log")])

    assert exit_code == 2
    assert "Failed to read log:" in capsys.readouterr().err


def test_cli_rejects_invalid_wrap_width(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    log = _write_log(tmp_path, "")

    exit_code = main([str(log), "--wrap-width", "0"])

    assert exit_code == 2
    assert "Invalid configuration:" in capsys.readouterr().err


def test_cli_uses_filesystem_to_find_file_names(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    (tmp_path / "my chapter.tex").write_text("", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    log = _write_log(tmp_path, "(./my chapter.tex\nLaTeX Warning: Inside on input line 5.\n)\n")

    main([str(log)])

    assert "./my chapter.tex:5: warning:" in capsys.readouterr().out


def test_cli_removes_aux_files_when_confirmed(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    root = tmp_path / "doc.tex"
    root.write_text("", encoding="utf-8")
    aux = tmp_path / "doc.aux"
    aux.write_text("\\relax\n\\newlabel{x", encoding="utf-8")
    log = _write_log(tmp_path, "! File ended while scanning use of \\@newl@bel.\n")
    monkeypatch.setattr("builtins.input", lambda prompt: "y")

    exit_code = main([str(log), "--no-filesystem", "--root-file", str(root), "--ask-remove-aux"])

    assert exit_code == 1
    assert not aux.exists()
    assert root.exists()
    assert f"Removed {aux}" in capsys.readouterr().out


def test_cli_notes_stale_aux_without_prompt(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    log = _write_log(tmp_path, "! File ended while scanning use of \\@newl@bel.\n")

    main([str(log), "--no-filesystem"])

    assert "corrupt .aux file" in capsys.readouterr().err
