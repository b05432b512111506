"""Tests for the ctxbundle command-line entry point."""

import subprocess
from unittest.mock import patch

import pytest

from ctxbundle.cli.main import format_counts, main
from ctxbundle.cli.signal_handler import signal_handler

TREE = "```text\n.\n+-- src\n|   \\-- main.py\n\\-- keep.txt\n```\n\n"
MAIN_BLOCK = "`src/main.py`:\n```python\nprint('hello')\n```\n\n"
KEEP_BLOCK = "`keep.txt`:\n```\nkeep\n```\n\n"


def clear_signals():
    signal_handler.sigpipe_received.clear()
    signal_handler.sigint_received.clear()


@pytest.fixture(autouse=True)
def no_signal_setup():
    clear_signals()
    with patch("ctxbundle.cli.main.setup_signal_handling"):
        yield
    clear_signals()


@pytest.fixture
def project(tmp_path):
    root = tmp_path / "project"
    root.mkdir()
    (root / ".gitignore").write_text("build/\n*.tmp\n.gitignore\n")
    (root / "build").mkdir()
    (root / "build" / "a.txt").write_text("a\n")
    (root / "src").mkdir()
    (root / "src" / "main.py").write_text("print('hello')\n")
    (root / "keep.txt").write_text("keep\n")
    (root / "x.tmp").write_text("x\n")
    return root


@pytest.fixture
def output(tmp_path):
    return tmp_path / "bundle.md"


def run(argv):
    """Run main and return its exit code (0 when it returns normally)."""
    try:
        main(argv)
    except SystemExit as e:
        return e.code
    return 0


def test_format_counts():
    counts = {"files": 2, "lines": 10, "tokens": 42, "characters": 2048, "bytes": 2048}
    assert format_counts(counts) == "Files: 2\nLines: 10\nTokens: 42\nCharacters: 2048\nSize: 2.05 KB"


def test_whole_root_by_default(project, output):
    assert run(["-r", str(project), "-o", str(output)]) == 0
    assert output.read_text() == TREE + MAIN_BLOCK + KEEP_BLOCK


def test_output_file_inside_root_is_left_out(project):
    output = project / "bundle.md"
    assert run(["-r", str(project), "-o", str(output)]) == 0
    text = output.read_text()
    assert "`bundle.md`" not in text
    assert "\\-- bundle.md" not in text
    assert text == TREE + MAIN_BLOCK + KEEP_BLOCK


def test_output_file_name_is_not_a_pattern(project, monkeypatch):
    (project / "out1.md").write_text("one\n")
    monkeypatch.chdir(project)
    assert run(["-r", str(project), "-T", "-o", "out*.md"]) == 0
    text = (project / "out*.md").read_text()
    assert "`out*.md`" not in text
    assert text == MAIN_BLOCK + KEEP_BLOCK + "`out1.md`:\n```markdown\none\n```\n\n"


def test_selected_paths_without_tree(project, output):
    assert run(["-r", str(project), "-T", "-o", str(output), "keep.txt", "x.tmp"]) == 0
    assert output.read_text() == KEEP_BLOCK + "`x.tmp`:\n```\nx\n```\n\n"


def test_writes_to_stdout(project, capfd):
    assert run(["-r", str(project), "src"]) == 0
    assert capfd.readouterr().out == TREE + MAIN_BLOCK


def test_extra_ignore_patterns(project, output):
    assert run(["-r", str(project), "-i", "/src", "-o", str(output)]) == 0
    assert output.read_text() == "```text\n.\n\\-- keep.txt\n```\n\n" + KEEP_BLOCK


def test_xml_format(project, output):
    assert run(["-r", str(project), "-T", "-f", "xml", "-o", str(output), "keep.txt"]) == 0
    assert output.read_text() == '<file path="keep.txt">\nkeep\n</file>\n\n'


def test_summary_to_stderr(project, output, capsys):
    assert run(["-r", str(project), "-o", str(output), "-s", "stderr"]) == 0
    err = capsys.readouterr().err
    assert "Files: 2" in err
    assert "Tokens" not in err


def test_summary_in_file(project, output):
    assert run(["-r", str(project), "-T", "-o", str(output), "-s", "file", "keep.txt"]) == 0
    assert output.read_text().startswith(KEEP_BLOCK + "\nFiles: 1\n")


def test_summary_file_requires_output(project, capsys):
    assert run(["-r", str(project), "-s", "file"]) == 1
    assert "Error: --summary=file requires -o/--output" in capsys.readouterr().err


def test_invalid_root(tmp_path, capsys):
    assert run(["-r", str(tmp_path / "missing")]) == 1
    assert "is not a valid directory" in capsys.readouterr().err


def test_invalid_format(project):
    assert run(["-r", str(project), "-f", "json"]) == 2


def test_warnings_printed(project, output, capsys):
    (project / "blob.bin").write_bytes(b"\xff\xfe")
    assert run(["-r", str(project), "-o", str(output)]) == 0
    err = capsys.readouterr().err
    assert f"Warning: Skipped '{project / 'blob.bin'}'" in err
    assert KEEP_BLOCK in output.read_text()


def test_warnings_suppressed_with_ignore(project, output, capsys):
    (project / "blob.bin").write_bytes(b"\xff\xfe")
    assert run(["-r", str(project), "-P", "ignore", "-o", str(output)]) == 0
    assert "Warning" not in capsys.readouterr().err


def test_permission_denied_exit_code(project, output, capsys):
    with patch("ctxbundle.cli.main.ContextBundle.stream", side_effect=PermissionError("Access denied to x")):
        assert run(["-r", str(project), "-P", "fail", "-o", str(output)]) == 126
    assert "Error: Access denied to x" in capsys.readouterr().err


def test_tokenizer_not_available(project, capsys):
    with patch("ctxbundle.token_counter.check_tiktoken_available", return_value=False):
        assert run(["-r", str(project), "-t", "gpt-4"]) == 1
    assert "pip install ctxbundle[token_counting]" in capsys.readouterr().err


def test_copy_to_clipboard(project, output):
    with patch("ctxbundle.cli.main.write_clipboard") as mock_write:
        assert run(["-r", str(project), "-c", "-o", str(output)]) == 0
    mock_write.assert_called_once_with(output.read_text())


def test_selection_from_clipboard(project, output):
    with patch("ctxbundle.providers.pyperclip.paste", return_value="keep.txt\n"):
        assert run(["-r", str(project), "-T", "--from-clipboard", "-o", str(output)]) == 0
    assert output.read_text() == KEEP_BLOCK


def test_diff_section(project, output):
    completed = subprocess.CompletedProcess(["git", "diff"], 0, stdout="+added\n", stderr="")
    with patch("ctxbundle.providers.subprocess.run", return_value=completed):
        assert run(["-r", str(project), "-T", "-d", "-o", str(output), "keep.txt"]) == 0
    assert output.read_text() == KEEP_BLOCK + "## Diff\n```diff\n+added\n```\n\n"


def test_diff_failure(project, capsys):
    failure = subprocess.CalledProcessError(128, ["git", "diff"], stderr="fatal: not a git repository\n")
    with patch("ctxbundle.providers.subprocess.run", side_effect=failure):
        assert run(["-r", str(project), "-d", "-o", str(project / "out.md")]) == 1
    assert "Error: 'git diff' exited with status 128" in capsys.readouterr().err


def test_broken_pipe_exit_code(project, output):
    signal_handler.sigpipe_received.set()
    assert run(["-r", str(project), "-o", str(output)]) == 141
    assert output.read_text() == ""


def test_interrupted_exit_code(project, output):
    signal_handler.sigint_received.set()
    with patch("ctxbundle.cli.main.write_clipboard") as mock_write:
        assert run(["-r", str(project), "-c", "-o", str(output)]) == 130
    mock_write.assert_not_called()
