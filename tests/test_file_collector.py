"""Unit tests for the FileCollector class."""

import os

import pytest

from ctxbundle.exclusion_rules import ContextIgnoreRules, load_patterns
from ctxbundle.file_collector import FileCollector, content_header, selection_to_path
from ctxbundle.file_system_tree import PermissionAction


@pytest.fixture
def project(tmp_path):
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "main.py").write_text("print('main')\n")
    (tmp_path / "src" / "b.py").write_text("b = 2\n")
    (tmp_path / "src" / "cache.tmp").write_text("tmp")
    (tmp_path / "src" / "build").mkdir()
    (tmp_path / "src" / "build" / "out.txt").write_text("out")
    (tmp_path / "notes.tmp").write_text("selected anyway\n")
    (tmp_path / "README.md").write_text("# Project\n")
    return tmp_path


@pytest.fixture
def rules(project):
    return ContextIgnoreRules(project, load_patterns("build/\n*.tmp\n"))


def test_selection_to_path():
    assert selection_to_path("file:///srv/project/my%20notes.md") == "/srv/project/my notes.md"
    assert selection_to_path("src/main.py") == "src/main.py"


def test_content_header(tmp_path):
    assert content_header(tmp_path / "docs" / "read me.md", tmp_path) == "docs/read me.md"
    assert content_header(str(tmp_path / "a%20b.txt"), tmp_path) == "a b.txt"


def test_directory_expansion_is_filtered(project, rules):
    blocks = list(FileCollector(project, rules).collect(["src"]))
    assert [b.header for b in blocks] == ["src/b.py", "src/main.py"]
    assert blocks[1].body == "print('main')\n"
    assert blocks[1].path == project / "src" / "main.py"


def test_direct_selection_is_not_filtered(project, rules):
    blocks = list(FileCollector(project, rules).collect(["notes.tmp", "src/build/out.txt"]))
    assert [b.header for b in blocks] == ["notes.tmp", "src/build/out.txt"]
    assert blocks[0].body == "selected anyway\n"


def test_selection_order_is_kept(project, rules):
    headers = [b.header for b in FileCollector(project, rules).collect(["README.md", "src", "notes.tmp"])]
    assert headers == ["README.md", "src/b.py", "src/main.py", "notes.tmp"]


def test_missing_selection_is_skipped_silently(project, rules):
    collector = FileCollector(project, rules)
    blocks = list(collector.collect(["gone.txt", "README.md"]))
    assert [b.header for b in blocks] == ["README.md"]
    assert collector.warnings == []


def test_absolute_and_uri_selections(project):
    uri = (project / "README.md").as_uri()
    collector = FileCollector(project)
    headers = [b.header for b in collector.collect([str(project / "src" / "b.py"), uri])]
    assert headers == ["src/b.py", "README.md"]


def test_root_selection_collects_everything_surviving(project, rules):
    headers = [b.header for b in FileCollector(project, rules).collect(["."])]
    assert headers == ["src/b.py", "src/main.py", "README.md"]


def test_content_is_unmodified(tmp_path):
    (tmp_path / "crlf.txt").write_bytes(b"one\r\ntwo\r\n")
    (tmp_path / "no-newline.txt").write_bytes(b"last line")
    blocks = {b.header: b.body for b in FileCollector(tmp_path).collect(["crlf.txt", "no-newline.txt"])}
    assert blocks == {"crlf.txt": "one\r\ntwo\r\n", "no-newline.txt": "last line"}


def test_undecodable_file_is_skipped_with_warning(tmp_path):
    (tmp_path / "blob.bin").write_bytes(b"\xff\xfe\x00binary")
    (tmp_path / "text.txt").write_text("text")

    collector = FileCollector(tmp_path)
    headers = [b.header for b in collector.collect(["."])]
    assert headers == ["text.txt"]
    assert len(collector.warnings) == 1
    assert collector.warnings[0].path == str(tmp_path / "blob.bin")


def test_undecodable_file_with_replacement(tmp_path):
    (tmp_path / "blob.bin").write_bytes(b"ok\xff")
    blocks = list(FileCollector(tmp_path, errors="replace").collect(["blob.bin"]))
    assert blocks[0].body == "ok\ufffd"


def test_undecodable_file_raises_when_configured(tmp_path):
    (tmp_path / "blob.bin").write_bytes(b"\xff")
    collector = FileCollector(tmp_path, permission_action=PermissionAction.RAISE)
    with pytest.raises(UnicodeDecodeError):
        list(collector.collect(["blob.bin"]))


@pytest.mark.skipif(os.name == "nt" or os.geteuid() == 0, reason="Permission bits are not enforced")
def test_unreadable_file(tmp_path):
    secret = tmp_path / "secret.txt"
    secret.write_text("secret")
    secret.chmod(0)
    try:
        collector = FileCollector(tmp_path)
        assert list(collector.collect(["secret.txt"])) == []
        assert collector.warnings[0].reason == "Permission denied"

        strict = FileCollector(tmp_path, permission_action=PermissionAction.RAISE)
        with pytest.raises(PermissionError):
            list(strict.collect(["secret.txt"]))
    finally:
        secret.chmod(0o644)
