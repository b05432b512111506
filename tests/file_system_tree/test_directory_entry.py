"""Unit tests for DirectoryEntry nodes and their tree lines."""

from pathlib import Path

from ctxbundle.file_system_tree.directory_entry import DirectoryEntry, FileIdentifier
from ctxbundle.types import TreeLine


def build_entries():
    root = DirectoryEntry(".", Path("/p"), is_dir=True, is_last=True)
    src = DirectoryEntry("src", Path("/p/src"), parent=root, is_dir=True, is_last=False)
    utils = DirectoryEntry("utils", Path("/p/src/utils"), parent=src, is_dir=True, is_last=True)
    helpers = DirectoryEntry("helpers.py", Path("/p/src/utils/helpers.py"), parent=utils, is_last=True)
    readme = DirectoryEntry("README.md", Path("/p/README.md"), parent=root, is_last=True)
    return root, src, utils, helpers, readme


def test_entry_attributes():
    _, src, _, helpers, _ = build_entries()
    assert src.name == "src"
    assert src.fs_path == Path("/p/src")
    assert src.is_dir
    assert not helpers.is_dir
    assert helpers.parent.parent is src


def test_top_level_entries_are_not_indented():
    _, src, _, _, readme = build_entries()
    assert src.tree_line() == TreeLine("", "+-- ", "src")
    assert readme.tree_line() == TreeLine("", "\\-- ", "README.md")


def test_indentation_follows_ancestors():
    _, _, utils, helpers, _ = build_entries()
    assert utils.indentation() == "|   "
    assert helpers.indentation() == "|       "
    assert str(helpers.tree_line()) == "|       \\-- helpers.py"


def test_file_identifier_equality():
    assert FileIdentifier(1, 42) == FileIdentifier(1, 42)
    assert FileIdentifier(1, 42) != FileIdentifier(2, 42)
    assert len({FileIdentifier(1, 42), FileIdentifier(1, 42)}) == 1
