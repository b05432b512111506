"""Unit tests for excluding individual files by exact path."""

from ctxbundle.exclusion_rules import ContextIgnoreRules, ExcludedPathsRules, load_patterns
from ctxbundle.file_system_tree import TreeWalker


def test_excludes_exact_path(tmp_path):
    rules = ExcludedPathsRules(tmp_path, None, [tmp_path / "out" / "bundle.md"])
    assert rules.exclude("out/bundle.md")
    assert rules.exclude(tmp_path / "out" / "bundle.md")
    assert not rules.exclude("bundle.md")
    assert not rules.exclude("out")
    assert rules.has_rules()


def test_wildcard_characters_are_literal(tmp_path):
    rules = ExcludedPathsRules(tmp_path, None, [tmp_path / "out*.md", tmp_path / "a?.txt"])
    assert rules.exclude("out*.md")
    assert rules.exclude("a?.txt")
    assert not rules.exclude("out1.md")
    assert not rules.exclude("ab.txt")


def test_paths_outside_root_are_dropped(tmp_path):
    root = tmp_path / "project"
    root.mkdir()
    rules = ExcludedPathsRules(root, None, [tmp_path / "bundle.md", root])
    assert not rules.has_rules()
    assert not rules.exclude("bundle.md")


def test_wrapped_rules_still_apply(tmp_path):
    inner = ContextIgnoreRules(tmp_path, load_patterns(None, ["*.tmp"]))
    rules = ExcludedPathsRules(tmp_path, inner, [tmp_path / "bundle.md"])
    assert rules.exclude("x.tmp")
    assert rules.exclude("bundle.md")
    assert not rules.exclude("keep.txt")

    empty = ExcludedPathsRules(tmp_path, ContextIgnoreRules(tmp_path), [])
    assert not empty.has_rules()


def test_tree_leaves_out_excluded_file(tmp_path):
    (tmp_path / "out*.md").touch()
    (tmp_path / "out1.md").touch()
    rules = ExcludedPathsRules(tmp_path, None, [tmp_path / "out*.md"])
    assert TreeWalker(tmp_path, rules).get_tree_representation() == ".\n\\-- out1.md"
