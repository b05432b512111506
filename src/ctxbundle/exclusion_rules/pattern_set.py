"""Loading of ignore rules from a rules file plus a supplemental list."""

import os
from os import PathLike
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union

from pathspec import PathSpec

from ctxbundle.types import PathType

from .base_rules import BaseExclusionRules
from .ignore_pattern import IgnorePattern


def is_rule_line(line: str) -> bool:
    """Tell whether a rules-file line carries a rule (not blank, not a ``#`` comment)."""
    stripped = line.strip()
    return bool(stripped) and not stripped.startswith("#")


def load_patterns(rules_content: Optional[str], supplemental: Sequence[str] = ()) -> List[IgnorePattern]:
    """Build the ordered list of rules from a rules file and a supplemental list.

    Args:
        rules_content: Text of the rules file, or None when there is no rules file.
        supplemental: Rules always appended after the rules-file entries.

    Returns:
        The rules-file patterns followed by the supplemental patterns, with blank
        and comment lines dropped.

    Example:
        >>> [p.raw for p in load_patterns("# build output\\nbuild/\\n\\n*.tmp\\n", ["*.log"])]
        ['build/', '*.tmp', '*.log']
        >>> [p.raw for p in load_patterns(None, [".git"])]
        ['.git']
    """
    lines: List[str] = rules_content.splitlines() if rules_content is not None else []
    lines.extend(supplemental)
    return [IgnorePattern(line.strip()) for line in lines if is_rule_line(line)]


def read_rules_file(path: PathType) -> Optional[str]:
    """Read a rules file, returning None when it does not exist."""
    rules_path = Path(path)
    if not rules_path.is_file():
        return None
    return rules_path.read_text(encoding="utf-8-sig")


def relative_to_root(path: PathType, root: PathType) -> str:
    """Express a path relative to the project root with ``/`` separators.

    Absolute paths inside the root are made relative to it. Any other path is
    taken to be root-relative already; a single leading separator is tolerated
    and removed later by the matcher.

    Example:
        >>> relative_to_root("/srv/project/src/main.py", "/srv/project")
        'src/main.py'
        >>> relative_to_root("src/main.py", "/srv/project")
        'src/main.py'
    """
    path_str = os.fspath(path)
    if os.path.isabs(path_str):
        root_str = os.path.abspath(os.fspath(root))
        abs_path = os.path.abspath(path_str)
        try:
            if os.path.commonpath([root_str, abs_path]) == root_str:
                path_str = os.path.relpath(abs_path, root_str)
        except ValueError:
            # Paths on different drives share no common path
            pass
    if os.sep != "/":
        path_str = path_str.replace(os.sep, "/")
    return path_str


class ContextIgnoreRules(BaseExclusionRules):
    """The union of a project's ignore rules.

    A path is excluded when any rule matches it; rule order has no effect. Paths
    handed to :meth:`exclude` may be absolute (inside ``root``) or relative to
    ``root``.

    Attributes:
        root (Path): Absolute path of the project root rules are relative to.
        spec (PathSpec): Compiled pattern matcher from the pathspec library.

    Example:
        >>> rules = ContextIgnoreRules("/srv/project", load_patterns("build/\\n", ["*.log"]))
        >>> rules.exclude("/srv/project/build/a.txt")
        True
        >>> rules.exclude("logs/app.log")
        True
        >>> rules.exclude("keep.txt")
        False
    """

    def __init__(self, root: PathType, patterns: Iterable[IgnorePattern] = ()) -> None:
        self.root = Path(os.path.abspath(os.fspath(root)))
        self._patterns: List[IgnorePattern] = list(patterns)
        self.spec = PathSpec(self._patterns)

    @classmethod
    def from_rules_file(
        cls, root: PathType, rules_file: Optional[PathType], supplemental: Sequence[str] = ()
    ) -> "ContextIgnoreRules":
        """Build the rules of a project from its rules file and a supplemental list.

        Args:
            root: Project root.
            rules_file: Rules file, relative to ``root`` unless absolute. A missing
                file (or None) contributes no rules.
            supplemental: Rules appended after the rules-file entries.

        Returns:
            A new ContextIgnoreRules instance.
        """
        content = read_rules_file(Path(root) / rules_file) if rules_file is not None else None
        return cls(root, load_patterns(content, supplemental))

    @property
    def patterns(self) -> List[IgnorePattern]:
        """A copy of the loaded patterns, in load order."""
        return list(self._patterns)

    def exclude(self, path: PathType) -> bool:
        """Check if a path is matched by any loaded rule.

        Args:
            path: Absolute path inside the root, or a root-relative path.

        Returns:
            bool: True if any rule matches the path or one of its ancestors.
        """
        return bool(self.spec.match_file(relative_to_root(path, self.root)))

    def has_rules(self) -> bool:
        return any(pattern.include is not None for pattern in self._patterns)

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]]) -> None:
        """Append the rules of one or more rules files.

        Unlike the project's own rules file, files named explicitly here must exist.

        Raises:
            FileNotFoundError: If any rules file does not exist.
        """
        if isinstance(rules_files, (str, PathLike)):
            rules_files = [rules_files]

        for rules_file in rules_files:
            content = read_rules_file(rules_file)
            if content is None:
                raise FileNotFoundError(f"Rules file not found: {rules_file}")
            self._extend(load_patterns(content))

    def add_rule(self, rule: str) -> None:
        """Append a single rule; blank and comment rules are ignored."""
        self._extend(load_patterns(None, [rule]))

    def _extend(self, patterns: List[IgnorePattern]) -> None:
        self._patterns.extend(patterns)
        self.spec = PathSpec(self._patterns)
