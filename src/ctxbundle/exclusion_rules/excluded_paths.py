"""Exclusion of specific files by exact path, on top of another rule set."""

import os
from typing import FrozenSet, Iterable, Optional

from pathspec.util import normalize_file

from ctxbundle.types import PathType

from .base_rules import BaseExclusionRules
from .pattern_set import relative_to_root


class ExcludedPathsRules(BaseExclusionRules):
    """Excludes a fixed set of paths in addition to what the wrapped rules exclude.

    Paths are compared literally, so names containing ``*`` or ``?`` exclude only
    themselves. Paths outside the root are dropped since the walker never offers
    them.

    Example:
        >>> rules = ExcludedPathsRules("/srv/project", None, ["/srv/project/out*.md", "/tmp/x.md"])
        >>> rules.exclude("out*.md"), rules.exclude("out1.md")
        (True, False)
    """

    def __init__(
        self, root: PathType, rules: Optional[BaseExclusionRules], paths: Iterable[PathType]
    ) -> None:
        self.root = os.path.abspath(os.fspath(root))
        self.rules = rules
        self._paths: FrozenSet[str] = frozenset(
            normalize_file(relative_to_root(os.path.abspath(os.fspath(path)), self.root))
            for path in paths
            if _is_inside(os.path.abspath(os.fspath(path)), self.root)
        )

    def exclude(self, path: PathType) -> bool:
        if self.rules is not None and self.rules.exclude(path):
            return True
        return normalize_file(relative_to_root(path, self.root)) in self._paths

    def has_rules(self) -> bool:
        return bool(self._paths) or (self.rules is not None and self.rules.has_rules())


def _is_inside(path: str, root: str) -> bool:
    try:
        return path != root and os.path.commonpath([root, path]) == root
    except ValueError:
        return False
