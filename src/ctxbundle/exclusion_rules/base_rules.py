from abc import ABC, abstractmethod

from ctxbundle.types import PathType


class BaseExclusionRules(ABC):
    """
    Interface the tree walker and the file collector consult to prune entries.

    Implementations receive paths relative to the project root, with ``/``
    separators; an absolute path inside the root is accepted too. A directory
    that is excluded is never listed, so its descendants are never offered.

    Example:
        >>> from ctxbundle.exclusion_rules.pattern_set import ContextIgnoreRules, load_patterns
        >>> rules = ContextIgnoreRules(".", load_patterns(None, ["*.pyc"]))
        >>> rules.exclude('pkg/test.pyc'), rules.exclude('pkg/test.py')
        (True, False)
    """

    @abstractmethod
    def exclude(self, path: PathType) -> bool:
        """
        Tell whether an entry is left out of the tree display and directory expansion.

        Args:
            path: Root-relative path of the file or directory.

        Returns:
            bool: True if the entry is excluded.
        """
        pass

    def has_rules(self) -> bool:
        """Report whether any rule is configured. Rule types without a notion of emptiness return True."""
        return True
