"""Compilation of single ignore rules into boundary-anchored path predicates.

The rule syntax is a deliberately small subset of the familiar ignore-file
dialects:

- ``*`` matches any run of characters, including ``/``;
- ``?`` matches exactly one character;
- a leading ``/`` anchors the rule at the project root;
- one leading and one trailing ``/`` are otherwise insignificant;
- everything else is matched literally.

A match must start at a path segment boundary (the beginning of the path or
right after a ``/``; only the beginning for rooted rules) and must end at one
(the end of the path or right before a ``/``). Because a match may end before a
``/``, a rule that names a directory also covers everything beneath it.
"""

import re
from typing import Callable, Optional, Tuple

from pathspec.pattern import RegexPattern
from pathspec.util import normalize_file

SEPARATOR = "/"

_ROOTED_ANCHOR = "^"
_UNROOTED_ANCHOR = "^(?:.*/)?"
_SEGMENT_END = "(?:/|$)"


def split_pattern(text: str) -> Tuple[str, bool]:
    """Split the raw text of a rule into its core and its rooted flag.

    Args:
        text: Raw rule text as it appears in a rules file.

    Returns:
        A ``(core, rooted)`` pair. ``core`` has surrounding whitespace and at most
        one leading and one trailing separator removed.

    Example:
        >>> split_pattern("/build/")
        ('build', True)
        >>> split_pattern("  *.log ")
        ('*.log', False)
    """
    text = text.strip()
    rooted = text.startswith(SEPARATOR)
    core = text[1:] if rooted else text
    if core.endswith(SEPARATOR):
        core = core[:-1]
    return core, rooted


def translate_core(core: str) -> str:
    """Translate the core of a rule into an unanchored regular expression.

    Example:
        >>> translate_core("*.py?")
        '.*\\\\.py.'
    """
    escaped = re.escape(core)
    return escaped.replace(r"\*", ".*").replace(r"\?", ".")


class IgnorePattern(RegexPattern):
    """A single compiled ignore rule.

    The compiled expression lives in ``regex`` and is evaluated with
    ``regex.match`` against a normalized, root-relative path, so instances can be
    placed in a :class:`pathspec.PathSpec` alongside any other pathspec pattern.

    Rules whose core is empty (for example a lone ``/``) compile to a null
    pattern that never matches.

    Attributes:
        raw (str): The raw rule text.
        core (str): Rule text without surrounding whitespace and boundary separators.
        rooted (bool): Whether the rule is anchored at the project root.

    Example:
        >>> rule = IgnorePattern("*.log")
        >>> rule.matches("logs/app.log")
        True
        >>> rule.matches("applog.txt")
        False
    """

    def __init__(self, pattern: str) -> None:
        super().__init__(pattern)
        self.raw = pattern
        self._core, self._rooted = split_pattern(pattern)

    @property
    def core(self) -> str:
        return self._core

    @property
    def rooted(self) -> bool:
        return self._rooted

    @classmethod
    def pattern_to_regex(cls, pattern: str) -> Tuple[Optional[str], Optional[bool]]:
        """Convert the raw rule text into a regular expression.

        Args:
            pattern: Raw rule text.

        Returns:
            A ``(regex, include)`` pair as expected by pathspec. ``include`` is True
            for every rule (a match means excluded); both are None for a null rule.

        Example:
            >>> IgnorePattern.pattern_to_regex("/foo")
            ('^foo(?:/|$)', True)
            >>> IgnorePattern.pattern_to_regex("log")
            ('^(?:.*/)?log(?:/|$)', True)
            >>> IgnorePattern.pattern_to_regex("/")
            (None, None)
        """
        core, rooted = split_pattern(pattern)
        if not core:
            return None, None

        anchor = _ROOTED_ANCHOR if rooted else _UNROOTED_ANCHOR
        return f"{anchor}{translate_core(core)}{_SEGMENT_END}", True

    def matches(self, path: str) -> bool:
        """Check whether a root-relative path is excluded by this rule.

        Platform separators are converted to ``/`` and a single leading ``/`` is
        stripped before matching.

        Args:
            path: Path relative to the project root.

        Returns:
            True if the path (or one of its ancestor directories) matches the rule.
        """
        if self.include is None:
            return False
        return self.regex.match(normalize_file(path)) is not None

    def __repr__(self) -> str:
        return f"IgnorePattern({self.raw!r})"


def compile_pattern(text: str) -> Callable[[str], bool]:
    """Compile one rule into a predicate over root-relative paths.

    Args:
        text: Raw rule text.

    Returns:
        A callable returning True when the given path is excluded.

    Example:
        >>> excluded = compile_pattern("/foo")
        >>> excluded("foo/bar"), excluded("src/foo")
        (True, False)
    """
    return IgnorePattern(text).matches
