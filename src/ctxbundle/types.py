from dataclasses import dataclass
from os import PathLike
from pathlib import Path
from typing import Union

# Complete path type including strings and any path-like object
PathType = Union[str, PathLike[str]]

# Branch markers used by the tree display
BRANCH_MARKER = "+-- "
LAST_BRANCH_MARKER = "\\-- "
CONTINUATION_INDENT = "|   "
BLANK_INDENT = "    "

# First line of every tree display, standing for the walked directory itself
TREE_ANCHOR = "."


@dataclass(frozen=True)
class TreeLine:
    """One rendered row of the directory tree display.

    Attributes:
        prefix: Indentation inherited from the ancestors of the entry.
        marker: ``"+-- "`` for a non-final sibling, ``"\\-- "`` for the final one.
        name: Name of the file or directory.

    Example:
        >>> str(TreeLine("|   ", LAST_BRANCH_MARKER, "main.py"))
        '|   \\\\-- main.py'
    """

    prefix: str
    marker: str
    name: str

    def __str__(self) -> str:
        return f"{self.prefix}{self.marker}{self.name}"


@dataclass(frozen=True)
class ContentBlock:
    """A labeled unit of output pairing a root-relative path with file contents.

    Attributes:
        header: Path relative to the project root, ``/``-separated and percent-decoded.
        body: The literal text of the file.
        path: Absolute path the content was read from.
    """

    header: str
    body: str
    path: Path


@dataclass(frozen=True)
class SkippedEntry:
    """An entry that could not be listed or read during a walk or collection."""

    path: str
    reason: str

    def __str__(self) -> str:
        return f"Skipped '{self.path}': {self.reason}"
