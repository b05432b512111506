"""Node representation for entries discovered while walking a directory."""

from pathlib import Path
from typing import Any, NamedTuple, Optional

from anytree import Node

from ctxbundle.types import BLANK_INDENT, BRANCH_MARKER, CONTINUATION_INDENT, LAST_BRANCH_MARKER, TreeLine


class FileIdentifier(NamedTuple):
    """Device and inode pair uniquely identifying a directory, used for symlink loop detection."""

    device_id: int
    inode_number: int


class DirectoryEntry(Node):  # type: ignore
    """A file or directory met during a walk.

    Extends anytree.Node so every entry knows its ancestors; the indentation of
    an entry's tree line is derived from whether each ancestor was the last of
    its siblings.

    Attributes:
        name (str): The name of the file or directory (just the basename).
        fs_path (Path): Absolute path of the entry (anytree reserves ``path``).
        is_dir (bool): True if the walk descends into this entry.
        is_last (bool): True if this is the last surviving sibling.
        parent (Optional[DirectoryEntry]): The parent entry (inherited from anytree.Node).

    Example:
        >>> root = DirectoryEntry(".", Path("/p"), is_dir=True)
        >>> src = DirectoryEntry("src", Path("/p/src"), parent=root, is_dir=True, is_last=False)
        >>> main = DirectoryEntry("main.py", Path("/p/src/main.py"), parent=src, is_last=True)
        >>> str(main.tree_line())
        '|   \\\\-- main.py'
    """

    def __init__(
        self,
        name: str,
        fs_path: Path,
        parent: Optional["DirectoryEntry"] = None,
        is_dir: bool = False,
        is_last: bool = False,
        **kwargs: Any,
    ) -> None:
        super().__init__(name, parent, **kwargs)
        self.fs_path = fs_path
        self.is_dir = is_dir
        self.is_last = is_last

    def indentation(self) -> str:
        """Indentation inherited from ancestors below the walk root."""
        # ancestors[0] is the walk root, whose children are not indented
        return "".join(BLANK_INDENT if a.is_last else CONTINUATION_INDENT for a in self.ancestors[1:])

    def tree_line(self) -> TreeLine:
        marker = LAST_BRANCH_MARKER if self.is_last else BRANCH_MARKER
        return TreeLine(self.indentation(), marker, self.name)
