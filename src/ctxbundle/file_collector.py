"""Collection of file contents for selected files and directories.

Selected directories are expanded into the files beneath them, honoring the
exclusion rules exactly as the tree display does. Selected files are read as
they are: an explicit selection is never filtered by the exclusion rules.
"""

import os
from pathlib import Path
from typing import Iterable, Iterator, List, Optional
from urllib.parse import unquote, urlparse

from .exclusion_rules.base_rules import BaseExclusionRules
from .file_system_tree.permission_action import PermissionAction, handle_access_error
from .file_system_tree.tree_walker import TreeWalker
from .types import ContentBlock, PathType, SkippedEntry

FILE_URI_SCHEME = "file://"


def selection_to_path(selection: PathType) -> str:
    """Turn a selected entry into a filesystem path.

    Entries copied from a file manager arrive as ``file://`` URIs; their path
    component is percent-decoded. Anything else is returned unchanged.

    Example:
        >>> selection_to_path("file:///srv/project/my%20notes.md")
        '/srv/project/my notes.md'
        >>> selection_to_path("src/main.py")
        'src/main.py'
    """
    text = os.fspath(selection)
    if text.startswith(FILE_URI_SCHEME):
        return unquote(urlparse(text).path)
    return text


def content_header(path: PathType, root: PathType) -> str:
    """Label a file by its path relative to the project root.

    The label uses ``/`` separators and has percent-escapes decoded.

    Example:
        >>> content_header("/srv/project/docs/read%20me.md", "/srv/project")
        'docs/read me.md'
    """
    relative = os.path.relpath(os.fspath(path), os.fspath(root))
    if os.sep != "/":
        relative = relative.replace(os.sep, "/")
    return unquote(relative)


class FileCollector:
    """Produces one ContentBlock per file for an ordered selection of entries.

    For each selected entry, in the order given:

    - a directory is expanded into every file beneath it, in tree order, with
      excluded files and subtrees skipped;
    - a file is read directly, even if the exclusion rules match it;
    - an entry that no longer exists is skipped silently.

    Files are read with the configured encoding and with newline translation
    disabled, so block bodies hold the file text exactly as stored. Files that
    cannot be read or decoded are handled according to ``permission_action``.

    Attributes:
        root_path (Path): The project root; headers and relative selections are
            relative to it.
        encoding (str): The encoding to use when reading files.
        errors (str): How to handle encoding errors when reading files.
        permission_action (PermissionAction): How to handle unreadable entries.

    Example:
        >>> collector = FileCollector("project")  # doctest: +SKIP
        >>> for block in collector.collect(["src", "README.md"]):  # doctest: +SKIP
        ...     print(block.header)
        src/main.py
        README.md
    """

    def __init__(
        self,
        root_path: PathType,
        exclusion_rules: Optional[BaseExclusionRules] = None,
        encoding: str = "utf-8",
        errors: str = "strict",
        permission_action: PermissionAction = PermissionAction.WARN,
        follow_symlinks: bool = False,
        warnings: Optional[List[SkippedEntry]] = None,
    ) -> None:
        self._walker = TreeWalker(
            root_path,
            exclusion_rules,
            permission_action=permission_action,
            follow_symlinks=follow_symlinks,
            warnings=warnings,
        )
        self.root_path = self._walker.root_path
        self.permission_action = self._walker.permission_action
        self.encoding = encoding
        self.errors = errors

    @property
    def warnings(self) -> List[SkippedEntry]:
        return self._walker.warnings

    def collect(self, selected_paths: Iterable[PathType]) -> Iterator[ContentBlock]:
        """Generate content blocks for the selected entries.

        Args:
            selected_paths: Files and directories, absolute, relative to the root,
                or as ``file://`` URIs.

        Yields:
            ContentBlock: One block per collected file.

        Raises:
            PermissionError: If access is denied and permission_action is RAISE.
            OSError: If a file cannot be read and permission_action is RAISE.
            UnicodeDecodeError: If a file cannot be decoded, errors is "strict" and
                permission_action is RAISE.
            LookupError: If the configured encoding is unknown.
        """
        for selection in selected_paths:
            path = self._resolve(selection)
            if path.is_dir():
                for file_path in self._walker.iterate_files(path):
                    block = self._read_block(file_path)
                    if block is not None:
                        yield block
            elif path.exists():
                block = self._read_block(path)
                if block is not None:
                    yield block

    def _resolve(self, selection: PathType) -> Path:
        path = Path(selection_to_path(selection))
        if not path.is_absolute():
            path = self.root_path / path
        return path

    def _read_block(self, path: Path) -> Optional[ContentBlock]:
        try:
            with open(path, "r", encoding=self.encoding, errors=self.errors, newline="") as file:
                body = file.read()
        except (OSError, UnicodeDecodeError) as e:
            handle_access_error(self.permission_action, self.warnings, path, e)
            return None
        return ContentBlock(content_header(path, self.root_path), body, path)
