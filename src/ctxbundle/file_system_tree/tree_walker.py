"""Filtered, ordered traversal of a project directory.

This module provides the TreeWalker class, which lists a directory hierarchy
while pruning entries matched by exclusion rules, and renders it as tree lines
or as a flat sequence of files.
"""

import os
from pathlib import Path
from typing import Iterator, List, Optional, Set

from ctxbundle.exclusion_rules.base_rules import BaseExclusionRules
from ctxbundle.exclusion_rules.pattern_set import relative_to_root
from ctxbundle.file_system_tree.directory_entry import DirectoryEntry, FileIdentifier
from ctxbundle.file_system_tree.permission_action import PermissionAction, handle_access_error
from ctxbundle.types import TREE_ANCHOR, PathType, SkippedEntry, TreeLine


class TreeWalker:
    """Walks a directory hierarchy, skipping excluded entries and their subtrees.

    Children of every directory are visited directories first, then files, each
    group ordered case-insensitively by name. An excluded directory is never
    listed, so nothing beneath it is visited.

    Every walk is lazy: entries are listed as the returned iterator advances,
    and an iterator cannot be restarted.

    Symbolic Link Behavior:
        By default a symlink to a directory is shown as a leaf and not descended.
        With follow_symlinks the target is descended, and a directory already on
        the current branch is shown but not entered again.

    Permission Handling:
        Entries that cannot be listed are skipped and the walk continues. Whether
        a SkippedEntry is recorded in ``warnings``, or the error is raised instead,
        depends on ``permission_action``.

    Attributes:
        root_path (Path): Absolute path to the project root.
        exclusion_rules (Optional[BaseExclusionRules]): Rules for excluding files/directories.
        permission_action (PermissionAction): How to handle inaccessible entries.
        follow_symlinks (bool): Whether to descend into symlinked directories.
        warnings (List[SkippedEntry]): Entries skipped because they could not be accessed.

    Example:
        >>> walker = TreeWalker("src")  # doctest: +SKIP
        >>> for line in walker.stream_tree_representation():  # doctest: +SKIP
        ...     print(line)
        .
        +-- utils
        |   \\-- helpers.py
        \\-- main.py
    """

    def __init__(
        self,
        root_path: PathType,
        exclusion_rules: Optional[BaseExclusionRules] = None,
        permission_action: PermissionAction = PermissionAction.WARN,
        follow_symlinks: bool = False,
        warnings: Optional[List[SkippedEntry]] = None,
    ) -> None:
        self.root_path = Path(os.path.abspath(os.fspath(root_path)))
        self.exclusion_rules = exclusion_rules
        self.permission_action = PermissionAction(permission_action)
        self.follow_symlinks = follow_symlinks
        self.warnings: List[SkippedEntry] = warnings if warnings is not None else []

    def walk(self, directory: Optional[PathType] = None) -> Iterator[TreeLine]:
        """Generate the tree lines below a directory.

        Args:
            directory: Directory to walk, absolute or relative to the root.
                Defaults to the root itself. Exclusion rules always apply to paths
                relative to the root.

        Yields:
            One TreeLine per surviving entry, parents before their children.

        Raises:
            FileNotFoundError: If the directory doesn't exist.
            NotADirectoryError: If the directory isn't a directory.
            PermissionError: If access is denied and permission_action is RAISE.
        """
        for entry in self._iterate_entries(directory):
            yield entry.tree_line()

    def stream_tree_representation(self, directory: Optional[PathType] = None) -> Iterator[str]:
        """Generate the tree display one line at a time, starting with the ``.`` anchor.

        Example:
            >>> walker = TreeWalker(".")  # doctest: +SKIP
            >>> print("\\n".join(walker.stream_tree_representation()))  # doctest: +SKIP
            .
            +-- y
            +-- z
            +-- a.txt
            \\-- b.txt
        """
        yield TREE_ANCHOR
        for line in self.walk(directory):
            yield str(line)

    def get_tree_representation(self, directory: Optional[PathType] = None) -> str:
        return "\n".join(self.stream_tree_representation(directory))

    def iterate_files(self, directory: Optional[PathType] = None) -> Iterator[Path]:
        """Generate the absolute paths of every surviving file below a directory.

        Files come in the same order as in the tree display. Symlinked
        directories that are not followed are skipped, and so are broken links
        (recorded as warnings).

        Yields:
            Absolute paths of regular files.
        """
        for entry in self._iterate_entries(directory):
            if entry.is_dir:
                continue
            if entry.fs_path.is_file():
                yield entry.fs_path
            elif not entry.fs_path.exists():
                handle_access_error(
                    self.permission_action,
                    self.warnings,
                    entry.fs_path,
                    FileNotFoundError(f"broken symbolic link: {entry.fs_path}"),
                )

    def _resolve_directory(self, directory: Optional[PathType]) -> Path:
        if directory is None:
            path = self.root_path
        else:
            path = Path(directory)
            if not path.is_absolute():
                path = self.root_path / path

        if not path.exists():
            raise FileNotFoundError(f"Directory does not exist: {path}")
        if not path.is_dir():
            raise NotADirectoryError(f"Not a directory: {path}")
        return path

    def _iterate_entries(self, directory: Optional[PathType]) -> Iterator[DirectoryEntry]:
        start = self._resolve_directory(directory)
        root_entry = DirectoryEntry(TREE_ANCHOR, start, is_dir=True, is_last=True)

        # Directories on the current branch, tracked only when following symlinks
        branch: Set[FileIdentifier] = set()
        if self.follow_symlinks:
            branch.add(self._get_file_identifier(start))

        yield from self._iterate_children(root_entry, branch)

    def _iterate_children(self, entry: DirectoryEntry, branch: Set[FileIdentifier]) -> Iterator[DirectoryEntry]:
        for child in self._list_children(entry):
            yield child
            if not child.is_dir:
                continue

            if not self.follow_symlinks:
                yield from self._iterate_children(child, branch)
            else:
                file_id = self._get_file_identifier(child.fs_path)
                if file_id in branch:
                    handle_access_error(
                        self.permission_action,
                        self.warnings,
                        child.fs_path,
                        OSError(f"symbolic link loop: {child.fs_path}"),
                    )
                    continue
                branch.add(file_id)
                yield from self._iterate_children(child, branch)
                branch.discard(file_id)

            # Release the finished subtree
            child.children = ()

    def _list_children(self, entry: DirectoryEntry) -> List[DirectoryEntry]:
        """List the surviving children of a directory in display order."""
        try:
            with os.scandir(entry.fs_path) as it:
                dir_entries = list(it)
        except OSError as e:
            handle_access_error(self.permission_action, self.warnings, entry.fs_path, e)
            return []

        survivors = []
        for dir_entry in dir_entries:
            child_path = Path(dir_entry.path)
            if self.exclusion_rules is not None and self.exclusion_rules.exclude(
                relative_to_root(child_path, self.root_path)
            ):
                continue
            survivors.append((dir_entry.name, child_path, self._is_dir(dir_entry)))

        # Directories first, then files, both alphabetically
        survivors.sort(key=lambda s: (not s[2], s[0].lower(), s[0]))

        last_index = len(survivors) - 1
        return [
            DirectoryEntry(name, path, parent=entry, is_dir=is_dir, is_last=i == last_index)
            for i, (name, path, is_dir) in enumerate(survivors)
        ]

    def _is_dir(self, dir_entry: os.DirEntry) -> bool:  # type: ignore[type-arg]
        try:
            return dir_entry.is_dir(follow_symlinks=self.follow_symlinks)
        except OSError:
            return False

    def _get_file_identifier(self, path: Path) -> FileIdentifier:
        try:
            stat_info = path.stat()
            return FileIdentifier(stat_info.st_dev, stat_info.st_ino)
        except OSError:
            # Never equal to a real directory
            return FileIdentifier(-1, id(path))
