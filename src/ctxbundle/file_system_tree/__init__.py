"""Filtered directory traversal.

This package provides the tree walker that lists a project while pruning
excluded entries, and renders it as tree lines or as a sequence of files.
"""

from .directory_entry import DirectoryEntry
from .permission_action import PermissionAction
from .tree_walker import TreeWalker

__all__ = ["DirectoryEntry", "PermissionAction", "TreeWalker"]
