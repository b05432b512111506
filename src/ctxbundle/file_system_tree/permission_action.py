"""Permission action enum for handling inaccessible entries during traversal."""

import os
from enum import Enum
from typing import List, Union

from ctxbundle.types import PathType, SkippedEntry


class PermissionAction(str, Enum):
    """Action to take when an entry cannot be listed or read.

    Values:
        IGNORE: Skip the entry silently and continue.
        WARN: Skip the entry, continue, and record a SkippedEntry warning (default behavior).
        RAISE: Raise the underlying error immediately.
    """

    IGNORE = "ignore"
    WARN = "warn"
    RAISE = "raise"


def handle_access_error(
    action: PermissionAction, warnings: List[SkippedEntry], path: PathType, error: Union[OSError, ValueError]
) -> None:
    """Apply a permission action to an entry that could not be listed or read.

    Args:
        action: The configured action.
        warnings: Sink receiving a SkippedEntry when the action is WARN.
        path: The entry that failed.
        error: The error raised while accessing it. Decoding errors count as
            unreadable entries too.

    Raises:
        PermissionError: If the action is RAISE and access was denied.
        OSError: If the action is RAISE and any other I/O error occurred.
        ValueError: If the action is RAISE and the content could not be decoded.
    """
    if action == PermissionAction.RAISE:
        if isinstance(error, PermissionError):
            raise PermissionError(f"Access denied to {path}: {error}") from error
        raise error
    if action == PermissionAction.WARN:
        reason = getattr(error, "strerror", None) or str(error)
        warnings.append(SkippedEntry(os.fspath(path), reason))
