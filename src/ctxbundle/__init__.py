"""Context bundle assembly utilities.

This package builds a single text document out of a filtered view of a
project's file tree, the contents of selected files, and auxiliary text blocks
such as a version-control diff, ready to be pasted into a Large Language Model
(LLM) conversation.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("ctxbundle")
except PackageNotFoundError:
    __version__ = "unknown"
