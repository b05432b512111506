"""Markdown output strategy, the default rendering of a bundle.

Every block is a fenced code block. Fences are lengthened as needed so file
contents that contain backtick fences of their own are never cut short.
"""

import re
from pathlib import PurePosixPath
from typing import Dict, Iterable

from ctxbundle.types import ContentBlock

from .base_strategy import OutputStrategy, ensure_trailing_newline

_BACKTICK_RUN = re.compile(r"`+")

_LANG_MAP: Dict[str, str] = {
    ".py": "python",
    ".pyi": "python",
    ".js": "javascript",
    ".ts": "typescript",
    ".tsx": "tsx",
    ".jsx": "jsx",
    ".json": "json",
    ".yml": "yaml",
    ".yaml": "yaml",
    ".toml": "toml",
    ".css": "css",
    ".scss": "scss",
    ".html": "html",
    ".md": "markdown",
    ".sh": "bash",
    ".rb": "ruby",
    ".go": "go",
    ".rs": "rust",
    ".c": "c",
    ".h": "c",
    ".cpp": "cpp",
    ".java": "java",
    ".sql": "sql",
}


def fence_for(text: str) -> str:
    """Return a backtick fence longer than any backtick run in the text.

    Example:
        >>> fence_for("plain")
        '```'
        >>> fence_for("```python\\nprint()\\n```")
        '````'
    """
    longest = max((len(run) for run in _BACKTICK_RUN.findall(text)), default=0)
    return "`" * max(3, longest + 1)


def language_for(path: str) -> str:
    """Guess a fenced-block language hint from a file name; empty if unknown."""
    return _LANG_MAP.get(PurePosixPath(path).suffix.lower(), "")


class MarkdownOutputStrategy(OutputStrategy):
    """Output strategy rendering blocks as Markdown.

    The tree display is a fenced ``text`` block whose first line is ``.``. Each
    file is a header line naming its root-relative path, followed by a fenced
    block holding the file content verbatim. Auxiliary sections get a level-2
    heading.

    Example:
        >>> strategy = MarkdownOutputStrategy()
        >>> print(strategy.format_tree([".", "\\\\-- keep.txt"]), end='')
        ```text
        .
        \\-- keep.txt
        ```
        <BLANKLINE>
        >>> block = ContentBlock("src/main.py", "print('hi')\\n", None)
        >>> print(strategy.format_file(block), end='')
        `src/main.py`:
        ```python
        print('hi')
        ```
        <BLANKLINE>
    """

    def format_tree(self, lines: Iterable[str]) -> str:
        body = ensure_trailing_newline("\n".join(lines))
        fence = fence_for(body)
        return f"{fence}text\n{body}{fence}\n\n"

    def format_file(self, block: ContentBlock) -> str:
        fence = fence_for(block.body)
        language = language_for(block.header)
        body = ensure_trailing_newline(block.body) if block.body else ""
        return f"`{block.header}`:\n{fence}{language}\n{body}{fence}\n\n"

    def format_section(self, title: str, text: str, language: str = "") -> str:
        fence = fence_for(text)
        body = ensure_trailing_newline(text) if text else ""
        return f"## {title}\n{fence}{language}\n{body}{fence}\n\n"

    def get_file_extension(self) -> str:
        return ".md"
