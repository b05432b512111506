"""Output strategy base class defining how bundle blocks are rendered.

This module provides the abstract base class that concrete strategies follow to
render the three kinds of blocks a bundle is made of: the tree display, file
content blocks, and auxiliary text sections.
"""

from abc import ABC, abstractmethod
from typing import Iterable

from ctxbundle.types import ContentBlock


def ensure_trailing_newline(text: str) -> str:
    """Return the text followed by a newline, adding one only if it is missing."""
    return text if text.endswith("\n") else text + "\n"


class OutputStrategy(ABC):
    """Abstract base class for rendering bundle blocks.

    Every method returns a complete block, terminated by a blank line, so
    blocks can be concatenated in call order to form the bundle document.

    Example:
        >>> class PlainStrategy(OutputStrategy):
        ...     def format_tree(self, lines):
        ...         return "\\n".join(lines) + "\\n\\n"
        ...
        ...     def format_file(self, block):
        ...         return f"{block.header}\\n{ensure_trailing_newline(block.body)}\\n"
        ...
        ...     def format_section(self, title, text, language=""):
        ...         return f"{title}\\n{ensure_trailing_newline(text)}\\n"
        ...
        ...     def get_file_extension(self):
        ...         return ".txt"
        >>> PlainStrategy().format_tree([".", "\\\\-- main.py"])
        '.\\n\\\\-- main.py\\n\\n'
    """

    @abstractmethod
    def format_tree(self, lines: Iterable[str]) -> str:
        """Render the tree display.

        Args:
            lines: The display lines, starting with the ``.`` anchor.

        Returns:
            The rendered tree block.
        """
        pass

    @abstractmethod
    def format_file(self, block: ContentBlock) -> str:
        """Render one file's header and literal content.

        Args:
            block: The content block to render. Its body must appear unmodified.

        Returns:
            The rendered content block.
        """
        pass

    @abstractmethod
    def format_section(self, title: str, text: str, language: str = "") -> str:
        """Render an auxiliary text block such as a diff or a remote document.

        Args:
            title: Heading for the section.
            text: Section body.
            language: Optional syntax hint for the body (e.g. "diff").

        Returns:
            The rendered section.
        """
        pass

    @abstractmethod
    def get_file_extension(self) -> str:
        """Get the appropriate file extension for this output format, including the leading dot."""
        pass
