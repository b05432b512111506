"""XML output strategy for bundle blocks.

This module provides a strategy for rendering the bundle as XML elements, with
paths, titles and bodies escaped so the output stays well formed whatever the
file contents are.
"""

from typing import Iterable
from xml.sax.saxutils import escape as xml_escape

from ctxbundle.types import ContentBlock

from .base_strategy import OutputStrategy, ensure_trailing_newline


class XMLOutputStrategy(OutputStrategy):
    """Output strategy that renders bundle blocks as XML elements.

    Structure::

        <tree>
        .
        \\-- src
        </tree>
        <file path="src/main.py">
        file content...
        </file>
        <section title="Diff" language="diff">
        section text...
        </section>

    Example:
        >>> strategy = XMLOutputStrategy()
        >>> block = ContentBlock("test & demo.py", "x = 1 < 2\\n", None)
        >>> print(strategy.format_file(block), end='')
        <file path="test &amp; demo.py">
        x = 1 &lt; 2
        </file>
        <BLANKLINE>
    """

    def __init__(self) -> None:
        # Extra entities needed inside attribute values
        self._xml_entities = {
            '"': "&quot;",
            "'": "&apos;",
        }

    def _attribute(self, value: str) -> str:
        return xml_escape(value, self._xml_entities)

    def _body(self, text: str) -> str:
        return ensure_trailing_newline(xml_escape(text)) if text else ""

    def format_tree(self, lines: Iterable[str]) -> str:
        text = "\n".join(lines)
        return f"<tree>\n{self._body(text)}</tree>\n\n"

    def format_file(self, block: ContentBlock) -> str:
        return f'<file path="{self._attribute(block.header)}">\n{self._body(block.body)}</file>\n\n'

    def format_section(self, title: str, text: str, language: str = "") -> str:
        start = f'<section title="{self._attribute(title)}"'
        if language:
            start += f' language="{self._attribute(language)}"'
        return f"{start}>\n{self._body(text)}</section>\n\n"

    def get_file_extension(self) -> str:
        return ".xml"
