"""Rendering strategies for bundle blocks."""

from typing import Dict, Type

from .base_strategy import OutputStrategy
from .markdown_strategy import MarkdownOutputStrategy
from .xml_strategy import XMLOutputStrategy

OUTPUT_STRATEGIES: Dict[str, Type[OutputStrategy]] = {
    "markdown": MarkdownOutputStrategy,
    "xml": XMLOutputStrategy,
}


def get_strategy(output_format: str) -> OutputStrategy:
    """Instantiate the strategy registered for an output format.

    Raises:
        ValueError: If the format is unknown.
    """
    try:
        return OUTPUT_STRATEGIES[output_format]()
    except KeyError:
        raise ValueError(f"Unsupported output format: {output_format}")


__all__ = ["OUTPUT_STRATEGIES", "MarkdownOutputStrategy", "OutputStrategy", "XMLOutputStrategy", "get_strategy"]
