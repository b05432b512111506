"""Unit tests for the Markdown output strategy."""

import pytest

from ctxbundle.output_strategies import MarkdownOutputStrategy
from ctxbundle.output_strategies.markdown_strategy import fence_for, language_for
from ctxbundle.types import ContentBlock


@pytest.fixture
def strategy():
    return MarkdownOutputStrategy()


def test_fence_for():
    assert fence_for("") == "```"
    assert fence_for("inline `code` here") == "```"
    assert fence_for("```python\nx\n```\n") == "````"
    assert fence_for("`````") == "``````"


@pytest.mark.parametrize(
    "path,language",
    [("src/main.py", "python"), ("web/App.TSX", "tsx"), ("Makefile", ""), ("notes.txt", ""), ("a/b.rs", "rust")],
)
def test_language_for(path, language):
    assert language_for(path) == language


def test_format_tree(strategy):
    assert strategy.format_tree([".", "+-- src", "\\-- keep.txt"]) == "```text\n.\n+-- src\n\\-- keep.txt\n```\n\n"


def test_format_file(strategy):
    block = ContentBlock("src/main.py", "print('hi')\n", None)
    assert strategy.format_file(block) == "`src/main.py`:\n```python\nprint('hi')\n```\n\n"


def test_format_file_without_trailing_newline(strategy):
    block = ContentBlock("notes.txt", "no newline", None)
    assert strategy.format_file(block) == "`notes.txt`:\n```\nno newline\n```\n\n"


def test_format_empty_file(strategy):
    assert strategy.format_file(ContentBlock("empty.txt", "", None)) == "`empty.txt`:\n```\n```\n\n"


def test_format_file_containing_fences(strategy):
    body = "# Title\n\n```bash\nls\n```\n"
    rendered = strategy.format_file(ContentBlock("README.md", body, None))
    assert rendered == "`README.md`:\n````markdown\n" + body + "````\n\n"


def test_format_section(strategy):
    assert strategy.format_section("Diff", "+added\n", "diff") == "## Diff\n```diff\n+added\n```\n\n"
    assert strategy.format_section("Notes", "text") == "## Notes\n```\ntext\n```\n\n"


def test_file_extension(strategy):
    assert strategy.get_file_extension() == ".md"
