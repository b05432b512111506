"""Assembly of the bundle document.

This module provides the ContextBundle class, the single output document that
the tree display, file content blocks and auxiliary sections are appended to,
in call order.
"""

from typing import Iterable, Iterator, List, Optional

from ctxbundle.config import BundleConfig
from ctxbundle.exceptions import TokenizationError
from ctxbundle.exclusion_rules.base_rules import BaseExclusionRules
from ctxbundle.file_collector import FileCollector
from ctxbundle.file_system_tree.tree_walker import TreeWalker
from ctxbundle.output_strategies import OutputStrategy, get_strategy
from ctxbundle.providers import ContextProvider, StaticProvider
from ctxbundle.token_counter import TokenCounter
from ctxbundle.types import PathType, SkippedEntry

DIFF_TITLE = "Diff"
SPEC_TITLE = "Specification"


class ContextBundle:
    """An output document assembled from a project's tree, files and auxiliary text.

    Each ``add_*`` method renders one block, appends it to the document and
    returns it. :meth:`stream` (and :meth:`build`, which drains it) appends the
    default sequence:

    1. the tree display, if ``config.include_tree``;
    2. the content blocks of the provider's selected entries;
    3. the diff section, if ``config.include_diff`` and the diff is not empty;
    4. the remote specification section, if ``config.spec_url``.

    Entries that cannot be listed or read are collected in :attr:`warnings`
    (unless the configuration says to ignore or raise).

    Attributes:
        config (BundleConfig): The configuration the bundle was built with.
        provider (ContextProvider): Source of selected entries, diff and remote text.

    Example:
        >>> bundle = ContextBundle(BundleConfig("project"), StaticProvider(["src"]))  # doctest: +SKIP
        >>> print(bundle.build())  # doctest: +SKIP
        ```text
        .
        \\-- src
            \\-- main.py
        ```
        <BLANKLINE>
        `src/main.py`:
        ```python
        print("hello")
        ```

    Raises:
        ValueError: If the root is not a directory.
        TokenizerNotAvailableError: If a tokenizer model is configured but tiktoken is missing.
    """

    def __init__(
        self,
        config: BundleConfig,
        provider: Optional[ContextProvider] = None,
        strategy: Optional[OutputStrategy] = None,
        exclusion_rules: Optional[BaseExclusionRules] = None,
    ) -> None:
        if not config.root.is_dir():
            raise ValueError(f"'{config.root}' is not a valid directory")

        self.config = config
        self.provider = provider if provider is not None else StaticProvider()
        self._strategy = strategy if strategy is not None else get_strategy(config.output_format)
        self._exclusion_rules = exclusion_rules if exclusion_rules is not None else config.load_exclusion_rules()

        # Walker and collector share one warnings sink
        self._warnings: List[SkippedEntry] = []
        self._walker = TreeWalker(
            config.root,
            self._exclusion_rules,
            permission_action=config.permission_action,
            follow_symlinks=config.follow_symlinks,
            warnings=self._warnings,
        )
        self._collector = FileCollector(
            config.root,
            self._exclusion_rules,
            encoding=config.encoding,
            errors=config.errors,
            permission_action=config.permission_action,
            follow_symlinks=config.follow_symlinks,
            warnings=self._warnings,
        )

        self._counter = TokenCounter(model=config.tokenizer_model)
        self._parts: List[str] = []
        self._file_count = 0

    @property
    def exclusion_rules(self) -> BaseExclusionRules:
        return self._exclusion_rules

    @property
    def text(self) -> str:
        """The document assembled so far."""
        return "".join(self._parts)

    @property
    def warnings(self) -> List[SkippedEntry]:
        """Entries skipped so far because they could not be listed or read."""
        return list(self._warnings)

    @property
    def file_count(self) -> int:
        """Number of content blocks appended so far."""
        return self._file_count

    @property
    def line_count(self) -> int:
        return self._counter.get_total_lines()

    @property
    def character_count(self) -> int:
        return self._counter.get_total_characters()

    @property
    def byte_count(self) -> int:
        """Size of the document encoded as UTF-8."""
        return sum(len(part.encode("utf-8")) for part in self._parts)

    @property
    def token_count(self) -> Optional[int]:
        """Number of tokens appended so far, or None if token counting is disabled."""
        return self._counter.get_total_tokens()

    def _append(self, text: str) -> str:
        try:
            self._counter.count(text)
        except TokenizationError:
            # Continue even if token counting fails
            pass
        self._parts.append(text)
        return text

    def add_tree(self, directory: Optional[PathType] = None) -> str:
        """Append the tree display of the root, or of a directory below it.

        Raises:
            FileNotFoundError: If the directory doesn't exist.
            NotADirectoryError: If the directory isn't a directory.
            PermissionError: If access is denied and permission_action is RAISE.
        """
        return self._append(self._strategy.format_tree(self._walker.stream_tree_representation(directory)))

    def stream_files(self, paths: Iterable[PathType]) -> Iterator[str]:
        """Append one content block per collected file, yielding each as it is appended."""
        for block in self._collector.collect(paths):
            self._file_count += 1
            yield self._append(self._strategy.format_file(block))

    def add_files(self, paths: Iterable[PathType]) -> str:
        """Append the content blocks of the selected files and directories."""
        return "".join(self.stream_files(paths))

    def add_section(self, title: str, text: str, language: str = "") -> str:
        """Append an auxiliary text block."""
        return self._append(self._strategy.format_section(title, text, language))

    def add_diff(self) -> str:
        """Append the provider's diff, unless it is empty.

        Returns:
            The appended section, or an empty string when there was no diff.

        Raises:
            ProviderError: If the diff cannot be produced.
        """
        diff = self.provider.read_diff_text()
        if not diff.strip():
            return ""
        return self.add_section(DIFF_TITLE, diff, "diff")

    def add_remote_spec(self, url: Optional[str] = None) -> str:
        """Append a remote specification document.

        Args:
            url: Document to fetch. Defaults to ``config.spec_url``.

        Raises:
            ValueError: If no URL is given or configured.
            ProviderError: If the document cannot be fetched.
        """
        url = url or self.config.spec_url
        if not url:
            raise ValueError("No specification URL given or configured")
        return self.add_section(f"{SPEC_TITLE} ({url})", self.provider.fetch_remote_text(url))

    def stream(self) -> Iterator[str]:
        """Append the default sequence of blocks, yielding each as it is appended."""
        if self.config.include_tree:
            yield self.add_tree()

        yield from self.stream_files(self.provider.read_selected_entries())

        if self.config.include_diff:
            diff = self.add_diff()
            if diff:
                yield diff

        if self.config.spec_url:
            yield self.add_remote_spec()

    def build(self) -> str:
        """Append the default sequence of blocks and return the whole document."""
        for _ in self.stream():
            pass
        return self.text
