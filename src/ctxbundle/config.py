"""Immutable configuration for assembling a bundle."""

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional, Tuple

from ctxbundle.exclusion_rules.pattern_set import ContextIgnoreRules
from ctxbundle.file_system_tree.permission_action import PermissionAction
from ctxbundle.output_strategies import OUTPUT_STRATEGIES
from ctxbundle.types import PathType

DEFAULT_RULES_FILE = ".gitignore"

# Always appended after the rules-file entries
DEFAULT_SUPPLEMENTAL_PATTERNS: Tuple[str, ...] = (
    ".git",
    "__pycache__",
    "*.pyc",
    ".DS_Store",
)


@dataclass(frozen=True)
class BundleConfig:
    """Everything that shapes a bundle, passed explicitly to the bundle entry points.

    Attributes:
        root: Project root. Tree display, exclusion rules and content headers are
            relative to it.
        rules_file: Rules file, relative to ``root`` unless absolute; None disables it.
            A missing rules file is not an error.
        supplemental_patterns: Rules appended after the rules-file entries.
        include_tree: Whether the bundle starts with the tree display.
        include_diff: Whether the bundle ends with the version-control diff.
        spec_url: URL of a remote specification document to append, if any.
        output_format: "markdown" or "xml".
        permission_action: How to handle entries that cannot be listed or read.
        follow_symlinks: Whether to descend into symlinked directories.
        encoding: Encoding used to read files.
        errors: Decoding error handling used to read files.
        tokenizer_model: Model whose tokenizer counts the bundle's tokens; None disables it.

    Example:
        >>> config = BundleConfig("/srv/project", supplemental_patterns=("*.log",))
        >>> config.with_patterns("*.tmp").supplemental_patterns
        ('*.log', '*.tmp')
        >>> BundleConfig(output_format="html")
        Traceback (most recent call last):
        ...
        ValueError: Unsupported output format: html
    """

    root: PathType = Path(".")
    rules_file: Optional[PathType] = DEFAULT_RULES_FILE
    supplemental_patterns: Tuple[str, ...] = DEFAULT_SUPPLEMENTAL_PATTERNS
    include_tree: bool = True
    include_diff: bool = False
    spec_url: Optional[str] = None
    output_format: str = "markdown"
    permission_action: PermissionAction = PermissionAction.WARN
    follow_symlinks: bool = False
    encoding: str = "utf-8"
    errors: str = "strict"
    tokenizer_model: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "root", Path(self.root))
        object.__setattr__(self, "supplemental_patterns", tuple(self.supplemental_patterns))

        if self.output_format not in OUTPUT_STRATEGIES:
            raise ValueError(f"Unsupported output format: {self.output_format}")

        if isinstance(self.permission_action, str):
            try:
                object.__setattr__(self, "permission_action", PermissionAction(self.permission_action.lower()))
            except ValueError:
                raise ValueError(
                    f"Invalid permission_action: {self.permission_action}. Must be one of: 'ignore', 'warn', 'raise'"
                )

    def with_patterns(self, *patterns: str) -> "BundleConfig":
        """Return a copy with extra supplemental patterns appended."""
        return replace(self, supplemental_patterns=self.supplemental_patterns + tuple(patterns))

    def load_exclusion_rules(self) -> ContextIgnoreRules:
        """Load the project's rules file and the supplemental patterns."""
        return ContextIgnoreRules.from_rules_file(self.root, self.rules_file, self.supplemental_patterns)
