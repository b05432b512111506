"""Exclusion rules for filtering files and directories."""

from .base_rules import BaseExclusionRules
from .excluded_paths import ExcludedPathsRules
from .ignore_pattern import IgnorePattern, compile_pattern
from .pattern_set import ContextIgnoreRules, load_patterns, read_rules_file

__all__ = [
    "BaseExclusionRules",
    "ContextIgnoreRules",
    "ExcludedPathsRules",
    "IgnorePattern",
    "compile_pattern",
    "load_patterns",
    "read_rules_file",
]
