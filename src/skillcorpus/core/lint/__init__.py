"""Structural checks for skill documents."""

from skillcorpus.core.lint.base import LintIssue, LintReport, LintTarget, Rule
from skillcorpus.core.lint.linter import Linter
from skillcorpus.core.lint.registry import RuleRegistry

__all__ = [
    "LintIssue",
    "LintReport",
    "LintTarget",
    "Linter",
    "Rule",
    "RuleRegistry",
]
