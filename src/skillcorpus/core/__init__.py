"""Core corpus functionality."""

from .context import SharedContext
from .lint import LintIssue, LintReport, Linter
from .scaffold import create_skill
from .skill_def import ParameterDecl, SkillDef, SkillMetadata
from .skill_loader import SkillLoader

__all__ = [
    "LintIssue",
    "LintReport",
    "Linter",
    "ParameterDecl",
    "SharedContext",
    "SkillDef",
    "SkillLoader",
    "SkillMetadata",
    "create_skill",
]
