"""Run lint rules over a skill corpus."""

import logging
from pathlib import Path
from typing import Iterator

from skillcorpus.core.lint.base import LintIssue, LintReport, LintTarget, Rule
from skillcorpus.core.lint.registry import RuleRegistry
from skillcorpus.core.skill_def import SKILL_ID
from skillcorpus.utils.config import Config
from skillcorpus.utils.def_loader import DefNotFoundError, iter_definition_dirs

logger = logging.getLogger(__name__)


class Linter:
    """Walks the skills tree and applies every enabled rule to each skill folder."""

    def __init__(self, config: Config, registry: RuleRegistry | None = None):
        self.config = config
        self.registry = registry or RuleRegistry.with_builtins()

    def is_candidate(self, path: Path) -> bool:
        """
        Decide whether a folder is meant to be a skill folder.

        A folder counts when it holds its skill document. Otherwise a folder
        with skill documents further down is a grouping folder, whatever its
        name. Failing both, it counts when it holds any ``*-skill.md`` file,
        a references/ subfolder, or is skill-named and holds Markdown.
        """
        if (path / self.config.skill_filename(path.name)).is_file():
            return True
        if self.holds_nested_skills(path):
            return False
        if (path / self.config.references_dir).is_dir():
            return True
        markdown = [
            child
            for child in path.iterdir()
            if child.is_file() and child.suffix.lower() == ".md"
        ]
        if any(child.name.endswith(self.config.skill_file_suffix) for child in markdown):
            return True
        return bool(SKILL_ID.match(path.name)) and bool(markdown)

    def holds_nested_skills(self, path: Path) -> bool:
        """True when a subfolder (outside references/ and dot-folders) holds a skill document."""
        for found in path.rglob(f"*{self.config.skill_file_suffix}"):
            parts = found.relative_to(path).parts
            if len(parts) < 2 or parts[0] == self.config.references_dir:
                continue
            if found.is_file() and not any(part.startswith(".") for part in parts):
                return True
        return False

    def iter_targets(self) -> Iterator[LintTarget]:
        for skill_dir in iter_definition_dirs(self.config.skills_path, self.is_candidate):
            yield LintTarget.from_dir(
                skill_dir, self.config.skill_filename(skill_dir.name)
            )

    def active_rules(self) -> list[Rule]:
        disabled = set(self.config.lint.disabled_rules)
        return [rule for rule in self.registry.list_all() if rule.id not in disabled]

    def lint_target(self, target: LintTarget) -> list[LintIssue]:
        issues = []
        overrides = self.config.lint.severity_overrides
        for rule in self.active_rules():
            for issue in rule.check(target, self.config):
                if rule.id in overrides:
                    issue.severity = overrides[rule.id]
                issues.append(issue)
        return issues

    def lint(self) -> LintReport:
        """
        Lint every skill folder under skills_path.

        Returns:
            LintReport with all issues, ordered by folder then rule

        Raises:
            FileNotFoundError: If skills_path doesn't exist
        """
        if not self.config.skills_path.is_dir():
            raise FileNotFoundError(
                f"Skills directory not found: {self.config.skills_path}"
            )

        report = LintReport()
        for target in self.iter_targets():
            report.skills_checked += 1
            report.issues.extend(self.lint_target(target))

        logger.info(
            f"Linted {report.skills_checked} skill(s): "
            f"{report.error_count} error(s), {report.warning_count} warning(s)"
        )
        return report

    def lint_skill(self, skill_id: str) -> list[LintIssue]:
        """
        Lint a single skill folder by name.

        Raises:
            DefNotFoundError: If no skill folder with that name exists
        """
        if self.config.skills_path.is_dir():
            for target in self.iter_targets():
                if target.skill_id == skill_id:
                    return self.lint_target(target)
        raise DefNotFoundError("skill", skill_id)
