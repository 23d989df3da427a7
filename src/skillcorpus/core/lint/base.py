"""Base classes for lint rules."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator

import yaml
from pydantic import BaseModel, Field, ValidationError, computed_field

from skillcorpus.core.skill_def import SkillFrontmatter
from skillcorpus.utils.config import Config, Severity
from skillcorpus.utils.def_loader import split_frontmatter


class LintIssue(BaseModel):
    """A single finding reported by a rule."""

    rule: str
    severity: Severity
    skill_id: str
    path: str
    message: str
    line: int | None = None

    def location(self) -> str:
        return f"{self.path}:{self.line}" if self.line else self.path


class LintReport(BaseModel):
    """All findings for one lint run."""

    skills_checked: int = 0
    issues: list[LintIssue] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def error_count(self) -> int:
        return sum(1 for issue in self.issues if issue.severity == "error")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def warning_count(self) -> int:
        return sum(1 for issue in self.issues if issue.severity == "warning")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def ok(self) -> bool:
        return self.error_count == 0

    def for_skill(self, skill_id: str) -> list[LintIssue]:
        return [issue for issue in self.issues if issue.skill_id == skill_id]


@dataclass
class LintTarget:
    """A candidate skill folder and whatever could be read from it."""

    skill_dir: Path
    skill_file: Path
    content: str | None = None
    read_error: str | None = None
    frontmatter_text: str | None = None
    frontmatter: dict[str, Any] | None = None
    frontmatter_error: str | None = None
    frontmatter_error_line: int | None = None
    body: str = ""
    body_start_line: int = 1
    parsed: SkillFrontmatter | None = None
    schema_errors: list[dict[str, Any]] = field(default_factory=list)

    @property
    def skill_id(self) -> str:
        return self.skill_dir.name

    @classmethod
    def from_dir(cls, skill_dir: Path, filename: str) -> "LintTarget":
        """Read and parse a skill folder as far as it will go without raising."""
        target = cls(skill_dir=skill_dir, skill_file=skill_dir / filename)
        if not target.skill_file.is_file():
            return target

        try:
            target.content = target.skill_file.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            target.read_error = f"not valid UTF-8 ({e.reason} at byte {e.start})"
            return target
        frontmatter_text, body, body_start = split_frontmatter(target.content)
        target.frontmatter_text = frontmatter_text
        target.body = body
        target.body_start_line = body_start
        if frontmatter_text is None:
            return target

        try:
            raw = yaml.safe_load(frontmatter_text)
        except yaml.YAMLError as e:
            target.frontmatter_error = str(e).replace("\n", " ")
            mark = getattr(e, "problem_mark", None)
            if mark is not None:
                # Front-matter starts on line 2, after the opening delimiter
                target.frontmatter_error_line = mark.line + 2
            return target

        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            target.frontmatter_error = (
                f"front-matter must be a mapping, got {type(raw).__name__}"
            )
            target.frontmatter_error_line = 2
            return target

        target.frontmatter = raw
        try:
            target.parsed = SkillFrontmatter.model_validate(raw)
        except ValidationError as e:
            target.schema_errors = list(e.errors())
        return target


class Rule(ABC):
    """Base class for lint rules."""

    id: str
    severity: Severity = "error"
    description: str = ""

    @abstractmethod
    def check(self, target: LintTarget, config: Config) -> Iterator[LintIssue]:
        """Yield issues found in the target."""

    def issue(
        self,
        target: LintTarget,
        config: Config,
        message: str,
        line: int | None = None,
        path: Path | None = None,
    ) -> LintIssue:
        """Build an issue for this rule, with the path shown relative to the corpus root."""
        path = path or (target.skill_file if target.content is not None else target.skill_dir)
        try:
            shown = path.relative_to(config.root).as_posix()
        except ValueError:
            shown = path.as_posix()
        return LintIssue(
            rule=self.id,
            severity=self.severity,
            skill_id=target.skill_id,
            path=shown,
            message=message,
            line=line,
        )
