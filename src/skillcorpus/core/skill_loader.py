"""Skill loader for discovering and loading skill documents."""

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Iterator, Optional

import yaml
from pydantic import ValidationError

from skillcorpus.core.changelog import parse_changelog
from skillcorpus.core.skill_def import (
    SKILL_ID,
    SkillDef,
    SkillFrontmatter,
    SkillMetadata,
)
from skillcorpus.utils.def_loader import (
    DefNotFoundError,
    InvalidDefError,
    discover_definitions,
    iter_definition_dirs,
    split_frontmatter,
)

if TYPE_CHECKING:
    from skillcorpus.utils.config import Config

logger = logging.getLogger(__name__)


class SkillLoader:
    """Load skill documents laid out as ``{prefix}-{name}/{prefix}-{name}-skill.md``."""

    @staticmethod
    def from_config(config: "Config") -> "SkillLoader":
        """Create SkillLoader from config."""
        return SkillLoader(
            config.skills_path,
            skill_file_suffix=config.skill_file_suffix,
            references_dir=config.references_dir,
        )

    def __init__(
        self,
        skills_path: Path,
        skill_file_suffix: str = "-skill.md",
        references_dir: str = "references",
    ):
        self.skills_path = skills_path
        self.skill_file_suffix = skill_file_suffix
        self.references_dir = references_dir

    def skill_filename(self, skill_dir: Path) -> str:
        return f"{skill_dir.name}{self.skill_file_suffix}"

    def is_skill_dir(self, path: Path) -> bool:
        """A skill folder has a kebab-case prefixed name and its document file."""
        return bool(SKILL_ID.match(path.name)) and (
            path / self.skill_filename(path)
        ).is_file()

    def iter_skill_dirs(self) -> Iterator[Path]:
        """Yield every skill folder under skills_path, descending into groups."""
        if not self.skills_path.is_dir():
            return iter(())
        return iter_definition_dirs(self.skills_path, self.is_skill_dir)

    def find_skill_dir(self, skill_id: str) -> Path:
        """
        Locate a skill folder by ID anywhere in the tree.

        Raises:
            DefNotFoundError: If no folder with that ID holds a skill document
        """
        if not SKILL_ID.match(skill_id):
            raise DefNotFoundError("skill", skill_id)

        direct = self.skills_path / skill_id
        if direct.is_dir() and self.is_skill_dir(direct):
            return direct

        for skill_dir in self.iter_skill_dirs():
            if skill_dir.name == skill_id:
                return skill_dir

        raise DefNotFoundError("skill", skill_id)

    def list_references(self, skill_dir: Path) -> list[str]:
        """List files under the optional references/ subfolder, relative to the skill folder."""
        ref_dir = skill_dir / self.references_dir
        if not ref_dir.is_dir():
            return []
        return sorted(
            path.relative_to(skill_dir).as_posix()
            for path in ref_dir.rglob("*")
            if path.is_file()
        )

    def discover_skills(self, prefix: Optional[str] = None) -> list[SkillMetadata]:
        """Scan skills directory and return list of valid SkillMetadata."""
        skills = discover_definitions(
            self.skills_path, self.skill_filename, self._parse_skill_metadata
        )
        if prefix is not None:
            skills = [s for s in skills if s.prefix == prefix]
        return skills

    def _parse_skill_metadata(
        self, def_id: str, frontmatter: dict[str, Any], body: str
    ) -> Optional[SkillMetadata]:
        """Parse skill metadata from frontmatter (callback for discover_definitions)."""
        if not SKILL_ID.match(def_id):
            logger.warning(f"Skipping skill folder with invalid name '{def_id}'")
            return None

        fm = SkillFrontmatter.model_validate(frontmatter)
        return SkillMetadata(
            id=def_id,
            prefix=def_id.split("-", 1)[0],
            name=fm.name or def_id,
            description=fm.description,
            version=fm.version,
        )

    def load_skill(self, skill_id: str) -> SkillDef:
        """Load full skill definition by ID.

        Args:
            skill_id: The skill directory name

        Returns:
            SkillDef with full content

        Raises:
            DefNotFoundError: If skill doesn't exist
            InvalidDefError: If skill is invalid (malformed, schema errors)
        """
        skill_dir = self.find_skill_dir(skill_id)
        skill_file = skill_dir / self.skill_filename(skill_dir)

        try:
            content = skill_file.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise InvalidDefError(
                "skill", skill_id, f"document is not valid UTF-8: {e.reason}"
            )
        frontmatter_text, body, _ = split_frontmatter(content)

        if frontmatter_text is None:
            raise InvalidDefError("skill", skill_id, "no valid frontmatter")

        try:
            raw = yaml.safe_load(frontmatter_text) or {}
        except yaml.YAMLError as e:
            raise InvalidDefError("skill", skill_id, f"frontmatter is not valid YAML: {e}")
        if not isinstance(raw, dict):
            raise InvalidDefError("skill", skill_id, "frontmatter is not a mapping")

        try:
            fm = SkillFrontmatter.model_validate(raw)
        except ValidationError as e:
            raise InvalidDefError("skill", skill_id, str(e))

        return SkillDef(
            id=skill_id,
            prefix=skill_id.split("-", 1)[0],
            name=fm.name or skill_id,
            description=fm.description,
            version=fm.version,
            bonded_agent=fm.bonded_agent,
            tags=fm.tags,
            parameters=fm.parameters,
            retry_config=fm.retry_config,
            logging=fm.logging,
            extra=fm.extra,
            content=body.strip(),
            references=self.list_references(skill_dir),
            changelog=parse_changelog(body),
            path=skill_file,
        )

    def load_all(self) -> list[SkillDef]:
        """Load every valid skill, logging and skipping invalid ones."""
        skills = []
        for skill_dir in self.iter_skill_dirs():
            try:
                skills.append(self.load_skill(skill_dir.name))
            except InvalidDefError as e:
                logger.warning(str(e))
        return skills
