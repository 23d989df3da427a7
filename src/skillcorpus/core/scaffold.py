"""Create new skill folders from a template."""

import logging
from datetime import date
from pathlib import Path
from typing import Any

from skillcorpus.core.skill_def import KEBAB_CASE, SEMVER
from skillcorpus.utils.def_loader import write_definition

logger = logging.getLogger(__name__)

SKILL_BODY_TEMPLATE = """# {title}

{description}

## Instructions

Describe when this skill applies and the steps to follow.

## Examples

Add illustrative snippets here.

## Changelog

| Version | Date | Changes |
|---------|------|---------|
| {version} | {today} | Initial version |
"""


def build_skill_document(
    skill_id: str,
    description: str,
    version: str = "0.1.0",
    today: date | None = None,
) -> tuple[dict[str, Any], str]:
    """Return (frontmatter, body) for a fresh skill document."""
    title = " ".join(word.capitalize() for word in skill_id.split("-"))
    frontmatter: dict[str, Any] = {
        "name": skill_id,
        "description": description,
        "version": version,
    }
    body = SKILL_BODY_TEMPLATE.format(
        title=title,
        description=description,
        version=version,
        today=(today or date.today()).isoformat(),
    )
    return frontmatter, body


def create_skill(
    skills_path: Path,
    prefix: str,
    name: str,
    description: str,
    version: str = "0.1.0",
    with_references: bool = False,
    skill_file_suffix: str = "-skill.md",
    references_dir: str = "references",
) -> Path:
    """
    Scaffold ``{prefix}-{name}/{prefix}-{name}-skill.md`` under skills_path.

    Args:
        skills_path: Root of the skills tree
        prefix: Topic prefix (e.g. "solidity")
        name: Skill name in kebab-case
        description: One-line description for the front-matter
        version: Initial version, MAJOR.MINOR.PATCH
        with_references: Also create an empty references/ folder

    Returns:
        Path to the written skill document

    Raises:
        ValueError: If prefix, name or version are malformed
        FileExistsError: If the skill folder already holds a document
    """
    if not KEBAB_CASE.match(prefix) or "-" in prefix:
        raise ValueError(f"prefix must be a single lowercase word, got '{prefix}'")
    if not KEBAB_CASE.match(name):
        raise ValueError(f"name must be kebab-case, got '{name}'")
    if not SEMVER.match(version):
        raise ValueError(f"version must be MAJOR.MINOR.PATCH, got '{version}'")
    if not description.strip():
        raise ValueError("description must not be empty")

    skill_id = f"{prefix}-{name}"
    filename = f"{skill_id}{skill_file_suffix}"
    skill_file = skills_path / skill_id / filename
    if skill_file.exists():
        raise FileExistsError(f"Skill already exists: {skill_id}")

    frontmatter, body = build_skill_document(skill_id, description.strip(), version)
    path = write_definition(skill_id, frontmatter, body, skills_path, filename)

    if with_references:
        (skills_path / skill_id / references_dir).mkdir(exist_ok=True)

    logger.info(f"Created skill {skill_id} at {path}")
    return path
