"""Skill resource router."""

import shutil

from fastapi import APIRouter, Depends, HTTPException, status

from skillcorpus.api.deps import get_context
from skillcorpus.api.schemas import SkillCreate, skill_frontmatter
from skillcorpus.core.context import SharedContext
from skillcorpus.core.skill_def import SKILL_ID, SkillDef, SkillMetadata
from skillcorpus.utils.def_loader import (
    DefNotFoundError,
    InvalidDefError,
    write_definition,
)

router = APIRouter()


def _load(ctx: SharedContext, skill_id: str) -> SkillDef:
    try:
        return ctx.skill_loader.load_skill(skill_id)
    except DefNotFoundError:
        raise HTTPException(status_code=404, detail=f"Skill not found: {skill_id}")
    except InvalidDefError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.get("", response_model=list[SkillMetadata])
def list_skills(
    prefix: str | None = None, ctx: SharedContext = Depends(get_context)
) -> list[SkillMetadata]:
    """List all skills, optionally filtered by prefix."""
    return ctx.skill_loader.discover_skills(prefix=prefix)


@router.get("/{skill_id}", response_model=SkillDef)
def get_skill(skill_id: str, ctx: SharedContext = Depends(get_context)) -> SkillDef:
    """Get skill by ID."""
    return _load(ctx, skill_id)


@router.post(
    "/{skill_id}", response_model=SkillDef, status_code=status.HTTP_201_CREATED
)
def create_skill(
    skill_id: str, data: SkillCreate, ctx: SharedContext = Depends(get_context)  # type: ignore[valid-type]
) -> SkillDef:
    """Create a new skill."""
    if not SKILL_ID.match(skill_id):
        raise HTTPException(
            status_code=422,
            detail=f"Skill id must be kebab-case '{{prefix}}-{{skill-name}}': {skill_id}",
        )

    try:
        ctx.skill_loader.find_skill_dir(skill_id)
    except DefNotFoundError:
        pass
    else:
        raise HTTPException(status_code=409, detail=f"Skill already exists: {skill_id}")

    write_definition(
        skill_id,
        skill_frontmatter(data),
        data.content,  # type: ignore[attr-defined]
        ctx.config.skills_path,
        ctx.config.skill_filename(skill_id),
    )
    return _load(ctx, skill_id)


@router.put("/{skill_id}", response_model=SkillDef)
def update_skill(
    skill_id: str, data: SkillCreate, ctx: SharedContext = Depends(get_context)  # type: ignore[valid-type]
) -> SkillDef:
    """Update an existing skill in place."""
    try:
        skill_dir = ctx.skill_loader.find_skill_dir(skill_id)
    except DefNotFoundError:
        raise HTTPException(status_code=404, detail=f"Skill not found: {skill_id}")

    write_definition(
        skill_id,
        skill_frontmatter(data),
        data.content,  # type: ignore[attr-defined]
        skill_dir.parent,
        ctx.config.skill_filename(skill_id),
    )
    return _load(ctx, skill_id)


@router.delete("/{skill_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_skill(skill_id: str, ctx: SharedContext = Depends(get_context)) -> None:
    """Delete a skill folder, references included."""
    try:
        skill_dir = ctx.skill_loader.find_skill_dir(skill_id)
    except DefNotFoundError:
        raise HTTPException(status_code=404, detail=f"Skill not found: {skill_id}")

    shutil.rmtree(skill_dir)
