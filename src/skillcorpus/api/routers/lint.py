"""Lint report router."""

from fastapi import APIRouter, Depends, HTTPException

from skillcorpus.api.deps import get_context
from skillcorpus.core.context import SharedContext
from skillcorpus.core.lint import LintIssue, LintReport
from skillcorpus.utils.def_loader import DefNotFoundError

router = APIRouter()


@router.get("", response_model=LintReport)
def lint_corpus(ctx: SharedContext = Depends(get_context)) -> LintReport:
    """Lint the whole corpus."""
    try:
        return ctx.linter.lint()
    except FileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{skill_id}", response_model=list[LintIssue])
def lint_skill(
    skill_id: str, ctx: SharedContext = Depends(get_context)
) -> list[LintIssue]:
    """Lint a single skill folder."""
    try:
        return ctx.linter.lint_skill(skill_id)
    except DefNotFoundError:
        raise HTTPException(status_code=404, detail=f"Skill not found: {skill_id}")
