"""Pydantic schemas for API request/response models."""

from typing import Any

from pydantic import BaseModel, create_model

from skillcorpus.core.skill_def import SkillDef


def make_create_model(model_cls: type[BaseModel], exclude: set[str]) -> type[BaseModel]:
    """Derive a Create model from existing model, excluding specified fields."""
    fields: dict[str, Any] = {}
    for name, field in model_cls.model_fields.items():
        if name in exclude:
            continue
        if field.is_required():
            fields[name] = (field.annotation, ...)
        else:
            fields[name] = (field.annotation, field)

    return create_model(f"{model_cls.__name__}Create", **fields)


# Derived at runtime from SkillDef, so mypy can't see the fields
SkillCreate: type[BaseModel] = make_create_model(  # type: ignore[assignment]
    SkillDef, exclude={"id", "prefix", "extra", "references", "changelog", "path"}
)


def skill_frontmatter(data: BaseModel) -> dict[str, Any]:
    """Build the YAML front-matter mapping for a SkillCreate payload."""
    payload: Any = data
    frontmatter: dict[str, Any] = {
        "name": payload.name,
        "description": payload.description,
    }
    if payload.version is not None:
        frontmatter["version"] = payload.version
    if payload.bonded_agent is not None:
        frontmatter["bonded_agent"] = payload.bonded_agent
    if payload.tags:
        frontmatter["tags"] = list(payload.tags)
    if payload.parameters:
        frontmatter["parameters"] = [
            {"name": param.name, **param.model_dump(exclude={"name"}, exclude_defaults=True)}
            for param in payload.parameters
        ]
    if payload.retry_config is not None:
        frontmatter["retry_config"] = payload.retry_config.model_dump()
    if payload.logging is not None:
        frontmatter["logging"] = payload.logging.model_dump(exclude_none=True)
    return frontmatter
