"""Skill definition models."""

import re
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

KEBAB_CASE = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
SKILL_ID = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)+$")
SEMVER = re.compile(r"^\d+\.\d+\.\d+(?:[-+][0-9A-Za-z.-]+)?$")

ParameterType = Literal[
    "string", "integer", "number", "boolean", "enum", "array", "object"
]


def split_skill_id(skill_id: str) -> tuple[str, str]:
    """Split a ``{prefix}-{skill-name}`` folder name into its two parts."""
    if not SKILL_ID.match(skill_id):
        raise ValueError(
            f"'{skill_id}' is not a kebab-case '{{prefix}}-{{skill-name}}' id"
        )
    prefix, _, name = skill_id.partition("-")
    return prefix, name


class ParameterDecl(BaseModel):
    """A declared skill parameter. Documentation only, never enforced here."""

    model_config = ConfigDict(extra="forbid")

    name: str
    type: ParameterType = "string"
    description: str = ""
    required: bool = False
    default: Any = None
    enum: list[Any] | None = None
    examples: list[Any] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def normalize(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        # A single `example` is accepted as shorthand for `examples`
        if "example" in data:
            example = data.pop("example")
            data.setdefault("examples", [])
            data["examples"] = [*data["examples"], example]
        if "enum" in data and "type" not in data:
            data["type"] = "enum"
        return data

    @property
    def is_enum(self) -> bool:
        return self.type == "enum" or self.enum is not None


class RetryConfig(BaseModel):
    """Retry policy an external orchestrator is expected to apply."""

    model_config = ConfigDict(extra="allow")

    max_attempts: int = Field(default=3, ge=1)
    backoff: Literal["none", "linear", "exponential"] = "exponential"
    initial_delay_seconds: float = Field(default=1.0, ge=0)


class LoggingDecl(BaseModel):
    """Logging expectations declared for an external orchestrator."""

    model_config = ConfigDict(extra="allow")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    destination: str | None = None

    @field_validator("level", mode="before")
    @classmethod
    def upper_level(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v


class ChangelogEntry(BaseModel):
    """One row of a changelog table embedded in a document body."""

    version: str
    date: str | None = None
    changes: str = ""
    author: str | None = None


class SkillFrontmatter(BaseModel):
    """Schema of the YAML front-matter block of a skill document."""

    model_config = ConfigDict(extra="allow")

    name: str | None = None
    description: str = ""
    version: str | None = None
    bonded_agent: str | None = None
    tags: list[str] = Field(default_factory=list)
    parameters: list[ParameterDecl] = Field(default_factory=list)
    retry_config: RetryConfig | None = None
    logging: LoggingDecl | None = None

    @field_validator("version", mode="before")
    @classmethod
    def version_as_text(cls, v: Any) -> Any:
        # YAML reads `version: 1.0` as a float
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("description", mode="before")
    @classmethod
    def description_as_text(cls, v: Any) -> Any:
        # An empty `description:` key is YAML null
        return "" if v is None else v

    @field_validator("parameters", mode="before")
    @classmethod
    def parameters_as_list(cls, v: Any) -> Any:
        """Accept both ``[{name: ...}]`` and ``{name: {...}}`` forms."""
        if v is None:
            return []
        if isinstance(v, dict):
            params = []
            for name, decl in v.items():
                if decl is None:
                    decl = {}
                if not isinstance(decl, dict):
                    raise ValueError(f"parameter '{name}' must be a mapping")
                params.append({"name": name, **decl})
            return params
        return v

    @field_validator("tags", mode="before")
    @classmethod
    def tags_as_list(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, str):
            return [t.strip() for t in v.split(",") if t.strip()]
        return v

    @property
    def extra(self) -> dict[str, Any]:
        return dict(self.model_extra or {})


class SkillMetadata(BaseModel):
    """Lightweight skill info for discovery."""

    model_config = ConfigDict(extra="forbid")

    id: str
    prefix: str
    name: str
    description: str
    version: str | None = None


class SkillDef(BaseModel):
    """Loaded skill definition."""

    model_config = ConfigDict(extra="forbid")

    id: str
    prefix: str
    name: str
    description: str
    version: str | None = None
    bonded_agent: str | None = None
    tags: list[str] = Field(default_factory=list)
    parameters: list[ParameterDecl] = Field(default_factory=list)
    retry_config: RetryConfig | None = None
    logging: LoggingDecl | None = None
    extra: dict[str, Any] = Field(default_factory=dict)
    content: str
    references: list[str] = Field(default_factory=list)
    changelog: list[ChangelogEntry] = Field(default_factory=list)
    path: Path | None = None

    def get_parameter(self, name: str) -> ParameterDecl | None:
        for param in self.parameters:
            if param.name == name:
                return param
        return None

    def to_metadata(self) -> SkillMetadata:
        return SkillMetadata(
            id=self.id,
            prefix=self.prefix,
            name=self.name,
            description=self.description,
            version=self.version,
        )
