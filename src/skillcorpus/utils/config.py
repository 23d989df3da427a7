"""Configuration management for skillcorpus."""

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

USER_CONFIG_FILE = "skillcorpus.yaml"
LOCAL_CONFIG_FILE = "skillcorpus.local.yaml"

Severity = Literal["error", "warning", "info"]


# ============================================================================
# Configuration Models
# ============================================================================


class LintConfig(BaseModel):
    """Lint rule configuration."""

    required_fields: list[str] = Field(
        default_factory=lambda: ["name", "description", "version"]
    )
    disabled_rules: list[str] = Field(default_factory=list)
    severity_overrides: dict[str, Severity] = Field(default_factory=dict)


class ApiConfig(BaseModel):
    """HTTP API configuration."""

    host: str = "127.0.0.1"
    port: int = Field(default=8000, gt=0, lt=65536)


# ============================================================================
# Main Configuration Class
# ============================================================================


class Config(BaseModel):
    """
    Main configuration for skillcorpus.

    Configuration is loaded from the corpus root:
    1. skillcorpus.yaml - Shared corpus configuration (optional)
    2. skillcorpus.local.yaml - Local overrides (optional, overrides shared)

    Pydantic defaults are used for fields not specified in either file.
    """

    root: Path
    skills_path: Path = Field(default=Path("skills"))
    logging_path: Path = Field(default=Path(".logs"))
    skill_file_suffix: str = "-skill.md"
    references_dir: str = "references"
    allowed_prefixes: list[str] = Field(default_factory=list)
    lint: LintConfig = Field(default_factory=LintConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)

    @field_validator("skill_file_suffix")
    @classmethod
    def suffix_must_be_markdown(cls, v: str) -> str:
        if not v.endswith(".md"):
            raise ValueError("skill_file_suffix must end with .md")
        return v

    @model_validator(mode="after")
    def resolve_paths(self) -> "Config":
        """Resolve relative paths to absolute using root."""
        for field_name in ("skills_path", "logging_path"):
            path = getattr(self, field_name)
            if path.is_absolute():
                raise ValueError(f"{field_name} must be relative, got: {path}")
            setattr(self, field_name, self.root / path)
        return self

    def skill_filename(self, skill_id: str) -> str:
        """Return the document file name for a skill folder name."""
        return f"{skill_id}{self.skill_file_suffix}"

    @classmethod
    def load(cls, root: Path) -> "Config":
        """
        Load configuration from a corpus root.

        Args:
            root: Corpus root directory

        Returns:
            Config instance with all settings loaded and validated

        Raises:
            FileNotFoundError: If root directory doesn't exist
            ValidationError: If configuration is invalid
        """
        if not root.is_dir():
            raise FileNotFoundError(f"Corpus root not found: {root}")

        config_data: dict[str, Any] = {"root": root}

        for config_file in (root / USER_CONFIG_FILE, root / LOCAL_CONFIG_FILE):
            if config_file.exists():
                with open(config_file, encoding="utf-8") as f:
                    file_data = yaml.safe_load(f) or {}
                config_data = cls._deep_merge(config_data, file_data)

        return cls.model_validate(config_data)

    @staticmethod
    def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """
        Deep merge override dict into base dict.

        Args:
            base: Base dictionary
            override: Override dictionary (takes precedence)

        Returns:
            Merged dictionary
        """
        result = base.copy()

        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = Config._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
