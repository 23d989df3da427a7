"""Rule registry for managing lint rules."""

from skillcorpus.core.lint.base import Rule


class RuleRegistry:
    """Registry for lint rules, kept in registration order."""

    def __init__(self) -> None:
        self._rules: dict[str, Rule] = {}

    def register(self, rule: Rule) -> None:
        """Register a rule, replacing any rule with the same id."""
        self._rules[rule.id] = rule

    def get(self, rule_id: str) -> Rule | None:
        return self._rules.get(rule_id)

    def list_all(self) -> list[Rule]:
        return list(self._rules.values())

    @classmethod
    def with_builtins(cls) -> "RuleRegistry":
        """Create registry with built-in rules registered."""
        from skillcorpus.core.lint.rules import (
            ChangelogVersionRule,
            CodeFenceRule,
            EnumExamplesRule,
            FolderNameRule,
            FrontmatterParseRule,
            LinksRule,
            NameMatchesFolderRule,
            PrefixRule,
            RequiredFieldsRule,
            SchemaRule,
            SkillFileRule,
            VersionRule,
        )

        registry = cls()
        registry.register(SkillFileRule())
        registry.register(FolderNameRule())
        registry.register(PrefixRule())
        registry.register(FrontmatterParseRule())
        registry.register(RequiredFieldsRule())
        registry.register(NameMatchesFolderRule())
        registry.register(VersionRule())
        registry.register(SchemaRule())
        registry.register(EnumExamplesRule())
        registry.register(ChangelogVersionRule())
        registry.register(CodeFenceRule())
        registry.register(LinksRule())
        return registry
