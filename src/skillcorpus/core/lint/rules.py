"""Built-in lint rules."""

import re
from typing import Iterator
from urllib.parse import unquote

from skillcorpus.core.changelog import latest_version, parse_changelog, version_key
from skillcorpus.core.lint.base import LintIssue, LintTarget, Rule
from skillcorpus.core.markdown import find_unclosed_fence, iter_prose_lines
from skillcorpus.core.skill_def import KEBAB_CASE, SEMVER, SKILL_ID
from skillcorpus.utils.config import Config

INLINE_CODE = re.compile(r"`+[^`]*`+")
LINK = re.compile(r"!?\[[^\]]*\]\(\s*<?([^)\s>]+)>?(?:\s+[\"'][^\"']*[\"'])?\s*\)")
URL_SCHEME = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*:")


class SkillFileRule(Rule):
    id = "layout/skill-file"
    description = "Every skill folder holds a {folder}-skill.md document"

    def check(self, target: LintTarget, config: Config) -> Iterator[LintIssue]:
        if target.read_error:
            yield self.issue(
                target,
                config,
                f"cannot read skill document: {target.read_error}",
                path=target.skill_file,
            )
        elif target.content is None:
            yield self.issue(
                target, config, f"missing skill document '{target.skill_file.name}'"
            )


class FolderNameRule(Rule):
    id = "layout/folder-name"
    description = "Skill folders are named {prefix}-{skill-name} in kebab-case"

    def check(self, target: LintTarget, config: Config) -> Iterator[LintIssue]:
        if not SKILL_ID.match(target.skill_id):
            yield self.issue(
                target,
                config,
                f"folder name '{target.skill_id}' is not kebab-case "
                "'{prefix}-{skill-name}'",
                path=target.skill_dir,
            )


class PrefixRule(Rule):
    id = "layout/prefix"
    severity = "warning"
    description = "Skill prefixes come from the configured list"

    def check(self, target: LintTarget, config: Config) -> Iterator[LintIssue]:
        if not config.allowed_prefixes or not SKILL_ID.match(target.skill_id):
            return
        prefix = target.skill_id.split("-", 1)[0]
        if prefix not in config.allowed_prefixes:
            yield self.issue(
                target,
                config,
                f"prefix '{prefix}' is not one of: {', '.join(config.allowed_prefixes)}",
                path=target.skill_dir,
            )


class FrontmatterParseRule(Rule):
    id = "frontmatter/parse"
    description = "Documents open with a YAML front-matter mapping"

    def check(self, target: LintTarget, config: Config) -> Iterator[LintIssue]:
        if target.content is None:
            return
        if target.frontmatter_text is None:
            yield self.issue(
                target, config, "missing '---' delimited front-matter block", line=1
            )
        elif target.frontmatter_error:
            yield self.issue(
                target,
                config,
                f"front-matter does not parse: {target.frontmatter_error}",
                line=target.frontmatter_error_line,
            )


class RequiredFieldsRule(Rule):
    id = "frontmatter/required"
    description = "Configured front-matter keys are present and non-empty"

    def check(self, target: LintTarget, config: Config) -> Iterator[LintIssue]:
        if target.frontmatter is None:
            return
        for key in config.lint.required_fields:
            value = target.frontmatter.get(key)
            if value is None or (isinstance(value, str) and not value.strip()):
                yield self.issue(target, config, f"missing required field '{key}'")


class NameMatchesFolderRule(Rule):
    id = "frontmatter/name-matches-folder"
    severity = "warning"
    description = "A kebab-case front-matter name equals the folder name"

    def check(self, target: LintTarget, config: Config) -> Iterator[LintIssue]:
        if target.parsed is None or not target.parsed.name:
            return
        name = target.parsed.name
        # Human-readable titles are allowed; only slug-style names must match
        if KEBAB_CASE.match(name) and name != target.skill_id:
            yield self.issue(
                target,
                config,
                f"name '{name}' does not match folder '{target.skill_id}'",
            )


class VersionRule(Rule):
    id = "frontmatter/version"
    severity = "warning"
    description = "version is MAJOR.MINOR.PATCH"

    def check(self, target: LintTarget, config: Config) -> Iterator[LintIssue]:
        if target.parsed is None or target.parsed.version is None:
            return
        if not SEMVER.match(target.parsed.version):
            yield self.issue(
                target,
                config,
                f"version '{target.parsed.version}' is not MAJOR.MINOR.PATCH",
            )


class SchemaRule(Rule):
    id = "frontmatter/schema"
    description = "parameters, retry_config and logging match their declared shape"

    def check(self, target: LintTarget, config: Config) -> Iterator[LintIssue]:
        for error in target.schema_errors:
            location = ".".join(str(part) for part in error.get("loc", ()))
            message = error.get("msg", "invalid value")
            yield self.issue(
                target, config, f"{location}: {message}" if location else message
            )


class EnumExamplesRule(Rule):
    id = "parameters/enum-examples"
    description = "Enum parameter defaults and examples come from the declared set"

    def check(self, target: LintTarget, config: Config) -> Iterator[LintIssue]:
        if target.parsed is None:
            return
        for param in target.parsed.parameters:
            if not param.is_enum:
                continue
            if not param.enum:
                yield self.issue(
                    target,
                    config,
                    f"parameter '{param.name}' is an enum with no declared values",
                )
                continue
            if param.default is not None and param.default not in param.enum:
                yield self.issue(
                    target,
                    config,
                    f"parameter '{param.name}' default {param.default!r} "
                    f"is not one of {param.enum!r}",
                )
            for example in param.examples:
                if example not in param.enum:
                    yield self.issue(
                        target,
                        config,
                        f"parameter '{param.name}' example {example!r} "
                        f"is not one of {param.enum!r}",
                    )


class ChangelogVersionRule(Rule):
    id = "changelog/version"
    severity = "warning"
    description = "The newest changelog entry matches the front-matter version"

    def check(self, target: LintTarget, config: Config) -> Iterator[LintIssue]:
        if target.parsed is None or not target.parsed.version:
            return
        newest = latest_version(parse_changelog(target.body))
        if newest is None:
            return
        if version_key(newest) != version_key(target.parsed.version):
            yield self.issue(
                target,
                config,
                f"changelog lists {newest} as newest but front-matter "
                f"version is {target.parsed.version}",
            )


class CodeFenceRule(Rule):
    id = "markdown/code-fence"
    description = "Fenced code blocks are closed"

    def check(self, target: LintTarget, config: Config) -> Iterator[LintIssue]:
        if target.content is None:
            return
        unclosed = find_unclosed_fence(target.body)
        if unclosed is not None:
            fence, opened_at = unclosed
            yield self.issue(
                target,
                config,
                f"code fence '{fence}' is never closed",
                line=target.body_start_line + opened_at,
            )


class LinksRule(Rule):
    id = "markdown/links"
    severity = "warning"
    description = "Relative links point at files that exist"

    def check(self, target: LintTarget, config: Config) -> Iterator[LintIssue]:
        if target.content is None:
            return
        for index, line in iter_prose_lines(target.body):
            for match in LINK.finditer(INLINE_CODE.sub("", line)):
                link = match.group(1)
                if link.startswith("#") or URL_SCHEME.match(link):
                    continue
                relative = unquote(link.split("#", 1)[0].split("?", 1)[0])
                if not relative:
                    continue
                if relative.startswith("/"):
                    resolved = config.root / relative.lstrip("/")
                else:
                    resolved = target.skill_dir / relative
                if not resolved.exists():
                    yield self.issue(
                        target,
                        config,
                        f"broken link '{link}'",
                        line=target.body_start_line + index,
                    )
