"""Shared utilities for loading front-matter definition files."""

import logging
from pathlib import Path
from typing import Any, Callable, Iterator, TypeVar

import yaml

T = TypeVar("T")
logger = logging.getLogger(__name__)

FRONTMATTER_DELIMITER = "---"


class DefNotFoundError(Exception):
    """Definition folder or file doesn't exist."""

    def __init__(self, kind: str, def_id: str):
        super().__init__(f"{kind.capitalize()} not found: {def_id}")
        self.kind = kind
        self.def_id = def_id


class InvalidDefError(Exception):
    """Definition file is malformed."""

    def __init__(self, kind: str, def_id: str, reason: str):
        super().__init__(f"Invalid {kind} '{def_id}': {reason}")
        self.kind = kind
        self.def_id = def_id
        self.reason = reason


def split_frontmatter(content: str) -> tuple[str | None, str, int]:
    """
    Split raw file content into front-matter text and body.

    Args:
        content: Raw file content

    Returns:
        Tuple of (frontmatter text or None, body, line number where body starts).
        Front-matter is None when the file doesn't open with a delimiter line
        or the closing delimiter is missing.
    """
    content = content.replace("\r\n", "\n")
    lines = content.split("\n")
    if not lines or lines[0].rstrip() != FRONTMATTER_DELIMITER:
        return None, content, 1

    for index in range(1, len(lines)):
        if lines[index].rstrip() == FRONTMATTER_DELIMITER:
            frontmatter_text = "\n".join(lines[1:index])
            body = "\n".join(lines[index + 1 :])
            return frontmatter_text, body, index + 2

    return None, content, 1


def parse_frontmatter(content: str) -> tuple[dict[str, Any], str]:
    """
    Parse YAML front-matter + markdown body.

    Args:
        content: Raw file content

    Returns:
        Tuple of (frontmatter dict, body). The dict is empty when the file
        has no front-matter block.

    Raises:
        yaml.YAMLError: If the block isn't valid YAML
        ValueError: If the block parses to something other than a mapping
    """
    frontmatter_text, body, _ = split_frontmatter(content)
    if frontmatter_text is None:
        return {}, content

    raw = yaml.safe_load(frontmatter_text)
    if raw is None:
        return {}, body
    if not isinstance(raw, dict):
        raise ValueError(
            f"front-matter must be a mapping, got {type(raw).__name__}"
        )
    return raw, body


def parse_definition(
    content: str,
    def_id: str,
    parse_fn: Callable[[str, dict[str, Any], str], T],
) -> T:
    """
    Parse YAML frontmatter + markdown body with type conversion.

    Args:
        content: Raw file content
        def_id: Definition ID (passed to parse_fn for context)
        parse_fn: Callback(def_id, frontmatter, body) -> typed object

    Returns:
        The typed object returned by parse_fn

    Raises:
        Whatever parse_fn raises (e.g., ValidationError)
    """
    frontmatter, body = parse_frontmatter(content)
    return parse_fn(def_id, frontmatter, body)


def iter_definition_dirs(
    path: Path, is_definition: Callable[[Path], bool]
) -> Iterator[Path]:
    """
    Walk a nested tree and yield definition folders in sorted order.

    Folders accepted by ``is_definition`` are yielded and not descended
    into; every other folder is treated as a grouping folder.
    """
    for child in sorted(path.iterdir()):
        if not child.is_dir() or child.name.startswith("."):
            continue
        if is_definition(child):
            yield child
        else:
            yield from iter_definition_dirs(child, is_definition)


def discover_definitions(
    path: Path,
    filename_for: Callable[[Path], str],
    parse_fn: Callable[[str, dict[str, Any], str], T | None],
) -> list[T]:
    """
    Scan a directory tree for definition files.

    Args:
        path: Directory containing definition folders (may be nested)
        filename_for: Callback(def_dir) -> name of the file to look for
        parse_fn: Callback(def_id, frontmatter, body) -> Metadata or None

    Returns:
        List of metadata objects from successful parses
    """
    if not path.exists():
        logger.warning(f"Definitions directory not found: {path}")
        return []

    results = []
    for def_dir in iter_definition_dirs(
        path, lambda d: (d / filename_for(d)).is_file()
    ):
        def_file = def_dir / filename_for(def_dir)
        try:
            content = def_file.read_text(encoding="utf-8")
            result = parse_definition(content, def_dir.name, parse_fn)
            if result is not None:
                results.append(result)
        except Exception as e:
            logger.warning(f"Failed to parse {def_dir.name}: {e}")
            continue

    return results


def write_definition(
    def_id: str,
    frontmatter: dict[str, Any],
    body: str,
    base_path: Path,
    filename: str,
) -> Path:
    """
    Write a definition file with YAML frontmatter and markdown body.

    Args:
        def_id: Definition ID (directory name)
        frontmatter: Dict of YAML frontmatter fields
        body: Markdown body content
        base_path: Base directory (e.g., skills_path)
        filename: File to write (e.g., "docker-compose-skill.md")

    Returns:
        Path to the written file
    """
    def_dir = base_path / def_id
    def_dir.mkdir(parents=True, exist_ok=True)

    yaml_content = yaml.safe_dump(
        frontmatter, default_flow_style=False, sort_keys=False, allow_unicode=True
    )
    content = f"---\n{yaml_content}---\n\n{body.strip()}\n"

    def_file = def_dir / filename
    def_file.write_text(content, encoding="utf-8")

    return def_file
