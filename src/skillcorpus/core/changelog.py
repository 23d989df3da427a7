"""Extract changelog tables from skill document bodies."""

import re

from skillcorpus.core.markdown import iter_prose_lines
from skillcorpus.core.skill_def import ChangelogEntry

TABLE_SEPARATOR = re.compile(r"^\s*\|?\s*:?-{3,}:?\s*(\|\s*:?-{3,}:?\s*)*\|?\s*$")

COLUMN_ALIASES = {
    "version": "version",
    "ver": "version",
    "date": "date",
    "released": "date",
    "changes": "changes",
    "change": "changes",
    "description": "changes",
    "notes": "changes",
    "summary": "changes",
    "author": "author",
    "by": "author",
}


def _split_row(line: str) -> list[str]:
    row = line.strip()
    if row.startswith("|"):
        row = row[1:]
    if row.endswith("|"):
        row = row[:-1]
    return [cell.strip() for cell in row.split("|")]


def _clean_version(cell: str) -> str:
    version = cell.strip().strip("`*_ ")
    if version[:1] in ("v", "V") and version[1:2].isdigit():
        version = version[1:]
    return version


def iter_tables(body: str) -> list[list[list[str]]]:
    """Return every Markdown table in the body as a list of rows (header first)."""
    tables: list[list[list[str]]] = []
    # Lines inside fenced code blocks stay None
    lines: list[str | None] = [None] * len(body.splitlines())
    for prose_index, prose in iter_prose_lines(body):
        lines[prose_index] = prose
    index = 0

    while index < len(lines):
        line = lines[index]
        following = lines[index + 1] if index + 1 < len(lines) else None
        if line is None or "|" not in line or not (
            following is not None and TABLE_SEPARATOR.match(following)
        ):
            index += 1
            continue

        rows = [_split_row(line)]
        index += 2
        while index < len(lines):
            row = lines[index]
            if row is None or "|" not in row or not row.strip():
                break
            rows.append(_split_row(row))
            index += 1
        tables.append(rows)

    return tables


def parse_changelog(body: str) -> list[ChangelogEntry]:
    """
    Parse the first table whose header has a Version column.

    Args:
        body: Markdown body of a skill document

    Returns:
        Changelog entries in table order; empty if there is no such table
    """
    for rows in iter_tables(body):
        header = [COLUMN_ALIASES.get(cell.lower().strip("*_ ")) for cell in rows[0]]
        if "version" not in header:
            continue

        entries = []
        for row in rows[1:]:
            fields: dict[str, str] = {}
            for column, cell in zip(header, row):
                if column and column not in fields:
                    fields[column] = cell
            version = _clean_version(fields.get("version", ""))
            if not version:
                continue
            entries.append(
                ChangelogEntry(
                    version=version,
                    date=fields.get("date") or None,
                    changes=fields.get("changes", ""),
                    author=fields.get("author") or None,
                )
            )
        return entries

    return []


def version_key(version: str) -> tuple[tuple[int, ...], int, str]:
    """
    Sort key for dotted versions.

    A release sorts after its own pre-releases (``1.0.0-beta`` < ``1.0.0``).
    Pre-release tags compare as text and build metadata is ignored.
    """
    core, _, prerelease = version.split("+", 1)[0].partition("-")
    numbers = tuple(int(part) for part in re.findall(r"\d+", core))
    return numbers, 0 if prerelease else 1, prerelease


def latest_version(entries: list[ChangelogEntry]) -> str | None:
    """Return the highest version listed in the changelog."""
    if not entries:
        return None
    return max(entries, key=lambda e: version_key(e.version)).version
