"""
Renderers for the two generated index documents.

- generate_short_index: curated list of the key sections (llms.txt)
- generate_full_index: every matching file, grouped by top-level directory (llms-full.txt)

Both end with a GitMCP connection section and the generation date.
"""

import os
import unicodedata
from datetime import date, datetime, timezone
from pathlib import Path

from ..config.schema import AppConfig
from ..logging.setup import get_logger
from .tree import FileDescriptor, walk

logger = get_logger(__name__)

ROOT_GROUP = "root"
README_NAME = "README.md"

PUNCTUATION_ORDER = " _-,;:!?.'\"()[]{}@*/\\&#%`^+<=>|~$"

SECTION_BLURBS: dict[str, str] = {
    "prompts": "Prompt templates and patterns.",
    "guides": "Step-by-step workflows and tool instructions.",
    "cheatsheets": "Quick reference for commands and syntax.",
}
DEFAULT_BLURB = "Documentation."


# -- Helpers -----------------------------------------------------------------


def probe_exists(path: str | Path) -> bool:
    """Return True if ``path`` can be stat'ed.

    Every OSError collapses to False, not only "does not exist": a permission
    or I/O fault reads as an absent section.
    """
    try:
        os.stat(path)
    except OSError:
        return False
    return True


def make_link(rel_path: str) -> str:
    """Normalize a relative path to forward slashes for a markdown link."""
    return rel_path.replace(os.sep, "/").replace("\\", "/")


def capitalize(name: str) -> str:
    """Uppercase the first character only."""
    return name[:1].upper() + name[1:]


def section_blurb(name: str) -> str:
    return SECTION_BLURBS.get(name, DEFAULT_BLURB)


def _strip_marks(value: str) -> str:
    return "".join(
        c for c in unicodedata.normalize("NFD", value) if not unicodedata.combining(c)
    )


def _primary_weight(char: str) -> tuple[int, int | str]:
    # Punctuation < digits < letters, punctuation in root collation order
    if char in PUNCTUATION_ORDER:
        return (0, PUNCTUATION_ORDER.index(char))
    if char.isdigit():
        return (1, char)
    return (2, char)


def collation_key(value: str) -> tuple:
    """Sort key following the root locale collation levels.

    Primary: base letters, accents and case ignored (``écoles`` sorts with ``e``).
    Secondary: accents. Tertiary: case, lowercase first (``readme`` before ``README``).
    """
    primary = tuple(_primary_weight(c) for c in _strip_marks(value).casefold())
    secondary = unicodedata.normalize("NFD", value).casefold()
    return (primary, secondary, value.swapcase())


def format_date(today: date | None = None) -> str:
    """YYYY-MM-DD for ``today``, or the current UTC date."""
    if today is None:
        today = datetime.now(timezone.utc).date()
    return today.isoformat()


def group_by_top_level(files: list[FileDescriptor]) -> dict[str, list[FileDescriptor]]:
    """Group files by first path segment; files at the root go under ``"root"``."""
    groups: dict[str, list[FileDescriptor]] = {}
    for f in files:
        parts = f.parts
        top = parts[0] if len(parts) > 1 else ROOT_GROUP
        groups.setdefault(top, []).append(f)
    return groups


# -- Short index ---------------------------------------------------------------


def generate_short_index(
    root: str | Path,
    config: AppConfig | None = None,
    today: date | None = None,
) -> str:
    """Render the short curated index.

    Args:
        root: Scan root
        config: Application config (defaults when None)
        today: Generation date embedded in the footer

    Returns:
        Markdown text ending with a newline.
    """
    config = config or AppConfig()
    root = os.fspath(root)
    project = config.project

    lines = [
        f"# {project.name}",
        "",
        project.tagline,
        project.summary,
        "",
        "## Key Sections",
    ]

    # Only sections that actually exist
    found = 0
    for section in config.index.top_sections:
        if probe_exists(os.path.join(root, section, README_NAME)):
            link = make_link(os.path.join(section, README_NAME))
            lines.append(f"- [{capitalize(section)}]({link}) — {section_blurb(section)}")
            found += 1
        else:
            logger.debug("indexer.section.missing", section=section)

    if not found:
        lines.extend(_fallback_sections(root, config))

    lines.extend([
        "",
        "## GitMCP Connection",
        f"MCP SSE URL: {config.gitmcp.endpoint_url}",
        "",
        f"Last updated: {format_date(today)}",
        "",
    ])
    return "\n".join(lines)


def _fallback_sections(root: str, config: AppConfig) -> list[str]:
    """Bare links to every top-level directory that has a README.md."""
    lines: list[str] = []
    with os.scandir(root) as entries:
        dirs = [
            e.name for e in entries
            if e.is_dir(follow_symlinks=False) and e.name not in config.index.skip_dirs
        ]
    for name in dirs:
        if probe_exists(os.path.join(root, name, README_NAME)):
            link = make_link(os.path.join(name, README_NAME))
            lines.append(f"- [{capitalize(name)}]({link})")
    logger.info("indexer.sections.fallback", sections=len(lines))
    return lines


# -- Full index ----------------------------------------------------------------


def generate_full_index(
    root: str | Path,
    config: AppConfig | None = None,
    today: date | None = None,
) -> str:
    """Render the full deep-link index.

    Walks ``root``, keeps files with an included extension and renders one
    section per top-level directory. Group keys and the files inside each
    group are sorted, so the output only depends on the tree and the date.

    Raises:
        OSError: Propagated from the tree walker
    """
    config = config or AppConfig()
    name = config.project.name
    index = config.index

    files = [
        f for f in walk(root, root, skip_dirs=index.skip_dirs)
        if f.extension in index.include_extensions
    ]
    groups = group_by_top_level(files)

    lines = [
        f"# {name} — Full AI Index",
        "",
        f"This is the extended reference index for the {name} repository, "
        "optimized for AI consumption.",
        "It lists all significant documents, deep links, and structured categories.",
        "",
        "---",
        "",
    ]

    for key in sorted(groups, key=collation_key):
        title = "Root" if key == ROOT_GROUP else capitalize(key)
        lines.append(f"## {title}")
        for f in sorted(groups[key], key=lambda f: collation_key(f.relative_path)):
            link = make_link(f.relative_path)
            lines.append(f"- [{link}]({link})")
        lines.extend(["", "---", ""])

    lines.extend([
        "## GitMCP Connection Info",
        f"- MCP SSE URL: {config.gitmcp.endpoint_url}",
        "",
        f"Last updated: {format_date(today)}",
        "",
    ])

    logger.info("indexer.full.rendered", groups=len(groups), files=len(files))
    return "\n".join(lines)
