"""Section extraction from PR descriptions.

Heading matching is case-sensitive and requires the exact '## ' prefix:
'## Changes' is the Changes section, '## changes' and '### Changes' are
not. When a heading appears more than once, the first occurrence wins.
A section body runs to the next heading of any level.
"""

from typing import Iterable, Optional

from prnote.sections.models import SectionEntry, SectionMap, SectionName
from prnote.sections.scanner import Block, scan_blocks

_HEADINGS = {name.heading: name for name in SectionName}


def section_for_heading(heading: Optional[str]) -> Optional[SectionName]:
    """Return the known section for a heading line, if any."""
    if heading is None:
        return None
    return _HEADINGS.get(heading.rstrip())


def _sections_from_blocks(blocks: list[Block]) -> SectionMap:
    entries: dict[SectionName, SectionEntry] = {}
    has_free_text = False

    for block in blocks:
        name = section_for_heading(block.heading)
        if name is None:
            # Preamble text or an unknown heading
            if block.heading is not None or block.body.strip():
                has_free_text = True
            continue
        if name in entries:
            continue
        entries[name] = SectionEntry(present=True, content=block.body.strip())

    return SectionMap(entries=entries, has_free_text=has_free_text)


def extract_sections(body: str) -> SectionMap:
    """Extract the known sections from a description.

    Args:
        body: The pull request description (may be empty).

    Returns:
        A SectionMap. Every name is not present when no known heading exists.
    """
    return _sections_from_blocks(scan_blocks(body or ""))


def render_sections(section_map: SectionMap, order: Optional[Iterable[SectionName]] = None) -> str:
    """Render the present sections back to markdown.

    Args:
        section_map: Sections to render.
        order: Section order. Defaults to declaration order.

    Returns:
        '## Name' blocks separated by blank lines. Only present sections
        are rendered.
    """
    names = list(order) if order is not None else list(SectionName)
    parts = []
    for name in names:
        if not section_map.is_present(name):
            continue
        content = section_map.content(name)
        parts.append(f"{name.heading}\n{content}" if content else name.heading)
    return "\n\n".join(parts)
