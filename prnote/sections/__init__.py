"""PR description section handling for prnote.

This package provides:
- models: SectionName, SectionEntry, SectionMap
- scanner: Block, scan_blocks, is_heading
- extractor: extract_sections, render_sections
"""

from prnote.sections.models import SectionEntry, SectionMap, SectionName
from prnote.sections.scanner import Block, is_heading, scan_blocks
from prnote.sections.extractor import (
    extract_sections,
    render_sections,
    section_for_heading,
)


__all__ = [
    # Models
    "SectionName",
    "SectionEntry",
    "SectionMap",
    # Scanner
    "Block",
    "scan_blocks",
    "is_heading",
    # Extractor
    "extract_sections",
    "render_sections",
    "section_for_heading",
]
