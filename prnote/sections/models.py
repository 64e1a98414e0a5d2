"""Data models for PR description sections.

Contains:
- SectionName: The closed set of section headings prnote understands
- SectionEntry: Content of one section plus whether its heading existed
- SectionMap: Result of extracting sections from a description
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping


class SectionName(Enum):
    """Known description sections. The value is the literal heading text."""

    DESCRIPTION = "Description"
    CHANGES = "Changes"
    TEST = "Test"
    API = "API"
    TICKET = "Ticket"

    @property
    def heading(self) -> str:
        """The markdown heading line for this section."""
        return f"## {self.value}"


@dataclass(frozen=True)
class SectionEntry:
    """One section of a description.

    Attributes:
        present: Whether the heading existed in the source text.
        content: Trimmed text under the heading (may be empty).
    """

    present: bool = False
    content: str = ""


@dataclass(frozen=True)
class SectionMap:
    """Known sections extracted from a description.

    A name that is absent from entries is reported as not present with
    empty content; that is the only way a section can be not present.

    Attributes:
        entries: Sections whose heading was found.
        has_free_text: Whether the source held text outside the known
            sections (a preamble or an unknown heading).
    """

    entries: Mapping[SectionName, SectionEntry] = field(default_factory=dict)
    has_free_text: bool = False

    def __getitem__(self, name: SectionName) -> SectionEntry:
        return self.entries.get(name, SectionEntry())

    def is_present(self, name: SectionName) -> bool:
        """Return True if the heading for name was found."""
        return self[name].present

    def content(self, name: SectionName) -> str:
        """Return the content for name, empty if absent."""
        return self[name].content

    def present_names(self) -> list[SectionName]:
        """Names whose heading was found, in declaration order."""
        return [name for name in SectionName if self.is_present(name)]

    @property
    def has_known_heading(self) -> bool:
        """Whether any recognized heading was found."""
        return any(entry.present for entry in self.entries.values())
