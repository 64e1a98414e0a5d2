"""Template building for PR description generation.

Decides which sections the output carries, seeds them with prior content,
and turns typed flags into the merge instructions handed to the model.

Contains:
- SKELETON_ORDER / PLACEHOLDERS: Section layout of the output
- Skeleton, build_skeleton: The seeded section skeleton
- InstructionFlags, build_instructions: Merge instructions from typed flags
- build_generation_request: Assemble the full GenerationRequest
"""

from dataclasses import dataclass
from typing import Optional

from prnote.github.models import PullRequestContext
from prnote.llm.base import GenerationRequest
from prnote.llm.prompts import (
    API_IF_EVIDENCED,
    API_KEEP_EXISTING,
    API_OMIT,
    API_RELEVANT,
    APPEND_CHANGES,
    BASE_INSTRUCTIONS,
    DIFF_TRUNCATED,
    NO_COMMITS,
    NO_DIFF,
    NO_EXISTING_DESCRIPTION,
    NO_FILE_CHANGES,
    PRESERVE_FREE_TEXT,
    PRESERVE_SECTION,
    SYSTEM_PROMPT,
    TICKET_KEEP,
    TICKET_OMIT,
    USER_PROMPT_TEMPLATE,
)
from prnote.sections import SectionEntry, SectionMap, SectionName, render_sections
from prnote.ticket import TicketInfo

SKELETON_ORDER = (
    SectionName.DESCRIPTION,
    SectionName.CHANGES,
    SectionName.API,
    SectionName.TEST,
    SectionName.TICKET,
)

PLACEHOLDERS = {
    SectionName.DESCRIPTION: "<!-- Replace this line to describe what this PR does -->",
    SectionName.CHANGES: "<!-- Replace this line to list changes -->",
    SectionName.API: "<!-- Replace this line to describe API changes (endpoints, request/response shapes) -->",
    SectionName.TEST: "<!-- Replace this line to explain how to test -->",
}


@dataclass(frozen=True)
class Skeleton:
    """The target sections of the output, in order, with their seed content.

    Attributes:
        order: Included sections in output order.
        sections: Seed content per included section (all marked present).
        seeded: Sections whose seed is prior content rather than a placeholder.
    """

    order: tuple[SectionName, ...]
    sections: SectionMap
    seeded: frozenset[SectionName]

    def includes(self, name: SectionName) -> bool:
        """Return True if the section is part of the output."""
        return name in self.order

    def render(self) -> str:
        """Render the skeleton as markdown."""
        return render_sections(self.sections, self.order)


def include_api_section(section_map: SectionMap, api_relevant: bool) -> bool:
    """The API section is kept when it already existed or the changes look API-related."""
    return section_map.is_present(SectionName.API) or api_relevant


def include_ticket_section(section_map: SectionMap, ticket: Optional[TicketInfo]) -> bool:
    """The Ticket section is kept when it already existed or a ticket was resolved."""
    return section_map.is_present(SectionName.TICKET) or ticket is not None


def build_skeleton(
    section_map: SectionMap,
    api_relevant: bool,
    ticket: Optional[TicketInfo],
) -> Skeleton:
    """Build the section skeleton for the output.

    Order is Description, Changes, [API], Test, [Ticket]. API is included
    if its heading existed or the changes look API-related. Ticket is
    included if its heading existed or a ticket was resolved.

    Args:
        section_map: Sections extracted from the existing description.
        api_relevant: Result of the API-relevance heuristic.
        ticket: Resolved ticket, if any.

    Returns:
        The Skeleton, seeded with prior content where the section existed.
    """
    order = []
    entries: dict[SectionName, SectionEntry] = {}
    seeded = set()

    for name in SKELETON_ORDER:
        if name == SectionName.API and not include_api_section(section_map, api_relevant):
            continue
        if name == SectionName.TICKET and not include_ticket_section(section_map, ticket):
            continue

        order.append(name)
        if section_map.is_present(name):
            content = section_map.content(name)
            seeded.add(name)
        elif name == SectionName.TICKET:
            content = ticket.as_markdown()
        else:
            content = PLACEHOLDERS[name]
        entries[name] = SectionEntry(present=True, content=content)

    return Skeleton(
        order=tuple(order),
        sections=SectionMap(entries=entries),
        seeded=frozenset(seeded),
    )


@dataclass(frozen=True)
class InstructionFlags:
    """Typed switches that select the merge instructions.

    Attributes:
        preserved: Included sections that already existed in the description.
        include_api: Whether the API section is part of the output.
        api_heading_existed: Whether the description already had an API heading.
        api_relevant: Whether the API heuristic fired.
        include_ticket: Whether the Ticket section is part of the output.
        diff_truncated: Whether the diff shown to the model was cut.
        diff_incomplete: Whether the diff was cut or is missing entirely.
        keep_free_text: Whether structured descriptions also carry free text
            outside the known sections.
    """

    preserved: frozenset[SectionName] = frozenset()
    include_api: bool = False
    api_heading_existed: bool = False
    api_relevant: bool = False
    include_ticket: bool = False
    diff_truncated: bool = False
    diff_incomplete: bool = False
    keep_free_text: bool = False

    @classmethod
    def from_state(
        cls,
        skeleton: Skeleton,
        section_map: SectionMap,
        api_relevant: bool,
        diff_truncated: bool,
        diff_missing: bool = False,
    ) -> "InstructionFlags":
        """Derive the flags from the skeleton and the extracted sections."""
        return cls(
            preserved=skeleton.seeded,
            include_api=skeleton.includes(SectionName.API),
            api_heading_existed=section_map.is_present(SectionName.API),
            api_relevant=api_relevant,
            include_ticket=skeleton.includes(SectionName.TICKET),
            diff_truncated=diff_truncated,
            diff_incomplete=diff_truncated or diff_missing,
            keep_free_text=section_map.has_known_heading and section_map.has_free_text,
        )


def build_instructions(flags: InstructionFlags) -> list[str]:
    """Select the merge instructions for a set of flags.

    Args:
        flags: Typed instruction switches.

    Returns:
        Instruction fragments in a fixed order.
    """
    instructions = list(BASE_INSTRUCTIONS)

    for name in SKELETON_ORDER:
        if name in flags.preserved:
            instructions.append(PRESERVE_SECTION.format(heading=name.heading))

    if SectionName.CHANGES in flags.preserved:
        instructions.append(APPEND_CHANGES)

    if not flags.include_api:
        instructions.append(API_IF_EVIDENCED if flags.diff_incomplete else API_OMIT)
    elif flags.api_relevant:
        instructions.append(API_RELEVANT)
    elif flags.api_heading_existed:
        instructions.append(API_KEEP_EXISTING)

    instructions.append(TICKET_KEEP if flags.include_ticket else TICKET_OMIT)

    if flags.keep_free_text:
        instructions.append(PRESERVE_FREE_TEXT)

    if flags.diff_truncated:
        instructions.append(DIFF_TRUNCATED)

    return instructions


def _bullets(items: list[str], empty: str) -> str:
    return "\n".join(f"- {item}" for item in items) if items else empty


def build_generation_request(
    context: PullRequestContext,
    section_map: SectionMap,
    api_relevant: bool,
    ticket: Optional[TicketInfo],
) -> GenerationRequest:
    """Assemble the prompt for the model.

    Args:
        context: The pull request snapshot.
        section_map: Sections extracted from the existing description.
        api_relevant: Result of the API-relevance heuristic.
        ticket: Resolved ticket, if any.

    Returns:
        The GenerationRequest. It depends only on the arguments.
    """
    skeleton = build_skeleton(section_map, api_relevant, ticket)
    flags = InstructionFlags.from_state(
        skeleton,
        section_map,
        api_relevant,
        context.diff_truncated,
        diff_missing=not context.diff,
    )
    instructions = build_instructions(flags)

    commits = _bullets([m.strip() for m in context.commit_messages], NO_COMMITS)
    file_changes = _bullets([f"{f.path} ({f.status})" for f in context.file_changes], NO_FILE_CHANGES)

    prompt = USER_PROMPT_TEMPLATE.format(
        branch=context.branch_name,
        existing_description=context.existing_body or NO_EXISTING_DESCRIPTION,
        commits=commits,
        file_changes=file_changes,
        diff=context.diff or NO_DIFF,
        template=skeleton.render(),
        instructions=_bullets(instructions, ""),
    )

    return GenerationRequest(
        prompt=prompt,
        instructions=tuple(instructions),
        system_prompt=SYSTEM_PROMPT,
    )
