"""Reconciliation of generated text with the existing PR description.

One of three outcomes is chosen per run:
- REPLACE: the description already had known headings, so the prompt asked
  the model to merge into them and its output is used as is.
- PREPEND_EXISTING: the description is free-form text; it is kept on top,
  followed by a separator and the generated text.
- PASS_THROUGH: there was no description; the generated text is used as is.

With the marker enabled, the prepended block is tagged with a hidden HTML
comment so a later run can drop the previous generated block instead of
stacking another one below it.
"""

from dataclasses import dataclass
from enum import Enum

from prnote.llm.exceptions import EmptyGenerationError
from prnote.sections import SectionMap

SEPARATOR = "\n\n---\n\n"
GENERATED_MARKER = "<!-- prnote:generated -->"


class ReconciliationDecision(Enum):
    """How the generated text is combined with the existing description."""

    REPLACE = "replace"
    PREPEND_EXISTING = "prepend-existing"
    PASS_THROUGH = "pass-through"


@dataclass(frozen=True)
class Reconciliation:
    """The chosen outcome and the description to publish."""

    decision: ReconciliationDecision
    body: str


def strip_generated_block(body: str) -> str:
    """Remove a previously generated, marker-tagged block from a description.

    Args:
        body: The existing description.

    Returns:
        The text before the last marked block, or the trimmed body when no
        marker is found. Line endings are normalized to LF.
    """
    body = (body or "").replace("\r\n", "\n").strip()
    if body.startswith(GENERATED_MARKER):
        return ""
    index = body.rfind(SEPARATOR + GENERATED_MARKER)
    if index == -1:
        return body
    return body[:index].rstrip()


def decide(existing_body: str, section_map: SectionMap) -> ReconciliationDecision:
    """Choose how to combine generated text with the existing description.

    Args:
        existing_body: The existing description.
        section_map: Sections extracted from existing_body.

    Returns:
        The ReconciliationDecision.
    """
    if section_map.has_known_heading:
        return ReconciliationDecision.REPLACE
    if not (existing_body or "").strip():
        return ReconciliationDecision.PASS_THROUGH
    return ReconciliationDecision.PREPEND_EXISTING


def reconcile(
    existing_body: str,
    generated: str,
    section_map: SectionMap,
    use_marker: bool = False,
) -> Reconciliation:
    """Combine the generated text with the existing description.

    Args:
        existing_body: The existing description.
        generated: Text returned by the model.
        section_map: Sections extracted from existing_body.
        use_marker: Tag prepended output with GENERATED_MARKER.

    Returns:
        The Reconciliation holding the decision and the final description.

    Raises:
        EmptyGenerationError: If generated is empty after trimming.
    """
    generated = (generated or "").strip()
    if not generated:
        raise EmptyGenerationError("Generated description is empty; refusing to publish.")

    existing = (existing_body or "").strip()
    decision = decide(existing, section_map)

    if decision == ReconciliationDecision.PREPEND_EXISTING:
        block = f"{GENERATED_MARKER}\n{generated}" if use_marker else generated
        return Reconciliation(decision=decision, body=f"{existing}{SEPARATOR}{block}")

    return Reconciliation(decision=decision, body=generated)
