"""Markdown heading scanner.

Splits text into (heading, body) blocks. A heading is an ATX heading line
(one to six '#' followed by a space, at most three leading spaces) that is
not inside a fenced code block. Text before the first heading forms a
block whose heading is None.
"""

import re
from dataclasses import dataclass
from typing import Optional

HEADING_PATTERN = re.compile(r"^ {0,3}#{1,6}(?:[ \t]|$)")
FENCE_PATTERN = re.compile(r"^ {0,3}(`{3,}|~{3,})")
# A closing fence carries no info string
CLOSING_FENCE_PATTERN = re.compile(r"^ {0,3}(`{3,}|~{3,})[ \t]*$")


@dataclass(frozen=True)
class Block:
    """A heading line and the raw text up to the next heading.

    Attributes:
        heading: The heading line with trailing whitespace removed, or None
            for the preamble.
        body: Raw text between this heading and the next one.
    """

    heading: Optional[str]
    body: str


def is_heading(line: str) -> bool:
    """Return True if the line is an ATX markdown heading."""
    return bool(HEADING_PATTERN.match(line))


def closes_fence(line: str, fence: str) -> bool:
    """Return True if the line closes a fence opened with the given marker.

    The closing run must use the same character and be at least as long
    as the opening one.
    """
    match = CLOSING_FENCE_PATTERN.match(line)
    if not match:
        return False
    marker = match.group(1)
    return marker[0] == fence[0] and len(marker) >= len(fence)


def scan_blocks(text: str) -> list[Block]:
    """Split text into heading-delimited blocks.

    Args:
        text: Markdown text.

    Returns:
        Blocks in source order. The first block is always the preamble
        (heading None), possibly with an empty body.
    """
    blocks: list[Block] = []
    heading: Optional[str] = None
    body_lines: list[str] = []
    fence: Optional[str] = None

    for line in text.replace("\r\n", "\n").split("\n"):
        if fence is not None:
            if closes_fence(line, fence):
                fence = None
            body_lines.append(line)
            continue

        fence_match = FENCE_PATTERN.match(line)
        if fence_match:
            fence = fence_match.group(1)
            body_lines.append(line)
            continue

        if is_heading(line):
            blocks.append(Block(heading=heading, body="\n".join(body_lines)))
            heading = line.rstrip()
            body_lines = []
            continue

        body_lines.append(line)

    blocks.append(Block(heading=heading, body="\n".join(body_lines)))
    return blocks
