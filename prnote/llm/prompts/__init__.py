"""LLM prompt templates for PR description generation.

This package contains:
- system: The shared system prompt for all providers
- description: The user prompt template and its instruction fragments
"""

from prnote.llm.prompts.system import SYSTEM_PROMPT
from prnote.llm.prompts.description import (
    API_KEEP_EXISTING,
    API_IF_EVIDENCED,
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
    TICKET_KEEP,
    TICKET_OMIT,
    USER_PROMPT_TEMPLATE,
)


__all__ = [
    "SYSTEM_PROMPT",
    "USER_PROMPT_TEMPLATE",
    "BASE_INSTRUCTIONS",
    "PRESERVE_SECTION",
    "APPEND_CHANGES",
    "API_RELEVANT",
    "API_KEEP_EXISTING",
    "API_OMIT",
    "API_IF_EVIDENCED",
    "TICKET_KEEP",
    "TICKET_OMIT",
    "DIFF_TRUNCATED",
    "PRESERVE_FREE_TEXT",
    "NO_EXISTING_DESCRIPTION",
    "NO_COMMITS",
    "NO_FILE_CHANGES",
    "NO_DIFF",
]
