"""User prompt template and instruction fragments for PR descriptions.

Every fragment is fixed text. The template builder decides which
fragments apply from typed flags; nothing here is conditional.
"""

USER_PROMPT_TEMPLATE = """Generate a GitHub pull request description based on the following details.

[BRANCH]
{branch}

[EXISTING_DESCRIPTION]
{existing_description}

[COMMITS]
{commits}

[FILE_CHANGES]
{file_changes}

[DIFF]
{diff}

[TEMPLATE]
{template}

[INSTRUCTIONS]
{instructions}"""

NO_EXISTING_DESCRIPTION = "(No existing description)"
NO_COMMITS = "(no commits)"
NO_FILE_CHANGES = "(no files)"
NO_DIFF = "(Diff unavailable)"

# Always applied
BASE_INSTRUCTIONS = (
    "Format the description using the [TEMPLATE] sections, in the same order, with the headings exactly as written.",
    "Replace every <!-- ... --> placeholder comment with real content.",
    "Do not add sections that are not in the template.",
)

# Applied once per section that already existed; {heading} is the heading line
PRESERVE_SECTION = (
    "The '{heading}' section already exists. Preserve its content and enhance it "
    "with anything new from the changes; do not replace or shorten it."
)

# Applied when the Changes section already existed
APPEND_CHANGES = (
    "In '## Changes', keep every existing item and append new changes as additional "
    "entries after them; do not overwrite or reorder existing items."
)

# Applied when the API section is included because the changes look API-related
API_RELEVANT = (
    "Include the '## API' section: describe added, changed or removed endpoints and their "
    "request/response shapes, but only if the changes actually touch an API."
)

# Applied when the API section is included only because it already existed
API_KEEP_EXISTING = (
    "Keep the existing '## API' section. Update it only if these changes affect the API."
)

# Applied when no API heading existed and nothing looked API-related
API_OMIT = "Do not include an '## API' section; these changes do not touch an API."

# Applied instead of API_OMIT when the diff is truncated or missing
API_IF_EVIDENCED = (
    "Include an '## API' section only if the commit messages or file list show API changes. "
    "The diff is incomplete, so its silence is not evidence either way."
)

TICKET_KEEP = "Keep the '## Ticket' section exactly as given in the template."

TICKET_OMIT = "Do not include a '## Ticket' section."

DIFF_TRUNCATED = (
    "The diff was truncated. Use the commit messages and file list for the parts it does not "
    "show, and do not conclude that something is unchanged because it is missing from the diff."
)

PRESERVE_FREE_TEXT = (
    "The existing description contains text outside the template sections. Keep that text "
    "verbatim above the first section."
)
