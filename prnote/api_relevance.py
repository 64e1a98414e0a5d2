"""Heuristic detection of API-related changes.

Decides whether a pull request should carry an API section. This is a
textual heuristic over paths and diff text, not a parse: it errs on the
side of reporting API changes. A truncated diff is only partial evidence,
so a negative result never means the change is API-free.
"""

import re

from prnote.github.models import PullRequestContext

# Substrings of a lowercased path that point at an API surface
API_PATH_MARKERS = (
    "api",
    "route",
    "controller",
    "endpoint",
    "openapi",
    "swagger",
    "graphql",
)

_HTTP_METHODS = r"(?:get|post|put|patch|delete|head|options|all)"

# Framework calls that define or invoke HTTP endpoints
API_DIFF_SIGNATURES = (
    # Express / Koa / Fastify style routing
    re.compile(rf"\b(?:app|router|server|api)\.{_HTTP_METHODS}\s*\(", re.IGNORECASE),
    re.compile(r"\b(?:app|router)\.(?:use|route)\s*\("),
    # Flask / FastAPI decorators
    re.compile(rf"@(?:\w+\.)?(?:route|{_HTTP_METHODS})\s*\(", re.IGNORECASE),
    # Spring / NestJS annotations
    re.compile(r"@(?:Request|Get|Post|Put|Patch|Delete)Mapping\b"),
    re.compile(r"@(?:Controller|Get|Post|Put|Patch|Delete)\s*\("),
    # HTTP clients
    re.compile(r"\bfetch\s*\("),
    re.compile(r"\baxios(?:\.\w+)?\s*\("),
    re.compile(rf"\b(?:requests|httpx)\.{_HTTP_METHODS}\s*\(", re.IGNORECASE),
    re.compile(r"\bhttp\.(?:Get|Post|NewRequest|HandleFunc)\s*\("),
)


def path_signals(paths: list[str]) -> list[str]:
    """Return the paths that look like API surfaces."""
    hits = []
    for path in paths:
        lowered = path.lower()
        if any(marker in lowered for marker in API_PATH_MARKERS):
            hits.append(path)
    return hits


def diff_signals(diff: str) -> list[str]:
    """Return the first match of every API signature found in the diff."""
    if not diff:
        return []
    hits = []
    for signature in API_DIFF_SIGNATURES:
        match = signature.search(diff)
        if match:
            hits.append(match.group(0))
    return hits


def detect_api_signals(context: PullRequestContext) -> list[str]:
    """Collect every reason the pull request looks API-related."""
    paths = [change.path for change in context.file_changes]
    return [f"path: {p}" for p in path_signals(paths)] + [f"diff: {s}" for s in diff_signals(context.diff)]
