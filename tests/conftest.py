"""Shared test fixtures and configuration."""

import pytest

from prnote.config import Settings
from prnote.github.models import FileChange, PullRequestContext
from prnote.llm.base import BaseLLMProvider, LLMResult


@pytest.fixture
def settings():
    """Run settings with default policies."""
    return Settings(
        owner="acme",
        repo="widgets",
        pr_number=42,
        branch_name="feature/CDB-1234-fix",
        github_token="ghp_test",
        llm_api_key="sk-test",
    )


@pytest.fixture
def sample_diff():
    """Small unified diff with no API-related content."""
    return """diff --git a/lib/util.py b/lib/util.py
index 1234567..abcdefg 100644
--- a/lib/util.py
+++ b/lib/util.py
@@ -1,5 +1,8 @@
 def main():
-    print("old")
+    print("new")
+
+def helper():
+    return True
"""


@pytest.fixture
def make_context(sample_diff):
    """Factory for PullRequestContext with overridable fields."""

    def _make(**overrides):
        values = dict(
            owner="acme",
            repo="widgets",
            number=42,
            branch_name="feature/CDB-1234-fix",
            commit_messages=("Fix rounding in totals", "Add helper"),
            file_changes=(
                FileChange(path="lib/util.py", status="modified"),
                FileChange(path="README.md", status="modified"),
            ),
            diff=sample_diff,
            diff_truncated=False,
            existing_body="",
        )
        values.update(overrides)
        return PullRequestContext(**values)

    return _make


class FakeProvider(BaseLLMProvider):
    """Provider returning a canned response."""

    display_name = "Fake"

    def __init__(self, response="## Description\nGenerated"):
        super().__init__(api_key="sk-test", model="fake-model", max_tokens=100, temperature=0.0)
        self.response = response
        self.requests = []

    def complete(self, request):
        self.requests.append(request)
        return LLMResult(text=self.response, model=self.model, input_tokens=10, output_tokens=5)


@pytest.fixture
def fake_provider():
    """LLM provider stub returning a structured description."""
    return FakeProvider()


@pytest.fixture
def make_provider():
    """Factory for FakeProvider with a given response."""
    return FakeProvider
