"""Tests for prnote.github.client module."""

import json

import httpx
import pytest

from prnote.github import FileChange, GitHubClient, GitHubError, PublishError
from prnote.github.client import DIFF_MEDIA_TYPE, PER_PAGE


def _client(handler):
    return GitHubClient("ghp_test", transport=httpx.MockTransport(handler))


class TestGitHubClientReads:
    """Tests for GitHubClient read operations."""

    def test_sends_auth_header(self):
        """Test that the token is sent as a bearer token."""
        seen = {}

        def handler(request):
            seen["auth"] = request.headers["Authorization"]
            return httpx.Response(200, json={"number": 42, "body": "hi"})

        with _client(handler) as client:
            client.get_pull_request("acme", "widgets", 42)

        assert seen["auth"] == "Bearer ghp_test"

    def test_get_pull_request(self):
        """Test fetching the PR record."""

        def handler(request):
            assert request.url.path == "/repos/acme/widgets/pulls/42"
            return httpx.Response(200, json={"number": 42, "body": "Some notes"})

        with _client(handler) as client:
            pr = client.get_pull_request("acme", "widgets", 42)

        assert pr["body"] == "Some notes"

    def test_list_commit_messages(self):
        """Test listing commit messages."""

        def handler(request):
            assert request.url.path == "/repos/acme/widgets/pulls/42/commits"
            return httpx.Response(
                200,
                json=[
                    {"commit": {"message": "Add login"}},
                    {"commit": {"message": "Fix typo"}},
                ],
            )

        with _client(handler) as client:
            messages = client.list_commit_messages("acme", "widgets", 42)

        assert messages == ["Add login", "Fix typo"]

    def test_list_files(self):
        """Test listing changed files."""

        def handler(request):
            return httpx.Response(
                200,
                json=[
                    {"filename": "src/routes/user.js", "status": "added"},
                    {"filename": "README.md", "status": "modified"},
                ],
            )

        with _client(handler) as client:
            files = client.list_files("acme", "widgets", 42)

        assert files == [
            FileChange(path="src/routes/user.js", status="added"),
            FileChange(path="README.md", status="modified"),
        ]

    def test_paginates(self):
        """Test that full pages trigger a request for the next page."""
        pages = []

        def handler(request):
            page = int(request.url.params["page"])
            pages.append(page)
            count = PER_PAGE if page == 1 else 3
            return httpx.Response(
                200,
                json=[{"filename": f"f{page}_{i}.py", "status": "added"} for i in range(count)],
            )

        with _client(handler) as client:
            files = client.list_files("acme", "widgets", 42)

        assert pages == [1, 2]
        assert len(files) == PER_PAGE + 3

    def test_get_diff_uses_diff_media_type(self):
        """Test that the diff is requested with the diff media type."""

        def handler(request):
            assert request.headers["Accept"] == DIFF_MEDIA_TYPE
            return httpx.Response(200, text="diff --git a/x b/x")

        with _client(handler) as client:
            diff = client.get_diff("acme", "widgets", 42)

        assert diff == "diff --git a/x b/x"

    def test_http_error_raises_github_error(self):
        """Test that an error status becomes GitHubError with the API message."""

        def handler(request):
            return httpx.Response(404, json={"message": "Not Found"})

        with _client(handler) as client:
            with pytest.raises(GitHubError) as exc_info:
                client.get_pull_request("acme", "widgets", 42)

        assert exc_info.value.status_code == 404
        assert "Not Found" in str(exc_info.value)

    def test_transport_error_raises_github_error(self):
        """Test that connection failures become GitHubError."""

        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with _client(handler) as client:
            with pytest.raises(GitHubError) as exc_info:
                client.get_diff("acme", "widgets", 42)

        assert exc_info.value.status_code is None


class TestGitHubClientUpdate:
    """Tests for GitHubClient.update_pull_request_body."""

    def test_sends_body(self):
        """Test that the new body is sent with PATCH."""
        seen = {}

        def handler(request):
            seen["method"] = request.method
            seen["payload"] = json.loads(request.content)
            return httpx.Response(200, json={"number": 42})

        with _client(handler) as client:
            client.update_pull_request_body("acme", "widgets", 42, "## Description\nfoo")

        assert seen["method"] == "PATCH"
        assert seen["payload"] == {"body": "## Description\nfoo"}

    def test_rejection_raises_publish_error(self):
        """Test that a rejected update raises PublishError."""

        def handler(request):
            return httpx.Response(403, json={"message": "Resource not accessible by integration"})

        with _client(handler) as client:
            with pytest.raises(PublishError) as exc_info:
                client.update_pull_request_body("acme", "widgets", 42, "x")

        assert exc_info.value.status_code == 403
