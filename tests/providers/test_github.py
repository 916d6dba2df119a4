"""Tests for GitHubIssue using pytest-httpx."""

import json

import httpx
import pytest
from pytest_httpx import HTTPXMock

from menta.errors import FetchError, PostError
from menta.models import Comment, IssueSnapshot
from menta.providers.github import BASE_URL, GitHubIssue

_ISSUE_URL = f"{BASE_URL}/repos/3-shake/alert-menta/issues/42"
_COMMENTS_URL = f"{_ISSUE_URL}/comments?per_page=100"

_ISSUE_NODE = {
    "id": 987654321,
    "number": 42,
    "title": "Fix null check",
    "body": "Null pointer in logout handler.",
    "html_url": "https://github.com/3-shake/alert-menta/issues/42",
    "state": "open",
}


def _issue() -> GitHubIssue:
    return GitHubIssue("3-shake", "alert-menta", 42, "ghp_test")


class TestGetSnapshot:
    def test_title_body_and_comments(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(url=_ISSUE_URL, json=_ISSUE_NODE)
        httpx_mock.add_response(
            url=_COMMENTS_URL,
            json=[
                {"user": {"login": "alice"}, "body": "Looks good to me."},
                {"user": {"login": "github-actions[bot]"}, "body": "auto"},
            ],
        )
        snapshot = _issue().get_snapshot()

        assert isinstance(snapshot, IssueSnapshot)
        assert snapshot.title == "Fix null check"
        assert snapshot.body == "Null pointer in logout handler."
        # Filtering happens in prompt assembly, not here.
        assert snapshot.comments == [
            Comment(login="alice", body="Looks good to me."),
            Comment(login="github-actions[bot]", body="auto"),
        ]

    def test_null_body_becomes_empty(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(url=_ISSUE_URL, json={**_ISSUE_NODE, "body": None})
        httpx_mock.add_response(url=_COMMENTS_URL, json=[{"user": {"login": "bob"}, "body": None}])
        snapshot = _issue().get_snapshot()
        assert snapshot.body == ""
        assert snapshot.comments == [Comment(login="bob", body="")]

    def test_follows_pagination(self, httpx_mock: HTTPXMock) -> None:
        page2 = f"{_ISSUE_URL}/comments?per_page=100&page=2"
        httpx_mock.add_response(url=_ISSUE_URL, json=_ISSUE_NODE)
        httpx_mock.add_response(
            url=_COMMENTS_URL,
            json=[{"user": {"login": "alice"}, "body": "one"}],
            headers={"Link": f'<{page2}>; rel="next", <{page2}>; rel="last"'},
        )
        httpx_mock.add_response(url=page2, json=[{"user": {"login": "bob"}, "body": "two"}])

        snapshot = _issue().get_snapshot()
        assert [c.body for c in snapshot.comments] == ["one", "two"]
        assert [str(r.url) for r in httpx_mock.get_requests()][1:] == [_COMMENTS_URL, page2]

    def test_null_login_becomes_empty(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(url=_ISSUE_URL, json=_ISSUE_NODE)
        httpx_mock.add_response(
            url=_COMMENTS_URL,
            json=[{"user": {"login": None}, "body": "ghost"}, {"user": None, "body": "gone"}],
        )
        snapshot = _issue().get_snapshot()
        assert snapshot.comments == [Comment(login="", body="ghost"), Comment(login="", body="gone")]

    def test_non_json_issue_raises_fetch_error(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(url=_ISSUE_URL, text="<html>proxy error</html>")
        with pytest.raises(FetchError, match="non-JSON"):
            _issue().get_snapshot()

    def test_non_json_comments_raises_fetch_error(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(url=_ISSUE_URL, json=_ISSUE_NODE)
        httpx_mock.add_response(url=_COMMENTS_URL, text="<html>")
        with pytest.raises(FetchError, match="non-JSON"):
            _issue().get_snapshot()

    def test_sends_auth_headers(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(url=_ISSUE_URL, json=_ISSUE_NODE)
        httpx_mock.add_response(url=_COMMENTS_URL, json=[])
        _issue().get_snapshot()

        request = httpx_mock.get_requests()[0]
        assert request.headers["Authorization"] == "Bearer ghp_test"
        assert request.headers["Accept"] == "application/vnd.github+json"

    def test_401_raises_fetch_error(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(url=_ISSUE_URL, status_code=401, json={"message": "Bad credentials"})
        with pytest.raises(FetchError, match="401"):
            _issue().get_snapshot()

    def test_404_raises_fetch_error(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(url=_ISSUE_URL, status_code=404, json={"message": "Not Found"})
        with pytest.raises(FetchError, match="404"):
            _issue().get_snapshot()

    def test_comment_failure_raises_fetch_error(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(url=_ISSUE_URL, json=_ISSUE_NODE)
        httpx_mock.add_response(url=_COMMENTS_URL, status_code=500)
        with pytest.raises(FetchError, match="500"):
            _issue().get_snapshot()

    def test_transport_error_raises_fetch_error(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_exception(httpx.ConnectError("boom"), url=_ISSUE_URL)
        with pytest.raises(FetchError, match="boom"):
            _issue().get_snapshot()


class TestPostComment:
    def test_posts_body_and_returns_url(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(
            method="POST",
            url=f"{_ISSUE_URL}/comments",
            status_code=201,
            json={"id": 1, "html_url": "https://github.com/3-shake/alert-menta/issues/42#issuecomment-1"},
        )
        url = _issue().post_comment("Here is my answer.")

        assert url.endswith("#issuecomment-1")
        request = httpx_mock.get_request()
        assert request is not None
        assert json.loads(request.content) == {"body": "Here is my answer."}

    def test_posts_empty_body(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(method="POST", url=f"{_ISSUE_URL}/comments", status_code=201, json={"id": 2})
        assert _issue().post_comment("") == ""
        request = httpx_mock.get_request()
        assert request is not None
        assert json.loads(request.content) == {"body": ""}

    def test_401_raises_post_error(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(method="POST", url=f"{_ISSUE_URL}/comments", status_code=401)
        with pytest.raises(PostError, match="401"):
            _issue().post_comment("x")

    def test_403_raises_post_error(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(method="POST", url=f"{_ISSUE_URL}/comments", status_code=403)
        with pytest.raises(PostError, match="403"):
            _issue().post_comment("x")

    def test_non_json_body_raises_post_error(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(method="POST", url=f"{_ISSUE_URL}/comments", status_code=201, text="<html>")
        with pytest.raises(PostError, match="non-JSON"):
            _issue().post_comment("x")
