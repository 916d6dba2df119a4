"""GitHub REST API v3 issue source."""

from typing import Any

import httpx

from menta.errors import FetchError, PostError
from menta.models import Comment, IssueSnapshot
from menta.providers.base import IssueSource

BASE_URL = "https://api.github.com"

_UNAUTHORIZED = "GitHub API returned 401. Check the token passed with --github-token."


class GitHubIssue(IssueSource):
    """One issue in owner/repo, read and commented on with a token."""

    def __init__(self, owner: str, repo: str, number: int, token: str, base_url: str = BASE_URL) -> None:
        self.owner = owner
        self.repo = repo
        self.number = number
        self._base_url = base_url.rstrip("/")
        self._headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }

    @property
    def _issue_path(self) -> str:
        return f"/repos/{self.owner}/{self.repo}/issues/{self.number}"

    def _get(self, url: str, params: dict | None = None) -> httpx.Response:
        # An empty params mapping would replace the query string already in url.
        kwargs = {"params": params} if params else {}
        try:
            response = httpx.get(url, headers=self._headers, timeout=30, **kwargs)
        except httpx.HTTPError as exc:
            raise FetchError(f"GET {url} failed: {exc}") from exc
        if response.status_code == 401:
            raise FetchError(_UNAUTHORIZED)
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise FetchError(f"GET {url} returned {response.status_code}") from exc
        return response

    def _get_json(self, url: str, params: dict | None = None) -> tuple[Any, httpx.Response]:
        response = self._get(url, params)
        try:
            return response.json(), response
        except ValueError as exc:
            raise FetchError(f"GET {url} returned a non-JSON body: {response.text[:200]}") from exc

    def _post(self, path: str, body: dict) -> dict:
        url = f"{self._base_url}{path}"
        try:
            response = httpx.post(url, headers=self._headers, json=body, timeout=30)
        except httpx.HTTPError as exc:
            raise PostError(f"POST {url} failed: {exc}") from exc
        if response.status_code == 401:
            raise PostError(_UNAUTHORIZED)
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise PostError(f"POST {url} returned {response.status_code}") from exc
        try:
            return response.json()
        except ValueError as exc:
            raise PostError(f"POST {url} returned a non-JSON body: {response.text[:200]}") from exc

    def _get_comments(self) -> list[Comment]:
        comments: list[Comment] = []
        url: str | None = f"{self._base_url}{self._issue_path}/comments"
        params: dict | None = {"per_page": "100"}
        while url:
            nodes, response = self._get_json(url, params)
            for node in nodes:
                user = node.get("user") or {}
                comments.append(Comment(login=user.get("login") or "", body=node.get("body") or ""))
            # The next link already carries the query string.
            url = response.links.get("next", {}).get("url")
            params = None
        return comments

    def get_snapshot(self) -> IssueSnapshot:
        node, _ = self._get_json(f"{self._base_url}{self._issue_path}")
        return IssueSnapshot(
            title=node.get("title") or "",
            body=node.get("body") or "",
            comments=self._get_comments(),
        )

    def post_comment(self, body: str) -> str:
        node = self._post(f"{self._issue_path}/comments", {"body": body})
        return node.get("html_url", "")
