"""Shared fixtures: a stubbed GitHub API built on httpx.MockTransport."""

from __future__ import annotations

from typing import Callable, Dict, List, Optional

import httpx
import pytest

import commit_timeline
from commit_timeline import FetcherConfig, GitHubCommitFetcher

API = "https://api.github.com"

Handler = Callable[[httpx.Request], httpx.Response]


def commit_item(sha: str, date: str = "2024-01-01T10:00:00Z", message: str = "msg", author: str = "Ada") -> dict:
    """Minimal item from GET /repos/{owner}/{repo}/commits."""
    return {
        "sha": sha,
        "commit": {
            "author": {"name": author, "email": "ada@example.com", "date": date},
            "committer": {"name": author, "date": date},
            "message": message,
        },
    }


def detail_payload(sha: str, files: Optional[List[dict]] = None) -> dict:
    """Minimal body of GET /repos/{owner}/{repo}/commits/{sha}."""
    payload = commit_item(sha)
    if files is not None:
        payload["files"] = files
    return payload


def next_link(url: str) -> Dict[str, str]:
    return {"Link": f'<{url}>; rel="next", <{API}/last>; rel="last"'}


def make_fetcher(handler: Handler, **config) -> GitHubCommitFetcher:
    config.setdefault("page_delay", 0)
    config.setdefault("detail_delay", 0)
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return GitHubCommitFetcher(FetcherConfig(**config), client=client)


class FakeGitHub:
    """Serves one page of commits newest-first plus per-commit details."""

    def __init__(self, commits: List[dict], details: Dict[str, dict]) -> None:
        self.commits = commits
        self.details = details
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path.endswith("/commits"):
            return httpx.Response(200, json=self.commits)
        sha = path.rsplit("/", 1)[-1]
        if sha in self.details:
            return httpx.Response(200, json=self.details[sha])
        return httpx.Response(404, json={"message": "Not Found"})


@pytest.fixture
def sleeps(monkeypatch: pytest.MonkeyPatch) -> List[float]:
    """Record time.sleep calls instead of sleeping."""
    calls: List[float] = []
    monkeypatch.setattr(commit_timeline.time, "sleep", calls.append)
    return calls
