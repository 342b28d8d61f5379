"""
Render a GitHub repository's commit history to a single static HTML page
that works as a blog-style timeline template.

Each commit becomes a section with:
- metadata (index, date, short SHA linking to GitHub, author, stats)
- a "Notes" placeholder to replace with your own narrative
- the commit's unified diff, syntax-highlighted, with collapse/copy buttons

Commits are listed oldest → newest so the story reads forward in time.
Public repositories need no token; set GITHUB_TOKEN to raise rate limits.
"""

from __future__ import annotations
import argparse
import dataclasses
import datetime
import html
import io
import logging
import os
import pathlib
import re
import sys
import time
import webbrowser
from typing import Callable, Dict, Iterator, List, Optional, Tuple

import httpx
from pygments.formatters import HtmlFormatter
from pygments.lexer import RegexLexer
from pygments.token import Generic, Text

logger = logging.getLogger(__name__)

# ---- constants & utilities ---------------------------------------------------

GITHUB_API_URL = "https://api.github.com"
GITHUB_WEB_URL = "https://github.com"
GITHUB_API_VERSION = "2022-11-28"
USER_AGENT = "commit-timeline-generator"
DEFAULT_BRANCH = "main"
PER_PAGE = 100  # GitHub max
PAGE_DELAY = 0.15
DETAIL_DELAY = 0.12
DEFAULT_TIMEOUT = 30.0
SHORT_SHA_LENGTH = 7
PYGMENTS_STYLE = "monokai"

REPO_ARG_RE = re.compile(r"[^/\s]+/[^/\s]+")
LINK_PART_RE = re.compile(r'<([^>]+)>;\s*rel="([^"]+)"')


def slug(s: str) -> str:
    out = []
    for ch in s:
        if ch.isalnum() or ch in "-_":
            out.append(ch)
        else:
            out.append("-")
    return "".join(out)


def short_sha(sha: str) -> str:
    return sha[:SHORT_SHA_LENGTH] if sha else ""


def normalize_date(value: str) -> str:
    """Reduce an ISO-8601 timestamp to its UTC calendar date (YYYY-MM-DD).

    Anything that doesn't parse is returned as-is; a bad date must never
    stop the page from rendering.
    """
    try:
        parsed = datetime.datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (AttributeError, TypeError, ValueError):
        return value
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(datetime.timezone.utc)
    return parsed.date().isoformat()


def parse_repo_arg(value: str) -> Tuple[str, str]:
    if not value or not REPO_ARG_RE.fullmatch(value):
        raise InvalidArgument('repo must be in the form "owner/repo".')
    owner, repo = value.split("/")
    return owner, repo


def default_output_path(owner: str, repo: str, branch: str) -> pathlib.Path:
    return pathlib.Path(f"{slug(owner)}-{slug(repo)}-{slug(branch)}-timeline.html")


# ---- errors ------------------------------------------------------------------

class TimelineError(Exception):
    """Base class for every failure that aborts a run."""


class InvalidArgument(TimelineError):
    """The command line named something we can't work with."""


class EmptyHistoryError(TimelineError):
    """The branch exists but has no commits (usually a wrong branch name)."""


class UpstreamError(TimelineError):
    """Non-success response from the GitHub API."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ""):
        self.message = message
        self.status_code = status_code
        self.body = body
        super().__init__(message)


class NotFoundError(UpstreamError):
    """Repository, branch or commit does not exist."""


class RateLimitError(UpstreamError):
    """API quota exhausted.

    ``retry_after`` is the estimated number of seconds until the quota
    resets (never negative), or None when GitHub sent no reset header.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = 403,
        body: str = "",
        rate_limit_reset: Optional[int] = None,
        now: Optional[float] = None,
    ):
        self.rate_limit_reset = rate_limit_reset  # Unix timestamp
        self.retry_after: Optional[int] = None
        if rate_limit_reset is not None:
            current = int(now if now is not None else time.time())
            self.retry_after = max(0, rate_limit_reset - current)
            message += f" (rate limit resets in ~{self.retry_after}s)"
        super().__init__(message, status_code, body)


# ---- data model --------------------------------------------------------------

@dataclasses.dataclass
class CommitSummary:
    sha: str
    date: str
    message: str
    author_name: str = ""


@dataclasses.dataclass
class FileChange:
    filename: str
    status: str  # added, modified, removed, renamed
    patch: Optional[str] = None  # absent for binaries and pure renames
    additions: int = 0
    deletions: int = 0


@dataclasses.dataclass
class CommitDetail:
    sha: str
    date: str
    message: str
    files: List[FileChange]


@dataclasses.dataclass
class CommitRecord:
    sha: str
    date: str
    message: str
    diff: str
    author_name: str = ""
    files: List[FileChange] = dataclasses.field(default_factory=list)

    @property
    def short_sha(self) -> str:
        return short_sha(self.sha)

    @property
    def files_changed(self) -> int:
        return len(self.files)

    @property
    def additions(self) -> int:
        return sum(f.additions for f in self.files)

    @property
    def deletions(self) -> int:
        return sum(f.deletions for f in self.files)


@dataclasses.dataclass
class TimelineDocument:
    owner: str
    repo: str
    branch: str
    generated_at: str
    commits: List[CommitRecord]


@dataclasses.dataclass
class FetcherConfig:
    token: Optional[str] = None
    api_url: str = GITHUB_API_URL
    page_size: int = PER_PAGE
    page_delay: float = PAGE_DELAY
    detail_delay: float = DETAIL_DELAY
    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = USER_AGENT


@dataclasses.dataclass
class Page:
    items: list
    next_url: Optional[str]


def summary_from_api(item: dict) -> CommitSummary:
    commit = item.get("commit") or {}
    author = commit.get("author") or {}
    committer = commit.get("committer") or {}
    return CommitSummary(
        sha=item["sha"],
        date=author.get("date") or committer.get("date") or "",
        message=commit.get("message") or "",
        author_name=author.get("name") or "",
    )


def file_change_from_api(item: dict) -> FileChange:
    return FileChange(
        filename=item.get("filename") or "unknown",
        status=item.get("status") or "",
        patch=item.get("patch") or None,
        additions=item.get("additions") or 0,
        deletions=item.get("deletions") or 0,
    )


# ---- GitHub fetching ---------------------------------------------------------

def parse_link_header(value: Optional[str]) -> Dict[str, str]:
    """
    Parse a ``Link`` header into {rel: url}.

    e.g. '<https://api.github.com/...&page=2>; rel="next", <...>; rel="last"'
    """
    if not value:
        return {}
    links: Dict[str, str] = {}
    for part in value.split(","):
        m = LINK_PART_RE.search(part.strip())
        if m:
            links[m.group(2)] = m.group(1)
    return links


class RateLimitInfo:
    """Rate limit information from a GitHub API response."""

    def __init__(self, response: httpx.Response) -> None:
        self.remaining = response.headers.get("X-RateLimit-Remaining")
        self.reset = response.headers.get("X-RateLimit-Reset")

    @property
    def reset_timestamp(self) -> Optional[int]:
        try:
            return int(self.reset) if self.reset else None
        except ValueError:
            return None

    @property
    def is_exhausted(self) -> bool:
        return self.remaining is not None and self.remaining.strip() == "0"


def raise_for_response(response: httpx.Response, not_found: str, failure: str) -> None:
    """
    Map a non-success GitHub response onto the error taxonomy.

    Raises:
        NotFoundError: 404
        RateLimitError: 403 with an exhausted quota
        UpstreamError: anything else outside 2xx
    """
    if response.is_success:
        return
    status = response.status_code
    body = response.text
    if status == 404:
        raise NotFoundError(not_found, status, body)
    if status == 403:
        rate_info = RateLimitInfo(response)
        if rate_info.is_exhausted:
            raise RateLimitError(
                "Forbidden / rate limited",
                status,
                body,
                rate_limit_reset=rate_info.reset_timestamp,
            )
    raise UpstreamError(f"{failure} (HTTP {status}): {body}", status, body)


def decode_json(response: httpx.Response, failure: str, expected: type):
    """Body of a successful response, which must be JSON of type ``expected``."""
    try:
        data = response.json()
    except ValueError:
        raise UpstreamError(f"{failure}: invalid JSON", response.status_code, response.text) from None
    if not isinstance(data, expected):
        raise UpstreamError(
            f"{failure}: expected a JSON {expected.__name__}, got {type(data).__name__}",
            response.status_code,
            response.text,
        )
    return data


class GitHubCommitFetcher:
    """
    Serial, rate-limit-aware reader for a repository's commits.

    Requests are issued one at a time; callers add the courtesy delays
    between detail fetches (see ``build_timeline``). Pass ``client`` to
    reuse or stub the underlying ``httpx.Client``.
    """

    def __init__(self, config: FetcherConfig, client: Optional[httpx.Client] = None):
        self.config = config
        self._owns_client = client is None
        self._client = client if client is not None else httpx.Client(
            timeout=httpx.Timeout(config.timeout, connect=5.0),
            follow_redirects=True,
        )
        self._headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": GITHUB_API_VERSION,
            "User-Agent": config.user_agent,
        }
        if config.token:
            self._headers["Authorization"] = f"Bearer {config.token}"

    def __enter__(self) -> "GitHubCommitFetcher":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def _get(self, url: str, params: Optional[dict] = None) -> httpx.Response:
        logger.debug("GET %s params=%s", url, params)
        return self._client.get(url, params=params, headers=self._headers)

    def iter_pages(
        self,
        url: str,
        params: Optional[dict],
        not_found: str,
        failure: str,
    ) -> Iterator[Page]:
        """Yield pages lazily, following ``rel="next"`` until there is none."""
        next_url: Optional[str] = url
        while next_url:
            response = self._get(next_url, params)
            raise_for_response(response, not_found, failure)
            # the next link already carries the query string
            params = None
            next_url = parse_link_header(response.headers.get("Link")).get("next")
            yield Page(items=decode_json(response, failure, list), next_url=next_url)

    def list_commits(self, owner: str, repo: str, branch: str) -> List[CommitSummary]:
        """Return every commit on ``branch``, newest first as GitHub sends them."""
        url = f"{self.config.api_url}/repos/{owner}/{repo}/commits"
        params = {"sha": branch, "per_page": self.config.page_size}
        commits: List[CommitSummary] = []
        pages = self.iter_pages(
            url,
            params,
            not_found=f"Repo not found or branch missing: {owner}/{repo}#{branch}",
            failure="GitHub API error",
        )
        for n, page in enumerate(pages, 1):
            commits.extend(summary_from_api(item) for item in page.items)
            logger.debug("Page %d: %d commits (total %d)", n, len(page.items), len(commits))
            if page.next_url:
                time.sleep(self.config.page_delay)
        return commits

    def fetch_detail(self, owner: str, repo: str, sha: str) -> CommitDetail:
        url = f"{self.config.api_url}/repos/{owner}/{repo}/commits/{sha}"
        response = self._get(url)
        raise_for_response(
            response,
            not_found=f"Commit not found: {owner}/{repo}@{sha}",
            failure=f"Failed to fetch commit {sha}",
        )
        data = decode_json(response, f"Failed to fetch commit {sha}", dict)
        summary = summary_from_api({**data, "sha": data.get("sha") or sha})
        files = [file_change_from_api(f) for f in data.get("files") or []]
        return CommitDetail(sha=sha, date=summary.date, message=summary.message, files=files)


# ---- diff building -----------------------------------------------------------

def build_diff(files: List[FileChange]) -> str:
    """Collate per-file patches into one unified diff.

    GitHub omits ``patch`` for binaries and pure renames; those files get a
    comment line naming their status instead.
    """
    chunks: List[str] = []
    for f in files:
        header = f"--- a/{f.filename}\n+++ b/{f.filename}"
        patch = f.patch if f.patch else f"# ({f.status}) No textual diff available."
        chunks.append(f"{header}\n{patch}")
    return "\n\n".join(chunks)


# ---- orchestration -----------------------------------------------------------

ProgressCallback = Callable[[int, int, CommitSummary], None]


def build_timeline(
    fetcher: GitHubCommitFetcher,
    owner: str,
    repo: str,
    branch: str,
    progress: Optional[ProgressCallback] = None,
    now: Optional[datetime.datetime] = None,
) -> TimelineDocument:
    summaries = fetcher.list_commits(owner, repo, branch)
    if not summaries:
        raise EmptyHistoryError("No commits found. Check the branch name.")

    # oldest → newest
    summaries.reverse()

    commits: List[CommitRecord] = []
    total = len(summaries)
    for idx, s in enumerate(summaries, 1):
        if idx > 1:
            time.sleep(fetcher.config.detail_delay)
        if progress is not None:
            progress(idx, total, s)
        detail = fetcher.fetch_detail(owner, repo, s.sha)
        commits.append(
            CommitRecord(
                sha=s.sha,
                date=s.date or detail.date,
                message=s.message or detail.message,
                diff=build_diff(detail.files),
                author_name=s.author_name,
                files=detail.files,
            )
        )

    generated = now or datetime.datetime.now(datetime.timezone.utc)
    if generated.tzinfo is not None:
        generated = generated.astimezone(datetime.timezone.utc)
    return TimelineDocument(
        owner=owner,
        repo=repo,
        branch=branch,
        generated_at=generated.strftime("%Y-%m-%dT%H:%M:%SZ"),
        commits=commits,
    )


# ---- HTML --------------------------------------------------------------------

class TimelineDiffLexer(RegexLexer):
    """Line-oriented diff lexer that tells file headers apart from +/- lines."""

    name = "Timeline diff"
    aliases: List[str] = []
    filenames: List[str] = []

    tokens = {
        "root": [
            # "." matches "\r", so CRLF endings stay inside the line token
            (r"@@.*\n?", Generic.Subheading),
            (r"(\+\+\+|---).*\n?", Generic.Heading),
            (r"\+.*\n?", Generic.Inserted),
            (r"-.*\n?", Generic.Deleted),
            (r".+\n?", Text),
            (r"\n", Text),
        ]
    }


STATUS_LABELS = {
    "added": ("A", "Added"),
    "modified": ("M", "Modified"),
    "removed": ("D", "Deleted"),
    "renamed": ("R", "Renamed"),
    "copied": ("C", "Copied"),
    "changed": ("T", "Type change"),
    "unchanged": ("U", "Unchanged"),
}

BASE_CSS = """
  :root { --gtl-bg: #0b0c10; --gtl-card: #111218; --gtl-text: #e6e6e6; --gtl-sub: #a7adba; --gtl-accent: #7aa2f7; --gtl-muted: #2a2f3a; --gtl-plus: #9ece6a; --gtl-minus: #f7768e; }
  * { box-sizing: border-box; }
  .gtl-body { margin: 0; background: var(--gtl-bg); color: var(--gtl-text); font-family: ui-sans-serif, system-ui, -apple-system, Segoe UI, Roboto, Inter, "Helvetica Neue", Arial; line-height: 1.6; }
  .gtl-container { max-width: 950px; margin: 0 auto; padding: 2.5rem 1rem 4rem; }
  .gtl-header { display: flex; flex-direction: column; gap: .3rem; margin-bottom: 1.5rem; }
  .gtl-title { font-size: 1.9rem; font-weight: 800; letter-spacing: .2px; }
  .gtl-meta { color: var(--gtl-sub); font-size: .95rem; }
  .gtl-help { color: var(--gtl-sub); font-size: .92rem; margin-top: .6rem; }

  .gtl-timeline { display: grid; gap: 1rem; position: relative; }
  .gtl-item { background: var(--gtl-card); border: 1px solid var(--gtl-muted); border-radius: 14px; padding: 1rem 1rem .25rem; }
  .gtl-item header { display: flex; flex-wrap: wrap; align-items: baseline; gap: .6rem 1rem; }
  .gtl-idx { font-weight: 700; color: var(--gtl-accent); }
  .gtl-sha a { color: var(--gtl-sub); text-decoration: none; font-family: ui-monospace, SFMono-Regular, Menlo, Consolas, monospace; }
  .gtl-sha a:hover { text-decoration: underline; }
  .gtl-date, .gtl-author { color: var(--gtl-sub); }
  .gtl-msg { font-weight: 600; margin: .2rem 0 .2rem; }
  .gtl-msg-body { white-space: pre-wrap; color: var(--gtl-sub); font-size: .92rem; margin: 0 0 .6rem; }

  .gtl-stats { display: flex; gap: .5rem; align-items: center; margin: .25rem 0 .5rem; flex-wrap: wrap; }
  .gtl-pill { border: 1px solid var(--gtl-muted); padding: .1rem .5rem; border-radius: 999px; font-size: .85rem; }
  .gtl-pill.plus { color: var(--gtl-plus); }
  .gtl-pill.minus { color: var(--gtl-minus); }
  .gtl-files { list-style: none; padding: 0; margin: .25rem 0 .5rem; font-size: .9rem; }
  .gtl-files li { padding: .1rem 0; }
  .gtl-badge { display: inline-block; font-size: .75rem; padding: 0 .4rem; border-radius: 999px; margin-right: .35rem; border: 1px solid var(--gtl-muted); }
  .gtl-badge-A { color: var(--gtl-plus); }
  .gtl-badge-D { color: var(--gtl-minus); }
  .gtl-badge-R, .gtl-badge-C { color: var(--gtl-accent); }

  .gtl-notes { margin: .6rem 0 1rem; background: rgba(122,162,247,.06); border: 1px dashed var(--gtl-accent); padding: .75rem; border-radius: 10px; }
  .gtl-notes .gtl-notes-label { font-size: .9rem; color: var(--gtl-sub); margin-bottom: .35rem; }
  .gtl-notes p { margin: .2rem 0; }

  .gtl-diff-wrap { margin: .6rem 0 1rem; border-top: 1px solid var(--gtl-muted); padding-top: .6rem; }
  .gtl-diff-controls { display: flex; gap: .6rem; margin-bottom: .4rem; }
  .gtl-btn { font: inherit; font-weight: 600; border-radius: 8px; padding: .35rem .6rem; border: 1px solid var(--gtl-muted); background: #161821; color: var(--gtl-text); cursor: pointer; }
  .gtl-btn:hover { filter: brightness(1.08); }
  .gtl-empty { color: var(--gtl-sub); }

  pre.gtl-code { border: 1px solid #1b1f2a; border-radius: 10px; padding: .75rem; overflow: auto; font-family: ui-monospace, SFMono-Regular, Menlo, Monaco, Consolas, "Liberation Mono", "Courier New", monospace; font-size: .85rem; line-height: 1.5; }

  .gtl-footer { color: var(--gtl-sub); font-size: .9rem; margin-top: 1.2rem; text-align: center; }

  @media print {
    .gtl-btn, .gtl-diff-controls { display: none !important; }
    .gtl-container { padding: 0; }
    .gtl-item { break-inside: avoid; }
  }
"""

SCRIPT = """
  // collapse/expand and copy for each diff
  document.addEventListener('click', (e) => {
    const btn = e.target.closest('.gtl-btn');
    if (!btn) return;
    const action = btn.getAttribute('data-action');
    const wrap = btn.closest('.gtl-item').querySelector('.gtl-diff-wrap');
    const pre = wrap.querySelector('pre');
    if (!pre) return;

    if (action === 'toggle') {
      const expanded = btn.getAttribute('aria-expanded') !== 'false';
      pre.style.display = expanded ? 'none' : '';
      btn.textContent = expanded ? 'Expand diff' : 'Collapse diff';
      btn.setAttribute('aria-expanded', expanded ? 'false' : 'true');
    }

    if (action === 'copy') {
      const code = wrap.querySelector('code').innerText;
      navigator.clipboard.writeText(code).then(() => {
        btn.textContent = 'Copied!';
        setTimeout(() => (btn.textContent = 'Copy diff'), 1000);
      }).catch(() => {
        btn.textContent = 'Copy failed';
        setTimeout(() => (btn.textContent = 'Copy diff'), 1200);
      });
    }
  });
"""


def highlight_diff(diff: str) -> str:
    """Escaped diff markup with one <span> per annotated line; text is untouched.

    ``highlight()`` would run the lexer's input preprocessing (newline
    normalisation, trailing newline), so tokens are fed to the formatter
    straight from ``get_tokens_unprocessed``.
    """
    tokens = ((ttype, value) for _, ttype, value in TimelineDiffLexer().get_tokens_unprocessed(diff))
    out = io.StringIO()
    HtmlFormatter(nowrap=True).format(tokens, out)
    return out.getvalue()


def status_badge(status: str) -> str:
    label, title = STATUS_LABELS.get(status, ((status[:1] or "?").upper(), status or "Unknown"))
    return (
        f'<span class="gtl-badge gtl-badge-{html.escape(label)}" title="{html.escape(title)}">'
        f"{html.escape(label)}</span>"
    )


def file_list(c: CommitRecord) -> str:
    items = []
    for f in c.files:
        items.append(f"<li>{status_badge(f.status)} <code>{html.escape(f.filename)}</code></li>")
    return '<ul class="gtl-files">' + "\n".join(items) + "</ul>"


def render_commit(owner: str, repo: str, idx: int, c: CommitRecord) -> str:
    commit_url = f"{GITHUB_WEB_URL}/{owner}/{repo}/commit/{c.sha}"
    subject, _, body = (c.message or "(no message)").partition("\n")
    body = body.strip()
    body_html = f'<div class="gtl-msg-body">{html.escape(body)}</div>' if body else ""
    author_html = f'<div class="gtl-author">{html.escape(c.author_name)}</div>' if c.author_name else ""

    if c.diff:
        diff_html = (
            '<div class="gtl-diff-controls">\n'
            '            <button class="gtl-btn" data-action="toggle" aria-expanded="true">Collapse diff</button>\n'
            '            <button class="gtl-btn" data-action="copy">Copy diff</button>\n'
            "          </div>\n"
            f'          <pre class="gtl-code"><code class="gtl-diff" data-language="diff">{highlight_diff(c.diff)}</code></pre>'
        )
        stats_html = (
            '<div class="gtl-stats">'
            f'<span class="gtl-pill">{c.files_changed} files</span>'
            f'<span class="gtl-pill plus">+{c.additions}</span>'
            f'<span class="gtl-pill minus">-{c.deletions}</span>'
            "</div>\n"
            f"        {file_list(c)}"
        )
    else:
        diff_html = '<em class="gtl-empty">No file changes</em>'
        stats_html = ""

    return f"""
      <article class="gtl-item" id="c-{html.escape(c.sha)}">
        <header>
          <div class="gtl-idx">#{idx}</div>
          <div class="gtl-date">{html.escape(normalize_date(c.date) or "")}</div>
          <div class="gtl-sha"><a href="{html.escape(commit_url)}" target="_blank" rel="noopener noreferrer">{html.escape(c.short_sha)}</a></div>
          {author_html}
        </header>
        <div class="gtl-msg">{html.escape(subject)}</div>
        {body_html}
        {stats_html}

        <section class="gtl-notes">
          <div class="gtl-notes-label">Notes (replace this with your story)</div>
          <p><em>What changed? Why? Any alternatives considered? Roadblocks or bugs fixed? Lessons learned?</em></p>
        </section>

        <section class="gtl-diff-wrap">
          {diff_html}
        </section>
      </article>
"""


def build_html(doc: TimelineDocument) -> str:
    pygments_css = HtmlFormatter(style=PYGMENTS_STYLE).get_style_defs(".gtl-diff")
    owner = html.escape(doc.owner)
    repo = html.escape(doc.repo)
    items = "\n".join(render_commit(doc.owner, doc.repo, i, c) for i, c in enumerate(doc.commits, 1))

    return f"""<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <title>{repo} – Commit Timeline</title>
  <style>
{BASE_CSS}
  /* Pygments */
  {pygments_css}
  </style>
</head>
<body class="gtl-body">
  <div class="gtl-container">
    <div class="gtl-header">
      <div class="gtl-title">{owner}/{repo} — Commit Timeline</div>
      <div class="gtl-meta">Branch: <strong>{html.escape(doc.branch)}</strong> • Commits: {len(doc.commits)} • Generated: {html.escape(doc.generated_at)}</div>
      <div class="gtl-help">Each commit below has a "Notes" area. Replace the placeholder text with your story: why changes were made, decisions, roadblocks, and takeaways. Delete any sections you don't need.</div>
    </div>

    <main class="gtl-timeline">
{items}
    </main>
    <div class="gtl-footer">End of timeline • You can remove this footer.</div>
  </div>

  <script>
{SCRIPT}
  </script>
</body>
</html>
"""


# ---- main --------------------------------------------------------------------

class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(sys.stderr)
        self.exit(1, f"Error: {message}\n")


def _print_progress(idx: int, total: int, s: CommitSummary) -> None:
    print(f"\r🧮 Fetching commit {idx}/{total}: {short_sha(s.sha)}   ", end="", file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    ap = _ArgumentParser(description="Render a GitHub repo's commit history as a single HTML timeline")
    ap.add_argument("repo", nargs="?", help="Repository as owner/repo")
    ap.add_argument("--branch", "-b", default=DEFAULT_BRANCH, help=f"Branch to walk (default: {DEFAULT_BRANCH})")
    ap.add_argument("--out", "-o", help="Output HTML file path (default: <owner>-<repo>-<branch>-timeline.html)")
    ap.add_argument("--open", action="store_true", help="Open the HTML file after generation")
    ap.add_argument("--verbose", "-v", action="store_true", help="Log every API request")
    args = ap.parse_args(argv)

    if args.repo is None:
        ap.print_help()
        return 0

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        owner, repo = parse_repo_arg(args.repo)
    except InvalidArgument as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    out_path = pathlib.Path(args.out) if args.out else default_output_path(owner, repo, args.branch)
    config = FetcherConfig(token=os.environ.get("GITHUB_TOKEN") or None)

    try:
        print(f"📜 Fetching commits for {owner}/{repo} (branch: {args.branch}) ...", file=sys.stderr)
        with GitHubCommitFetcher(config) as fetcher:
            doc = build_timeline(fetcher, owner, repo, args.branch, progress=_print_progress)
        print("", file=sys.stderr)

        print("🔨 Building HTML...", file=sys.stderr)
        html_out = build_html(doc)

        print(f"💾 Writing: {out_path.resolve()}", file=sys.stderr)
        out_path.write_text(html_out, encoding="utf-8")
    except (TimelineError, httpx.HTTPError, OSError) as exc:
        print(f"\nError: {exc}", file=sys.stderr)
        return 1

    print(f"✓ Wrote {len(doc.commits)} commits to: {out_path.resolve()}", file=sys.stderr)

    if args.open:
        print("🌐 Opening in browser...", file=sys.stderr)
        webbrowser.open(f"file://{out_path.resolve()}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
