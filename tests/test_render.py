"""Tests for diff building and HTML rendering."""

from __future__ import annotations

import html
import re

import pytest

from commit_timeline import (
    CommitRecord,
    FileChange,
    TimelineDocument,
    build_diff,
    build_html,
    default_output_path,
    highlight_diff,
    normalize_date,
    short_sha,
)

SHA = "0123456789abcdef0123456789abcdef01234567"
CODE_RE = re.compile(r'<code class="gtl-diff" data-language="diff">(.*?)</code>', re.DOTALL)
TAG_RE = re.compile(r"<[^>]+>")


def _doc(*commits: CommitRecord) -> TimelineDocument:
    return TimelineDocument(
        owner="octo",
        repo="hello",
        branch="main",
        generated_at="2024-05-01T00:00:00Z",
        commits=list(commits),
    )


def _record(sha: str = SHA, message: str = "Initial commit", diff: str = "", **kwargs) -> CommitRecord:
    return CommitRecord(sha=sha, date="2023-05-01T12:00:00Z", message=message, diff=diff, **kwargs)


def _code_text(markup: str) -> str:
    """Text a reader would copy out of a rendered <code> block."""
    return html.unescape(TAG_RE.sub("", markup))


# ═══════════════════════════════════════════════════════════════════════════
# build_diff
# ═══════════════════════════════════════════════════════════════════════════


class TestBuildDiff:
    def test_patch_between_headers(self):
        files = [FileChange("app.py", "modified", "@@ -1 +1 @@\n-old\n+new")]
        assert build_diff(files) == "--- a/app.py\n+++ b/app.py\n@@ -1 +1 @@\n-old\n+new"

    def test_missing_patch_uses_status_placeholder(self):
        diff = build_diff([FileChange("logo.png", "added")])
        assert diff == "--- a/logo.png\n+++ b/logo.png\n# (added) No textual diff available."

    @pytest.mark.parametrize("status", ["removed", "renamed"])
    def test_placeholder_names_status(self, status):
        diff = build_diff([FileChange("f.bin", status)])
        assert f"({status})" in diff
        assert "@@" not in diff

    def test_blocks_keep_input_order_and_blank_line_separator(self):
        files = [
            FileChange("b.txt", "modified", "@@ -1 +1 @@\n-x\n+y"),
            FileChange("a.txt", "removed"),
        ]
        diff = build_diff(files)
        first, second = diff.split("\n\n")
        assert first.startswith("--- a/b.txt")
        assert second.startswith("--- a/a.txt")

    def test_no_files_is_empty_string(self):
        assert build_diff([]) == ""

    def test_deterministic(self):
        files = [FileChange("a", "modified", "+1"), FileChange("b", "added")]
        assert build_diff(files) == build_diff(files) == build_diff(list(files))


# ═══════════════════════════════════════════════════════════════════════════
# small helpers
# ═══════════════════════════════════════════════════════════════════════════


class TestNormalizeDate:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("2023-05-01T12:00:00Z", "2023-05-01"),
            ("2023-05-01T23:30:00-02:00", "2023-05-02"),
            ("2023-05-01", "2023-05-01"),
        ],
    )
    def test_iso_dates(self, raw, expected):
        assert normalize_date(raw) == expected

    @pytest.mark.parametrize("raw", ["not-a-date", ""])
    def test_unparseable_returned_unchanged(self, raw):
        assert normalize_date(raw) == raw


class TestShortSha:
    def test_seven_chars(self):
        assert short_sha(SHA) == "0123456"

    def test_empty(self):
        assert short_sha("") == ""


class TestDefaultOutputPath:
    def test_slugs_branch(self):
        assert str(default_output_path("vercel", "next.js", "feature/x")) == "vercel-next-js-feature-x-timeline.html"


# ═══════════════════════════════════════════════════════════════════════════
# diff highlighting
# ═══════════════════════════════════════════════════════════════════════════


class TestHighlightDiff:
    DIFF = "--- a/f.txt\n+++ b/f.txt\n@@ -1,2 +1,2 @@\n context\n-old\n+new"

    def test_annotates_line_kinds(self):
        out = highlight_diff(self.DIFF)
        assert '<span class="gh">--- a/f.txt</span>' in out
        assert '<span class="gh">+++ b/f.txt</span>' in out
        assert '<span class="gu">@@ -1,2 +1,2 @@</span>' in out
        assert '<span class="gd">-old</span>' in out
        assert '<span class="gi">+new</span>' in out

    def test_text_survives_annotation(self):
        assert _code_text(highlight_diff(self.DIFF)) == self.DIFF

    def test_markup_in_patch_is_escaped(self):
        diff = '+<script>alert("x") && 1</script>'
        out = highlight_diff(diff)
        assert "<script>" not in out
        assert _code_text(out) == diff

    def test_crlf_line_endings_preserved(self):
        diff = "--- a/win.txt\r\n+++ b/win.txt\r\n@@ -1 +1 @@\r\n-old\r\n+new\r"
        out = highlight_diff(diff)
        assert _code_text(out) == diff
        assert '<span class="gd">-old\r</span>' in out

    def test_blank_lines_and_no_trailing_newline_added(self):
        diff = "--- a/a\n+++ b/a\n+x\n\n--- a/b\n+++ b/b\n# (added) No textual diff available."
        assert _code_text(highlight_diff(diff)) == diff


# ═══════════════════════════════════════════════════════════════════════════
# build_html
# ═══════════════════════════════════════════════════════════════════════════


class TestBuildHtml:
    def test_header_metadata(self):
        out = build_html(_doc(_record()))
        assert "octo/hello — Commit Timeline" in out
        assert "<strong>main</strong>" in out
        assert "2024-05-01T00:00:00Z" in out

    def test_short_sha_displayed_full_sha_linked(self):
        out = build_html(_doc(_record()))
        assert f'id="c-{SHA}"' in out
        assert f"https://github.com/octo/hello/commit/{SHA}" in out
        assert ">0123456</a>" in out

    def test_date_only(self):
        out = build_html(_doc(_record()))
        assert '<div class="gtl-date">2023-05-01</div>' in out

    def test_bad_date_does_not_abort(self):
        rec = _record()
        rec.date = "not-a-date"
        out = build_html(_doc(rec))
        assert '<div class="gtl-date">not-a-date</div>' in out

    def test_message_is_escaped(self):
        out = build_html(_doc(_record(message="Fix <b>bold</b> & \"quotes\"\n\nBody <i>text</i>")))
        assert "<b>bold</b>" not in out
        assert "Fix &lt;b&gt;bold&lt;/b&gt; &amp; &quot;quotes&quot;" in out
        assert '<div class="gtl-msg-body">Body &lt;i&gt;text&lt;/i&gt;</div>' in out

    def test_empty_message(self):
        out = build_html(_doc(_record(message="")))
        assert '<div class="gtl-msg">(no message)</div>' in out

    def test_filenames_escaped_in_file_list(self):
        files = [FileChange("<evil>.txt", "added")]
        out = build_html(_doc(_record(diff=build_diff(files), files=files)))
        assert "<evil>" not in out
        assert "<code>&lt;evil&gt;.txt</code>" in out
        assert 'class="gtl-badge gtl-badge-A"' in out

    def test_diff_block_round_trips(self):
        files = [FileChange("a.html", "modified", "@@ -1 +1 @@\n-<p>old</p>\n+<p>new & improved</p>")]
        diff = build_diff(files)
        out = build_html(_doc(_record(diff=diff, files=files)))

        (code,) = CODE_RE.findall(out)
        assert "<p>" not in code
        assert _code_text(code) == diff

    def test_stats_pills(self):
        files = [
            FileChange("a", "modified", "+x", additions=3, deletions=1),
            FileChange("b", "added", "+y", additions=2),
        ]
        out = build_html(_doc(_record(diff=build_diff(files), files=files)))
        assert '<span class="gtl-pill">2 files</span>' in out
        assert '<span class="gtl-pill plus">+5</span>' in out
        assert '<span class="gtl-pill minus">-1</span>' in out

    def test_empty_diff_has_no_code_block(self):
        out = build_html(_doc(_record(diff="")))
        assert "No file changes" in out
        assert not CODE_RE.findall(out)

    def test_notes_placeholder_per_commit(self):
        out = build_html(_doc(_record(sha="a" * 40), _record(sha="b" * 40)))
        assert out.count('<section class="gtl-notes">') == 2
        assert "#1</div>" in out and "#2</div>" in out

    def test_keeps_commit_order(self):
        out = build_html(_doc(_record(sha="b" * 40), _record(sha="a" * 40)))
        assert out.index(f'id="c-{"b" * 40}"') < out.index(f'id="c-{"a" * 40}"')

    def test_deterministic(self):
        doc = _doc(_record(diff=build_diff([FileChange("x", "modified", "+1")])))
        assert build_html(doc) == build_html(doc)
