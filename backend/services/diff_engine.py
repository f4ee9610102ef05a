"""
Diff Engine - Line-based diff/patch between two versions of a file

Serialized diffs carry one line per entry with a 2-character prefix:
"  " unchanged, "+ " added, "- " deleted. The UI renderer colors lines by
that prefix, so the format is shared with the frontend.
"""

from __future__ import annotations

from models.diff import ApplyResult, DiffLine, DiffStats, LineKind

CONTEXT_PREFIX = "  "
ADDED_PREFIX = "+ "
DELETED_PREFIX = "- "

# Largest window tried when re-synchronizing after a divergence
MAX_LOOKAHEAD = 3

_PREFIX_KINDS = {
    CONTEXT_PREFIX: LineKind.CONTEXT,
    ADDED_PREFIX: LineKind.ADDED,
    DELETED_PREFIX: LineKind.DELETED,
}


def split_lines(text: str) -> list[str]:
    """Split text on newlines; the empty string has no lines.

    A trailing newline produces a trailing empty line, which keeps
    split and join symmetric.
    """
    if not text:
        return []
    return text.split("\n")


def compute_diff(original: str, modified: str) -> str:
    """Compute a line diff turning `original` into `modified`.

    Greedy scan with a bounded look-ahead rather than a full LCS. When both
    sides could re-synchronize at the same window size the modified-side
    match wins.
    """
    old = split_lines(original)
    new = split_lines(modified)
    out: list[str] = []

    i = 0
    j = 0
    while i < len(old) or j < len(new):
        if i >= len(old):
            out.append(ADDED_PREFIX + new[j])
            j += 1
        elif j >= len(new):
            out.append(DELETED_PREFIX + old[i])
            i += 1
        elif old[i] == new[j]:
            out.append(CONTEXT_PREFIX + old[i])
            i += 1
            j += 1
        else:
            k = _resync(old, new, i, j, out)
            if not k:
                # One-line replacement
                out.append(DELETED_PREFIX + old[i])
                out.append(ADDED_PREFIX + new[j])
                k = 1
            i += k
            j += k

    return "\n".join(out)


def _resync(old: list[str], new: list[str], i: int, j: int, out: list[str]) -> int:
    """Try windows of 1..MAX_LOOKAHEAD lines; return the window used or 0."""
    old_remaining = len(old) - i
    new_remaining = len(new) - j
    lookahead = min(MAX_LOOKAHEAD, max(old_remaining, new_remaining))

    for k in range(1, lookahead + 1):
        if k <= old_remaining and new[j:j + k] == old[i:i + k]:
            out.extend(CONTEXT_PREFIX + line for line in old[i:i + k])
            return k
        if k <= new_remaining and old[i:i + k] == new[j:j + k]:
            for offset in range(k):
                out.append(DELETED_PREFIX + old[i + offset])
                out.append(ADDED_PREFIX + new[j + offset])
            return k
    return 0


def _seek(lines: list[str], start: int, target: str) -> int:
    """Index of the first line equal to `target` at or after `start`, else len(lines)."""
    i = start
    while i < len(lines) and lines[i] != target:
        i += 1
    return i


def apply_diff_checked(original: str, diff: str) -> ApplyResult:
    """Apply a serialized diff to `original`, reporting unmatched lines.

    Context and deleted lines are located by scanning forward from the
    current position, so an original that drifted slightly still applies.
    Lines that cannot be found are counted in `unresolved_lines` and
    contribute nothing to the output.
    """
    old = split_lines(original)
    result: list[str] = []
    unresolved = 0
    ignored = 0

    i = 0
    for line in diff_lines(diff):
        if line.kind == LineKind.ADDED:
            result.append(line.text)
        elif line.kind in (LineKind.CONTEXT, LineKind.DELETED):
            i = _seek(old, i, line.text)
            if i >= len(old):
                unresolved += 1
                continue
            if line.kind == LineKind.CONTEXT:
                result.append(line.text)
            i += 1
        else:
            ignored += 1

    return ApplyResult(
        content="\n".join(result),
        success=unresolved == 0,
        unresolved_lines=unresolved,
        ignored_lines=ignored,
    )


def apply_diff(original: str, diff: str) -> str:
    """Reconstruct the modified text from `original` and a diff.

    Best effort: unmatched and unrecognized lines are skipped silently.
    Use apply_diff_checked() to find out whether anything was dropped.
    """
    return apply_diff_checked(original, diff).content


def diff_lines(diff: str) -> list[DiffLine]:
    """Tag every line of a serialized diff by its prefix"""
    if not diff:
        return []

    tagged = []
    for raw in diff.split("\n"):
        kind = _PREFIX_KINDS.get(raw[:2], LineKind.OTHER)
        text = raw if kind == LineKind.OTHER else raw[2:]
        tagged.append(DiffLine(kind=kind, text=text))
    return tagged


def parse_diff(diff: str) -> DiffStats:
    """Count added, deleted and unchanged lines; unknown lines are not counted"""
    stats = DiffStats()
    for line in diff_lines(diff):
        if line.kind == LineKind.ADDED:
            stats.additions += 1
        elif line.kind == LineKind.DELETED:
            stats.deletions += 1
        elif line.kind == LineKind.CONTEXT:
            stats.unchanged += 1
    return stats


def unified_header(path: str, stats: DiffStats) -> str:
    """Whole-file header: a single hunk sized from the statistics.

    Display-only; the hunk start values are not what `patch` expects.
    """
    old_count = stats.unchanged + stats.deletions
    new_count = stats.unchanged + stats.additions
    return (
        f"--- a/{path}\n"
        f"+++ b/{path}\n"
        f"@@ -{old_count + 1},{old_count} +{new_count + 1},{new_count} @@\n"
    )


def generate_unified_diff(path: str, original: str, modified: str) -> str:
    """Render a whole-file unified diff document for `path`"""
    diff = compute_diff(original, modified)
    return unified_header(path, parse_diff(diff)) + diff
