"""Diff-related data models"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class LineKind(str, Enum):
    """Tag carried by each serialized diff line"""

    CONTEXT = "context"
    ADDED = "added"
    DELETED = "deleted"
    OTHER = "other"  # no recognized prefix


class DiffLine(BaseModel):
    """A single tagged line of a serialized diff"""

    kind: LineKind
    text: str  # payload without the 2-character prefix


class DiffStats(BaseModel):
    """Line counts derived from a serialized diff"""

    additions: int = 0
    deletions: int = 0
    unchanged: int = 0


class ApplyResult(BaseModel):
    """Outcome of applying a diff with unresolved-line accounting"""

    content: str
    success: bool
    unresolved_lines: int = 0  # context/deleted lines missing from the original
    ignored_lines: int = 0  # lines without a recognized prefix


class FileDiff(BaseModel):
    """Diff of one file between its stored and proposed content"""

    path: str
    original_content: str
    new_content: str
    diff: str
    stats: DiffStats | None = None


class DiffResult(BaseModel):
    """Diffs for every file touched by one change set"""

    files: list[FileDiff]
    summary: str


# ========== API payloads ==========


class ComputeDiffRequest(BaseModel):
    original: str
    modified: str


class ComputeDiffResponse(BaseModel):
    diff: str
    stats: DiffStats


class ApplyDiffRequest(BaseModel):
    original: str
    diff: str


class ApplyDiffResponse(BaseModel):
    content: str


class DiffTextRequest(BaseModel):
    diff: str


class DiffLinesResponse(BaseModel):
    lines: list[DiffLine]


class UnifiedDiffRequest(BaseModel):
    path: str
    original: str
    modified: str


class UnifiedDiffResponse(BaseModel):
    path: str
    unified_diff: str
    stats: DiffStats
