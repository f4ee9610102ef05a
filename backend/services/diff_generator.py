"""
Diff Generator Service - Build file diffs for agent proposals and manual edits
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from models.agent import FileContext, ProposedFile
from models.diff import ApplyResult, DiffResult, FileDiff
from services import diff_engine

logger = logging.getLogger(__name__)


class DiffGenerator:
    """Generate diffs for code modifications"""

    def generate_diff(
        self,
        original_content: str,
        new_content: str,
        file_path: str,
    ) -> FileDiff:
        """Generate diff and statistics from original and new content"""
        diff = diff_engine.compute_diff(original_content, new_content)

        return FileDiff(
            path=file_path,
            original_content=original_content,
            new_content=new_content,
            diff=diff,
            stats=diff_engine.parse_diff(diff),
        )

    def generate_result(
        self,
        summary: str,
        proposed: Iterable[ProposedFile],
        existing: Iterable[FileContext],
    ) -> DiffResult:
        """Diff every proposed file against its stored version.

        Files not yet stored are diffed against empty content.
        """
        current = {f.path: f.content for f in existing}
        files = []

        for file in proposed:
            original_content = current.get(file.path, "")
            files.append(self.generate_diff(original_content, file.content, file.path))

        logger.info("Generated diffs for %d file(s)", len(files))
        return DiffResult(files=files, summary=summary)

    def verify(self, file_diff: FileDiff) -> ApplyResult:
        """Replay a stored diff against its original content"""
        result = diff_engine.apply_diff_checked(file_diff.original_content, file_diff.diff)
        if not result.success:
            logger.warning(
                "Diff for %s left %d line(s) unresolved",
                file_diff.path,
                result.unresolved_lines,
            )
        return result

    def unified(self, file_diff: FileDiff) -> str:
        """Render a stored diff as a whole-file unified diff"""
        stats = file_diff.stats or diff_engine.parse_diff(file_diff.diff)
        return diff_engine.unified_header(file_diff.path, stats) + file_diff.diff
