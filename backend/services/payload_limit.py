"""
Payload Limits - Size checks and path sanitization for content sent to the engine
"""

from __future__ import annotations

import json
import re
from typing import Any

from models.config import PayloadValidationResult

MAX_FILE_SIZE = 1024 * 1024
MAX_AGENT_PAYLOAD = 5 * 1024 * 1024

_UNSAFE_PATH_CHARS = re.compile(r"[^a-zA-Z0-9_./-]")


def format_bytes(size: int) -> str:
    """Human-readable byte size (Bytes, KB, MB, GB)"""
    if size == 0:
        return "0 Bytes"
    units = ["Bytes", "KB", "MB", "GB"]
    value = float(size)
    unit = 0
    while value >= 1024 and unit < len(units) - 1:
        value /= 1024
        unit += 1
    return f"{round(value, 2):g} {units[unit]}"


def _byte_size(text: str) -> int:
    return len(text.encode("utf-8"))


def validate_file_content(content: str, limit: int = MAX_FILE_SIZE) -> PayloadValidationResult:
    """Check a single file's content against the file-size limit"""
    size = _byte_size(content)
    if size > limit:
        return PayloadValidationResult(
            valid=False,
            error=f"File content exceeds maximum size of {format_bytes(limit)}",
            size=size,
            limit=limit,
        )
    return PayloadValidationResult(valid=True, size=size)


def max_diff_size(max_file_size: int = MAX_FILE_SIZE) -> int:
    """Largest diff two files within `max_file_size` can serialize to.

    A diff of texts of a and b bytes with N lines in total is at most
    a + b + 2N + 1 bytes, and N <= a + b + 2.
    """
    return 6 * max_file_size + 5


def validate_diff_content(diff: str, max_file_size: int = MAX_FILE_SIZE) -> PayloadValidationResult:
    """Check a serialized diff against the bound implied by the file-size limit"""
    limit = max_diff_size(max_file_size)
    size = _byte_size(diff)
    if size > limit:
        return PayloadValidationResult(
            valid=False,
            error=f"Diff exceeds maximum size of {format_bytes(limit)}",
            size=size,
            limit=limit,
        )
    return PayloadValidationResult(valid=True, size=size)


def validate_agent_payload(
    payload: dict[str, Any],
    limit: int = MAX_AGENT_PAYLOAD,
) -> PayloadValidationResult:
    """Check the JSON-serialized size of an agent request"""
    size = _byte_size(json.dumps(payload))
    if size > limit:
        return PayloadValidationResult(
            valid=False,
            error=f"Payload exceeds maximum size of {format_bytes(limit)}",
            size=size,
            limit=limit,
        )
    return PayloadValidationResult(valid=True, size=size)


def sanitize_file_path(path: str) -> str:
    """Normalize a project-relative path; returns "" for unsafe paths"""
    normalized = path.replace("\\", "/")

    if ".." in normalized or normalized.startswith("/") or "//" in normalized:
        return ""

    return _UNSAFE_PATH_CHARS.sub("_", normalized)
