"""Agent response endpoints - turn proposed file contents into diffs"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from models.agent import (
    AgentChangesRequest,
    AgentChangesResponse,
    FileVerification,
    ProposedFile,
    VerifyRequest,
    VerifyResponse,
)
from services.config_manager import ConfigManager
from services.diff_generator import DiffGenerator
from services.payload_limit import sanitize_file_path, validate_agent_payload

from .deps import check_diff_size, check_file_sizes, get_config_manager

logger = logging.getLogger(__name__)

router = APIRouter()
diff_generator = DiffGenerator()

PARSE_FAILURE_SUMMARY = "Failed to parse LLM response"
RAW_RESPONSE_PREVIEW = 500


def extract_changes(response: str) -> dict[str, Any] | None:
    """Parse the {"summary", "files"} object out of an LLM response.

    Accepts a fenced ```json block or the outermost brace span of the text.
    Returns None when no usable object is found.
    """
    fence_match = re.search(r"```(?:json)?\s*([\s\S]*?)```", response)
    candidates = []
    if fence_match:
        candidates.append(fence_match.group(1).strip())
    brace_match = re.search(r"\{[\s\S]*\}", response)
    if brace_match:
        candidates.append(brace_match.group(0))

    for candidate in candidates:
        try:
            parsed = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(parsed, dict) and parsed.get("summary") and isinstance(parsed.get("files"), list):
            return parsed
    return None


def _proposed_files(parsed: dict[str, Any]) -> list[ProposedFile]:
    """Well-formed {path, content} entries, keyed by the path as the agent wrote it"""
    files = []
    for entry in parsed["files"]:
        if not isinstance(entry, dict):
            continue
        path = entry.get("path")
        content = entry.get("content")
        if not isinstance(path, str) or not isinstance(content, str):
            logger.warning("Skipping malformed file entry: %r", path)
            continue
        if not sanitize_file_path(path):
            raise HTTPException(status_code=400, detail=f"Invalid file path: {path}")
        files.append(ProposedFile(path=path, content=content))
    return files


@router.post("/changes", response_model=AgentChangesResponse)
async def agent_changes(
    request: AgentChangesRequest,
    config_manager: ConfigManager = Depends(get_config_manager),
) -> AgentChangesResponse:
    """Diff each file proposed by the agent against its stored content"""
    limits = config_manager.limits()
    size_check = validate_agent_payload(request.model_dump(), limits.maxAgentPayload)
    if not size_check.valid:
        raise HTTPException(status_code=413, detail=size_check.error)

    parsed = extract_changes(request.response)
    if parsed is None:
        logger.warning("Could not parse agent response (%d chars)", len(request.response))
        return AgentChangesResponse(
            summary=PARSE_FAILURE_SUMMARY,
            files=[],
            raw_response=request.response[:RAW_RESPONSE_PREVIEW],
        )

    proposed = _proposed_files(parsed)
    check_file_sizes(config_manager, *(f.content for f in proposed))

    result = diff_generator.generate_result(
        str(parsed["summary"]),
        proposed,
        request.existing_files,
    )
    return AgentChangesResponse(summary=result.summary, files=result.files)


@router.post("/verify", response_model=VerifyResponse)
async def verify_changes(
    request: VerifyRequest,
    config_manager: ConfigManager = Depends(get_config_manager),
) -> VerifyResponse:
    """Replay stored diffs and confirm they reproduce the stored new content"""
    check_file_sizes(
        config_manager,
        *(f.original_content for f in request.files),
        *(f.new_content for f in request.files),
    )
    for file_diff in request.files:
        check_diff_size(config_manager, file_diff.diff)

    verifications = []
    for file_diff in request.files:
        result = diff_generator.verify(file_diff)
        verifications.append(
            FileVerification(
                path=file_diff.path,
                result=result,
                matches_new_content=result.success and result.content == file_diff.new_content,
            )
        )

    return VerifyResponse(
        files=verifications,
        all_verified=all(v.matches_new_content for v in verifications),
    )
