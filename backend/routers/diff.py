"""Diff API endpoints"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from models.diff import (
    ApplyDiffRequest,
    ApplyDiffResponse,
    ApplyResult,
    ComputeDiffRequest,
    ComputeDiffResponse,
    DiffLinesResponse,
    DiffStats,
    DiffTextRequest,
    UnifiedDiffRequest,
    UnifiedDiffResponse,
)
from services import diff_engine
from services.config_manager import ConfigManager
from services.payload_limit import sanitize_file_path

from .deps import check_diff_size, check_file_sizes, get_config_manager

router = APIRouter()


@router.post("/compute", response_model=ComputeDiffResponse)
async def compute(
    request: ComputeDiffRequest,
    config_manager: ConfigManager = Depends(get_config_manager),
) -> ComputeDiffResponse:
    """Compute the line diff between two versions of a file"""
    check_file_sizes(config_manager, request.original, request.modified)

    diff = diff_engine.compute_diff(request.original, request.modified)
    return ComputeDiffResponse(diff=diff, stats=diff_engine.parse_diff(diff))


@router.post("/apply", response_model=ApplyDiffResponse)
async def apply(
    request: ApplyDiffRequest,
    config_manager: ConfigManager = Depends(get_config_manager),
) -> ApplyDiffResponse:
    """Reconstruct modified content from the original and a diff"""
    check_file_sizes(config_manager, request.original)
    check_diff_size(config_manager, request.diff)

    return ApplyDiffResponse(content=diff_engine.apply_diff(request.original, request.diff))


@router.post("/apply-checked", response_model=ApplyResult)
async def apply_checked(
    request: ApplyDiffRequest,
    config_manager: ConfigManager = Depends(get_config_manager),
) -> ApplyResult:
    """Apply a diff and report lines that could not be matched"""
    check_file_sizes(config_manager, request.original)
    check_diff_size(config_manager, request.diff)

    return diff_engine.apply_diff_checked(request.original, request.diff)


@router.post("/stats", response_model=DiffStats)
async def diff_stats(request: DiffTextRequest) -> DiffStats:
    """Count added, deleted and unchanged lines of a diff"""
    return diff_engine.parse_diff(request.diff)


@router.post("/lines", response_model=DiffLinesResponse)
async def tag_lines(request: DiffTextRequest) -> DiffLinesResponse:
    """Tag diff lines for rendering"""
    return DiffLinesResponse(lines=diff_engine.diff_lines(request.diff))


@router.post("/unified", response_model=UnifiedDiffResponse)
async def unified(
    request: UnifiedDiffRequest,
    config_manager: ConfigManager = Depends(get_config_manager),
) -> UnifiedDiffResponse:
    """Render a whole-file unified diff"""
    path = sanitize_file_path(request.path)
    if not path:
        raise HTTPException(status_code=400, detail=f"Invalid file path: {request.path}")
    check_file_sizes(config_manager, request.original, request.modified)

    diff = diff_engine.compute_diff(request.original, request.modified)
    stats = diff_engine.parse_diff(diff)
    return UnifiedDiffResponse(
        path=path,
        unified_diff=diff_engine.unified_header(path, stats) + diff,
        stats=stats,
    )
