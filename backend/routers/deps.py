"""Shared request dependencies"""

from __future__ import annotations

from fastapi import HTTPException, Request

from services.config_manager import ConfigManager
from services.payload_limit import validate_diff_content, validate_file_content


def get_config_manager(request: Request) -> ConfigManager:
    """ConfigManager created at application startup"""
    return request.app.state.config_manager


def check_file_sizes(config_manager: ConfigManager, *contents: str) -> None:
    """Reject content over the configured file-size limit with 413"""
    limit = config_manager.limits().maxFileSize
    for content in contents:
        result = validate_file_content(content, limit)
        if not result.valid:
            raise HTTPException(status_code=413, detail=result.error)


def check_diff_size(config_manager: ConfigManager, diff: str) -> None:
    """Reject a diff larger than any pair of in-limit files could produce with 413"""
    result = validate_diff_content(diff, config_manager.limits().maxFileSize)
    if not result.valid:
        raise HTTPException(status_code=413, detail=result.error)
