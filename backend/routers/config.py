"""Configuration API endpoints"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from models.config import LimitsConfig
from services.config_manager import ConfigManager

from .deps import get_config_manager

router = APIRouter()


class LimitsUpdate(BaseModel):
    """Partial update of payload limits"""

    maxFileSize: int | None = Field(default=None, gt=0)
    maxAgentPayload: int | None = Field(default=None, gt=0)


class ConfigUpdateRequest(BaseModel):
    """Request to update configuration"""

    limits: LimitsUpdate | None = None
    server: dict | None = None


class ConfigResponse(BaseModel):
    """Configuration response"""

    limits: LimitsConfig
    server: dict


@router.get("", response_model=ConfigResponse)
async def get_config(
    config_manager: ConfigManager = Depends(get_config_manager),
) -> ConfigResponse:
    """Get current configuration"""
    config = config_manager.get_config()
    return ConfigResponse(
        limits=LimitsConfig(**config.get("limits", {})),
        server=config.get("server", {}),
    )


@router.put("")
async def update_config(
    request: ConfigUpdateRequest,
    config_manager: ConfigManager = Depends(get_config_manager),
) -> dict[str, Any]:
    """Update configuration"""
    current_config = config_manager.get_config()

    # Update only provided fields
    if request.limits:
        current_config["limits"] = {
            **current_config.get("limits", {}),
            **request.limits.model_dump(exclude_none=True),
        }
    if request.server:
        current_config["server"] = {**current_config.get("server", {}), **request.server}

    try:
        config_manager.save_config(current_config)
    except RuntimeError as e:
        raise HTTPException(status_code=500, detail=str(e)) from e

    return {"status": "success", "message": "Configuration updated"}
