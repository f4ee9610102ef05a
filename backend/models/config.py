"""Configuration and payload-limit models"""

from __future__ import annotations

from pydantic import BaseModel


class LimitsConfig(BaseModel):
    """Upper bounds on content reaching the diff engine (bytes)"""

    maxFileSize: int = 1024 * 1024
    maxAgentPayload: int = 5 * 1024 * 1024


class PayloadValidationResult(BaseModel):
    """Result of a payload-size check"""

    valid: bool
    error: str | None = None
    size: int | None = None
    limit: int | None = None
