"""Agent response data models"""

from __future__ import annotations

from pydantic import BaseModel

from .diff import ApplyResult, FileDiff


class FileContext(BaseModel):
    """Current stored content of a project file"""

    path: str
    content: str


class ProposedFile(BaseModel):
    """Complete new content the agent proposes for a file"""

    path: str
    content: str


class AgentChangesRequest(BaseModel):
    """Raw LLM answer plus the files it was asked to change"""

    response: str
    existing_files: list[FileContext] = []


class AgentChangesResponse(BaseModel):
    """Per-file diffs for an agent proposal"""

    summary: str
    files: list[FileDiff] = []
    raw_response: str | None = None  # only set when parsing failed


class VerifyRequest(BaseModel):
    """Stored diffs to replay against their original content"""

    files: list[FileDiff]


class FileVerification(BaseModel):
    path: str
    result: ApplyResult
    matches_new_content: bool


class VerifyResponse(BaseModel):
    files: list[FileVerification]
    all_verified: bool
