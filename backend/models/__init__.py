"""Models module - Pydantic data models"""

from .agent import (
    AgentChangesRequest,
    AgentChangesResponse,
    FileContext,
    FileVerification,
    ProposedFile,
    VerifyRequest,
    VerifyResponse,
)
from .config import LimitsConfig, PayloadValidationResult
from .diff import (
    ApplyDiffRequest,
    ApplyDiffResponse,
    ApplyResult,
    ComputeDiffRequest,
    ComputeDiffResponse,
    DiffLine,
    DiffLinesResponse,
    DiffResult,
    DiffStats,
    DiffTextRequest,
    FileDiff,
    LineKind,
    UnifiedDiffRequest,
    UnifiedDiffResponse,
)

__all__ = [
    # Agent models
    "AgentChangesRequest",
    "AgentChangesResponse",
    "FileContext",
    "FileVerification",
    "ProposedFile",
    "VerifyRequest",
    "VerifyResponse",
    # Config models
    "LimitsConfig",
    "PayloadValidationResult",
    # Diff models
    "ApplyDiffRequest",
    "ApplyDiffResponse",
    "ApplyResult",
    "ComputeDiffRequest",
    "ComputeDiffResponse",
    "DiffLine",
    "DiffLinesResponse",
    "DiffResult",
    "DiffStats",
    "DiffTextRequest",
    "FileDiff",
    "LineKind",
    "UnifiedDiffRequest",
    "UnifiedDiffResponse",
]
