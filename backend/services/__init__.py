"""Services module - Business logic layer"""

from .config_manager import ConfigManager
from .diff_engine import (
    apply_diff,
    apply_diff_checked,
    compute_diff,
    diff_lines,
    generate_unified_diff,
    parse_diff,
)
from .diff_generator import DiffGenerator

__all__ = [
    "ConfigManager",
    "DiffGenerator",
    "apply_diff",
    "apply_diff_checked",
    "compute_diff",
    "diff_lines",
    "generate_unified_diff",
    "parse_diff",
]
