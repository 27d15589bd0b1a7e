# Area: Shared
"""
Shared utilities used by the runner and the game core.

This package contains:
- Logging configuration
- Terminal rendering helpers
"""

from .logging_config import (
    setup_logging,
    log_error_block,
    enable_quiet_mode,
    disable_quiet_mode,
    is_quiet_mode_enabled,
)

__all__ = [
    "setup_logging",
    "log_error_block",
    "enable_quiet_mode",
    "disable_quiet_mode",
    "is_quiet_mode_enabled",
]
