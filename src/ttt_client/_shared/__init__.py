# Area: Shared
"""
Shared utilities used by the lifecycle and ledger packages.

This package contains:
- Logging configuration
- Ledger activity output
"""

from .logging_config import (
    setup_logging,
    enable_interactive_mode,
    disable_interactive_mode,
    is_interactive_mode_enabled,
)
from .activity_logger import (
    LedgerActivityLogger,
    configure_activity_logger,
    get_activity_logger,
)

__all__ = [
    "setup_logging",
    "enable_interactive_mode",
    "disable_interactive_mode",
    "is_interactive_mode_enabled",
    "LedgerActivityLogger",
    "configure_activity_logger",
    "get_activity_logger",
]
