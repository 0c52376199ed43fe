"""Utility modules for shared functionality."""

from .constants import (
    ACTIVE_DEPLOYMENT_STATE,
    DEFAULT_BUILD_TASK,
    DEPLOYMENT_PAGE_DELAY_SECONDS,
    DEPLOYMENT_PAGE_SIZE,
    INACTIVE_DEPLOYMENT_STATE,
)
from .process import CommandResult, run_command

__all__ = [
    "ACTIVE_DEPLOYMENT_STATE",
    "INACTIVE_DEPLOYMENT_STATE",
    "DEPLOYMENT_PAGE_SIZE",
    "DEPLOYMENT_PAGE_DELAY_SECONDS",
    "DEFAULT_BUILD_TASK",
    "CommandResult",
    "run_command",
]
