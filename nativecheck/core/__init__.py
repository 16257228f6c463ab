"""Core infrastructure components for nativecheck."""

from .config import Config, get_config
from .exceptions import (
    NativeCheckError,
    PathResolutionError,
    StageFailedError,
    ToolNotFoundError,
)
from .logging import get_logger, setup_logging
from .types import PipelineRun, StageResult, StageStatus

__all__ = [
    "Config",
    "get_config",
    "NativeCheckError",
    "PathResolutionError",
    "StageFailedError",
    "ToolNotFoundError",
    "get_logger",
    "setup_logging",
    "PipelineRun",
    "StageResult",
    "StageStatus",
]
