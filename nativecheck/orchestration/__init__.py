"""Orchestration module for nativecheck."""

from .pipeline import BuildAndTestPipeline, run_pipeline
from .stages import (
    DEFAULT_STAGES,
    Stage,
    StageContext,
    configure_and_build,
    generate_sources,
    resolve_tests_root,
    run_crypto_tests,
    run_lint,
    run_unit_tests,
)

__all__ = [
    "BuildAndTestPipeline",
    "run_pipeline",
    "DEFAULT_STAGES",
    "Stage",
    "StageContext",
    "configure_and_build",
    "generate_sources",
    "resolve_tests_root",
    "run_crypto_tests",
    "run_lint",
    "run_unit_tests",
]
