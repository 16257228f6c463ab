"""
Core type definitions for nativecheck.

Result types recording what each pipeline stage did and how the run ended.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StageStatus(str, Enum):
    """Status of a pipeline stage."""

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    SKIPPED = "skipped"


class StageResult(BaseModel):
    """Result of a pipeline stage execution."""

    stage_name: str = Field(description="Name of the pipeline stage")
    status: StageStatus = Field(default=StageStatus.RUNNING, description="Execution status")
    started_at: datetime = Field(default_factory=_utcnow)
    completed_at: datetime | None = Field(default=None)
    duration_seconds: float = Field(default=0.0)
    exit_code: int = Field(default=0, description="Exit code the stage ended with")
    commands: list[str] = Field(default_factory=list, description="Commands the stage ran")
    error_message: str | None = Field(default=None)

    def _finish(self, status: StageStatus) -> None:
        self.status = status
        self.completed_at = _utcnow()
        self.duration_seconds = (self.completed_at - self.started_at).total_seconds()

    def mark_completed(self, status: StageStatus = StageStatus.COMPLETED) -> None:
        """Mark stage as finished, either COMPLETED or SKIPPED."""
        self._finish(status)

    def mark_failed(self, error: str, exit_code: int) -> None:
        """Mark stage as failed."""
        self._finish(StageStatus.FAILED)
        self.error_message = error
        self.exit_code = exit_code


class PipelineRun(BaseModel):
    """Represents a complete pipeline execution."""

    run_id: str = Field(description="Unique run identifier")
    project_root: Path = Field(description="Repository root the run operated on")
    started_at: datetime = Field(default_factory=_utcnow)
    completed_at: datetime | None = Field(default=None)
    stages: list[StageResult] = Field(default_factory=list)
    final_status: StageStatus = Field(default=StageStatus.PENDING)
    failed_stage: str | None = Field(default=None)
    exit_code: int = Field(default=0)

    @property
    def success(self) -> bool:
        return self.final_status == StageStatus.COMPLETED

    @property
    def duration_seconds(self) -> float:
        if self.completed_at is None:
            return 0.0
        return (self.completed_at - self.started_at).total_seconds()

    def get_stage(self, name: str) -> StageResult | None:
        """Get a stage result by name."""
        for stage in self.stages:
            if stage.stage_name == name:
                return stage
        return None

    def mark_completed(self) -> None:
        self.final_status = StageStatus.COMPLETED
        self.completed_at = _utcnow()
        self.exit_code = 0

    def mark_failed(self, stage_name: str, exit_code: int) -> None:
        self.final_status = StageStatus.FAILED
        self.completed_at = _utcnow()
        self.failed_stage = stage_name
        self.exit_code = exit_code
