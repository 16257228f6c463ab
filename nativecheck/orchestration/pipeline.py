"""
Main pipeline orchestration for nativecheck.

Runs the stages strictly in order. The first stage that fails ends the run and
its exit code becomes the exit code of the whole pipeline.
"""

from __future__ import annotations

import uuid
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from rich.console import Console

from ..core.config import Config, get_config
from ..core.exceptions import NativeCheckError, StageFailedError
from ..core.logging import bind_context, clear_context, get_logger
from ..core.types import PipelineRun, StageResult
from ..services.process import ProcessRunner
from .stages import DEFAULT_STAGES, Stage, StageContext

logger = get_logger(__name__)


class BuildAndTestPipeline:
    """Generate, build, lint, and test a native project, failing fast."""

    def __init__(
        self,
        config: Config | None = None,
        runner: ProcessRunner | None = None,
        console: Console | None = None,
        stages: Sequence[Stage] = DEFAULT_STAGES,
    ) -> None:
        """Initialize the pipeline.

        Args:
            config: Configuration; the cached environment config when omitted
            runner: Process runner; a real one honouring config.pipeline.dry_run when omitted
            console: Where stage announcements are printed
            stages: Ordered stages to run
        """
        self.config = config or get_config()
        self.runner = runner or ProcessRunner(dry_run=self.config.pipeline.dry_run)
        self.console = console or Console()
        self.stages = tuple(stages)

    def announce(self, stage: Stage) -> None:
        self.console.print(f"#### {stage.label}... ####", markup=False, highlight=False)

    def run(self, gtest_filter: str | None = None) -> PipelineRun:
        """Run every stage in order until one fails.

        Args:
            gtest_filter: Test filter for the gtest binary; the configured default when None

        Returns:
            PipelineRun describing each stage and the overall exit code
        """
        run = PipelineRun(
            run_id=str(uuid.uuid4())[:8],
            project_root=self.config.project_root,
        )
        if gtest_filter is None:
            gtest_filter = self.config.suite.gtest_filter
        ctx = StageContext(config=self.config, runner=self.runner, gtest_filter=gtest_filter)

        bind_context(run_id=run.run_id)
        logger.info("Starting pipeline", project_root=str(run.project_root))
        total = len(self.stages)

        try:
            for index, stage in enumerate(self.stages, start=1):
                self.announce(stage)
                logger.info(f"Stage {index}/{total}: {stage.label}")

                result = StageResult(stage_name=stage.name)
                run.stages.append(result)
                ctx.commands = result.commands

                try:
                    status = stage.action(ctx)
                except StageFailedError as e:
                    # The tool has already printed its own diagnostics.
                    logger.debug("Stage failed", stage=stage.name, exit_code=e.exit_code)
                    result.mark_failed(str(e), e.exit_code)
                    run.mark_failed(stage.name, e.exit_code)
                    return run
                except NativeCheckError as e:
                    logger.error(str(e), stage=stage.name)
                    result.mark_failed(str(e), e.exit_code)
                    run.mark_failed(stage.name, e.exit_code)
                    return run

                result.mark_completed(status)
                logger.info(
                    "Stage finished",
                    stage=stage.name,
                    status=status.value,
                    duration_seconds=round(result.duration_seconds, 2),
                )

            run.mark_completed()
            logger.info("Pipeline completed", duration_seconds=round(run.duration_seconds, 2))
            return run
        finally:
            clear_context()


def run_pipeline(
    project_root: str | Path | None = None,
    gtest_filter: str | None = None,
    **kwargs: Any,
) -> PipelineRun:
    """Convenience function to run the pipeline.

    Args:
        project_root: Repository root; the configured root when None
        gtest_filter: Test filter for the gtest binary
        **kwargs: Passed through to BuildAndTestPipeline

    Returns:
        PipelineRun with all stage results
    """
    config = kwargs.pop("config", None) or get_config()
    if project_root is not None:
        config = config.model_copy(update={"project_root": Path(project_root).resolve()})
    pipeline = BuildAndTestPipeline(config=config, **kwargs)
    return pipeline.run(gtest_filter=gtest_filter)
