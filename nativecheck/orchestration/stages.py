"""
Stages of the nativecheck pipeline.

Each stage builds the command line for one external tool from the
configuration, runs it through the ProcessRunner, and raises StageFailedError
when the tool exits non-zero.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from ..core.config import Config
from ..core.exceptions import PathResolutionError, StageFailedError
from ..core.logging import get_logger
from ..core.types import StageStatus
from ..services.process import CommandArg, ProcessRunner

logger = get_logger(__name__)

TIMEOUT_MULTIPLIER_VAR = "CK_TIMEOUT_MULTIPLIER"


@dataclass
class StageContext:
    """Everything a stage needs to run."""

    config: Config
    runner: ProcessRunner
    gtest_filter: str
    commands: list[str] = field(default_factory=list)

    def execute(
        self,
        stage: str,
        cmd: list[CommandArg],
        env: dict[str, str] | None = None,
    ) -> None:
        """Run one command for a stage, failing the stage on a non-zero exit."""
        self.commands.append(" ".join(str(arg) for arg in cmd))
        returncode = self.runner.run(cmd, cwd=self.config.project_root, env=env)
        if returncode != 0:
            raise StageFailedError(
                message=f"{Path(str(cmd[0])).name} exited with {returncode}",
                context={"command": self.commands[-1]},
                stage=stage,
                returncode=returncode,
            )


StageAction = Callable[[StageContext], StageStatus]


@dataclass(frozen=True)
class Stage:
    """A named step of the pipeline."""

    name: str
    label: str
    action: StageAction


def generate_sources(ctx: StageContext) -> StageStatus:
    """Run the code generator that writes derived sources into the tree."""
    generator = ctx.config.project_root / ctx.config.tools.generator
    ctx.execute("generate", [generator])
    return StageStatus.COMPLETED


def configure_and_build(ctx: StageContext) -> StageStatus:
    """Configure the CMake build directory, then compile the test targets."""
    toolchain = ctx.config.toolchain
    build_dir = ctx.config.build_dir

    ctx.execute(
        "build",
        [
            toolchain.cmake,
            "-S", ctx.config.project_root,
            "-B", build_dir,
            f"-DCMAKE_BUILD_TYPE={toolchain.build_type}",
            f"-DCMAKE_C_COMPILER={toolchain.c_compiler}",
            f"-DCMAKE_CXX_COMPILER={toolchain.cxx_compiler}",
        ],
    )
    ctx.execute(
        "build",
        [toolchain.make, "-C", build_dir, f"-j{toolchain.jobs}", *toolchain.targets],
    )
    return StageStatus.COMPLETED


def run_lint(ctx: StageContext) -> StageStatus:
    """Run the lint wrapper when the linter is installed; skip otherwise."""
    probe = ctx.config.tools.lint_probe
    found = ctx.runner.which(probe)
    if found is None:
        logger.debug("Lint tool not on PATH, skipping", tool=probe)
        return StageStatus.SKIPPED

    logger.debug("Found lint tool", tool=probe, path=str(found))
    ctx.execute("lint", [ctx.config.project_root / ctx.config.tools.lint_wrapper])
    return StageStatus.COMPLETED


def run_crypto_tests(ctx: StageContext) -> StageStatus:
    """Run the trezor-crypto check suite with scaled timeouts."""
    binary = ctx.config.build_dir / ctx.config.suite.crypto_tests_binary
    env = {TIMEOUT_MULTIPLIER_VAR: str(ctx.config.suite.timeout_multiplier)}
    ctx.execute("crypto_tests", [binary], env=env)
    return StageStatus.COMPLETED


def resolve_tests_root(config: Config) -> Path:
    """Canonical absolute path of the tests directory under the project root.

    Raises:
        PathResolutionError: If the directory does not exist
    """
    candidate = config.project_root / config.suite.tests_dir
    try:
        tests_root = candidate.resolve(strict=True)
    except (OSError, RuntimeError) as e:
        raise PathResolutionError(
            message="No such directory",
            cause=e,
            path=str(candidate),
        ) from e

    if not tests_root.is_dir():
        raise PathResolutionError(message="Not a directory", path=str(candidate))
    return tests_root


def run_unit_tests(ctx: StageContext) -> StageStatus:
    """Run the gtest suite against the tests root."""
    tests_root = resolve_tests_root(ctx.config)
    binary = ctx.config.build_dir / ctx.config.suite.unit_tests_binary
    ctx.execute("unit_tests", [binary, tests_root, f"--gtest_filter={ctx.gtest_filter}"])
    return StageStatus.COMPLETED


DEFAULT_STAGES: tuple[Stage, ...] = (
    Stage("generate", "Generating files", generate_sources),
    Stage("build", "Building", configure_and_build),
    Stage("lint", "Linting", run_lint),
    Stage("crypto_tests", "Testing trezor-crypto", run_crypto_tests),
    Stage("unit_tests", "Testing", run_unit_tests),
)
