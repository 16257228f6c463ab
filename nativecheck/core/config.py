"""
Configuration management for nativecheck.

Provides centralized, type-safe configuration with environment variable overrides.
Defaults reproduce the fixed toolchain of the build-and-test routine: a Debug
build with clang, twelve compile jobs, and the two gtest/check binaries.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load .env file if it exists (looks in cwd and parent directories)
load_dotenv()


class ToolchainConfig(BaseModel):
    """CMake configuration and compilation settings."""

    build_type: Literal["Debug", "Release", "RelWithDebInfo", "MinSizeRel"] = Field(
        default="Debug", description="CMAKE_BUILD_TYPE"
    )
    c_compiler: str = Field(default="clang", description="CMAKE_C_COMPILER")
    cxx_compiler: str = Field(default="clang++", description="CMAKE_CXX_COMPILER")
    jobs: int = Field(default=12, ge=1, description="Parallel compile jobs")
    build_dir: Path = Field(default=Path("build"), description="Out-of-source build directory")
    targets: list[str] = Field(
        default_factory=lambda: ["tests", "TrezorCryptoTests"],
        description="Build targets compiled after configuration",
    )
    cmake: str = Field(default="cmake", description="CMake front end")
    make: str = Field(default="make", description="Build tool driving the generated makefiles")


class ToolsConfig(BaseModel):
    """Project helper scripts, relative to the project root."""

    generator: Path = Field(
        default=Path("tools/generate-files"), description="Source generator"
    )
    lint_wrapper: Path = Field(default=Path("tools/lint"), description="Lint wrapper script")
    lint_probe: str = Field(
        default="clang-tidy", description="Tool whose presence on PATH enables linting"
    )


class SuiteConfig(BaseModel):
    """Test binaries and their runtime settings."""

    crypto_tests_binary: Path = Field(
        default=Path("trezor-crypto/crypto/tests/TrezorCryptoTests"),
        description="Primary test binary, relative to the build directory",
    )
    unit_tests_binary: Path = Field(
        default=Path("tests/tests"),
        description="Secondary test binary, relative to the build directory",
    )
    tests_dir: Path = Field(
        default=Path("tests"), description="Tests root passed to the secondary binary"
    )
    timeout_multiplier: int = Field(
        default=4, ge=1, description="CK_TIMEOUT_MULTIPLIER for the primary binary"
    )
    gtest_filter: str = Field(default="*", min_length=1, description="Default --gtest_filter")


class PipelineConfig(BaseModel):
    """Pipeline execution configuration."""

    dry_run: bool = Field(default=False, description="Log commands without executing them")


class Config(BaseModel):
    """Root configuration for nativecheck."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging level"
    )
    log_format: Literal["auto", "console", "json"] = Field(
        default="auto", description="Log renderer; auto picks JSON when stderr is not a terminal"
    )
    project_root: Path = Field(
        default_factory=Path.cwd, description="Repository root all relative paths resolve against"
    )
    toolchain: ToolchainConfig = Field(default_factory=ToolchainConfig)
    tools: ToolsConfig = Field(default_factory=ToolsConfig)
    suite: SuiteConfig = Field(default_factory=SuiteConfig)
    pipeline: PipelineConfig = Field(default_factory=PipelineConfig)

    model_config = {"extra": "ignore"}

    @field_validator("project_root")
    @classmethod
    def _absolute_root(cls, value: Path) -> Path:
        # Tool paths are built from the root and also run with it as cwd
        return value.resolve()

    @property
    def build_dir(self) -> Path:
        """Absolute build directory."""
        return self.project_root / self.toolchain.build_dir

    @classmethod
    def from_env(cls) -> Config:
        """Create configuration from environment variables."""
        return cls(
            log_level=os.environ.get("NC_LOG_LEVEL", "INFO"),  # type: ignore
            log_format=os.environ.get("NC_LOG_FORMAT", "auto"),  # type: ignore
            project_root=Path(os.environ.get("NC_PROJECT_ROOT", os.getcwd())),
            toolchain=ToolchainConfig(
                build_type=os.environ.get("NC_BUILD_TYPE", "Debug"),  # type: ignore
                c_compiler=os.environ.get("NC_CC", "clang"),
                cxx_compiler=os.environ.get("NC_CXX", "clang++"),
                jobs=int(os.environ.get("NC_JOBS", "12")),
                build_dir=Path(os.environ.get("NC_BUILD_DIR", "build")),
            ),
            suite=SuiteConfig(
                timeout_multiplier=int(os.environ.get("NC_TIMEOUT_MULTIPLIER", "4")),
                gtest_filter=os.environ.get("NC_GTEST_FILTER", "*"),
            ),
            pipeline=PipelineConfig(
                dry_run=os.environ.get("NC_DRY_RUN", "false").lower() == "true",
            ),
        )


@lru_cache(maxsize=1)
def get_config() -> Config:
    """Get cached configuration instance."""
    return Config.from_env()
