"""Test configuration for nativecheck."""

import tempfile
from dataclasses import dataclass
from pathlib import Path

import pytest

from nativecheck.core.config import Config, get_config
from nativecheck.services.process import ProcessRunner


@dataclass
class RecordedCall:
    argv: list
    cwd: Path
    env: dict

    @property
    def program(self):
        return Path(self.argv[0]).name


class RecordingRunner(ProcessRunner):
    """ProcessRunner that records commands instead of spawning them.

    Exit codes are looked up by program name (e.g. ``"make"``); anything not
    listed exits 0. Only tools in ``available_tools`` are found on PATH.
    """

    def __init__(self, returncodes=None, available_tools=()):
        super().__init__()
        self.returncodes = dict(returncodes or {})
        self.available_tools = set(available_tools)
        self.calls = []
        self.probes = []

    def which(self, tool_name):
        self.probes.append(tool_name)
        if tool_name in self.available_tools:
            return Path("/usr/bin") / tool_name
        return None

    def run(self, cmd, cwd, env=None):
        call = RecordedCall(argv=[str(arg) for arg in cmd], cwd=cwd, env=dict(env or {}))
        self.calls.append(call)
        return self.returncodes.get(call.program, 0)

    @property
    def programs(self):
        return [call.program for call in self.calls]

    def call_for(self, program):
        for call in self.calls:
            if call.program == program:
                return call
        return None


@pytest.fixture(autouse=True)
def clear_config_cache():
    """Drop the cached configuration around every test."""
    get_config.cache_clear()
    yield
    get_config.cache_clear()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests.

    Yields:
        Path: A Path object pointing to the temporary directory.
            The directory is automatically cleaned up after the test.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def project_root(temp_dir):
    """Create a minimal native project tree.

    Contains the generator and lint scripts under ``tools/`` and the
    ``tests/`` directory handed to the gtest binary.

    Returns:
        Path: The project root.
    """
    root = temp_dir / "project"
    (root / "tools").mkdir(parents=True)
    (root / "tests").mkdir()
    for script in ("generate-files", "lint"):
        path = root / "tools" / script
        path.write_text("#!/bin/sh\nexit 0\n")
        path.chmod(0o755)
    return root.resolve()


@pytest.fixture
def config(project_root):
    """Create a configuration rooted at the sample project.

    Returns:
        Config: Default settings with ``project_root`` pointing at the sample tree.
    """
    return Config(project_root=project_root)


@pytest.fixture
def make_runner():
    """Factory for RecordingRunner instances.

    Returns:
        Callable: ``make_runner(returncodes=None, available_tools=())``.
    """
    return RecordingRunner
