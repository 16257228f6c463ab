"""Unit tests for the command-line interface."""

import pytest
from typer.testing import CliRunner

from nativecheck import __version__
from nativecheck.cli import app


@pytest.fixture
def cli():
    return CliRunner()


@pytest.fixture
def recording(monkeypatch, make_runner):
    """Route the pipeline's process runner to a recording fake.

    Returns:
        Callable: ``recording(**kwargs)`` installs and returns a RecordingRunner.
    """

    def install(**kwargs):
        runner = make_runner(**kwargs)
        monkeypatch.setattr(
            "nativecheck.orchestration.pipeline.ProcessRunner",
            lambda **_: runner,
        )
        return runner

    return install


class TestRunCommand:
    """Tests for `nativecheck run`."""

    def test_success(self, cli, recording, project_root):
        """Test a green run.

        Verifies exit code 0, the announcements in order, and the summary.
        """
        runner = recording()

        result = cli.invoke(app, ["run", "--root", str(project_root)])

        assert result.exit_code == 0, result.output
        lines = [line for line in result.stdout.splitlines() if line.startswith("####")]
        assert lines == [
            "#### Generating files... ####",
            "#### Building... ####",
            "#### Linting... ####",
            "#### Testing trezor-crypto... ####",
            "#### Testing... ####",
        ]
        assert "All stages passed" in result.stdout
        assert runner.call_for("tests").argv[-1] == "--gtest_filter=*"

    def test_exit_code_is_first_failure(self, cli, recording, project_root):
        """Test that the CLI exits with the failing tool's exit code."""
        runner = recording(returncodes={"make": 2})

        result = cli.invoke(app, ["run", "--root", str(project_root)])

        assert result.exit_code == 2
        assert runner.programs == ["generate-files", "cmake", "make"]
        assert "All stages passed" not in result.stdout

    def test_filter_option(self, cli, recording, project_root):
        """Test that --filter reaches the gtest binary."""
        runner = recording()

        result = cli.invoke(app, ["run", "--root", str(project_root), "--filter", "HDWallet*"])

        assert result.exit_code == 0, result.output
        assert runner.call_for("tests").argv[-1] == "--gtest_filter=HDWallet*"

    def test_filter_from_environment(self, cli, recording, project_root, monkeypatch):
        """Test that NC_GTEST_FILTER provides the default filter."""
        monkeypatch.setenv("NC_GTEST_FILTER", "Cardano*")
        runner = recording()

        result = cli.invoke(app, ["run", "--root", str(project_root)])

        assert result.exit_code == 0, result.output
        assert runner.call_for("tests").argv[-1] == "--gtest_filter=Cardano*"

    def test_missing_tests_dir(self, cli, recording, project_root):
        """Test that a missing tests directory exits 1 without running gtest."""
        (project_root / "tests").rmdir()
        runner = recording()

        result = cli.invoke(app, ["run", "--root", str(project_root)])

        assert result.exit_code == 1
        assert "tests" not in runner.programs

    def test_empty_filter_rejected(self, cli, recording, project_root):
        """Test that an empty --filter is a usage error and nothing runs."""
        runner = recording()

        result = cli.invoke(app, ["run", "--root", str(project_root), "--filter", ""])

        assert result.exit_code == 2
        assert runner.calls == []

    def test_dry_run(self, cli, project_root):
        """Test that --dry-run completes without spawning any tool."""
        (project_root / "tools" / "generate-files").unlink()

        result = cli.invoke(app, ["run", "--root", str(project_root), "--dry-run"])

        assert result.exit_code == 0, result.output

    def test_root_must_exist(self, cli, temp_dir):
        """Test that a nonexistent --root is rejected by argument parsing."""
        result = cli.invoke(app, ["run", "--root", str(temp_dir / "missing")])
        assert result.exit_code == 2


class TestOtherCommands:
    """Tests for the version flag and the config command."""

    def test_version(self, cli):
        result = cli.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"nativecheck v{__version__}" in result.stdout

    def test_config(self, cli, monkeypatch, temp_dir):
        """Test that the effective configuration is shown."""
        monkeypatch.setenv("NC_JOBS", "3")
        monkeypatch.setenv("NC_PROJECT_ROOT", str(temp_dir))

        result = cli.invoke(app, ["config"])

        assert result.exit_code == 0
        assert "Debug" in result.stdout
        assert "clang++" in result.stdout
        assert "3" in result.stdout
