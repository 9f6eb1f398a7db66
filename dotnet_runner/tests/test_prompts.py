"""Tests for interactive option collection.

Prompt.ask is patched; each side_effect entry answers one prompt in order.
"""

import io
from pathlib import Path
from unittest.mock import patch

import pytest
from rich.console import Console

from dotnet_runner.config import RunnerConfig
from dotnet_runner.models import KeyValue, NamedSingleton, Switch, Target
from dotnet_runner.prompts import KNOWN_OPTIONS, OptionPrompter, discover_projects

PATTERNS = ["*.sln", "*.csproj"]


def quiet_console() -> Console:
    return Console(file=io.StringIO(), width=120)


@pytest.fixture
def project_tree(tmp_path: Path) -> Path:
    """A small solution layout with build output that must be ignored."""
    (tmp_path / "App.sln").touch()
    (tmp_path / "src" / "App").mkdir(parents=True)
    (tmp_path / "src" / "App" / "App.csproj").touch()
    (tmp_path / "src" / "App" / "obj").mkdir()
    (tmp_path / "src" / "App" / "obj" / "Generated.csproj").touch()
    (tmp_path / ".hidden").mkdir()
    (tmp_path / ".hidden" / "Old.csproj").touch()
    return tmp_path


class TestDiscoverProjects:
    """Tests for discover_projects()."""

    def test_finds_projects_and_solutions(self, project_tree: Path):
        assert discover_projects(project_tree, PATTERNS) == [
            Path("App.sln"),
            Path("src/App/App.csproj"),
        ]

    def test_empty_directory(self, tmp_path: Path):
        assert discover_projects(tmp_path, PATTERNS) == []


class TestOptionPrompter:
    """Tests for OptionPrompter."""

    def test_collects_target_and_options(self, project_tree: Path):
        prompter = OptionPrompter(RunnerConfig(), quiet_console(), root=project_tree)

        with patch(
            "dotnet_runner.prompts.Prompt.ask",
            side_effect=["2", "--configuration=Release --no-incremental"],
        ):
            args = prompter("build")

        assert list(args) == [
            KeyValue("--configuration", "Release"),
            Switch("--no-incremental"),
            Target(str(project_tree / "src" / "App" / "App.csproj")),
        ]

    def test_no_target_selected(self, project_tree: Path):
        prompter = OptionPrompter(RunnerConfig(), quiet_console(), root=project_tree)

        with patch(
            "dotnet_runner.prompts.Prompt.ask", side_effect=["0", "--no-restore"]
        ):
            args = prompter("build")

        assert list(args) == [Switch("--no-restore")]

    def test_options_default_to_preset(self, tmp_path: Path):
        prompter = OptionPrompter(RunnerConfig(), quiet_console(), root=tmp_path)

        with patch("dotnet_runner.prompts.Prompt.ask") as mock_ask:
            mock_ask.side_effect = lambda *args, **kwargs: kwargs["default"]
            args = prompter("clean")

        assert list(args) == [
            KeyValue("--configuration", "Debug"),
            KeyValue("--verbosity", "normal"),
        ]

    def test_test_collects_run_settings(self, tmp_path: Path):
        prompter = OptionPrompter(RunnerConfig(), quiet_console(), root=tmp_path)

        with patch(
            "dotnet_runner.prompts.Prompt.ask",
            side_effect=["--filter=Category=Fast", 'Parameter(name="env")'],
        ):
            args = prompter("test")

        assert list(args) == [
            KeyValue("--filter", "Category=Fast"),
            NamedSingleton("<RunSettings>", 'Parameter(name="env")'),
        ]

    def test_blank_run_settings_are_absent(self, tmp_path: Path):
        prompter = OptionPrompter(RunnerConfig(), quiet_console(), root=tmp_path)

        with patch(
            "dotnet_runner.prompts.Prompt.ask", side_effect=["--no-build", "  "]
        ):
            args = prompter("test")

        assert list(args) == [Switch("--no-build")]

    def test_invalid_quoting_asks_again(self, tmp_path: Path):
        prompter = OptionPrompter(RunnerConfig(), quiet_console(), root=tmp_path)

        with patch(
            "dotnet_runner.prompts.Prompt.ask",
            side_effect=['--output="unclosed', "--output=out"],
        ):
            args = prompter("build")

        assert list(args) == [KeyValue("--output", "out")]

    def test_interrupt_abandons_collection(self, tmp_path: Path):
        prompter = OptionPrompter(RunnerConfig(), quiet_console(), root=tmp_path)

        with patch("dotnet_runner.prompts.Prompt.ask", side_effect=KeyboardInterrupt):
            assert prompter("build") is None

    def test_eof_abandons_collection(self, tmp_path: Path):
        prompter = OptionPrompter(RunnerConfig(), quiet_console(), root=tmp_path)

        with patch("dotnet_runner.prompts.Prompt.ask", side_effect=EOFError):
            assert prompter("test") is None


class TestKnownOptions:
    """Tests for the option hints."""

    def test_every_operation_has_hints(self):
        assert set(KNOWN_OPTIONS) == {"build", "test", "clean"}

    def test_filter_only_offered_for_test(self):
        assert any(opt.startswith("--filter") for opt, _ in KNOWN_OPTIONS["test"])
        assert not any(opt.startswith("--filter") for opt, _ in KNOWN_OPTIONS["build"])
