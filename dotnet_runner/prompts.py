"""Interactive option collection.

Prompts the user for a target project and option tokens and produces the
RawArgumentSet consumed by the command pipeline. Abandoning a prompt with
Ctrl-C or EOF returns None and changes nothing.
"""

import shlex
from collections.abc import Sequence
from pathlib import Path

from rich.console import Console
from rich.prompt import Prompt
from rich.table import Table

from dotnet_runner.config import RunnerConfig
from dotnet_runner.log import get_logger
from dotnet_runner.models import (
    RUNSETTINGS_MARKER,
    NamedSingleton,
    OperationKind,
    RawArgumentSet,
    Target,
)

logger = get_logger(__name__)

# Directories never searched for project files
SKIPPED_DIRS = {"bin", "obj", "node_modules"}

# Common flags offered as hints, per operation
KNOWN_OPTIONS: dict[str, list[tuple[str, str]]] = {
    "build": [
        ("--configuration=<name>", "Build configuration (Debug, Release)"),
        ("--verbosity=<level>", "quiet, minimal, normal, detailed, diagnostic"),
        ("--framework=<tfm>", "Target framework"),
        ("--runtime=<rid>", "Target runtime identifier"),
        ("--output=<dir>", "Output directory"),
        ("--no-restore", "Skip the implicit restore"),
        ("--no-incremental", "Force a full rebuild"),
    ],
    "test": [
        ("--configuration=<name>", "Build configuration (Debug, Release)"),
        ("--verbosity=<level>", "quiet, minimal, normal, detailed, diagnostic"),
        ("--filter=<expr>", "Run tests matching the expression"),
        ("--logger=<logger>", "Test logger, e.g. trx"),
        ("--framework=<tfm>", "Target framework"),
        ("--no-build", "Do not build before testing"),
        ("--blame", "Run in blame mode to isolate crashing tests"),
    ],
    "clean": [
        ("--configuration=<name>", "Build configuration (Debug, Release)"),
        ("--verbosity=<level>", "quiet, minimal, normal, detailed, diagnostic"),
        ("--framework=<tfm>", "Target framework"),
        ("--output=<dir>", "Output directory"),
    ],
}


def discover_projects(root: Path, patterns: Sequence[str]) -> list[Path]:
    """Find project and solution files below ``root``.

    Skips hidden directories and build output directories.

    Args:
        root: Directory to search
        patterns: Glob patterns such as ``*.csproj``

    Returns:
        Sorted list of paths relative to ``root``
    """
    found: set[Path] = set()
    for pattern in patterns:
        for path in root.rglob(pattern):
            relative = path.relative_to(root)
            if any(
                part.startswith(".") or part in SKIPPED_DIRS
                for part in relative.parts[:-1]
            ):
                continue
            found.add(relative)
    return sorted(found)


class OptionPrompter:
    """Collects arguments for an operation from the terminal.

    Instances are callable, so one can be passed directly as the collector
    of a RunnerSession.
    """

    def __init__(
        self,
        config: RunnerConfig,
        console: Console | None = None,
        root: Path | None = None,
    ) -> None:
        self.config = config
        self.console = console or Console()
        self.root = root or Path.cwd()

    def __call__(self, kind: OperationKind) -> RawArgumentSet | None:
        try:
            return self.collect(kind)
        except (KeyboardInterrupt, EOFError):
            self.console.print(f"\n[yellow]{kind} cancelled[/yellow]")
            return None

    def collect(self, kind: OperationKind) -> RawArgumentSet:
        """Prompt for target, options and (for test) runtime settings."""
        arguments = []

        target = self.choose_target()
        if target is not None:
            arguments.append(Target(target))

        self.show_known_options(kind)
        tokens = self.ask_tokens(kind)

        if kind == "test":
            settings = Prompt.ask(
                "Run settings (blank for none)", default="", console=self.console
            )
            if settings.strip():
                arguments.append(NamedSingleton(RUNSETTINGS_MARKER, settings.strip()))

        logger.debug(f"Collected {kind} tokens: {tokens!r}")
        return RawArgumentSet.from_tokens(tokens).with_arguments(arguments)

    def ask_tokens(self, kind: OperationKind) -> list[str]:
        """Ask for option tokens, starting from the preset."""
        default = " ".join(self.config.presets.get(kind, []))
        while True:
            line = Prompt.ask("Options", default=default, console=self.console)
            try:
                return shlex.split(line)
            except ValueError as e:
                self.console.print(f"[red]Invalid options:[/red] {e}")

    def choose_target(self) -> str | None:
        """Let the user pick a discovered project, or none."""
        projects = discover_projects(self.root, self.config.project_patterns)
        if not projects:
            self.console.print(
                "[yellow]No project or solution files found[/yellow]"
            )
            return None

        self.console.print("[bold]Targets:[/bold]")
        self.console.print("  0) (none - use current directory)")
        for i, project in enumerate(projects, start=1):
            self.console.print(f"  {i}) {project}")

        choices = [str(i) for i in range(len(projects) + 1)]
        answer = Prompt.ask(
            "Target", choices=choices, default="0", console=self.console
        )
        index = int(answer)
        if index == 0:
            return None
        return str(self.root / projects[index - 1])

    def show_known_options(self, kind: OperationKind) -> None:
        table = Table(title=f"Common {kind} options", show_header=False)
        table.add_column("Option")
        table.add_column("Description")
        for option, description in KNOWN_OPTIONS.get(kind, []):
            table.add_row(option, description)
        self.console.print(table)
