"""CLI for dotnet-runner.

Provides one-shot build, test and clean commands, an interactive shell with
repeat actions, and a presets listing.
"""

import sys
from collections.abc import Callable
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt
from rich.table import Table

from dotnet_runner.config import RunnerConfig
from dotnet_runner.errors import RunnerError
from dotnet_runner.log import configure_logging
from dotnet_runner.models import (
    OPERATION_KINDS,
    RUNSETTINGS_MARKER,
    NamedSingleton,
    OperationKind,
    RawArgumentSet,
    RenderedCommand,
    Target,
)
from dotnet_runner.process import ProcessRunner
from dotnet_runner.prompts import OptionPrompter
from dotnet_runner.session import RunnerSession, assemble_command
from dotnet_runner.telemetry import create_metrics, setup_telemetry

console = Console()

PASSTHROUGH = {"ignore_unknown_options": True}

# Menu entries for the interactive shell: key -> (description, kind, repeat)
MENU: dict[str, tuple[str, OperationKind | None, bool]] = {
    "b": ("build", "build", False),
    "t": ("test", "test", False),
    "c": ("clean", "clean", False),
    "rb": ("repeat last build", "build", True),
    "rt": ("repeat last test", "test", True),
    "q": ("quit", None, False),
}


@click.group()
@click.version_option(package_name="dotnet-runner")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def cli(debug: bool) -> None:
    """dotnet-runner - Build, test and clean .NET projects."""
    config = RunnerConfig.from_env()
    configure_logging(log_dir=config.log_dir, debug=debug)


@cli.command(context_settings=PASSTHROUGH)
@click.argument("tokens", nargs=-1, type=click.UNPROCESSED)
@click.option("--project", "target", default=None, help="Project or solution file")
@click.option("--dry-run", is_flag=True, help="Print the command without running it")
def build(tokens: tuple[str, ...], target: str | None, dry_run: bool) -> None:
    """Build a project, e.g. build --project src/App.csproj --configuration=Release"""
    _run_once("build", tokens, target, None, dry_run)


@cli.command(context_settings=PASSTHROUGH)
@click.argument("tokens", nargs=-1, type=click.UNPROCESSED)
@click.option("--project", "target", default=None, help="Project or solution file")
@click.option(
    "--run-settings", "settings", default=None, help="Run settings passed after --"
)
@click.option("--dry-run", is_flag=True, help="Print the command without running it")
def test(
    tokens: tuple[str, ...], target: str | None, settings: str | None, dry_run: bool
) -> None:
    """Run tests, e.g. test --filter=Category=Fast"""
    _run_once("test", tokens, target, settings, dry_run)


@cli.command(context_settings=PASSTHROUGH)
@click.argument("tokens", nargs=-1, type=click.UNPROCESSED)
@click.option("--project", "target", default=None, help="Project or solution file")
@click.option("--dry-run", is_flag=True, help="Print the command without running it")
def clean(tokens: tuple[str, ...], target: str | None, dry_run: bool) -> None:
    """Clean build outputs in the background."""
    _run_once("clean", tokens, target, None, dry_run)


def _arguments_from_cli(
    tokens: tuple[str, ...], target: str | None, settings: str | None
) -> RawArgumentSet:
    """Build an argument set from command-line tokens and options.

    A relative target is made absolute against the current directory.
    """
    extra = []
    if target:
        extra.append(Target(str((Path.cwd() / Path(target).expanduser()).resolve())))
    if settings:
        extra.append(NamedSingleton(RUNSETTINGS_MARKER, settings))
    return RawArgumentSet.from_tokens(tokens).with_arguments(extra)


def _run_once(
    kind: OperationKind,
    tokens: tuple[str, ...],
    target: str | None,
    settings: str | None,
    dry_run: bool,
) -> None:
    """Internal implementation of the one-shot commands."""
    config = RunnerConfig.from_env()
    arguments = _arguments_from_cli(tokens, target, settings)

    try:
        if dry_run:
            command, notice = assemble_command(
                kind, arguments, config, default_dir=Path.cwd()
            )
            if notice:
                _print_notice(notice)
            click.echo(command.text)
            return

        tracer, meter = setup_telemetry(config)
        create_metrics(meter)

        runner = ProcessRunner(log_dir=config.log_dir)
        session = RunnerSession(
            config=config,
            collect=lambda _kind: arguments,
            runner=runner,
            notify=_print_notice,
            on_dispatch=_dispatch_printer(runner),
            tracer=tracer,
        )
        returncode = session.execute(kind, arguments)
    except RunnerError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)

    if returncode is None:
        return
    _print_status(kind, returncode)
    sys.exit(0 if returncode == 0 else 1)


@cli.command()
def shell() -> None:
    """Start an interactive session with build, test, clean and repeat."""
    config = RunnerConfig.from_env()
    tracer, meter = setup_telemetry(config)
    create_metrics(meter)

    runner = ProcessRunner(log_dir=config.log_dir)
    session = RunnerSession(
        config=config,
        collect=OptionPrompter(config, console=console),
        runner=runner,
        notify=_print_notice,
        on_dispatch=_dispatch_printer(runner),
        tracer=tracer,
    )

    while True:
        _print_menu()
        try:
            choice = Prompt.ask("Action", choices=list(MENU), default="b")
        except (KeyboardInterrupt, EOFError):
            console.print()
            return

        _, kind, repeat = MENU[choice]
        if kind is None:
            return

        try:
            if repeat:
                returncode = session.repeat(kind)
            else:
                returncode = session.run(kind)
        except RunnerError as e:
            console.print(f"[red]Error:[/red] {escape(str(e))}")
            continue

        if returncode is not None:
            _print_status(kind, returncode)


@cli.command()
def presets() -> None:
    """Show the default options for each operation."""
    config = RunnerConfig.from_env()

    table = Table(title="Option Presets")
    table.add_column("Operation")
    table.add_column("Options")
    for kind in OPERATION_KINDS:
        table.add_row(kind, escape(" ".join(config.presets.get(kind, []))))

    console.print(table)


def _print_menu() -> None:
    console.print()
    for key, (description, _, _) in MENU.items():
        console.print(f"  [bold]{key:>2}[/bold]  {description}")


def _print_notice(notice: str) -> None:
    console.print(f"[yellow]{escape(notice)}[/yellow]")


def _dispatch_printer(
    runner: ProcessRunner,
) -> Callable[[str, RenderedCommand], None]:
    """Build the callback that echoes each command before it runs."""

    def on_dispatch(label: str, command: RenderedCommand) -> None:
        console.print(f"[bold]{escape(label)}:[/bold] {escape(command.text)}")
        console.print(f"  [dim]in {escape(str(command.working_directory))}[/dim]")
        if command.kind == "clean":
            output = runner.output_path(command.kind)
            console.print(
                f"{command.kind} started in the background; "
                f"output in {escape(str(output))}"
            )

    return on_dispatch


def _print_status(kind: str, returncode: int) -> None:
    if returncode == 0:
        console.print(f"[bold green]{kind.upper()} SUCCEEDED[/bold green]")
    else:
        console.print(
            f"[bold red]{kind.upper()} FAILED[/bold red] (exit code {returncode})"
        )


def main() -> None:
    """Main entry point for the dotnet-runner CLI."""
    cli()


if __name__ == "__main__":
    main()
