"""Operation pipeline and repeat handling.

A RunnerSession ties the pieces together for one interactive session:
collect arguments, resolve the target, render the command, remember it and
hand it to the process runner. It also owns the repeat action, which replays
a remembered command verbatim.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from opentelemetry import trace

from dotnet_runner import telemetry
from dotnet_runner.config import RunnerConfig
from dotnet_runner.errors import RunnerError
from dotnet_runner.log import get_command_logger, get_logger
from dotnet_runner.memory import CommandMemory
from dotnet_runner.models import (
    RUNSETTINGS_MARKER,
    OperationKind,
    RawArgumentSet,
    RenderedCommand,
)
from dotnet_runner.options import collect_options, preset_arguments, render_options
from dotnet_runner.process import ProcessRunner
from dotnet_runner.target import (
    resolve_named,
    resolve_target,
    resolve_working_directory,
)
from dotnet_runner.templates import (
    CommandParts,
    get_template,
    render_command,
    render_settings,
)

logger = get_logger(__name__)

Collector = Callable[[OperationKind], RawArgumentSet | None]


def assemble_command(
    kind: OperationKind,
    arguments: RawArgumentSet,
    config: RunnerConfig,
    default_dir: Path,
) -> tuple[RenderedCommand, str | None]:
    """Render the command for ``kind`` from collected arguments.

    When ``arguments`` carries no options, the operation's preset options
    are rendered instead.

    Args:
        kind: Operation kind
        arguments: Arguments collected by the UI layer
        config: Runner configuration (tool, presets, root markers)
        default_dir: Directory used when no target is given

    Returns:
        Tuple of (rendered command, notice for the user or None)
    """
    if arguments.has_options():
        options = render_options(collect_options(arguments))
    else:
        options = render_options(collect_options(preset_arguments(kind, config)))

    settings = ""
    if kind == "test":
        settings = render_settings(
            resolve_named(arguments, RUNSETTINGS_MARKER, escape=False)
        )

    parts = CommandParts(
        tool=config.tool,
        target=resolve_target(arguments),
        options=options,
        settings=settings,
    )
    text = render_command(get_template(kind), parts)

    workdir = resolve_working_directory(arguments, default_dir, config.root_markers)
    return RenderedCommand(kind, text, workdir.path), workdir.notice


@dataclass
class RunnerSession:
    """Pipeline state for one interactive session.

    Attributes:
        config: Runner configuration
        collect: UI callback returning the arguments for an operation kind,
            or None when the user abandons collection
        runner: Process runner receiving rendered commands
        memory: Last build and test commands
        cwd: Default working directory when no target is selected
        notify: Receives user-facing notices
        on_output: Receives output lines of build and test commands
        on_dispatch: Called with (label, command) just before execution
        tracer: OpenTelemetry tracer for operation spans
    """

    config: RunnerConfig
    collect: Collector
    runner: ProcessRunner
    memory: CommandMemory = field(default_factory=CommandMemory)
    cwd: Path = field(default_factory=Path.cwd)
    notify: Callable[[str], None] = logger.info
    on_output: Callable[[str], None] | None = None
    on_dispatch: Callable[[str, RenderedCommand], None] | None = None
    tracer: trace.Tracer = field(default_factory=lambda: trace.get_tracer(__name__))
    command_log: logging.Logger = field(init=False)

    def __post_init__(self) -> None:
        self.command_log = get_command_logger(self.config.log_dir)

    def run(self, kind: OperationKind) -> int | None:
        """Run the full flow for ``kind``, starting with option collection.

        Returns:
            Exit code for build and test, None for clean or when the user
            abandoned option collection
        """
        arguments = self.collect(kind)
        if arguments is None:
            logger.info(f"{kind} cancelled during option collection")
            return None
        return self.execute(kind, arguments)

    def execute(self, kind: OperationKind, arguments: RawArgumentSet) -> int | None:
        """Render, remember and run a command from collected arguments."""
        with self.tracer.start_as_current_span(f"dotnet_runner.{kind}") as span:
            command, notice = assemble_command(kind, arguments, self.config, self.cwd)
            if notice:
                self.notify(notice)

            span.set_attribute("command.text", command.text)
            span.set_attribute("command.cwd", str(command.working_directory))

            if self.memory.remembers(kind):
                self.memory.record(command)
                return self._run_compile(kind, command)

            self._dispatch(kind, command)
            self.runner.run_detached(
                command.text, label=kind, cwd=command.working_directory
            )
            return None

    def repeat(self, kind: OperationKind) -> int | None:
        """Replay the last command of ``kind`` without re-collecting options.

        Falls back to the full flow when nothing has been run yet.

        Raises:
            RunnerError: If ``kind`` has no repeat (clean)
        """
        if not self.memory.remembers(kind):
            raise RunnerError(f"{kind} has no repeat action")

        command = self.memory.recall(kind)
        _count_repeat(kind, replayed=command is not None)
        if command is None:
            self.notify(f"No previous {kind} command; collecting options")
            return self.run(kind)

        with self.tracer.start_as_current_span(f"dotnet_runner.repeat_{kind}") as span:
            span.set_attribute("command.text", command.text)
            return self._run_compile(f"repeat {kind}", command)

    def _run_compile(self, label: str, command: RenderedCommand) -> int:
        self._dispatch(label, command)
        return self.runner.run_compile(
            command.text, command.working_directory, on_output=self.on_output
        )

    def _dispatch(self, label: str, command: RenderedCommand) -> None:
        self.command_log.info(command.text, extra={"label": label})
        try:
            telemetry.commands_counter.add(1, {"kind": command.kind})
        except (AttributeError, NameError):
            pass  # Metrics not initialized
        if self.on_dispatch:
            self.on_dispatch(label, command)


def _count_repeat(kind: OperationKind, replayed: bool) -> None:
    try:
        telemetry.repeats_counter.add(1, {"kind": kind, "replayed": replayed})
    except (AttributeError, NameError):
        pass  # Metrics not initialized
