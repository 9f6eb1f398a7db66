"""Option collection and rendering.

Turns the option variants of a RawArgumentSet into escaped (name, value)
pairs and renders them as a single space-separated segment.
"""

import shlex
from collections.abc import Iterable

from dotnet_runner.config import RunnerConfig
from dotnet_runner.models import (
    KeyValue,
    OperationKind,
    ParsedOption,
    RawArgument,
    RawArgumentSet,
    Switch,
)


def collect_options(arguments: Iterable[RawArgument]) -> list[ParsedOption]:
    """Collect switch and key/value options, escaping values once.

    Targets and other marked values are skipped. Duplicates are kept in
    input order.

    Args:
        arguments: Argument variants, typically a RawArgumentSet

    Returns:
        Parsed options in input order
    """
    parsed: list[ParsedOption] = []
    for arg in arguments:
        if isinstance(arg, KeyValue):
            parsed.append(ParsedOption(arg.name, shlex.quote(arg.value)))
        elif isinstance(arg, Switch):
            parsed.append(ParsedOption(arg.name))
    return parsed


def render_option(option: ParsedOption) -> str:
    """Render one option as ``name value``, or ``name`` for a switch."""
    if option.value is None:
        return option.name
    return f"{option.name} {option.value}"


def render_options(options: Iterable[ParsedOption]) -> str:
    """Render parsed options as ``name value`` pairs and bare switches."""
    return " ".join(render_option(option) for option in options)


def preset_arguments(kind: OperationKind, config: RunnerConfig) -> RawArgumentSet:
    """Return the default option preset for an operation kind."""
    return RawArgumentSet.from_tokens(config.presets.get(kind, []))
