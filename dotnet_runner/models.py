"""Data models for dotnet-runner.

Defines the tagged argument variants produced by the UI layer, the parsed
option pairs consumed by rendering, and the rendered command unit that is
stored in memory and handed to the process runner.
"""

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Union

from dotnet_runner.log import get_logger

logger = get_logger(__name__)

OperationKind = Literal["build", "test", "clean"]

OPERATION_KINDS: tuple[OperationKind, ...] = ("build", "test", "clean")

TARGET_MARKER = "<TARGET>"
RUNSETTINGS_MARKER = "<RunSettings>"

SWITCH_PREFIX = "-"
VALUE_SEPARATOR = "="


@dataclass(frozen=True)
class Switch:
    """A bare switch such as ``--no-build``."""

    name: str


@dataclass(frozen=True)
class KeyValue:
    """An option with a value, such as ``--configuration=Debug``."""

    name: str
    value: str


@dataclass(frozen=True)
class Target:
    """The optional project or solution path that scopes an operation."""

    value: str


@dataclass(frozen=True)
class NamedSingleton:
    """A marked single value other than the target, e.g. runtime settings."""

    marker: str
    value: str


RawArgument = Union[Switch, KeyValue, Target, NamedSingleton]


@dataclass(frozen=True)
class ParsedOption:
    """An option ready for rendering.

    ``value`` is already shell-escaped; it is None for bare switches.
    """

    name: str
    value: str | None = None


@dataclass(frozen=True)
class RenderedCommand:
    """A fully rendered command and the directory it runs in."""

    kind: OperationKind
    text: str
    working_directory: Path


def parse_token(token: str) -> RawArgument | None:
    """Classify a single raw token.

    Returns None for tokens that are neither options nor well-formed marker
    tokens. Malformed marker tokens are logged and treated as absent.
    """
    if token.startswith("<"):
        if ">" not in token:
            logger.warning(f"Ignoring unterminated marker token: {token!r}")
            return None
        end = token.index(">") + 1
        marker, rest = token[:end], token[end:]
        if not rest.startswith(VALUE_SEPARATOR) or len(rest) == 1:
            logger.warning(f"Ignoring malformed marker token: {token!r}")
            return None
        value = rest[1:]
        if marker == TARGET_MARKER:
            return Target(value)
        return NamedSingleton(marker, value)

    if token.startswith(SWITCH_PREFIX):
        if VALUE_SEPARATOR in token:
            name, value = token.split(VALUE_SEPARATOR, 1)
            return KeyValue(name, value)
        return Switch(token)

    logger.debug(f"Ignoring non-option token: {token!r}")
    return None


@dataclass(frozen=True)
class RawArgumentSet:
    """Ordered sequence of arguments collected for one invocation."""

    arguments: tuple[RawArgument, ...] = ()

    @classmethod
    def from_tokens(cls, tokens: Iterable[str]) -> "RawArgumentSet":
        """Build an argument set from raw string tokens, preserving order."""
        parsed = (parse_token(token) for token in tokens)
        return cls(tuple(arg for arg in parsed if arg is not None))

    @classmethod
    def of(cls, arguments: Sequence[RawArgument]) -> "RawArgumentSet":
        """Build an argument set from already classified arguments."""
        return cls(tuple(arguments))

    def __iter__(self) -> Iterator[RawArgument]:
        return iter(self.arguments)

    def __len__(self) -> int:
        return len(self.arguments)

    def has_options(self) -> bool:
        """True when any switch or key/value option is present."""
        return any(isinstance(arg, (Switch, KeyValue)) for arg in self.arguments)

    def with_arguments(self, arguments: Iterable[RawArgument]) -> "RawArgumentSet":
        """Return a new set with ``arguments`` appended."""
        return RawArgumentSet(self.arguments + tuple(arguments))
