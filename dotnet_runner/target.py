"""Target resolution and working directory selection.

Extracts the optional target (and other marked single values) from a
RawArgumentSet and decides which directory a command runs in.
"""

import shlex
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

from dotnet_runner.log import get_logger
from dotnet_runner.models import NamedSingleton, RawArgument, Target

logger = get_logger(__name__)


@dataclass(frozen=True)
class WorkingDirectory:
    """Directory a command runs in, with a notice when no target was given."""

    path: Path
    notice: str | None = None


def raw_target(arguments: Iterable[RawArgument]) -> str | None:
    """Return the unescaped target value, or None when absent.

    At most one target is expected; if several are present the last one wins.
    """
    targets = [arg.value for arg in arguments if isinstance(arg, Target)]
    if len(targets) > 1:
        logger.warning(f"Multiple targets given, using the last one: {targets!r}")
    return targets[-1] if targets else None


def resolve_target(arguments: Iterable[RawArgument]) -> str | None:
    """Return the shell-escaped target, or None when absent."""
    value = raw_target(arguments)
    return shlex.quote(value) if value is not None else None


def resolve_named(
    arguments: Iterable[RawArgument], marker: str, escape: bool = True
) -> str | None:
    """Return the value carried by ``marker``, or None when absent.

    Args:
        arguments: Argument variants to search
        marker: Exact marker, e.g. ``<RunSettings>``
        escape: Shell-escape the value; pass False for text the tool
            receives verbatim

    Returns:
        The (escaped) value of the last matching argument, or None
    """
    values = [
        arg.value
        for arg in arguments
        if isinstance(arg, NamedSingleton) and arg.marker == marker
    ]
    if not values:
        return None
    return shlex.quote(values[-1]) if escape else values[-1]


def _has_marker(directory: Path, markers: Sequence[str]) -> bool:
    for marker in markers:
        if any(ch in marker for ch in "*?["):
            if any(directory.glob(marker)):
                return True
        elif (directory / marker).exists():
            return True
    return False


def find_project_root(path: Path, markers: Sequence[str]) -> Path | None:
    """Find the nearest directory at or above ``path`` holding a root marker.

    Args:
        path: A file or directory; files start the search at their parent
        markers: File or directory names, glob patterns allowed (``*.sln``)

    Returns:
        The nearest enclosing root directory, or None when there is none
    """
    start = path if path.is_dir() else path.parent
    for directory in (start, *start.parents):
        if _has_marker(directory, markers):
            return directory
    return None


def resolve_working_directory(
    arguments: Iterable[RawArgument],
    default_dir: Path,
    markers: Sequence[str],
) -> WorkingDirectory:
    """Decide where a command runs.

    Without a target the command runs in ``default_dir`` and a notice is
    returned for the user. With a target it runs in the project root that
    contains the target, or in the target's own directory when no root
    marker is found.
    """
    value = raw_target(arguments)
    if value is None:
        return WorkingDirectory(
            path=default_dir,
            notice=(
                "No target selected; running against the current directory "
                f"({default_dir})"
            ),
        )

    target = Path(value).expanduser()
    if not target.is_absolute():
        target = default_dir / target
    target = target.resolve()

    root = find_project_root(target, markers)
    if root is None:
        root = target if target.is_dir() else target.parent
        logger.debug(f"No project root found for {target}, using {root}")
    return WorkingDirectory(path=root)
