"""Last-command memory for the repeat action.

Holds the most recently rendered build and test commands for one session.
Clean commands are never remembered.
"""

import threading

from dotnet_runner.models import OperationKind, RenderedCommand

REMEMBERED_KINDS: tuple[OperationKind, ...] = ("build", "test")


class CommandMemory:
    """Single-slot memory per operation kind.

    Each slot holds at most one command; recording overwrites it and
    recalling never clears it. Nothing is persisted across restarts.

    Usage:
        memory = CommandMemory()
        memory.record(command)
        memory.recall("build")  # -> the same RenderedCommand
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._slots: dict[str, RenderedCommand | None] = {
            kind: None for kind in REMEMBERED_KINDS
        }

    def record(self, command: RenderedCommand) -> None:
        """Store ``command`` as the last command of its kind.

        Raises:
            ValueError: If the kind has no memory slot (clean)
        """
        if command.kind not in self._slots:
            raise ValueError(f"{command.kind} commands are not remembered")
        with self._lock:
            self._slots[command.kind] = command

    def recall(self, kind: OperationKind) -> RenderedCommand | None:
        """Return the last command of ``kind``, or None if none was recorded."""
        with self._lock:
            return self._slots.get(kind)

    def remembers(self, kind: OperationKind) -> bool:
        """True when ``kind`` has a memory slot."""
        return kind in self._slots
