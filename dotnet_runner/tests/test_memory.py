"""Tests for last-command memory."""

import threading
from pathlib import Path

import pytest

from dotnet_runner.memory import CommandMemory
from dotnet_runner.models import RenderedCommand


def make_command(kind: str = "build", text: str = "dotnet build") -> RenderedCommand:
    """Create a test RenderedCommand."""
    return RenderedCommand(kind, text, Path("/repo"))  # type: ignore[arg-type]


class TestCommandMemory:
    """Tests for CommandMemory."""

    def test_empty_at_start(self):
        memory = CommandMemory()
        assert memory.recall("build") is None
        assert memory.recall("test") is None

    def test_record_then_recall(self):
        memory = CommandMemory()
        command = make_command()
        memory.record(command)
        assert memory.recall("build") is command

    def test_recall_does_not_clear(self):
        memory = CommandMemory()
        memory.record(make_command())
        memory.recall("build")
        assert memory.recall("build") is not None

    def test_record_overwrites(self):
        memory = CommandMemory()
        memory.record(make_command(text="dotnet build a.sln"))
        memory.record(make_command(text="dotnet build b.sln"))
        assert memory.recall("build").text == "dotnet build b.sln"

    def test_slots_are_independent(self):
        memory = CommandMemory()
        memory.record(make_command("test", "dotnet test"))
        assert memory.recall("build") is None
        assert memory.recall("test").text == "dotnet test"

    def test_clean_is_not_remembered(self):
        memory = CommandMemory()
        assert not memory.remembers("clean")
        with pytest.raises(ValueError):
            memory.record(make_command("clean", "dotnet clean"))
        assert memory.recall("clean") is None

    def test_concurrent_records_leave_one_complete_value(self):
        memory = CommandMemory()
        commands = [make_command(text=f"dotnet build {i}.sln") for i in range(50)]
        threads = [
            threading.Thread(target=memory.record, args=(c,)) for c in commands
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert memory.recall("build") in commands
