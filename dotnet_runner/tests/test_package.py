"""Tests for dotnet_runner package structure.

These tests verify the basic package setup and entry point functionality.
"""

import subprocess
import sys
from pathlib import Path


class TestPackageImportable:
    """Test that the dotnet_runner package is properly importable."""

    def test_import_package(self):
        """Package should be importable."""
        import dotnet_runner

        assert dotnet_runner is not None

    def test_package_has_version(self):
        """Package should expose a __version__ attribute."""
        import dotnet_runner

        assert isinstance(dotnet_runner.__version__, str)
        assert len(dotnet_runner.__version__) > 0


class TestCLIEntryPoint:
    """Test that the CLI entry point works correctly."""

    def test_cli_help_works(self):
        """Running 'python -m dotnet_runner --help' should show help text."""
        result = subprocess.run(
            [sys.executable, "-m", "dotnet_runner", "--help"],
            capture_output=True,
            text=True,
            timeout=30,
        )
        assert result.returncode == 0
        assert "usage" in result.stdout.lower()
        assert "build" in result.stdout


class TestTypeHints:
    """Test that type hints are enabled via py.typed marker."""

    def test_py_typed_marker_exists(self):
        """Package should have py.typed marker for type hint support."""
        import dotnet_runner

        package_dir = Path(dotnet_runner.__file__).parent
        assert (package_dir / "py.typed").exists()
