"""Allow running the CLI with ``python -m dotnet_runner``."""

from dotnet_runner.cli import main

main()
