"""Configuration for dotnet-runner.

Provides centralized configuration with sensible defaults and environment
variable overrides for the wrapped tool, logging and telemetry.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path


def _default_presets() -> dict[str, list[str]]:
    return {
        "build": ["--configuration=Debug", "--verbosity=minimal"],
        "test": ["--configuration=Debug", "--verbosity=minimal"],
        "clean": ["--configuration=Debug", "--verbosity=normal"],
    }


@dataclass
class RunnerConfig:
    """Configuration for command assembly and execution.

    All settings have sensible defaults but can be overridden via environment
    variables using the from_env() factory method.
    """

    # Wrapped toolchain
    tool: str = "dotnet"

    # Project discovery
    root_markers: list[str] = field(
        default_factory=lambda: [".git", ".hg", ".svn", "*.sln"]
    )
    project_patterns: list[str] = field(
        default_factory=lambda: ["*.sln", "*.csproj", "*.fsproj", "*.vbproj"]
    )

    # Initial option state per operation, before user edits
    presets: dict[str, list[str]] = field(default_factory=_default_presets)

    # Logging
    log_dir: Path = field(default_factory=lambda: Path("logs"))

    # Telemetry settings
    otlp_endpoint: str = field(
        default_factory=lambda: os.getenv("OTLP_ENDPOINT", "http://localhost:4317")
    )
    service_name: str = "dotnet-runner"

    @classmethod
    def from_env(cls) -> "RunnerConfig":
        """Load config with environment variable overrides.

        Environment variables:
            DOTNET_RUNNER_TOOL: Override tool (default: dotnet)
            DOTNET_RUNNER_LOG_DIR: Override log_dir (default: logs)
            OTLP_ENDPOINT: Override otlp_endpoint (default: http://localhost:4317)
        """
        return cls(
            tool=os.getenv("DOTNET_RUNNER_TOOL", "dotnet"),
            log_dir=Path(os.getenv("DOTNET_RUNNER_LOG_DIR", "logs")),
            otlp_endpoint=os.getenv("OTLP_ENDPOINT", "http://localhost:4317"),
        )
