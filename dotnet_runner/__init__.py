"""
dotnet-runner - Interactive front-end for dotnet build, test and clean.

This package assembles correctly quoted dotnet commands from user-selected
options and a target project, remembers the last build and test commands,
and hands them to an external process runner.
"""

__version__ = "0.1.0"
