"""Tests for command templates and rendering."""

import pytest

from dotnet_runner.errors import TemplateError
from dotnet_runner.templates import (
    PLACEHOLDER,
    TEMPLATES,
    CommandParts,
    OperationTemplate,
    get_template,
    render_command,
    render_settings,
)


class TestTemplates:
    """Tests for the fixed operation templates."""

    def test_build_template(self):
        assert TEMPLATES["build"].pattern == "{tool} build {target} {options}"

    def test_test_template_has_settings(self):
        assert TEMPLATES["test"].placeholders == [
            "tool",
            "target",
            "options",
            "settings",
        ]

    def test_clean_template(self):
        assert TEMPLATES["clean"].pattern == "{tool} clean {target} {options}"

    def test_unknown_kind(self):
        with pytest.raises(TemplateError):
            get_template("deploy")  # type: ignore[arg-type]


class TestRenderSettings:
    """Tests for render_settings()."""

    def test_absent_renders_empty(self):
        assert render_settings(None) == ""
        assert render_settings("") == ""

    def test_present_renders_after_separator(self):
        assert render_settings("A.B=c") == "-- A.B=c"


class TestRenderCommand:
    """Tests for render_command()."""

    def test_build_with_target_and_options(self):
        parts = CommandParts(
            tool="dotnet",
            target="/repo/src/App.csproj",
            options="--configuration Release --no-incremental",
        )
        assert render_command(get_template("build"), parts) == (
            "dotnet build /repo/src/App.csproj --configuration Release --no-incremental"
        )

    def test_absent_target_renders_empty_segment(self):
        parts = CommandParts(tool="dotnet", options="--verbosity normal")
        assert render_command(get_template("clean"), parts) == (
            "dotnet clean  --verbosity normal"
        )

    def test_settings_follow_options(self):
        parts = CommandParts(
            tool="dotnet",
            options="--no-build",
            settings=render_settings("X=1"),
        )
        assert render_command(get_template("test"), parts) == (
            "dotnet test  --no-build -- X=1"
        )

    def test_no_placeholder_remains(self):
        for template in TEMPLATES.values():
            rendered = render_command(template, CommandParts(tool="dotnet"))
            assert PLACEHOLDER.search(rendered) is None

    def test_values_are_not_substituted_twice(self):
        """Placeholder text inside a value is left alone."""
        parts = CommandParts(tool="dotnet", target="{options}", options="--x")
        assert render_command(get_template("build"), parts) == (
            "dotnet build {options} --x"
        )

    def test_rendering_is_deterministic(self):
        parts = CommandParts(tool="dotnet", target="a.sln", options="--blame")
        template = get_template("test")
        assert render_command(template, parts) == render_command(template, parts)

    def test_unknown_placeholder_raises(self):
        template = OperationTemplate("build", "{tool} build {project}")
        with pytest.raises(TemplateError) as exc_info:
            render_command(template, CommandParts(tool="dotnet"))
        assert "project" in str(exc_info.value)
