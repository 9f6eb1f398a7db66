"""Command templates and rendering.

Each operation kind has a fixed template with named placeholders. Rendering
substitutes every placeholder exactly once in a single pass, so values that
happen to contain placeholder text are never expanded again.
"""

import re
from dataclasses import dataclass

from dotnet_runner.errors import TemplateError
from dotnet_runner.models import OperationKind

PLACEHOLDER = re.compile(r"\{(\w+)\}")

SETTINGS_SEPARATOR = "--"


@dataclass(frozen=True)
class OperationTemplate:
    """A fixed command template for one operation kind."""

    kind: OperationKind
    pattern: str

    @property
    def placeholders(self) -> list[str]:
        return PLACEHOLDER.findall(self.pattern)


TEMPLATES: dict[str, OperationTemplate] = {
    "build": OperationTemplate("build", "{tool} build {target} {options}"),
    "test": OperationTemplate("test", "{tool} test {target} {options} {settings}"),
    "clean": OperationTemplate("clean", "{tool} clean {target} {options}"),
}


@dataclass(frozen=True)
class CommandParts:
    """Substitution values for a template.

    Attributes:
        tool: Executable name, e.g. ``dotnet``
        target: Escaped target path, None when absent
        options: Rendered options segment
        settings: Rendered runtime-settings segment (test only)
    """

    tool: str
    target: str | None = None
    options: str = ""
    settings: str = ""

    def values(self) -> dict[str, str]:
        return {
            "tool": self.tool,
            "target": self.target or "",
            "options": self.options,
            "settings": self.settings,
        }


def render_settings(raw: str | None) -> str:
    """Render runtime settings as ``-- <raw>``, or empty text when absent."""
    if not raw:
        return ""
    return f"{SETTINGS_SEPARATOR} {raw}"


def render_command(template: OperationTemplate, parts: CommandParts) -> str:
    """Render ``template`` with ``parts``.

    Raises:
        TemplateError: If the template uses a placeholder with no value
    """
    values = parts.values()
    unknown = [name for name in template.placeholders if name not in values]
    if unknown:
        raise TemplateError(
            f"Template for {template.kind} uses unknown placeholder(s): "
            f"{', '.join(unknown)}"
        )
    return PLACEHOLDER.sub(lambda match: values[match.group(1)], template.pattern)


def get_template(kind: OperationKind) -> OperationTemplate:
    try:
        return TEMPLATES[kind]
    except KeyError:
        raise TemplateError(f"No template for operation: {kind}") from None
