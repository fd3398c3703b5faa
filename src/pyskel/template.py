"""Lightweight string templating utilities."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Mapping, MutableMapping

__all__ = [
    "TemplateRenderer",
    "TemplateRenderingError",
    "toml_list",
]


_PLACEHOLDER_PATTERN = re.compile(r"{{\s*(?P<expression>[^{}]+?)\s*}}")


class TemplateRenderingError(RuntimeError):
    """Raised when the renderer cannot evaluate a placeholder."""


def _split(expression: str) -> tuple[str, list[str]]:
    key, *filters = [part.strip() for part in expression.split("|")]
    return key, filters


def _as_list(value: Any) -> list[str]:
    if isinstance(value, str):
        return [value]
    if isinstance(value, Iterable):
        return [str(item) for item in value]
    return [str(value)]


def toml_list(value: Any, *, indent: str = "    ") -> str:
    """Render ``value`` as the body of a multi-line TOML array of strings."""

    items = _as_list(value)
    if not items:
        return ""
    lines = [f'{indent}"{item}",' for item in items]
    return "\n" + "\n".join(lines) + "\n"


@dataclass(slots=True)
class TemplateRenderer:
    """Render templates with ``{{ key }}`` and ``{{ key|filter }}`` expressions."""

    filters: MutableMapping[str, Callable[[Any], Any]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.filters:
            self.filters["toml_list"] = toml_list

    def render_string(self, template: str, context: Mapping[str, Any]) -> str:
        """Render ``template`` using ``context``.

        Every placeholder must name a key of ``context``; a missing key or an
        unknown filter raises :class:`TemplateRenderingError`.
        """

        def substitute(match: re.Match[str]) -> str:
            key, filters = _split(match.group("expression"))
            if key not in context:
                raise TemplateRenderingError(f"missing value for '{key}'")

            value = context[key]
            for filter_name in filters:
                try:
                    value = self.filters[filter_name](value)
                except KeyError as exc:
                    raise TemplateRenderingError(f"unknown filter '{filter_name}'") from exc

            return str(value)

        return _PLACEHOLDER_PATTERN.sub(substitute, template)

    def placeholders(self, template: str) -> set[str]:
        """Return the context keys referenced by ``template``."""

        return {_split(match.group("expression"))[0] for match in _PLACEHOLDER_PATTERN.finditer(template)}
