"""Loading and rendering of the bundled source templates."""

from __future__ import annotations

import logging
from functools import lru_cache
from importlib import resources
from types import MappingProxyType
from collections.abc import Mapping

from .errors import CligenError

LOGGER = logging.getLogger(__name__)

TEMPLATE_PACKAGE = "cligen"
TEMPLATE_DIR = "templates"
TEMPLATE_SUFFIX = ".tmpl"


class TemplateRenderError(CligenError):
    """Raised when template loading or rendering fails."""

    pass


TemplateSet = Mapping[str, str]


@lru_cache(maxsize=None)
def load_templates(package: str = TEMPLATE_PACKAGE) -> TemplateSet:
    """Load every ``*.tmpl`` file under ``package``'s template directory.

    Keys are file names without the ``.tmpl`` suffix, e.g. ``front_end.py``.
    The result is cached, so templates are read once per process.
    """
    templates: dict[str, str] = {}
    directory = resources.files(package).joinpath(TEMPLATE_DIR)
    for entry in sorted(directory.iterdir(), key=lambda item: item.name):
        if not entry.name.endswith(TEMPLATE_SUFFIX):
            continue
        templates[entry.name[: -len(TEMPLATE_SUFFIX)]] = entry.read_text(encoding="utf-8")
    LOGGER.debug(f"Loaded {len(templates)} templates from {package}")
    return MappingProxyType(templates)


def render_template(template_text: str, replacements: Mapping[str, str]) -> str:
    """Render a template string with the given replacements.

    Args:
        template_text: Template string with {placeholder} variables.
        replacements: Mapping of placeholder names to values.

    Returns:
        Rendered string with placeholders replaced.

    Raises:
        TemplateRenderError: If a required placeholder is missing.
    """
    try:
        return template_text.format(**replacements)
    except KeyError as exc:
        missing = exc.args[0]
        raise TemplateRenderError(f"Missing template variable: {missing}") from exc


def render_named_template(
    name: str, replacements: Mapping[str, str], templates: TemplateSet | None = None
) -> str:
    """Render the bundled template ``name`` (e.g. ``front_end.py``)."""
    templates = load_templates() if templates is None else templates
    try:
        template_text = templates[name]
    except KeyError as exc:
        raise TemplateRenderError(f"Unknown template: {name}") from exc
    return render_template(template_text, replacements)


__all__ = [
    "TemplateRenderError",
    "TemplateSet",
    "load_templates",
    "render_named_template",
    "render_template",
]
