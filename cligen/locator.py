"""Selection of the class that declares a command's arguments."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .errors import DeclarationNotFound
from .models import SourceDeclaration

LOGGER = logging.getLogger(__name__)

DEFAULT_NAME_MARKER = "args"


def _explicitly_marked(declaration: SourceDeclaration, command: str) -> bool:
    return any(marker.lower() == command for marker in declaration.markers)


def find_declaration(
    declarations: Iterable[SourceDeclaration],
    command: str,
    *,
    marker: str = DEFAULT_NAME_MARKER,
    source: str | None = None,
) -> SourceDeclaration:
    """Return the declaration for ``command``.

    A class decorated with ``@cli_args(command)`` takes precedence. Otherwise
    the first class, in source order, whose name contains both the command and
    ``marker`` (case-insensitively) is selected; later matches are never
    considered.

    Raises:
        DeclarationNotFound: If no class qualifies.
    """
    declarations = list(declarations)
    wanted = command.lower()
    wanted_marker = marker.lower()

    for declaration in declarations:
        if _explicitly_marked(declaration, wanted):
            LOGGER.debug(f"Using {declaration.name} (explicit marker) for command {command}")
            return declaration

    for declaration in declarations:
        name = declaration.name.lower()
        if wanted in name and wanted_marker in name:
            LOGGER.debug(f"Using {declaration.name} for command {command}")
            return declaration

    raise DeclarationNotFound(command, source)


__all__ = ["DEFAULT_NAME_MARKER", "find_declaration"]
