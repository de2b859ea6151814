"""Reading Python source files into class declarations."""

from __future__ import annotations

import ast
import logging
from pathlib import Path

from .errors import SourceParseError
from .extractor import extract_fields
from .markers import DEFAULT_MARKER_DECORATOR
from .models import SourceDeclaration

LOGGER = logging.getLogger(__name__)


def read_source(path: str | Path) -> str:
    path = Path(path)
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceParseError(f"failed to read source file {path}: {exc}") from exc


def parse_source(text: str, filename: str = "<source>") -> ast.Module:
    try:
        return ast.parse(text, filename=filename)
    except (SyntaxError, ValueError) as exc:
        raise SourceParseError(f"failed to parse source file {filename}: {exc}") from exc


def _decorator_commands(class_def: ast.ClassDef, decorator: str) -> tuple[str, ...]:
    """Commands named by ``@<decorator>("command")`` on ``class_def``."""
    commands: list[str] = []
    for node in class_def.decorator_list:
        if not isinstance(node, ast.Call) or not node.args:
            continue
        func = node.func
        name = func.id if isinstance(func, ast.Name) else getattr(func, "attr", None)
        if name != decorator:
            continue
        first = node.args[0]
        if isinstance(first, ast.Constant) and isinstance(first.value, str):
            commands.append(first.value)
    return tuple(commands)


def load_declarations(
    module: ast.Module, decorator: str = DEFAULT_MARKER_DECORATOR
) -> list[SourceDeclaration]:
    """List the top-level classes of ``module`` in source order."""
    declarations: list[SourceDeclaration] = []
    for node in module.body:
        if not isinstance(node, ast.ClassDef):
            continue
        declarations.append(
            SourceDeclaration(
                name=node.name,
                fields=tuple(extract_fields(node)),
                markers=_decorator_commands(node, decorator),
                lineno=node.lineno,
            )
        )
    LOGGER.debug(f"Found {len(declarations)} top-level classes")
    return declarations


def load_source_declarations(
    path: str | Path, decorator: str = DEFAULT_MARKER_DECORATOR
) -> list[SourceDeclaration]:
    """Read, parse and list the class declarations of a source file."""
    text = read_source(path)
    return load_declarations(parse_source(text, filename=str(path)), decorator=decorator)


__all__ = ["load_declarations", "load_source_declarations", "parse_source", "read_source"]
