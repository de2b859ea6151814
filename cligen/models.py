"""In-memory records passed between the pipeline stages."""

from __future__ import annotations

from dataclasses import dataclass, field

from .field_kinds import FieldKind


@dataclass(frozen=True)
class FieldDeclaration:
    """One annotated field as written in the source class."""

    name: str
    declared_type: str
    annotation: str = ""
    lineno: int | None = None


@dataclass(frozen=True)
class SourceDeclaration:
    """A top-level class and its fields, in source order.

    ``markers`` holds the commands named by explicit ``@cli_args(...)``
    decorators on the class.
    """

    name: str
    fields: tuple[FieldDeclaration, ...] = ()
    markers: tuple[str, ...] = ()
    lineno: int | None = None


@dataclass(frozen=True)
class FieldDescriptor:
    """Directive-resolved description of one command-line flag."""

    name: str
    declared_type: str
    kind: FieldKind
    cli_name: str
    short: str | None = None
    default: str | None = None
    required: bool = False
    options: tuple[str, ...] | None = None
    help: str | None = None
    unrecognized: tuple[str, ...] = field(default=())


__all__ = ["FieldDeclaration", "SourceDeclaration", "FieldDescriptor"]
