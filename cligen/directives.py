"""Parsing of the per-field ``cli`` directive micro-language.

A field annotation is a whitespace separated list of ``key:"value"`` pairs,
for example::

    cli:"env,e,required,options:dev|staging|prod" json:"env"

The value stored under the designated key (``cli`` by default) is a comma
separated directive list. The first token renames the flag, later tokens set
the short flag, the default, required-ness, the allowed values or the help
text. Parsing never fails: tokens that match no directive are reported back as
:class:`Unrecognized` and otherwise ignored.
"""

from __future__ import annotations

import ast
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from .field_kinds import kind_for_type
from .models import FieldDeclaration, FieldDescriptor

DEFAULT_TAG_KEY = "cli"


class DirectiveKind(str, Enum):
    NAME = "name"
    SHORT = "short"
    DEFAULT = "default"
    REQUIRED = "required"
    OPTIONS = "options"
    USAGE = "usage"


@dataclass(frozen=True)
class Recognized:
    kind: DirectiveKind
    value: Any
    token: str


@dataclass(frozen=True)
class Unrecognized:
    token: str


Directive = Union[Recognized, Unrecognized]


def lookup_tag(annotation: str, key: str) -> str | None:
    """Return the unquoted value stored under ``key`` in ``annotation``.

    The quoted value follows string literal rules: raw tabs are kept and
    escapes such as ``\\t``, ``\\x41``, ``\\101`` or ``\\u00e9`` are decoded.
    Returns ``None`` when the key is absent or the annotation stops being
    well-formed before the key is reached.
    """
    text = annotation
    while text:
        text = text.lstrip(" ")
        if not text:
            break

        index = 0
        while index < len(text) and text[index] > " " and text[index] not in ':"\x7f':
            index += 1
        if index == 0 or index + 1 >= len(text) or text[index] != ":" or text[index + 1] != '"':
            break
        name = text[:index]
        text = text[index + 1 :]

        # scan the quoted value, honouring backslash escapes
        index = 1
        while index < len(text) and text[index] != '"':
            if text[index] == "\\":
                index += 1
            index += 1
        if index >= len(text):
            break
        quoted = text[: index + 1]
        text = text[index + 1 :]

        if name == key:
            try:
                value = ast.literal_eval(quoted)
            except (SyntaxError, ValueError):
                return None
            return value if isinstance(value, str) else None
    return None


def classify_token(token: str) -> Directive | None:
    """Classify a single directive token after the flag name.

    Returns ``None`` for empty tokens.
    """
    part = token.strip()
    if not part:
        return None
    if len(part) == 1:
        return Recognized(DirectiveKind.SHORT, part, part)
    if part.startswith("default:"):
        return Recognized(DirectiveKind.DEFAULT, part[len("default:") :], part)
    if part == "required":
        return Recognized(DirectiveKind.REQUIRED, True, part)
    if part.startswith("options:"):
        return Recognized(DirectiveKind.OPTIONS, tuple(part[len("options:") :].split("|")), part)
    if part.startswith("usage:"):
        return Recognized(DirectiveKind.USAGE, part[len("usage:") :], part)
    return Unrecognized(part)


def parse_directives(value: str) -> list[Directive]:
    """Split a directive list into tagged directives, preserving order."""
    parts = value.split(",")
    directives: list[Directive] = []

    name = parts[0].strip()
    if name:
        directives.append(Recognized(DirectiveKind.NAME, name, name))

    for part in parts[1:]:
        directive = classify_token(part)
        if directive is not None:
            directives.append(directive)
    return directives


def default_descriptor(field: FieldDeclaration) -> FieldDescriptor:
    return FieldDescriptor(
        name=field.name,
        declared_type=field.declared_type,
        kind=kind_for_type(field.declared_type),
        cli_name=field.name.lower(),
    )


def build_descriptor(field: FieldDeclaration, tag_key: str = DEFAULT_TAG_KEY) -> FieldDescriptor:
    """Resolve a field declaration into its flag descriptor.

    When a directive appears more than once, the last occurrence wins.
    """
    descriptor = default_descriptor(field)
    if not field.annotation:
        return descriptor

    value = lookup_tag(field.annotation, tag_key)
    if not value:
        return descriptor

    attributes: dict[str, Any] = {}
    unrecognized: list[str] = []
    for directive in parse_directives(value):
        if isinstance(directive, Unrecognized):
            unrecognized.append(directive.token)
        elif directive.kind is DirectiveKind.NAME:
            attributes["cli_name"] = directive.value
        elif directive.kind is DirectiveKind.SHORT:
            attributes["short"] = directive.value
        elif directive.kind is DirectiveKind.DEFAULT:
            attributes["default"] = directive.value
        elif directive.kind is DirectiveKind.REQUIRED:
            attributes["required"] = True
        elif directive.kind is DirectiveKind.OPTIONS:
            attributes["options"] = directive.value
        elif directive.kind is DirectiveKind.USAGE:
            attributes["help"] = directive.value

    return FieldDescriptor(
        name=descriptor.name,
        declared_type=descriptor.declared_type,
        kind=descriptor.kind,
        cli_name=attributes.get("cli_name", descriptor.cli_name),
        short=attributes.get("short"),
        default=attributes.get("default"),
        required=attributes.get("required", False),
        options=attributes.get("options"),
        help=attributes.get("help"),
        unrecognized=tuple(unrecognized),
    )


__all__ = [
    "DEFAULT_TAG_KEY",
    "Directive",
    "DirectiveKind",
    "Recognized",
    "Unrecognized",
    "build_descriptor",
    "classify_token",
    "default_descriptor",
    "lookup_tag",
    "parse_directives",
]
