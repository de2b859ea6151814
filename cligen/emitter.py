"""Rendering of field descriptors into generated source files.

Rendering is a pure function of its inputs: the same command, help text and
descriptors always produce byte-identical output, so generated files can be
regenerated and diffed.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from collections.abc import Sequence

from .errors import OutputWriteError
from .field_kinds import FieldKind, KindStrategy, strategy_for
from .models import FieldDescriptor
from .template_renderer import TemplateSet, render_named_template

LOGGER = logging.getLogger(__name__)

INDENT = "    "


def module_stem(command: str) -> str:
    """Turn a command name into a valid module name prefix."""
    stem = re.sub(r"\W", "_", command)
    if not stem or stem[0].isdigit():
        stem = f"_{stem}"
    return stem


def _supported(
    descriptors: Sequence[FieldDescriptor],
) -> list[tuple[FieldDescriptor, KindStrategy]]:
    """Pair descriptors with their strategy, dropping unknown kinds."""
    supported = []
    for descriptor in descriptors:
        strategy = strategy_for(descriptor.kind)
        if strategy is None:
            continue
        supported.append((descriptor, strategy))
    return supported


def _flag_help(descriptor: FieldDescriptor) -> str:
    parts = [descriptor.help] if descriptor.help else []
    if descriptor.required:
        parts.append("(required)")
    if descriptor.options and descriptor.kind is FieldKind.STRING:
        parts.append(f"(one of: {', '.join(descriptor.options)})")
    if descriptor.default is not None:
        parts.append(f"(default: {descriptor.default})")
    # argparse expands %-placeholders in help strings
    return " ".join(parts).replace("%", "%%")


def _flags(descriptor: FieldDescriptor) -> list[str]:
    flags = [f"--{descriptor.cli_name}"]
    if descriptor.short:
        flags.insert(0, f"-{descriptor.short}")
    return flags


def find_flag_conflicts(descriptors: Sequence[FieldDescriptor]) -> list[str]:
    """Describe option strings claimed by more than one generated flag.

    Repeated field names are reported too. Only descriptors that produce a
    flag are considered. The ``--no-<name>`` form added for booleans that
    default to true counts as an option string.
    """
    owners: dict[str, tuple[int, str]] = {}
    conflicts: list[str] = []
    names: set[str] = set()
    for position, (descriptor, strategy) in enumerate(_supported(descriptors)):
        if descriptor.name in names:
            conflicts.append(f"field {descriptor.name} is declared more than once")
        names.add(descriptor.name)
        for option in _flags(descriptor) + strategy.implied_options(descriptor):
            owner, owner_name = owners.setdefault(option, (position, descriptor.name))
            if owner != position:
                conflicts.append(f"{option} is used by both {owner_name} and {descriptor.name}")
    return conflicts


def _registration(descriptor: FieldDescriptor, strategy: KindStrategy) -> str:
    value = strategy.default_value(descriptor)
    arguments = [repr(flag) for flag in _flags(descriptor)]
    arguments.append(f"dest={descriptor.name!r}")
    arguments.extend(strategy.argument_kwargs(value))
    arguments.append(f"help={_flag_help(descriptor)!r}")

    lines = [f"{INDENT}parser.add_argument("]
    lines.extend(f"{INDENT * 2}{argument}," for argument in arguments)
    lines.append(f"{INDENT})")
    return "\n".join(lines)


def _required_check(descriptor: FieldDescriptor, strategy: KindStrategy) -> str:
    condition = strategy.missing_condition(f"args.{descriptor.name}")
    message = f"flag --{descriptor.cli_name} is required"
    return f"{INDENT}if {condition}:\n{INDENT * 2}return _fail(parser, {message!r})"


def _options_check(descriptor: FieldDescriptor, strategy: KindStrategy) -> str:
    attribute = f"args.{descriptor.name}"
    allowed = tuple(descriptor.options or ())
    condition = f"{attribute} not in {allowed!r}"
    if not descriptor.required:
        # an optional flag left unset is not validated against the allowed set
        condition = f"{attribute} != {strategy.zero!r} and {condition}"
    prefix = f"invalid value for --{descriptor.cli_name}: "
    suffix = f" (allowed: {', '.join(allowed)})"
    return (
        f"{INDENT}if {condition}:\n"
        f"{INDENT * 2}return _fail(parser, {prefix!r} + repr({attribute}) + {suffix!r})"
    )


def build_front_end_context(
    command: str,
    help_text: str,
    struct_name: str,
    descriptors: Sequence[FieldDescriptor],
    impl_module: str,
) -> dict[str, str]:
    """Build the placeholder values of the front-end template."""
    supported = _supported(descriptors)

    record_fields: list[str] = []
    record_values: list[str] = []
    registrations: list[str] = []
    validations: list[str] = []
    needs_field = False

    for descriptor, strategy in supported:
        value = strategy.default_value(descriptor)
        record_default = strategy.record_default(value)
        needs_field = needs_field or record_default.startswith("_dataclass_field(")
        record_fields.append(f"{INDENT}{descriptor.name}: {strategy.annotation} = {record_default}")
        record_values.append(
            f"{INDENT * 2}{descriptor.name}={strategy.namespace_value(descriptor, value)},"
        )
        registrations.append(_registration(descriptor, strategy))

    for descriptor, strategy in supported:
        if descriptor.required:
            validations.append(_required_check(descriptor, strategy))

    for descriptor, strategy in supported:
        if descriptor.options is None:
            continue
        if descriptor.kind is not FieldKind.STRING:
            LOGGER.warning(
                f"Field {descriptor.name}: allowed values are only checked for string flags"
            )
            continue
        validations.append(_options_check(descriptor, strategy))

    dataclass_import = "from dataclasses import dataclass"
    if needs_field:
        # record attributes may themselves be named "field"
        dataclass_import += ", field as _dataclass_field"

    return {
        "command": command,
        "struct_name": struct_name,
        "dataclass_import": dataclass_import,
        "help_literal": repr(help_text),
        "prog_literal": repr(command),
        "record_fields": "\n".join(record_fields) or f"{INDENT}pass",
        "record_values": "\n".join(record_values),
        "registrations": "\n".join(registrations),
        "validations": "\n".join(validations),
        "impl_module": impl_module,
    }


def render_front_end(
    command: str,
    help_text: str,
    struct_name: str,
    descriptors: Sequence[FieldDescriptor],
    impl_module: str,
    templates: TemplateSet | None = None,
) -> str:
    """Render the argparse front end module for ``command``."""
    context = build_front_end_context(command, help_text, struct_name, descriptors, impl_module)
    return render_named_template("front_end.py", context, templates)


def render_impl_stub(
    command: str,
    struct_name: str,
    descriptors: Sequence[FieldDescriptor],
    cli_module: str,
    templates: TemplateSet | None = None,
) -> str:
    """Render the one-time implementation stub that defines ``run(args)``."""
    heading = f"{command} called with:"
    body = [f"{INDENT}print({heading!r})"]
    for descriptor, _ in _supported(descriptors):
        label = f"  {descriptor.cli_name}:"
        body.append(f"{INDENT}print({label!r}, repr(args.{descriptor.name}))")
    context = {
        "command": command,
        "struct_name": struct_name,
        "cli_module": cli_module,
        "body": "\n".join(body),
    }
    return render_named_template("impl.py", context, templates)


def render_project_descriptor(
    command: str,
    help_text: str,
    cli_module: str,
    impl_module: str,
    requires_python: str = ">=3.10",
    templates: TemplateSet | None = None,
) -> str:
    """Render a ``pyproject.toml`` exposing the command as a console script."""
    # JSON strings are valid TOML basic strings
    context = {
        "name": json.dumps(command),
        "description": json.dumps(help_text),
        "requires_python": json.dumps(requires_python),
        "script_name": json.dumps(command),
        "entry_point": json.dumps(f"{cli_module}:main"),
        "modules": ", ".join(json.dumps(module) for module in (cli_module, impl_module)),
    }
    return render_named_template("pyproject.toml", context, templates)


def write_output(path: str | Path, text: str) -> Path:
    """Write a generated file, creating parent directories as needed."""
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise OutputWriteError(f"failed to write {path}: {exc}") from exc
    LOGGER.debug(f"Wrote {path}")
    return path


def write_impl_stub(path: str | Path, text: str) -> bool:
    """Write the implementation stub unless ``path`` already exists.

    Returns:
        ``True`` if the stub was written, ``False`` if an existing file was kept.
    """
    path = Path(path)
    if path.exists():
        LOGGER.info(f"Keeping existing implementation {path}")
        return False
    write_output(path, text)
    return True


def write_project_descriptor(path: str | Path, text: str) -> Path:
    return write_output(path, text)


__all__ = [
    "build_front_end_context",
    "find_flag_conflicts",
    "module_stem",
    "render_front_end",
    "render_impl_stub",
    "render_project_descriptor",
    "write_impl_stub",
    "write_output",
    "write_project_descriptor",
]
