"""Parsing of the generator's own invocation arguments.

Two forms are accepted::

    cligen serve "Starts an HTTP server" [output]
    cligen --command=serve --help="Starts an HTTP server" [--output=path]

Long-form values may also follow their flag as a separate argument.
"""

from __future__ import annotations

from dataclasses import dataclass
from collections.abc import Sequence

from .errors import InvocationError

USAGE = """Usage:
  cligen --command=<name> --help="<description>" [--output=<file>]
  cligen <command> "<description>" [output_file]

The source file is read from the CLIGEN_FILE environment variable (or --source).
Add a comment like the following to the source file and run `cligen --all`:
  # cligen: serve "Starts an HTTP server"
"""

_LONG_OPTIONS = {"--command": "command", "--help": "help", "--output": "output"}


@dataclass(frozen=True)
class Invocation:
    command: str
    help: str = ""
    output: str | None = None


def _parse_long_form(tokens: Sequence[str]) -> Invocation:
    values: dict[str, str] = {}
    index = 0
    while index < len(tokens):
        token = tokens[index]
        flag, has_value, value = token.partition("=")
        if flag not in _LONG_OPTIONS:
            raise InvocationError(f"unexpected argument {token!r}")
        if not has_value:
            index += 1
            if index >= len(tokens):
                raise InvocationError(f"flag {flag} needs a value")
            value = tokens[index]
        values[_LONG_OPTIONS[flag]] = value
        index += 1

    command = values.get("command", "")
    if not command:
        raise InvocationError("command name is required")
    return Invocation(command=command, help=values.get("help", ""), output=values.get("output"))


def parse_invocation(tokens: Sequence[str]) -> Invocation:
    """Parse the positional or long invocation form.

    Raises:
        InvocationError: If the arguments match neither form.
    """
    tokens = list(tokens)
    if not tokens:
        raise InvocationError("missing command")
    if tokens[0].startswith("--"):
        return _parse_long_form(tokens)

    if len(tokens) < 2:
        raise InvocationError("missing help text for command")
    if len(tokens) > 3:
        raise InvocationError(f"unexpected argument {tokens[3]!r}")
    command, help_text = tokens[0], tokens[1]
    if not command:
        raise InvocationError("command name is required")
    return Invocation(command=command, help=help_text, output=tokens[2] if len(tokens) > 2 else None)


__all__ = ["Invocation", "USAGE", "parse_invocation"]
