"""Exception hierarchy shared by the generation pipeline."""

from __future__ import annotations


class CligenError(RuntimeError):
    """Base class for fatal generation errors."""


class SourceParseError(CligenError):
    """Raised when the input file cannot be read or parsed as Python source."""


class DeclarationNotFound(CligenError):
    """Raised when no class declaration matches the requested command."""

    def __init__(self, command: str, source: str | None = None) -> None:
        self.command = command
        self.source = source
        location = f" in {source}" if source else ""
        super().__init__(f"could not find argument class for command {command!r}{location}")


class OutputWriteError(CligenError):
    """Raised when a generated file or its directory cannot be written."""


class DirectiveSyntaxError(CligenError):
    """Raised in strict mode when a field carries unrecognized directives."""


class FlagConflictError(CligenError):
    """Raised when two generated flags would claim the same option string."""


class InvocationError(CligenError):
    """Raised when the generator invocation arguments are malformed."""


__all__ = [
    "CligenError",
    "SourceParseError",
    "DeclarationNotFound",
    "OutputWriteError",
    "DirectiveSyntaxError",
    "FlagConflictError",
    "InvocationError",
]
