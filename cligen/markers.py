"""Runtime counterpart of the explicit ``@cli_args`` marker."""

from __future__ import annotations

from typing import Callable, TypeVar

DEFAULT_MARKER_DECORATOR = "cli_args"

T = TypeVar("T", bound=type)


def cli_args(command: str) -> Callable[[T], T]:
    """Mark a class as the argument declaration of ``command``.

    The generator recognises the decorator statically; at runtime it only
    records the command name on the class.
    """

    def decorate(cls: T) -> T:
        cls.__cligen_command__ = command
        return cls

    return decorate


__all__ = ["DEFAULT_MARKER_DECORATOR", "cli_args"]
