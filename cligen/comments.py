"""Discovery of ``# cligen:`` generation comments in a source file."""

from __future__ import annotations

import logging
import re
import shlex

from .errors import InvocationError
from .invocation import Invocation, parse_invocation

LOGGER = logging.getLogger(__name__)

_COMMENT_RE = re.compile(r"^\s*#\s*cligen:\s*(?P<arguments>.*?)\s*$")


def find_generate_comments(text: str) -> list[Invocation]:
    """Return the invocations requested by ``# cligen: ...`` comments, in file order.

    Raises:
        InvocationError: If a comment cannot be split or parsed; the message
            names the offending line.
    """
    invocations: list[Invocation] = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        match = _COMMENT_RE.match(line)
        if not match:
            continue
        try:
            tokens = shlex.split(match.group("arguments"))
            invocations.append(parse_invocation(tokens))
        except (ValueError, InvocationError) as exc:
            raise InvocationError(f"line {lineno}: invalid cligen comment: {exc}") from exc
        LOGGER.debug(f"line {lineno}: found cligen comment for {invocations[-1].command}")
    return invocations


__all__ = ["find_generate_comments"]
