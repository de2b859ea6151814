"""Semantic field kinds and the argparse strategy bound to each of them."""

from __future__ import annotations

import logging
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any
from collections.abc import Mapping

if TYPE_CHECKING:
    from .models import FieldDescriptor

LOGGER = logging.getLogger(__name__)

_TRUE_LITERALS = {"1", "true", "yes", "on"}


class FieldKind(str, Enum):
    """Closed set of field types the emitter knows how to register."""

    STRING = "string"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    STRING_LIST = "string-list"
    UNKNOWN = "unknown"


_TYPE_KINDS: Mapping[str, FieldKind] = MappingProxyType(
    {
        "str": FieldKind.STRING,
        "int": FieldKind.INTEGER,
        "bool": FieldKind.BOOLEAN,
        "list[str]": FieldKind.STRING_LIST,
    }
)


def kind_for_type(declared_type: str) -> FieldKind:
    return _TYPE_KINDS.get(declared_type, FieldKind.UNKNOWN)


class KindStrategy:
    """Code fragments for one supported field kind.

    Subclasses decide how a field is declared on the generated record, how it
    is registered with argparse, how its parsed value is read back and what
    its zero value is.
    """

    kind: FieldKind
    annotation: str
    zero: Any

    def default_value(self, descriptor: FieldDescriptor) -> Any:
        """Return the Python value of the declared default (zero if absent)."""
        if descriptor.default is None:
            return self.zero
        return self.coerce(descriptor.name, descriptor.default)

    def coerce(self, name: str, literal: str) -> Any:
        return literal

    def record_default(self, value: Any) -> str:
        return repr(value)

    def argument_kwargs(self, value: Any) -> list[str]:
        raise NotImplementedError

    def namespace_value(self, descriptor: FieldDescriptor, value: Any) -> str:
        return f"namespace.{descriptor.name}"

    def missing_condition(self, attribute: str) -> str:
        raise NotImplementedError

    def implied_options(self, descriptor: FieldDescriptor) -> list[str]:
        """Option strings argparse derives from the flag on its own."""
        return []


class StringStrategy(KindStrategy):
    kind = FieldKind.STRING
    annotation = "str"
    zero = ""

    def argument_kwargs(self, value: Any) -> list[str]:
        return ["type=str", f"default={value!r}"]

    def missing_condition(self, attribute: str) -> str:
        return f"{attribute} == {self.zero!r}"


class IntegerStrategy(KindStrategy):
    kind = FieldKind.INTEGER
    annotation = "int"
    zero = 0

    def coerce(self, name: str, literal: str) -> Any:
        text = literal.strip()
        for base in (0, 10):
            try:
                return int(text, base)
            except ValueError:
                continue
        LOGGER.warning(f"Field {name}: default {literal!r} is not an integer, using 0")
        return self.zero

    def argument_kwargs(self, value: Any) -> list[str]:
        return ["type=int", f"default={value!r}"]

    def missing_condition(self, attribute: str) -> str:
        return f"{attribute} == {self.zero!r}"


class BooleanStrategy(KindStrategy):
    kind = FieldKind.BOOLEAN
    annotation = "bool"
    zero = False

    def coerce(self, name: str, literal: str) -> Any:
        return literal.strip().lower() in _TRUE_LITERALS

    def argument_kwargs(self, value: Any) -> list[str]:
        if value:
            return ["action=argparse.BooleanOptionalAction", "default=True"]
        return ['action="store_true"', "default=False"]

    def implied_options(self, descriptor: FieldDescriptor) -> list[str]:
        if self.default_value(descriptor):
            return [f"--no-{descriptor.cli_name}"]
        return []

    def missing_condition(self, attribute: str) -> str:
        return f"not {attribute}"


class StringListStrategy(KindStrategy):
    kind = FieldKind.STRING_LIST
    annotation = "list[str]"
    zero: list[str] = []

    def default_value(self, descriptor: FieldDescriptor) -> Any:
        if descriptor.default is None:
            return []
        return self.coerce(descriptor.name, descriptor.default)

    def coerce(self, name: str, literal: str) -> Any:
        return [item for item in literal.split("|") if item]

    def record_default(self, value: Any) -> str:
        if not value:
            return "_dataclass_field(default_factory=list)"
        return f"_dataclass_field(default_factory=lambda: {value!r})"

    def argument_kwargs(self, value: Any) -> list[str]:
        # default stays None so repeated flags do not extend the declared default
        return ['action="extend"', "type=_split_list", "default=None"]

    def namespace_value(self, descriptor: FieldDescriptor, value: Any) -> str:
        attribute = f"namespace.{descriptor.name}"
        return f"{attribute} if {attribute} is not None else {value!r}"

    def missing_condition(self, attribute: str) -> str:
        return f"not {attribute}"


STRATEGIES: Mapping[FieldKind, KindStrategy] = MappingProxyType(
    {
        FieldKind.STRING: StringStrategy(),
        FieldKind.INTEGER: IntegerStrategy(),
        FieldKind.BOOLEAN: BooleanStrategy(),
        FieldKind.STRING_LIST: StringListStrategy(),
    }
)


def strategy_for(kind: FieldKind) -> KindStrategy | None:
    """Return the strategy for ``kind``; ``None`` for unsupported kinds."""
    return STRATEGIES.get(kind)


__all__ = [
    "FieldKind",
    "KindStrategy",
    "STRATEGIES",
    "kind_for_type",
    "strategy_for",
]
