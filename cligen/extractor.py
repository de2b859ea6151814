"""Extraction of annotated fields from a class definition."""

from __future__ import annotations

import ast
import logging

from .models import FieldDeclaration

LOGGER = logging.getLogger(__name__)

UNKNOWN_TYPE = "unknown"

_LIST_NAMES = {"list", "List"}
_OPTIONAL_NAMES = {"Optional"}
_UNION_NAMES = {"Union"}
_SKIPPED_QUALIFIERS = {"ClassVar"}


def _terminal_name(expr: ast.expr) -> str | None:
    """Return ``List`` for both ``List`` and ``typing.List``."""
    if isinstance(expr, ast.Name):
        return expr.id
    if isinstance(expr, ast.Attribute):
        return expr.attr
    return None


def _is_none(expr: ast.expr) -> bool:
    return isinstance(expr, ast.Constant) and expr.value is None


def _subscript_args(node: ast.Subscript) -> list[ast.expr]:
    inner = node.slice
    if isinstance(inner, ast.Tuple):
        return list(inner.elts)
    return [inner]


def _optional_of(members: list[ast.expr]) -> ast.expr | None:
    """Return ``X`` for a two-member union of ``X`` and ``None``."""
    if len(members) != 2:
        return None
    left, right = members
    if _is_none(right) and not _is_none(left):
        return left
    if _is_none(left) and not _is_none(right):
        return right
    return None


def resolve_type(expr: ast.expr | None) -> str:
    """Render a type expression as the type text used for kind lookup.

    Plain names keep their identifier, list types become ``list[<elem>]`` and
    optional types become ``optional[<inner>]``. Every other shape resolves to
    ``unknown``.
    """
    if expr is None:
        return UNKNOWN_TYPE
    if isinstance(expr, ast.Name):
        return expr.id
    if isinstance(expr, ast.Constant) and isinstance(expr.value, str):
        try:
            parsed = ast.parse(expr.value.strip(), mode="eval")
        except SyntaxError:
            return UNKNOWN_TYPE
        return resolve_type(parsed.body)
    if isinstance(expr, ast.BinOp) and isinstance(expr.op, ast.BitOr):
        inner = _optional_of([expr.left, expr.right])
        if inner is not None:
            return f"optional[{resolve_type(inner)}]"
        return UNKNOWN_TYPE
    if isinstance(expr, ast.Subscript):
        base = _terminal_name(expr.value)
        args = _subscript_args(expr)
        if base in _LIST_NAMES and len(args) == 1:
            return f"list[{resolve_type(args[0])}]"
        if base in _OPTIONAL_NAMES and len(args) == 1:
            return f"optional[{resolve_type(args[0])}]"
        if base in _UNION_NAMES:
            inner = _optional_of(args)
            if inner is not None:
                return f"optional[{resolve_type(inner)}]"
    return UNKNOWN_TYPE


def split_annotated(expr: ast.expr) -> tuple[ast.expr, str]:
    """Split ``Annotated[T, meta...]`` into ``T`` and the first string in ``meta``.

    Expressions that are not ``Annotated`` are returned with an empty
    annotation string.
    """
    if isinstance(expr, ast.Subscript) and _terminal_name(expr.value) == "Annotated":
        args = _subscript_args(expr)
        if args:
            for meta in args[1:]:
                if isinstance(meta, ast.Constant) and isinstance(meta.value, str):
                    return args[0], meta.value
            return args[0], ""
    return expr, ""


def _is_class_attribute(expr: ast.expr) -> bool:
    if isinstance(expr, ast.Subscript):
        expr = expr.value
    return _terminal_name(expr) in _SKIPPED_QUALIFIERS


def extract_fields(class_def: ast.ClassDef) -> list[FieldDeclaration]:
    """Return the annotated fields of ``class_def`` in declaration order."""
    fields: list[FieldDeclaration] = []
    for statement in class_def.body:
        if not isinstance(statement, ast.AnnAssign):
            continue
        if not isinstance(statement.target, ast.Name):
            LOGGER.debug(f"{class_def.name}: skipping unnamed field on line {statement.lineno}")
            continue

        type_expr, annotation = split_annotated(statement.annotation)
        if _is_class_attribute(type_expr):
            continue

        fields.append(
            FieldDeclaration(
                name=statement.target.id,
                declared_type=resolve_type(type_expr),
                annotation=annotation,
                lineno=statement.lineno,
            )
        )
    return fields


__all__ = ["UNKNOWN_TYPE", "extract_fields", "resolve_type", "split_annotated"]
