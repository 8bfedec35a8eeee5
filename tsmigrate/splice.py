"""List surgery over ordered node sequences.

Every operation returns a new list; inputs are never mutated. Anchors are
located by identity, not equality, so structurally equal siblings are
never confused.
"""

from __future__ import annotations

from dataclasses import replace as copy_with
from typing import Sequence, TypeVar

from .ast import ClassDeclaration, Statement, TypeDeclaration, TypeNode
from .errors import UnsupportedHeritageShape

T = TypeVar("T")


def _index_of(items: Sequence[T], anchor: T) -> int:
    for i, item in enumerate(items):
        if item is anchor:
            return i
    raise ValueError("anchor not in sequence")


def insert_before(items: Sequence[T], anchor: T, new_items: list[T]) -> list[T]:
    """new_items placed immediately before anchor, in order."""
    i = _index_of(items, anchor)
    return list(items[:i]) + list(new_items) + list(items[i:])


def insert_after(items: Sequence[T], anchor: T, new_items: list[T]) -> list[T]:
    """new_items placed immediately after anchor, in order."""
    i = _index_of(items, anchor) + 1
    return list(items[:i]) + list(new_items) + list(items[i:])


def replace(items: Sequence[T], anchor: T, new_item: T) -> list[T]:
    """anchor swapped for new_item."""
    i = _index_of(items, anchor)
    return list(items[:i]) + [new_item] + list(items[i + 1 :])


def remove(items: Sequence[T], anchor: T) -> list[T]:
    """anchor dropped."""
    i = _index_of(items, anchor)
    return list(items[:i]) + list(items[i + 1 :])


def check_heritage_shape(cls: ClassDeclaration) -> None:
    """Raise UnsupportedHeritageShape unless cls has exactly one clause with a type."""
    name = cls.name or "<anonymous>"
    count = len(cls.heritage_clauses)
    if count != 1:
        raise UnsupportedHeritageShape(name, f"expected one heritage clause, found {count}", cls.pos)
    if not cls.heritage_clauses[0].types:
        raise UnsupportedHeritageShape(name, "heritage clause has no type", cls.pos)


def rewrite_heritage(cls: ClassDeclaration, type_arguments: list[TypeNode]) -> ClassDeclaration:
    """Copy of cls whose base type carries type_arguments: extends Base<P, S>."""
    check_heritage_shape(cls)
    clause = cls.heritage_clauses[0]
    base = clause.types[0]
    new_base = copy_with(base, type_arguments=list(type_arguments))
    new_clause = copy_with(clause, types=replace(clause.types, base, new_base))
    return copy_with(cls, heritage_clauses=replace(cls.heritage_clauses, clause, new_clause))


def splice_class(
    statements: Sequence[Statement],
    cls: ClassDeclaration,
    declarations: list[TypeDeclaration],
    new_cls: ClassDeclaration,
) -> list[Statement]:
    """Insert declarations right before cls, then swap cls for new_cls."""
    result = insert_before(statements, cls, declarations)
    return replace(result, cls, new_cls)
