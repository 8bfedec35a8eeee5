"""Declaration composition for component props and state."""

from __future__ import annotations

from ..ast import (
    ExpressionWithTypeArguments,
    HeritageClause,
    Identifier,
    InterfaceDeclaration,
    PropertyAccessExpression,
    PropertySignature,
    TypeAliasDeclaration,
    TypeLiteral,
    TypeReference,
)
from ..options import DEFAULT_OPTIONS, MigrateOptions
from .usage import InferredField


def _dotted_expression(name: str) -> Identifier | PropertyAccessExpression:
    """React.HTMLAttributes -> PropertyAccess(Identifier(React), HTMLAttributes)."""
    parts = name.split(".")
    expr: Identifier | PropertyAccessExpression = Identifier(parts[0])
    for part in parts[1:]:
        expr = PropertyAccessExpression(expr, part)
    return expr


def base_attributes_clause(options: MigrateOptions = DEFAULT_OPTIONS) -> HeritageClause:
    """extends React.HTMLAttributes<Element>"""
    base = ExpressionWithTypeArguments(
        _dotted_expression(options.base_attributes),
        [TypeReference(options.base_attributes_argument)],
    )
    return HeritageClause("extends", [base])


def _sorted(members: dict[str, PropertySignature]) -> list[PropertySignature]:
    return sorted(members.values(), key=lambda m: m.name)


class PropsBuilder:
    """Props members. Declared hints are merged first and win on conflict."""

    def __init__(self) -> None:
        self._members: dict[str, PropertySignature] = {}

    def merge(self, member: PropertySignature) -> None:
        if member.name not in self._members:
            self._members[member.name] = member

    def add_hints(self, hints: list[PropertySignature]) -> None:
        for hint in hints:
            self.merge(hint)

    def add_inferred(self, fields: list[InferredField]) -> None:
        for f in fields:
            self.merge(f.to_signature())

    def members(self) -> list[PropertySignature]:
        return _sorted(self._members)

    def build(self, class_name: str, options: MigrateOptions = DEFAULT_OPTIONS) -> InterfaceDeclaration | None:
        """interface I<Class>Props extends <base attributes> { ... }, or None if empty."""
        if not self._members:
            return None
        return InterfaceDeclaration(
            options.props_type_name(class_name),
            [base_attributes_clause(options)],
            self.members(),
        )


class StateBuilder:
    """State members. The first sighting of a name wins."""

    def __init__(self) -> None:
        self._members: dict[str, PropertySignature] = {}

    def merge(self, member: PropertySignature) -> None:
        if member.name not in self._members:
            self._members[member.name] = member

    def add_inferred(self, fields: list[InferredField]) -> None:
        for f in fields:
            self.merge(f.to_signature())

    def members(self) -> list[PropertySignature]:
        return _sorted(self._members)

    def build(self, class_name: str, options: MigrateOptions = DEFAULT_OPTIONS) -> TypeAliasDeclaration | None:
        """type <Class>State = { ... }, or None if empty."""
        if not self._members:
            return None
        return TypeAliasDeclaration(options.state_type_name(class_name), TypeLiteral(self.members()))


def compose_props(
    class_name: str,
    hints: list[PropertySignature],
    inferred: list[InferredField],
    options: MigrateOptions = DEFAULT_OPTIONS,
) -> InterfaceDeclaration | None:
    builder = PropsBuilder()
    builder.add_hints(hints)
    builder.add_inferred(inferred)
    return builder.build(class_name, options)


def compose_state(
    class_name: str,
    inferred: list[InferredField],
    options: MigrateOptions = DEFAULT_OPTIONS,
) -> TypeAliasDeclaration | None:
    builder = StateBuilder()
    builder.add_inferred(inferred)
    return builder.build(class_name, options)
