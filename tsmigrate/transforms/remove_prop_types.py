"""Removal of runtime propTypes declarations.

Once props are declared as an interface the runtime hint is redundant.

Before:
    class Foo extends React.Component {
        static propTypes = { title: PropTypes.string };
    }
    Foo.propTypes = { title: PropTypes.string };

After:
    class Foo extends React.Component {
    }
"""

from __future__ import annotations

from dataclasses import replace

from .. import splice
from ..analysis.usage import is_component_class
from ..ast import (
    BinaryExpression,
    ClassDeclaration,
    ClassMember,
    ExpressionStatement,
    GetAccessorDeclaration,
    Identifier,
    PropertyAccessExpression,
    PropertyDeclaration,
    SourceFile,
    Statement,
    has_modifier,
)
from ..options import DEFAULT_OPTIONS, MigrateOptions
from ..resolver import TypeResolver


def is_prop_types_member(member: ClassMember, options: MigrateOptions = DEFAULT_OPTIONS) -> bool:
    """static propTypes = ... or static get propTypes()."""
    return (
        isinstance(member, (PropertyDeclaration, GetAccessorDeclaration))
        and has_modifier(member, "static")
        and member.name == options.prop_types_member
    )


def is_prop_types_assignment(stmt: Statement, options: MigrateOptions = DEFAULT_OPTIONS) -> bool:
    """Foo.propTypes = ... as a statement."""
    if not isinstance(stmt, ExpressionStatement):
        return False
    expr = stmt.expression
    return (
        isinstance(expr, BinaryExpression)
        and expr.operator == "="
        and isinstance(expr.left, PropertyAccessExpression)
        and isinstance(expr.left.expression, Identifier)
        and expr.left.name == options.prop_types_member
    )


def _strip_class(cls: ClassDeclaration, options: MigrateOptions) -> ClassDeclaration:
    members = list(cls.members)
    for member in cls.members:
        if is_prop_types_member(member, options):
            members = splice.remove(members, member)
    if len(members) == len(cls.members):
        return cls
    return replace(cls, members=members)


def remove_prop_types(
    source: SourceFile,
    resolver: TypeResolver,
    options: MigrateOptions = DEFAULT_OPTIONS,
) -> SourceFile:
    """Drop static propTypes members of component classes and top-level propTypes assignments."""
    statements: list[Statement] = list(source.statements)
    for stmt in source.statements:
        if is_prop_types_assignment(stmt, options):
            statements = splice.remove(statements, stmt)
        elif isinstance(stmt, ClassDeclaration) and is_component_class(stmt, options):
            stripped = _strip_class(stmt, options)
            if stripped is not stmt:
                statements = splice.replace(statements, stmt, stripped)
    if len(statements) == len(source.statements) and all(
        new is old for new, old in zip(statements, source.statements)
    ):
        return source
    return replace(source, statements=statements)
