"""Declared props from a component's propTypes hint.

Components written without static types often declare props at runtime:

    static propTypes = { foo: PropTypes.string.isRequired }
    static get propTypes() { return { foo: PropTypes.string } }
    Foo.propTypes = { foo: PropTypes.string };

Each entry becomes a property signature. Entries ending in .isRequired
are required; the rest are optional.
"""

from __future__ import annotations

from ..ast import (
    ArrayLiteralExpression,
    ArrayType,
    BinaryExpression,
    BooleanLiteral,
    CallExpression,
    ClassDeclaration,
    Expression,
    ExpressionStatement,
    FunctionType,
    GetAccessorDeclaration,
    Identifier,
    IndexSignature,
    KeywordType,
    LiteralType,
    NumericLiteral,
    ObjectLiteralExpression,
    Parameter,
    PropertyAccessExpression,
    PropertyAssignment,
    PropertyDeclaration,
    PropertySignature,
    ReturnStatement,
    Statement,
    StringLiteral,
    TypeLiteral,
    TypeNode,
    TypeReference,
    UnionType,
    has_modifier,
)
from ..options import DEFAULT_OPTIONS, MigrateOptions
from ..printer import print_node


def _any() -> TypeNode:
    return KeywordType("any")


def _simple_validators() -> dict[str, TypeNode]:
    """PropTypes.<name> validators that take no argument."""
    return {
        "any": KeywordType("any"),
        "array": ArrayType(KeywordType("any")),
        "bool": KeywordType("boolean"),
        "element": TypeReference("JSX.Element"),
        "func": FunctionType([Parameter("args", ArrayType(KeywordType("any")), rest=True)], KeywordType("any")),
        "node": TypeReference("React.ReactNode"),
        "number": KeywordType("number"),
        "object": KeywordType("object"),
        "string": KeywordType("string"),
        "symbol": KeywordType("symbol"),
    }


def prop_types_object(
    cls: ClassDeclaration, options: MigrateOptions = DEFAULT_OPTIONS
) -> ObjectLiteralExpression | None:
    """The object literal of a static propTypes property or getter, if any."""
    for member in cls.members:
        if (
            isinstance(member, PropertyDeclaration)
            and has_modifier(member, "static")
            and member.name == options.prop_types_member
            and isinstance(member.initializer, ObjectLiteralExpression)
        ):
            return member.initializer
    for member in cls.members:
        if (
            isinstance(member, GetAccessorDeclaration)
            and has_modifier(member, "static")
            and member.name == options.prop_types_member
        ):
            for stmt in member.body.statements:
                if isinstance(stmt, ReturnStatement):
                    if isinstance(stmt.expression, ObjectLiteralExpression):
                        return stmt.expression
                    break
    return None


def prop_type_hints(
    cls: ClassDeclaration, options: MigrateOptions = DEFAULT_OPTIONS
) -> list[PropertySignature]:
    """Property signatures declared by the class's propTypes hint."""
    obj = prop_types_object(cls, options)
    if obj is None:
        return []
    return signatures_from_prop_types(obj)


def assigned_prop_types_object(
    statements: list[Statement], class_name: str, options: MigrateOptions = DEFAULT_OPTIONS
) -> ObjectLiteralExpression | None:
    """The object literal of a top-level <class_name>.propTypes = { ... } statement, if any."""
    for stmt in statements:
        if not isinstance(stmt, ExpressionStatement):
            continue
        expr = stmt.expression
        if (
            isinstance(expr, BinaryExpression)
            and expr.operator == "="
            and isinstance(expr.left, PropertyAccessExpression)
            and expr.left.name == options.prop_types_member
            and isinstance(expr.left.expression, Identifier)
            and expr.left.expression.text == class_name
            and isinstance(expr.right, ObjectLiteralExpression)
        ):
            return expr.right
    return None


def assigned_prop_type_hints(
    statements: list[Statement], class_name: str, options: MigrateOptions = DEFAULT_OPTIONS
) -> list[PropertySignature]:
    obj = assigned_prop_types_object(statements, class_name, options)
    if obj is None:
        return []
    return signatures_from_prop_types(obj)


def signatures_from_prop_types(obj: ObjectLiteralExpression) -> list[PropertySignature]:
    """Convert { name: validator, ... } into property signatures, in source order."""
    result: list[PropertySignature] = []
    for prop in obj.properties:
        if not isinstance(prop, PropertyAssignment):
            continue
        typ, required = validator_type(prop.initializer)
        result.append(PropertySignature(prop.name.text, typ, optional=not required))
    return result


def validator_type(validator: Expression) -> tuple[TypeNode, bool]:
    """Type for a PropTypes validator expression, and whether it is required."""
    required = False
    if isinstance(validator, PropertyAccessExpression) and validator.name == "isRequired":
        required = True
        validator = validator.expression
    return _validator_type(validator), required


def _validator_type(validator: Expression) -> TypeNode:
    if isinstance(validator, PropertyAccessExpression):
        return _simple_validators().get(validator.name, _any())
    if not isinstance(validator, CallExpression):
        return _any()
    callee = validator.expression
    if isinstance(callee, PropertyAccessExpression):
        name = callee.name
    elif isinstance(callee, Identifier):
        name = callee.text
    else:
        return _any()
    arg = validator.arguments[0] if validator.arguments else None
    if arg is None:
        return _any()
    if name == "arrayOf":
        return ArrayType(_validator_type(arg))
    if name == "objectOf":
        return TypeLiteral([IndexSignature("key", KeywordType("string"), _validator_type(arg))])
    if name == "instanceOf":
        return TypeReference(print_node(arg))
    if name == "oneOf" and isinstance(arg, ArrayLiteralExpression):
        literals: list[TypeNode] = []
        for element in arg.elements:
            if isinstance(element, (StringLiteral, NumericLiteral, BooleanLiteral)):
                literals.append(LiteralType(element))
            else:
                return _any()
        return _union(literals)
    if name == "oneOfType" and isinstance(arg, ArrayLiteralExpression):
        return _union([_validator_type(e) for e in arg.elements])
    if name in ("shape", "exact") and isinstance(arg, ObjectLiteralExpression):
        return TypeLiteral(signatures_from_prop_types(arg))
    return _any()


def _union(types: list[TypeNode]) -> TypeNode:
    if not types:
        return _any()
    if len(types) == 1:
        return types[0]
    return UnionType(types)
