"""Type-resolution capability.

The engine never computes types itself; it asks a TypeResolver. A real
implementation wraps a whole-program checker. LiteralResolver is a local
stand-in that types what is visible in the expression itself.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Protocol

from .ast import (
    ArrayLiteralExpression,
    ArrayType,
    ArrowFunction,
    BinaryExpression,
    BindingElement,
    BooleanLiteral,
    CallExpression,
    ConditionalExpression,
    Expression,
    FunctionExpression,
    FunctionType,
    Identifier,
    JsxElement,
    JsxSelfClosingElement,
    KeywordType,
    LiteralType,
    Node,
    NullLiteral,
    NumericLiteral,
    ObjectLiteralExpression,
    Parameter,
    ParenthesizedExpression,
    PrefixUnaryExpression,
    PropertyAssignment,
    PropertySignature,
    ShorthandPropertyAssignment,
    StringLiteral,
    TypeLiteral,
    TypeNode,
    TypeReference,
)
from .errors import TypeResolutionFailure
from .printer import print_node

KEYWORDS: set[str] = {
    "any",
    "boolean",
    "never",
    "null",
    "number",
    "object",
    "string",
    "symbol",
    "undefined",
    "unknown",
    "void",
}


@dataclass(frozen=True)
class TypeDescriptor:
    """A resolved type.

    text is the checker's rendering ('1', '"s"', 'true', 'undefined[]',
    'ReactNode'). kind classifies it: any, string, number, boolean,
    string_literal, number_literal, boolean_literal, array, object,
    function, reference, null, undefined. symbol is the declared name of
    a named type, when there is one. node, if set, is the structural type
    expression for the type.
    """

    text: str
    kind: str = "reference"
    symbol: str | None = None
    node: TypeNode | None = None


ANY = TypeDescriptor("any", "any")


class TypeResolver(Protocol):
    """What the engine needs from a type checker."""

    def resolve_type(self, node: Node) -> TypeDescriptor:
        """Type of the value at node. May raise TypeResolutionFailure."""
        ...

    def type_to_node(self, descriptor: TypeDescriptor) -> TypeNode:
        """Structural type expression for descriptor."""
        ...


_QUOTED_RE = re.compile(r'"(?:[^"\\]|\\.)*"')


def type_node_from_text(text: str) -> TypeNode:
    """Best-effort type expression for a rendered type name."""
    if text in KEYWORDS:
        return KeywordType(text)
    if text.endswith("[]"):
        return ArrayType(type_node_from_text(text[:-2]))
    if _QUOTED_RE.fullmatch(text):
        return LiteralType(StringLiteral(json.loads(text)))
    return TypeReference(text)


_WIDENED: dict[str, str] = {
    "string_literal": "string",
    "number_literal": "number",
    "boolean_literal": "boolean",
}


def _widen(desc: TypeDescriptor) -> TypeDescriptor:
    """Literal type -> its primitive, as a checker does for mutable locations."""
    base = _WIDENED.get(desc.kind)
    if base is None:
        return desc
    return TypeDescriptor(base, base)


def _any_function() -> FunctionType:
    rest = Parameter("args", ArrayType(KeywordType("any")), rest=True)
    return FunctionType([rest], KeywordType("any"))


_ARITHMETIC = {"-", "*", "/", "%", "**", "|", "&", "^", "<<", ">>", ">>>"}
_COMPARISON = {"==", "!=", "===", "!==", "<", ">", "<=", ">=", "in", "instanceof"}
_ASSIGNMENT = {"=", "+=", "-=", "*=", "/=", "%=", "||=", "&&=", "??="}


class LiteralResolver:
    """Types literals and simple operators; everything else is any.

    timer_functions names calls that return a timer handle.
    """

    def __init__(self, timer_functions: tuple[str, ...] = ("setTimeout", "setInterval")) -> None:
        self.timer_functions: tuple[str, ...] = timer_functions

    def resolve_type(self, node: Node) -> TypeDescriptor:
        match node:
            case NumericLiteral(text=text):
                return TypeDescriptor(text, "number_literal")
            case StringLiteral():
                return TypeDescriptor(print_node(node), "string_literal")
            case BooleanLiteral(value=value):
                return TypeDescriptor("true" if value else "false", "boolean_literal")
            case NullLiteral():
                return TypeDescriptor("null", "null")
            case Identifier(text="undefined"):
                return TypeDescriptor("undefined", "undefined")
            case ParenthesizedExpression(expression=inner):
                return self.resolve_type(inner)
            case ArrayLiteralExpression(elements=elements):
                return self._array(elements)
            case ObjectLiteralExpression(properties=props):
                return self._object(props)
            case ArrowFunction() | FunctionExpression():
                fn = _any_function()
                return TypeDescriptor(print_node(fn), "function", node=fn)
            case JsxElement() | JsxSelfClosingElement():
                return TypeDescriptor("Element", "reference", symbol="JSX.Element", node=TypeReference("JSX.Element"))
            case PrefixUnaryExpression(operator="!"):
                return TypeDescriptor("boolean", "boolean")
            case PrefixUnaryExpression(operator=op) if op in ("-", "+", "~"):
                return TypeDescriptor("number", "number")
            case BinaryExpression(operator=op, right=right) if op in _ASSIGNMENT:
                return self.resolve_type(right)
            case BinaryExpression(operator=op) if op in _COMPARISON:
                return TypeDescriptor("boolean", "boolean")
            case BinaryExpression(operator=op) if op in _ARITHMETIC:
                return TypeDescriptor("number", "number")
            case BinaryExpression(operator="+", left=left, right=right):
                lt = _widen(self.resolve_type(left))
                rt = _widen(self.resolve_type(right))
                if lt.kind == "string" or rt.kind == "string":
                    return TypeDescriptor("string", "string")
                if lt.kind == "number" and rt.kind == "number":
                    return TypeDescriptor("number", "number")
                return ANY
            case BinaryExpression():
                return ANY
            case ConditionalExpression(when_true=yes, when_false=no):
                a = _widen(self.resolve_type(yes))
                b = _widen(self.resolve_type(no))
                if a.text == b.text:
                    return a
                return ANY
            case CallExpression(expression=Identifier(text=name)) if name in self.timer_functions:
                return TypeDescriptor("Timer", "reference", symbol="Timer")
            case Expression() | BindingElement() | ShorthandPropertyAssignment():
                return ANY
            case _:
                raise TypeResolutionFailure(f"cannot resolve type of {type(node).__name__}", node.pos)

    def type_to_node(self, descriptor: TypeDescriptor) -> TypeNode:
        if descriptor.node is not None:
            return descriptor.node
        return type_node_from_text(descriptor.text)

    def _array(self, elements: list[Expression]) -> TypeDescriptor:
        if not elements:
            return TypeDescriptor("undefined[]", "array", node=ArrayType(KeywordType("undefined")))
        types = [_widen(self.resolve_type(e)) for e in elements]
        first = types[0]
        if all(t.text == first.text for t in types) and first.kind != "object":
            element = self.type_to_node(first)
            return TypeDescriptor(first.text + "[]", "array", node=ArrayType(element))
        return TypeDescriptor("any[]", "array", node=ArrayType(KeywordType("any")))

    def _object(self, props: list[PropertyAssignment | ShorthandPropertyAssignment]) -> TypeDescriptor:
        members: list[PropertySignature] = []
        for prop in props:
            if isinstance(prop, ShorthandPropertyAssignment):
                desc = self.resolve_type(prop.name)
            else:
                desc = _widen(self.resolve_type(prop.initializer))
            members.append(PropertySignature(prop.name.text, self.type_to_node(desc)))
        literal = TypeLiteral(members)
        return TypeDescriptor(print_node(literal), "object", node=literal)
