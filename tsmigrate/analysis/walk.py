"""Tree walking over the closed set of node variants."""

from __future__ import annotations

from dataclasses import replace
from typing import Callable

from ..ast import (
    ArrayLiteralExpression,
    ArrayType,
    ArrowFunction,
    BinaryExpression,
    BindingElement,
    Block,
    BooleanLiteral,
    CallExpression,
    ClassDeclaration,
    ConditionalExpression,
    Constructor,
    ElementAccessExpression,
    ExpressionStatement,
    ExpressionWithTypeArguments,
    ForOfStatement,
    ForStatement,
    FunctionDeclaration,
    FunctionExpression,
    FunctionType,
    GetAccessorDeclaration,
    HeritageClause,
    Identifier,
    IfStatement,
    ImportDeclaration,
    IndexSignature,
    InterfaceDeclaration,
    JsxAttribute,
    JsxElement,
    JsxExpression,
    JsxSelfClosingElement,
    JsxText,
    KeywordType,
    LiteralType,
    MethodDeclaration,
    Node,
    NullLiteral,
    NumericLiteral,
    ObjectBindingPattern,
    ObjectLiteralExpression,
    Parameter,
    ParenthesizedExpression,
    PrefixUnaryExpression,
    PropertyAccessExpression,
    PropertyAssignment,
    PropertyDeclaration,
    PropertySignature,
    ReturnStatement,
    ShorthandPropertyAssignment,
    SourceFile,
    StringLiteral,
    ThisKeyword,
    TypeAliasDeclaration,
    TypeLiteral,
    TypeReference,
    UnionType,
    VariableDeclaration,
    VariableDeclarationList,
    VariableStatement,
    WhileStatement,
)

# Child slots walked per variant, in source order. Classes are leaves:
# extraction starts from a class's member list, never descends into a
# nested class body. Type nodes, binding patterns and parameters are
# leaves as well.
CHILD_SLOTS: dict[type[Node], tuple[str, ...]] = {
    SourceFile: ("statements",),
    Block: ("statements",),
    ExpressionStatement: ("expression",),
    ReturnStatement: ("expression",),
    IfStatement: ("expression", "then_statement", "else_statement"),
    ForStatement: ("initializer", "condition", "incrementor", "body"),
    ForOfStatement: ("initializer", "expression", "body"),
    WhileStatement: ("expression", "body"),
    VariableStatement: ("declaration_list",),
    VariableDeclarationList: ("declarations",),
    VariableDeclaration: ("initializer",),
    FunctionDeclaration: ("body",),
    ImportDeclaration: (),
    ClassDeclaration: (),
    PropertyDeclaration: ("initializer",),
    MethodDeclaration: ("body",),
    GetAccessorDeclaration: ("body",),
    Constructor: ("body",),
    InterfaceDeclaration: (),
    TypeAliasDeclaration: (),
    # Expressions
    Identifier: (),
    ThisKeyword: (),
    NumericLiteral: (),
    StringLiteral: (),
    BooleanLiteral: (),
    NullLiteral: (),
    PropertyAccessExpression: ("expression",),
    ElementAccessExpression: ("expression",),
    CallExpression: ("expression", "arguments"),
    BinaryExpression: ("left", "right"),
    PrefixUnaryExpression: ("operand",),
    ParenthesizedExpression: ("expression",),
    ConditionalExpression: ("condition", "when_true", "when_false"),
    ArrowFunction: ("body",),
    FunctionExpression: ("body",),
    ObjectLiteralExpression: ("properties",),
    PropertyAssignment: ("initializer",),
    ShorthandPropertyAssignment: (),
    ArrayLiteralExpression: ("elements",),
    JsxElement: ("attributes", "children"),
    JsxSelfClosingElement: ("attributes",),
    JsxAttribute: ("initializer",),
    JsxExpression: ("expression",),
    JsxText: (),
    # Leaves
    Parameter: (),
    ObjectBindingPattern: (),
    BindingElement: (),
    HeritageClause: (),
    ExpressionWithTypeArguments: (),
    KeywordType: (),
    TypeReference: (),
    ArrayType: (),
    TypeLiteral: (),
    PropertySignature: (),
    IndexSignature: (),
    UnionType: (),
    LiteralType: (),
    FunctionType: (),
}


def _slots(node: Node) -> tuple[str, ...]:
    slots = CHILD_SLOTS.get(type(node))
    if slots is None:
        raise TypeError(f"unknown node variant: {type(node).__name__}")
    return slots


def children(node: Node) -> list[Node]:
    """Direct children of node in source order, lists flattened, empty slots skipped."""
    result: list[Node] = []
    for slot in _slots(node):
        value = getattr(node, slot)
        if isinstance(value, list):
            result.extend(value)
        elif value is not None:
            result.append(value)
    return result


def traverse(nodes: list[Node], visit: Callable[[Node], None]) -> None:
    """Call visit once per reachable node.

    Stack based. Children are pushed in reverse so pops follow source
    pre-order; the order is deterministic for identical input.
    """
    stack: list[Node] = list(reversed(nodes))
    while stack:
        node = stack.pop()
        visit(node)
        stack.extend(reversed(children(node)))


def filter(nodes: list[Node], predicate: Callable[[Node], bool]) -> list[Node]:
    """Nodes matching predicate, in traversal order."""
    result: list[Node] = []

    def visit(node: Node) -> None:
        if predicate(node):
            result.append(node)

    traverse(nodes, visit)
    return result


def rebuild(node: Node, fn: Callable[[Node], Node]) -> Node:
    """Copy-on-write rewrite: apply fn bottom-up over the walked slots.

    Subtrees fn leaves alone are shared with the input; ancestors of a
    replaced node are copied with dataclasses.replace. The input tree is
    never mutated.
    """
    changes: dict[str, object] = {}
    for slot in _slots(node):
        value = getattr(node, slot)
        if isinstance(value, list):
            new_items = [rebuild(item, fn) for item in value]
            if any(new is not old for new, old in zip(new_items, value)):
                changes[slot] = new_items
        elif value is not None:
            new_value = rebuild(value, fn)
            if new_value is not value:
                changes[slot] = new_value
    if changes:
        node = replace(node, **changes)
    return fn(node)
