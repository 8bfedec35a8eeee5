"""Syntax tree for component sources.

A closed set of node variants. Each variant names its children in typed
slots; there is no uniform child list. The walker in analysis/walk.py
enumerates the slots per variant.
"""

from __future__ import annotations

from dataclasses import dataclass, field


# ============================================================
# POSITION
# ============================================================


@dataclass
class Pos:
    """Source position, 1-indexed. 0 = unknown."""

    line: int
    col: int


def pos_unknown() -> Pos:
    """Factory for unknown source position."""
    return Pos(0, 0)


@dataclass(kw_only=True)
class Node:
    """Base for all nodes. Abstract."""

    pos: Pos = field(default_factory=pos_unknown)


# ============================================================
# TYPE NODES
# ============================================================


@dataclass
class TypeNode(Node):
    """Base for all type expressions."""


@dataclass
class KeywordType(TypeNode):
    """any, string, number, boolean, object, symbol, undefined, null, void."""

    keyword: str


@dataclass
class TypeReference(TypeNode):
    """Named type with optional arguments: Foo, React.ReactNode, Map<K, V>."""

    name: str
    type_arguments: list[TypeNode] = field(default_factory=list)


@dataclass
class ArrayType(TypeNode):
    """T[]."""

    element_type: TypeNode


@dataclass
class PropertySignature(TypeNode):
    """name?: Type inside a type literal or interface."""

    name: str
    type: TypeNode
    optional: bool = False


@dataclass
class IndexSignature(TypeNode):
    """[key: string]: Type."""

    key_name: str
    key_type: TypeNode
    type: TypeNode


@dataclass
class TypeLiteral(TypeNode):
    """{ members }. An empty literal is the empty-object type {}."""

    members: list[PropertySignature | IndexSignature] = field(default_factory=list)


@dataclass
class UnionType(TypeNode):
    """A | B | ..."""

    types: list[TypeNode]


@dataclass
class LiteralType(TypeNode):
    """Literal used as a type: "a", 1, true."""

    literal: Expression


@dataclass
class FunctionType(TypeNode):
    """(params) => Ret."""

    parameters: list[Parameter]
    type: TypeNode


# ============================================================
# EXPRESSIONS
# ============================================================


@dataclass
class Expression(Node):
    """Base for all expressions."""


@dataclass
class Identifier(Expression):
    """Name reference."""

    text: str


@dataclass
class ThisKeyword(Expression):
    """this."""


@dataclass
class NumericLiteral(Expression):
    """Number literal, kept as source text."""

    text: str


@dataclass
class StringLiteral(Expression):
    """String literal with escapes resolved."""

    text: str


@dataclass
class BooleanLiteral(Expression):
    """true or false."""

    value: bool


@dataclass
class NullLiteral(Expression):
    """null."""


@dataclass
class PropertyAccessExpression(Expression):
    """expression.name"""

    expression: Expression
    name: str


@dataclass
class ElementAccessExpression(Expression):
    """expression[argument]"""

    expression: Expression
    argument: Expression


@dataclass
class CallExpression(Expression):
    """expression(arguments)"""

    expression: Expression
    arguments: list[Expression] = field(default_factory=list)


@dataclass
class BinaryExpression(Expression):
    """left operator right, including assignments."""

    left: Expression
    operator: str
    right: Expression


@dataclass
class PrefixUnaryExpression(Expression):
    """operator operand: !x, -x."""

    operator: str
    operand: Expression


@dataclass
class ParenthesizedExpression(Expression):
    """(expression)"""

    expression: Expression


@dataclass
class ConditionalExpression(Expression):
    """condition ? when_true : when_false"""

    condition: Expression
    when_true: Expression
    when_false: Expression


@dataclass
class Parameter(Node):
    """Function parameter. rest marks ...name."""

    name: str
    type: TypeNode | None = None
    initializer: Expression | None = None
    rest: bool = False


@dataclass
class ArrowFunction(Expression):
    """(parameters) => body"""

    parameters: list[Parameter]
    body: Block | Expression


@dataclass
class FunctionExpression(Expression):
    """function name(parameters) { body }"""

    name: str | None
    parameters: list[Parameter]
    body: Block


@dataclass
class PropertyAssignment(Node):
    """name: initializer inside an object literal."""

    name: Identifier | StringLiteral
    initializer: Expression


@dataclass
class ShorthandPropertyAssignment(Node):
    """{ name } inside an object literal."""

    name: Identifier


@dataclass
class ObjectLiteralExpression(Expression):
    """{ properties }"""

    properties: list[PropertyAssignment | ShorthandPropertyAssignment] = field(
        default_factory=list
    )


@dataclass
class ArrayLiteralExpression(Expression):
    """[elements]"""

    elements: list[Expression] = field(default_factory=list)


# --- JSX ---


@dataclass
class JsxAttribute(Node):
    """name={initializer} or name="text". initializer None for bare flags."""

    name: str
    initializer: Expression | None = None


@dataclass
class JsxExpression(Expression):
    """{expression} inside JSX."""

    expression: Expression | None


@dataclass
class JsxText(Expression):
    """Literal text between JSX tags."""

    text: str


@dataclass
class JsxSelfClosingElement(Expression):
    """<tag attributes />"""

    tag_name: str
    attributes: list[JsxAttribute] = field(default_factory=list)


@dataclass
class JsxElement(Expression):
    """<tag attributes>children</tag>"""

    tag_name: str
    attributes: list[JsxAttribute] = field(default_factory=list)
    children: list[Expression] = field(default_factory=list)


# ============================================================
# STATEMENTS
# ============================================================


@dataclass
class Statement(Node):
    """Base for all statements and declarations."""


@dataclass
class Block(Statement):
    """{ statements }"""

    statements: list[Statement] = field(default_factory=list)


@dataclass
class ExpressionStatement(Statement):
    """Bare expression as statement."""

    expression: Expression


@dataclass
class ReturnStatement(Statement):
    """return expression?"""

    expression: Expression | None = None


@dataclass
class IfStatement(Statement):
    """if (expression) then_statement else else_statement"""

    expression: Expression
    then_statement: Statement
    else_statement: Statement | None = None


@dataclass
class BindingElement(Node):
    """One entry of a destructuring pattern: property_name: name = initializer."""

    name: Identifier
    property_name: Identifier | None = None
    initializer: Expression | None = None


@dataclass
class ObjectBindingPattern(Node):
    """{ a, b: c }"""

    elements: list[BindingElement]


@dataclass
class VariableDeclaration(Node):
    """name: type = initializer"""

    name: Identifier | ObjectBindingPattern
    type: TypeNode | None = None
    initializer: Expression | None = None


@dataclass
class VariableDeclarationList(Node):
    """kind declarations; kind is const, let or var."""

    declarations: list[VariableDeclaration]
    kind: str = "const"


@dataclass
class VariableStatement(Statement):
    """Declaration list used as a statement."""

    declaration_list: VariableDeclarationList
    modifiers: list[str] = field(default_factory=list)


@dataclass
class ForStatement(Statement):
    """for (initializer; condition; incrementor) body"""

    initializer: VariableDeclarationList | Expression | None
    condition: Expression | None
    incrementor: Expression | None
    body: Statement


@dataclass
class ForOfStatement(Statement):
    """for (initializer of expression) body"""

    initializer: VariableDeclarationList
    expression: Expression
    body: Statement


@dataclass
class WhileStatement(Statement):
    """while (expression) body"""

    expression: Expression
    body: Statement


@dataclass
class FunctionDeclaration(Statement):
    """function name(parameters) { body }"""

    name: str
    parameters: list[Parameter]
    body: Block
    modifiers: list[str] = field(default_factory=list)


@dataclass
class ImportDeclaration(Statement):
    """import default, * as namespace, { names } from "module"."""

    module: str
    default_name: str | None = None
    namespace_name: str | None = None
    names: list[str] = field(default_factory=list)


# --- Classes ---


@dataclass
class ExpressionWithTypeArguments(Node):
    """React.Component<P, S> in a heritage clause."""

    expression: Expression
    type_arguments: list[TypeNode] = field(default_factory=list)


@dataclass
class HeritageClause(Node):
    """extends/implements followed by one or more types."""

    token: str
    types: list[ExpressionWithTypeArguments]


@dataclass
class ClassMember(Node):
    """Base for class members."""


@dataclass
class PropertyDeclaration(ClassMember):
    """modifiers name: type = initializer"""

    name: str
    type: TypeNode | None = None
    initializer: Expression | None = None
    modifiers: list[str] = field(default_factory=list)


@dataclass
class MethodDeclaration(ClassMember):
    """modifiers name(parameters) { body }"""

    name: str
    parameters: list[Parameter]
    body: Block
    modifiers: list[str] = field(default_factory=list)


@dataclass
class GetAccessorDeclaration(ClassMember):
    """modifiers get name() { body }"""

    name: str
    body: Block
    modifiers: list[str] = field(default_factory=list)


@dataclass
class Constructor(ClassMember):
    """constructor(parameters) { body }"""

    parameters: list[Parameter]
    body: Block


@dataclass
class ClassDeclaration(Statement):
    """class name extends ... { members }. name None for anonymous classes.

    Also used in expression position (const A = class extends B {}).
    """

    name: str | None
    heritage_clauses: list[HeritageClause] = field(default_factory=list)
    members: list[ClassMember] = field(default_factory=list)
    modifiers: list[str] = field(default_factory=list)


# --- Type declarations ---


@dataclass
class InterfaceDeclaration(Statement):
    """interface name extends ... { members }"""

    name: str
    heritage_clauses: list[HeritageClause] = field(default_factory=list)
    members: list[PropertySignature | IndexSignature] = field(default_factory=list)
    modifiers: list[str] = field(default_factory=list)


@dataclass
class TypeAliasDeclaration(Statement):
    """type name = type"""

    name: str
    type: TypeNode
    modifiers: list[str] = field(default_factory=list)


TypeDeclaration = InterfaceDeclaration | TypeAliasDeclaration


# ============================================================
# SOURCE FILE
# ============================================================


@dataclass
class SourceFile(Node):
    """One source unit.

    emit_helpers is runtime-support metadata owned by the printer stage;
    passes must carry it through untouched.
    """

    statements: list[Statement]
    file_name: str = ""
    emit_helpers: list[str] = field(default_factory=list)


def member_name(member: ClassMember) -> str:
    """Declared name of a class member."""
    if isinstance(member, Constructor):
        return "constructor"
    return member.name


def has_modifier(node: Node, modifier: str) -> bool:
    """Check modifiers list for a keyword such as static or export."""
    return modifier in getattr(node, "modifiers", [])
