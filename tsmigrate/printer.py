"""TypeScript printer: syntax tree -> source text.

Expressions and types print inline; statements print one per line with
two-space indentation. Operator precedence is not recomputed; grouping
comes from explicit ParenthesizedExpression nodes.
"""

from __future__ import annotations

import re

from .ast import (
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
    Statement,
    StringLiteral,
    ThisKeyword,
    TypeAliasDeclaration,
    TypeLiteral,
    TypeNode,
    TypeReference,
    UnionType,
    VariableDeclaration,
    VariableDeclarationList,
    VariableStatement,
    WhileStatement,
)


def _quote(s: str) -> str:
    """Double-quoted string literal."""
    out = s.replace("\\", "\\\\").replace('"', '\\"')
    out = out.replace("\n", "\\n").replace("\r", "\\r").replace("\t", "\\t")
    return '"' + out + '"'


_IDENTIFIER_RE = re.compile(r"[A-Za-z_$][\w$]*")


def _member_name(name: str) -> str:
    """Property name, quoted unless it is a plain identifier."""
    if _IDENTIFIER_RE.fullmatch(name):
        return name
    return _quote(name)


def _modifiers(modifiers: list[str]) -> str:
    if not modifiers:
        return ""
    return " ".join(modifiers) + " "


class TypeScriptPrinter:
    """Renders nodes as TypeScript source."""

    def __init__(self, indent: int = 0) -> None:
        self.indent: int = indent
        self.lines: list[str] = []

    def print(self, node: Node) -> str:
        """Render any node. Statements render as lines, everything else inline."""
        if isinstance(node, SourceFile):
            self.lines = []
            for stmt in node.statements:
                self._stmt(stmt)
            return "\n".join(self.lines) + "\n"
        if isinstance(node, Statement):
            self.lines = []
            self._stmt(node)
            return "\n".join(self.lines)
        if isinstance(node, (PropertyDeclaration, MethodDeclaration, GetAccessorDeclaration, Constructor)):
            self.lines = []
            self._member(node)
            return "\n".join(self.lines)
        if isinstance(node, TypeNode):
            return self._type(node)
        return self.expr(node)

    def _line(self, text: str = "") -> None:
        if text:
            self.lines.append("  " * self.indent + text)
        else:
            self.lines.append("")

    def _braced(self, child: TypeScriptPrinter) -> str:
        """Wrap a child printer's lines in braces closing at this indent."""
        return "{\n" + "\n".join(child.lines) + "\n" + "  " * self.indent + "}"

    # --- statements ---

    def _body(self, stmt: Statement) -> None:
        """Emit the statements of a block (or a lone statement) one level deeper."""
        self.indent += 1
        if isinstance(stmt, Block):
            for s in stmt.statements:
                self._stmt(s)
        else:
            self._stmt(stmt)
        self.indent -= 1

    def _stmt(self, stmt: Statement) -> None:
        match stmt:
            case ImportDeclaration():
                self._line(self._import(stmt))
            case VariableStatement(declaration_list=decls, modifiers=modifiers):
                self._line(f"{_modifiers(modifiers)}{self._decl_list(decls)};")
            case ExpressionStatement(expression=expression):
                self._line(f"{self.expr(expression)};")
            case ReturnStatement(expression=None):
                self._line("return;")
            case ReturnStatement(expression=expression):
                self._line(f"return {self.expr(expression)};")
            case IfStatement():
                self._if(stmt)
            case ForStatement(initializer=init, condition=cond, incrementor=incr, body=body):
                init_s = ""
                if isinstance(init, VariableDeclarationList):
                    init_s = self._decl_list(init)
                elif init is not None:
                    init_s = self.expr(init)
                cond_s = self.expr(cond) if cond is not None else ""
                incr_s = self.expr(incr) if incr is not None else ""
                self._line(f"for ({init_s}; {cond_s}; {incr_s}) {{")
                self._body(body)
                self._line("}")
            case ForOfStatement(initializer=init, expression=expression, body=body):
                self._line(f"for ({self._decl_list(init)} of {self.expr(expression)}) {{")
                self._body(body)
                self._line("}")
            case WhileStatement(expression=expression, body=body):
                self._line(f"while ({self.expr(expression)}) {{")
                self._body(body)
                self._line("}")
            case Block():
                self._line("{")
                self._body(stmt)
                self._line("}")
            case FunctionDeclaration(name=name, parameters=params, body=body, modifiers=modifiers):
                self._line(f"{_modifiers(modifiers)}function {name}({self._params(params)}) {{")
                self._body(body)
                self._line("}")
            case ClassDeclaration():
                self._class(stmt)
            case InterfaceDeclaration(name=name, heritage_clauses=clauses, members=members, modifiers=modifiers):
                self._line(f"{_modifiers(modifiers)}interface {name}{self._heritage(clauses)} {{")
                self.indent += 1
                for m in members:
                    self._line(self._signature(m))
                self.indent -= 1
                self._line("}")
            case TypeAliasDeclaration(name=name, type=typ, modifiers=modifiers):
                self._line(f"{_modifiers(modifiers)}type {name} = {self._type(typ)};")
            case _:
                raise NotImplementedError(f"cannot print statement {type(stmt).__name__}")

    def _if(self, stmt: IfStatement, prefix: str = "") -> None:
        self._line(f"{prefix}if ({self.expr(stmt.expression)}) {{")
        self._body(stmt.then_statement)
        other = stmt.else_statement
        if other is None:
            self._line("}")
        elif isinstance(other, IfStatement):
            self._if(other, "} else ")
        else:
            self._line("} else {")
            self._body(other)
            self._line("}")

    def _import(self, stmt: ImportDeclaration) -> str:
        parts: list[str] = []
        if stmt.default_name:
            parts.append(stmt.default_name)
        if stmt.namespace_name:
            parts.append(f"* as {stmt.namespace_name}")
        if stmt.names:
            parts.append("{ " + ", ".join(stmt.names) + " }")
        if not parts:
            return f"import {_quote(stmt.module)};"
        return f"import {', '.join(parts)} from {_quote(stmt.module)};"

    def _decl_list(self, decls: VariableDeclarationList) -> str:
        return decls.kind + " " + ", ".join(self._var_decl(d) for d in decls.declarations)

    def _var_decl(self, decl: VariableDeclaration) -> str:
        if isinstance(decl.name, ObjectBindingPattern):
            out = self._binding_pattern(decl.name)
        else:
            out = decl.name.text
        if decl.type is not None:
            out += f": {self._type(decl.type)}"
        if decl.initializer is not None:
            out += f" = {self.expr(decl.initializer)}"
        return out

    def _binding_pattern(self, pattern: ObjectBindingPattern) -> str:
        parts = [self._binding_element(e) for e in pattern.elements]
        return "{ " + ", ".join(parts) + " }"

    def _binding_element(self, element: BindingElement) -> str:
        out = element.name.text
        if element.property_name is not None:
            out = f"{element.property_name.text}: {out}"
        if element.initializer is not None:
            out += f" = {self.expr(element.initializer)}"
        return out

    # --- classes ---

    def _heritage(self, clauses: list[HeritageClause]) -> str:
        out = ""
        for clause in clauses:
            types = ", ".join(self._expr_with_type_args(t) for t in clause.types)
            out += f" {clause.token} {types}"
        return out

    def _expr_with_type_args(self, node: ExpressionWithTypeArguments) -> str:
        out = self.expr(node.expression)
        if node.type_arguments:
            out += "<" + ", ".join(self._type(t) for t in node.type_arguments) + ">"
        return out

    def _class(self, cls: ClassDeclaration) -> None:
        name = f" {cls.name}" if cls.name else ""
        self._line(f"{_modifiers(cls.modifiers)}class{name}{self._heritage(cls.heritage_clauses)} {{")
        self.indent += 1
        for member in cls.members:
            self._member(member)
        self.indent -= 1
        self._line("}")

    def _member(self, member: Node) -> None:
        match member:
            case PropertyDeclaration(name=name, type=typ, initializer=init, modifiers=modifiers):
                out = _modifiers(modifiers) + name
                if typ is not None:
                    out += f": {self._type(typ)}"
                if init is not None:
                    out += f" = {self.expr(init)}"
                self._line(out + ";")
            case MethodDeclaration(name=name, parameters=params, body=body, modifiers=modifiers):
                self._line(f"{_modifiers(modifiers)}{name}({self._params(params)}) {{")
                self._body(body)
                self._line("}")
            case GetAccessorDeclaration(name=name, body=body, modifiers=modifiers):
                self._line(f"{_modifiers(modifiers)}get {name}() {{")
                self._body(body)
                self._line("}")
            case Constructor(parameters=params, body=body):
                self._line(f"constructor({self._params(params)}) {{")
                self._body(body)
                self._line("}")
            case _:
                raise NotImplementedError(f"cannot print member {type(member).__name__}")

    def _params(self, params: list[Parameter]) -> str:
        parts: list[str] = []
        for p in params:
            out = ("..." if p.rest else "") + p.name
            if p.type is not None:
                out += f": {self._type(p.type)}"
            if p.initializer is not None:
                out += f" = {self.expr(p.initializer)}"
            parts.append(out)
        return ", ".join(parts)

    # --- expressions ---

    def expr(self, node: Node) -> str:
        match node:
            case Identifier(text=text):
                return text
            case ThisKeyword():
                return "this"
            case NumericLiteral(text=text):
                return text
            case StringLiteral(text=text):
                return _quote(text)
            case BooleanLiteral(value=value):
                return "true" if value else "false"
            case NullLiteral():
                return "null"
            case PropertyAccessExpression(expression=obj, name=name):
                return f"{self.expr(obj)}.{name}"
            case ElementAccessExpression(expression=obj, argument=arg):
                return f"{self.expr(obj)}[{self.expr(arg)}]"
            case CallExpression(expression=callee, arguments=args):
                return f"{self.expr(callee)}({', '.join(self.expr(a) for a in args)})"
            case BinaryExpression(left=left, operator=op, right=right):
                return f"{self.expr(left)} {op} {self.expr(right)}"
            case PrefixUnaryExpression(operator=op, operand=operand):
                return f"{op}{self.expr(operand)}"
            case ParenthesizedExpression(expression=inner):
                return f"({self.expr(inner)})"
            case ConditionalExpression(condition=cond, when_true=yes, when_false=no):
                return f"{self.expr(cond)} ? {self.expr(yes)} : {self.expr(no)}"
            case ArrowFunction(parameters=params, body=body):
                head = f"({self._params(params)}) => "
                if isinstance(body, Block):
                    return head + self._block_text(body)
                if isinstance(body, ObjectLiteralExpression):
                    return head + f"({self.expr(body)})"
                return head + self.expr(body)
            case FunctionExpression(name=name, parameters=params, body=body):
                label = f" {name}" if name else ""
                return f"function{label}({self._params(params)}) " + self._block_text(body)
            case ObjectLiteralExpression(properties=props):
                if not props:
                    return "{}"
                return "{ " + ", ".join(self._object_property(p) for p in props) + " }"
            case ArrayLiteralExpression(elements=elements):
                return "[" + ", ".join(self.expr(e) for e in elements) + "]"
            case JsxSelfClosingElement(tag_name=tag, attributes=attrs):
                return f"<{tag}{self._jsx_attrs(attrs)} />"
            case JsxElement(tag_name=tag, attributes=attrs, children=children):
                inner = "".join(self._jsx_child(c) for c in children)
                return f"<{tag}{self._jsx_attrs(attrs)}>{inner}</{tag}>"
            case JsxExpression(expression=inner):
                return "{" + (self.expr(inner) if inner is not None else "") + "}"
            case JsxText(text=text):
                return text
            case ClassDeclaration():
                child = TypeScriptPrinter(self.indent)
                child._class(node)
                return "\n".join(child.lines).lstrip()
            case TypeNode():
                return self._type(node)
            case _:
                raise NotImplementedError(f"cannot print expression {type(node).__name__}")

    def _block_text(self, body: Block) -> str:
        if not body.statements:
            return "{}"
        child = TypeScriptPrinter(self.indent + 1)
        for stmt in body.statements:
            child._stmt(stmt)
        return self._braced(child)

    def _object_property(self, prop: PropertyAssignment | ShorthandPropertyAssignment) -> str:
        if isinstance(prop, ShorthandPropertyAssignment):
            return prop.name.text
        name = prop.name.text if isinstance(prop.name, Identifier) else _quote(prop.name.text)
        return f"{name}: {self.expr(prop.initializer)}"

    def _jsx_attrs(self, attrs: list[JsxAttribute]) -> str:
        out = ""
        for attr in attrs:
            if attr.initializer is None:
                out += f" {attr.name}"
            elif isinstance(attr.initializer, StringLiteral):
                out += f" {attr.name}={_quote(attr.initializer.text)}"
            else:
                value = self.expr(attr.initializer)
                if not isinstance(attr.initializer, JsxExpression):
                    value = "{" + value + "}"
                out += f" {attr.name}={value}"
        return out

    def _jsx_child(self, child: Node) -> str:
        if isinstance(child, (JsxText, JsxExpression, JsxElement, JsxSelfClosingElement)):
            return self.expr(child)
        return "{" + self.expr(child) + "}"

    # --- types ---

    def _type(self, typ: TypeNode) -> str:
        match typ:
            case KeywordType(keyword=keyword):
                return keyword
            case TypeReference(name=name, type_arguments=args):
                if not args:
                    return name
                return f"{name}<{', '.join(self._type(a) for a in args)}>"
            case ArrayType(element_type=element):
                inner = self._type(element)
                if isinstance(element, (UnionType, FunctionType)):
                    inner = f"({inner})"
                return f"{inner}[]"
            case TypeLiteral(members=members):
                if not members:
                    return "{}"
                child = TypeScriptPrinter(self.indent + 1)
                for m in members:
                    child._line(child._signature(m))
                return self._braced(child)
            case UnionType(types=types):
                return " | ".join(self._type(t) for t in types)
            case LiteralType(literal=literal):
                return self.expr(literal)
            case FunctionType(parameters=params, type=ret):
                return f"({self._params(params)}) => {self._type(ret)}"
            case PropertySignature() | IndexSignature():
                return self._signature(typ)
            case _:
                raise NotImplementedError(f"cannot print type {type(typ).__name__}")

    def _signature(self, member: PropertySignature | IndexSignature) -> str:
        if isinstance(member, IndexSignature):
            return f"[{member.key_name}: {self._type(member.key_type)}]: {self._type(member.type)};"
        mark = "?" if member.optional else ""
        return f"{_member_name(member.name)}{mark}: {self._type(member.type)};"


def print_node(node: Node) -> str:
    """Render a node as TypeScript text."""
    return TypeScriptPrinter().print(node)
