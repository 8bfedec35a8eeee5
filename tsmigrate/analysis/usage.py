"""Field usage extraction.

Scans a class body and classifies every usage site of an implicit record
field by idiom. Three concerns are extracted independently:

- state: fields of a component's this.state
- props: fields of a component's this.props
- instance fields: this.<name> of any class

Only a fixed set of idioms is recognized. Anything else contributes
nothing; there is no fallback analysis.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from ..ast import (
    BinaryExpression,
    BindingElement,
    CallExpression,
    ClassDeclaration,
    Expression,
    ExpressionStatement,
    Identifier,
    KeywordType,
    Node,
    ObjectBindingPattern,
    ObjectLiteralExpression,
    PropertyAccessExpression,
    PropertyAssignment,
    PropertySignature,
    ShorthandPropertyAssignment,
    ThisKeyword,
    TypeNode,
    VariableDeclaration,
    member_name,
)
from ..errors import MalformedUsageExpression
from ..options import DEFAULT_OPTIONS, MigrateOptions
from ..printer import print_node
from ..resolver import TypeResolver
from . import walk
from .hints import prop_type_hints
from .synth import synthesize_type

ASSIGNMENT_OPERATORS: set[str] = {
    "=",
    "+=",
    "-=",
    "*=",
    "/=",
    "%=",
    "**=",
    "<<=",
    ">>=",
    ">>>=",
    "&=",
    "|=",
    "^=",
    "&&=",
    "||=",
    "??=",
}

_CALL_ARGS_RE = re.compile(r"\(\w*\)")
_INDEX_RE = re.compile(r"\[.+\]")
_QUALIFIER_RE = re.compile(r"^this\.")
_IDENTIFIER_RE = re.compile(r"[A-Za-z_$][\w$]*")


@dataclass
class FieldUsageSite:
    """One recognized usage occurrence of a field."""

    field_name: str
    source: Node
    inferred_type: TypeNode


@dataclass
class InferredField:
    """A field synthesized from usage. Identity is name."""

    name: str
    type: TypeNode
    optional: bool = False

    def to_signature(self) -> PropertySignature:
        return PropertySignature(self.name, self.type, self.optional)


@dataclass
class ComponentClassContext:
    """Per-class facts computed once before extraction."""

    class_name: str
    is_component_class: bool
    existing_member_names: set[str] = field(default_factory=set)
    existing_declarative_hints: list[PropertySignature] = field(default_factory=list)


class FieldCollector:
    """Accumulates usage sites into fields. First sighting of a name wins."""

    def __init__(self, optional: bool = False) -> None:
        self.optional: bool = optional
        self._fields: dict[str, InferredField] = {}

    def add(self, site: FieldUsageSite) -> None:
        if site.field_name in self._fields:
            return
        self._fields[site.field_name] = InferredField(site.field_name, site.inferred_type, self.optional)

    def add_all(self, sites: list[FieldUsageSite]) -> None:
        for site in sites:
            self.add(site)

    def __contains__(self, name: str) -> bool:
        return name in self._fields

    def fields(self) -> list[InferredField]:
        """Collected fields, sorted by name."""
        return sorted(self._fields.values(), key=lambda f: f.name)


# ---------------------------------------------------------------------------
# Class classification
# ---------------------------------------------------------------------------


def _base_name(expression: Expression) -> str | None:
    if isinstance(expression, Identifier):
        return expression.text
    if isinstance(expression, PropertyAccessExpression):
        return expression.name
    return None


def is_component_class(cls: ClassDeclaration, options: MigrateOptions = DEFAULT_OPTIONS) -> bool:
    """Check whether cls extends one of the configured component bases."""
    for clause in cls.heritage_clauses:
        if clause.token != "extends" or not clause.types:
            continue
        return _base_name(clause.types[0].expression) in options.component_bases
    return False


def classify_class(cls: ClassDeclaration, options: MigrateOptions = DEFAULT_OPTIONS) -> ComponentClassContext:
    """Compute the per-class context used by every extractor."""
    component = is_component_class(cls, options)
    return ComponentClassContext(
        class_name=cls.name or "",
        is_component_class=component,
        existing_member_names={member_name(m) for m in cls.members},
        existing_declarative_hints=prop_type_hints(cls, options) if component else [],
    )


def is_slot_access(node: Node, slot: str) -> bool:
    """True for this.<slot>."""
    return (
        isinstance(node, PropertyAccessExpression)
        and isinstance(node.expression, ThisKeyword)
        and node.name == slot
    )


# ---------------------------------------------------------------------------
# Name normalization
# ---------------------------------------------------------------------------


def field_name_from_text(text: str) -> str:
    """Leading field name of a this.<field> usage text.

    this.items[0] -> items, this.load() -> load, this.a.b -> a.
    """
    stripped = _CALL_ARGS_RE.sub("", text, count=1)
    stripped = _INDEX_RE.sub("", stripped, count=1)
    stripped = _QUALIFIER_RE.sub("", stripped, count=1)
    match = _IDENTIFIER_RE.search(stripped)
    if match is None:
        raise MalformedUsageExpression(text)
    return match.group(0)


# ---------------------------------------------------------------------------
# State
# ---------------------------------------------------------------------------


def _literal_key_sites(
    obj: ObjectLiteralExpression, resolver: TypeResolver, options: MigrateOptions
) -> list[FieldUsageSite]:
    sites: list[FieldUsageSite] = []
    for prop in obj.properties:
        if isinstance(prop, PropertyAssignment):
            value: Node = prop.initializer
        elif isinstance(prop, ShorthandPropertyAssignment):
            value = prop.name
        else:
            continue
        typ = synthesize_type(resolver.resolve_type(value), resolver, options)
        sites.append(FieldUsageSite(prop.name.text, prop, typ))
    return sites


def _state_initializer_sites(
    member: Node, resolver: TypeResolver, options: MigrateOptions
) -> list[FieldUsageSite]:
    """this.state = { ... }"""
    sites: list[FieldUsageSite] = []
    for stmt in walk.filter([member], lambda n: isinstance(n, ExpressionStatement)):
        expr = stmt.expression
        if (
            isinstance(expr, BinaryExpression)
            and expr.operator == "="
            and is_slot_access(expr.left, options.state_slot)
            and isinstance(expr.right, ObjectLiteralExpression)
        ):
            sites.extend(_literal_key_sites(expr.right, resolver, options))
    return sites


def _state_mutation_sites(
    member: Node, resolver: TypeResolver, options: MigrateOptions
) -> list[FieldUsageSite]:
    """this.setState({ ... })"""
    sites: list[FieldUsageSite] = []
    for call in walk.filter([member], lambda n: isinstance(n, CallExpression)):
        if (
            is_slot_access(call.expression, options.state_mutator)
            and call.arguments
            and isinstance(call.arguments[0], ObjectLiteralExpression)
        ):
            sites.extend(_literal_key_sites(call.arguments[0], resolver, options))
    return sites


def _destructured_elements(member: Node, slot: str) -> list[BindingElement]:
    """Binding elements of const { a, b: c } = this.<slot>."""
    elements: list[BindingElement] = []
    for decl in walk.filter([member], lambda n: isinstance(n, VariableDeclaration)):
        if isinstance(decl.name, ObjectBindingPattern) and is_slot_access(decl.initializer, slot):
            elements.extend(decl.name.elements)
    return elements


def _binding_key(element: BindingElement) -> str:
    if element.property_name is not None:
        return element.property_name.text
    return element.name.text


def _state_destructuring_sites(
    member: Node, resolver: TypeResolver, options: MigrateOptions
) -> list[FieldUsageSite]:
    """const { a } = this.state"""
    sites: list[FieldUsageSite] = []
    for element in _destructured_elements(member, options.state_slot):
        typ = synthesize_type(resolver.resolve_type(element), resolver, options)
        sites.append(FieldUsageSite(_binding_key(element), element, typ))
    return sites


def _slot_member_accesses(member: Node, slot: str) -> list[PropertyAccessExpression]:
    """this.<slot>.<name> accesses."""
    return walk.filter(
        [member],
        lambda n: isinstance(n, PropertyAccessExpression) and is_slot_access(n.expression, slot),
    )


def _state_access_sites(
    member: Node, resolver: TypeResolver, options: MigrateOptions
) -> list[FieldUsageSite]:
    """this.state.a"""
    sites: list[FieldUsageSite] = []
    for access in _slot_member_accesses(member, options.state_slot):
        typ = synthesize_type(resolver.resolve_type(access), resolver, options)
        sites.append(FieldUsageSite(access.name, access, typ))
    return sites


def state_usage_sites(
    cls: ClassDeclaration,
    resolver: TypeResolver,
    options: MigrateOptions = DEFAULT_OPTIONS,
) -> list[FieldUsageSite]:
    """All state usage sites, member by member, idioms in a fixed order."""
    sites: list[FieldUsageSite] = []
    for member in cls.members:
        sites.extend(_state_initializer_sites(member, resolver, options))
        sites.extend(_state_mutation_sites(member, resolver, options))
        sites.extend(_state_destructuring_sites(member, resolver, options))
        sites.extend(_state_access_sites(member, resolver, options))
    return sites


def extract_state_fields(
    cls: ClassDeclaration,
    context: ComponentClassContext,
    resolver: TypeResolver,
    options: MigrateOptions = DEFAULT_OPTIONS,
) -> list[InferredField]:
    """State fields of a component class. Every state field is optional."""
    if not context.is_component_class:
        return []
    collector = FieldCollector(optional=True)
    collector.add_all(state_usage_sites(cls, resolver, options))
    return collector.fields()


# ---------------------------------------------------------------------------
# Props
# ---------------------------------------------------------------------------


def prop_usage_sites(cls: ClassDeclaration, options: MigrateOptions = DEFAULT_OPTIONS) -> list[FieldUsageSite]:
    """Props usage sites. Props are typed any; the resolver is not consulted."""
    sites: list[FieldUsageSite] = []
    for member in cls.members:
        for element in _destructured_elements(member, options.props_slot):
            sites.append(FieldUsageSite(_binding_key(element), element, KeywordType("any")))
        for access in _slot_member_accesses(member, options.props_slot):
            sites.append(FieldUsageSite(access.name, access, KeywordType("any")))
    return sites


def extract_prop_fields(
    cls: ClassDeclaration,
    context: ComponentClassContext,
    options: MigrateOptions = DEFAULT_OPTIONS,
) -> list[InferredField]:
    """Props of a component class, each optional and any-typed."""
    if not context.is_component_class:
        return []
    collector = FieldCollector(optional=True)
    collector.add_all(prop_usage_sites(cls, options))
    return collector.fields()


# ---------------------------------------------------------------------------
# Instance fields
# ---------------------------------------------------------------------------


def _instance_candidate(
    name: str, context: ComponentClassContext, options: MigrateOptions
) -> bool:
    if name in context.existing_member_names:
        return False
    if context.is_component_class and name.lower() in options.reserved_names():
        return False
    return True


def instance_usage_sites(
    cls: ClassDeclaration,
    context: ComponentClassContext,
    resolver: TypeResolver,
    options: MigrateOptions = DEFAULT_OPTIONS,
) -> list[FieldUsageSite]:
    """this.<name> sites: assignments first, then plain accesses."""
    assignments: list[FieldUsageSite] = []
    accesses: list[FieldUsageSite] = []
    nodes = walk.filter(
        cls.members,
        lambda n: isinstance(n, (BinaryExpression, PropertyAccessExpression)),
    )
    for node in nodes:
        if isinstance(node, BinaryExpression):
            if node.operator not in ASSIGNMENT_OPERATORS:
                continue
            text = print_node(node.left)
            if not text.startswith("this."):
                continue
            name = field_name_from_text(text)
            if not _instance_candidate(name, context, options):
                continue
            descriptor = resolver.resolve_type(node.right)
            typ = synthesize_type(descriptor, resolver, options, index_target="[" in text)
            assignments.append(FieldUsageSite(name, node, typ))
        elif isinstance(node.expression, ThisKeyword):
            text = print_node(node)
            name = field_name_from_text(text)
            if not _instance_candidate(name, context, options):
                continue
            typ = synthesize_type(resolver.resolve_type(node), resolver, options)
            accesses.append(FieldUsageSite(name, node, typ))
    return assignments + accesses


def extract_instance_fields(
    cls: ClassDeclaration,
    context: ComponentClassContext,
    resolver: TypeResolver,
    options: MigrateOptions = DEFAULT_OPTIONS,
) -> list[InferredField]:
    """Instance fields of any class, excluding declared members."""
    collector = FieldCollector()
    collector.add_all(instance_usage_sites(cls, context, resolver, options))
    return collector.fields()
