"""Tests for field usage extraction."""

import pytest

from tsmigrate.analysis.usage import (
    classify_class,
    extract_instance_fields,
    extract_prop_fields,
    extract_state_fields,
    field_name_from_text,
    is_component_class,
)
from tsmigrate.ast import (
    BinaryExpression,
    CallExpression,
    ClassDeclaration,
    ElementAccessExpression,
    ExpressionStatement,
    ExpressionWithTypeArguments,
    HeritageClause,
    ObjectLiteralExpression,
    PropertyAccessExpression,
    PropertyDeclaration,
    ShorthandPropertyAssignment,
)
from tsmigrate.errors import MalformedUsageExpression
from tsmigrate.options import MigrateOptions
from tsmigrate.printer import print_node
from tsmigrate.resolver import LiteralResolver

from trees import (
    assign,
    component,
    ctor,
    destructure,
    ident,
    method,
    num,
    obj,
    plain_class,
    prop_type,
    set_state,
    static_prop_types,
    string,
    this,
)

RESOLVER = LiteralResolver()


def _fields(fields):
    """name -> (printed type, optional)."""
    return {f.name: (print_node(f.type), f.optional) for f in fields}


def _state(cls):
    return extract_state_fields(cls, classify_class(cls), RESOLVER)


def _props(cls):
    return extract_prop_fields(cls, classify_class(cls))


def _instance(cls):
    return extract_instance_fields(cls, classify_class(cls), RESOLVER)


# ── Name normalization ──


@pytest.mark.parametrize(
    "text,expected",
    [
        ("this.items[0]", "items"),
        ("this.load()", "load"),
        ("this.fetch(id)", "fetch"),
        ("this.a.b", "a"),
        ("this.count", "count"),
        ("this.rows[i].cells", "rows"),
        ("this.$el", "$el"),
        ("this._$cache.get()", "_$cache"),
    ],
)
def test_field_name_from_text(text, expected):
    assert field_name_from_text(text) == expected


@pytest.mark.parametrize("text", ["this.", "[all]", "()"])
def test_field_name_from_text_malformed(text):
    with pytest.raises(MalformedUsageExpression, match="fail to analyze property name"):
        field_name_from_text(text)


# ── Classification ──


def test_component_detection_qualified_and_bare():
    assert is_component_class(component("A", base="React.Component"))
    assert is_component_class(component("B", base="PureComponent"))
    assert is_component_class(component("C", base="React.PureComponent"))
    assert not is_component_class(component("D", base="Base"))
    assert not is_component_class(plain_class("E"))


def test_implements_only_is_not_component():
    clause = HeritageClause("implements", [ExpressionWithTypeArguments(ident("Component"))])
    assert not is_component_class(ClassDeclaration("A", [clause]))


def test_custom_component_base():
    options = MigrateOptions(component_bases=("Widget",))
    assert is_component_class(component("A", base="ui.Widget"), options)
    assert not is_component_class(component("B", base="React.Component"), options)


def test_classify_collects_member_names_and_hints():
    cls = component(
        "A",
        static_prop_types(("title", prop_type("string.isRequired"))),
        method("render"),
    )
    context = classify_class(cls)
    assert context.class_name == "A"
    assert context.is_component_class
    assert context.existing_member_names == {"propTypes", "render"}
    assert [h.name for h in context.existing_declarative_hints] == ["title"]


def test_classify_plain_class_has_no_hints():
    cls = plain_class("A", static_prop_types(("title", prop_type("string"))))
    assert classify_class(cls).existing_declarative_hints == []


# ── State ──


def test_state_initializer_and_mutation_sorted():
    cls = component(
        "Counter",
        ctor(assign(this("state"), obj(("foo", num(1)), ("bar", string("s"))))),
        method("bump", set_state(("baz", num(2)))),
    )
    fields = _state(cls)
    assert [f.name for f in fields] == ["bar", "baz", "foo"]
    assert _fields(fields) == {
        "bar": ("string", True),
        "baz": ("number", True),
        "foo": ("number", True),
    }


def test_state_conflict_keeps_first_seen():
    cls = component(
        "A",
        method("one", set_state(("x", num(1)))),
        method("two", set_state(("x", string("s")))),
    )
    assert _fields(_state(cls)) == {"x": ("number", True)}


def test_state_destructuring_and_access():
    cls = component(
        "A",
        method("render", destructure(["open"], this("state")), ExpressionStatement(this("state", "loading"))),
    )
    assert _fields(_state(cls)) == {"loading": ("any", True), "open": ("any", True)}


def test_state_shorthand_key_resolves_identifier():
    literal = ObjectLiteralExpression([ShorthandPropertyAssignment(ident("items"))])
    cls = component("A", method("load", ExpressionStatement(CallExpression(this("setState"), [literal]))))
    assert _fields(_state(cls)) == {"items": ("any", True)}


def test_state_ignores_mutation_without_literal():
    cls = component("A", method("load", ExpressionStatement(CallExpression(this("setState"), [ident("next")]))))
    assert _state(cls) == []


def test_state_of_plain_class_is_empty():
    cls = plain_class("A", ctor(assign(this("state"), obj(("foo", num(1))))))
    assert _state(cls) == []


def test_state_slot_detection_is_structural():
    # other.state is not this.state
    other = assign(PropertyAccessExpression(ident("other"), "state"), obj(("foo", num(1))))
    cls = component("A", method("m", other))
    assert _state(cls) == []


# ── Props ──


def test_props_destructuring_two_names():
    cls = component("A", method("render", destructure(["title", "size"], this("props"))))
    assert _fields(_props(cls)) == {"size": ("any", True), "title": ("any", True)}


def test_props_direct_access_deduplicated():
    cls = component(
        "A",
        method("render", ExpressionStatement(this("props", "title"))),
        method("other", ExpressionStatement(this("props", "title"))),
    )
    assert [f.name for f in _props(cls)] == ["title"]


def test_props_of_plain_class_is_empty():
    cls = plain_class("A", method("render", destructure(["title"], this("props"))))
    assert _props(cls) == []


# ── Instance fields ──


def test_instance_fields_from_constructor():
    cls = plain_class("Point", ctor(assign(this("name"), string("")), assign(this("count"), num(1))))
    assert _fields(_instance(cls)) == {"count": ("number", False), "name": ("string", False)}
    assert [f.name for f in _instance(cls)] == ["count", "name"]


def test_instance_fields_skip_declared_members():
    cls = plain_class(
        "Point",
        PropertyDeclaration("count"),
        ctor(assign(this("name"), string("")), assign(this("count"), num(1))),
    )
    assert [f.name for f in _instance(cls)] == ["name"]


def test_instance_fields_skip_methods():
    cls = plain_class("A", method("helper"), method("run", ExpressionStatement(CallExpression(this("helper")))))
    assert _instance(cls) == []


def test_instance_index_target_is_any():
    target = ElementAccessExpression(this("items"), num(0))
    cls = plain_class("A", method("m", ExpressionStatement(BinaryExpression(target, "=", num(5)))))
    assert _fields(_instance(cls)) == {"items": ("any", False)}


def test_instance_assignment_beats_earlier_access():
    cls = plain_class(
        "A",
        method("read", ExpressionStatement(this("total"))),
        method("write", assign(this("total"), num(0))),
    )
    assert _fields(_instance(cls)) == {"total": ("number", False)}


def test_instance_compound_assignment():
    cls = plain_class("A", method("m", assign(this("label"), string("x"), "+=")))
    assert _fields(_instance(cls)) == {"label": ("string", False)}


def test_instance_access_only_field():
    cls = plain_class("A", method("m", ExpressionStatement(this("cache"))))
    assert _fields(_instance(cls)) == {"cache": ("any", False)}


def test_instance_component_reserved_names():
    cls = component(
        "A",
        ctor(assign(this("state"), obj(("a", num(1)))), assign(this("State"), num(2))),
        method("m", set_state(("b", num(1))), ExpressionStatement(this("props", "c"))),
        method("tick", assign(this("timer"), CallExpression(ident("setTimeout"), [ident("f"), num(10)]))),
    )
    assert _fields(_instance(cls)) == {"timer": ("number", False)}


def test_instance_reserved_names_only_on_components():
    cls = plain_class("A", ctor(assign(this("state"), num(1))))
    assert _fields(_instance(cls)) == {"state": ("number", False)}


def test_instance_nested_member_uses_leading_name():
    cls = plain_class("A", method("m", assign(this("config", "debug"), num(1))))
    assert [f.name for f in _instance(cls)] == ["config"]
