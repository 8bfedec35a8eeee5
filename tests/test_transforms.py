"""Tests for the rewrite passes and the pipeline."""

from tsmigrate.ast import (
    Block,
    CallExpression,
    ClassDeclaration,
    ExpressionStatement,
    FunctionDeclaration,
    HeritageClause,
    InterfaceDeclaration,
    ObjectLiteralExpression,
    PropertyAssignment,
    PropertyDeclaration,
    SourceFile,
    TypeAliasDeclaration,
    VariableDeclaration,
    VariableDeclarationList,
    VariableStatement,
)
from tsmigrate.errors import MigrateError, TypeResolutionFailure
from tsmigrate.options import MigrateOptions
from tsmigrate.pipeline import ALL_TRANSFORMS, migrate, migrate_batch
from tsmigrate.printer import print_node
from tsmigrate.resolver import LiteralResolver, TypeDescriptor
from tsmigrate.transforms import (
    declare_instance_fields,
    make_props_and_state,
    remove_prop_types,
)

from trees import (
    assign,
    component,
    ctor,
    destructure,
    dotted,
    extends,
    ident,
    method,
    num,
    obj,
    plain_class,
    prop_type,
    set_state,
    source,
    static_prop_types,
    string,
    this,
)

RESOLVER = LiteralResolver()


def _find(tree, kind, name=None):
    for stmt in tree.statements:
        if isinstance(stmt, kind) and (name is None or stmt.name == name):
            return stmt
    raise ValueError(f"no {kind.__name__} {name}")


def _members(decl):
    """name -> (printed type, optional) of an interface or type alias."""
    members = decl.members if isinstance(decl, InterfaceDeclaration) else decl.type.members
    return [(m.name, print_node(m.type), m.optional) for m in members]


def _heritage(cls):
    return print_node(ClassDeclaration(cls.name, cls.heritage_clauses)).splitlines()[0]


# ── Props and state ──


def test_state_from_initializer_and_mutation():
    cls = component(
        "Counter",
        ctor(assign(this("state"), obj(("foo", num(1)), ("bar", string("s"))))),
        method("bump", set_state(("baz", num(2)))),
    )
    result = make_props_and_state(source(cls), RESOLVER)
    state = _find(result, TypeAliasDeclaration)
    assert state.name == "CounterState"
    assert _members(state) == [
        ("bar", "string", True),
        ("baz", "number", True),
        ("foo", "number", True),
    ]
    assert _heritage(_find(result, ClassDeclaration)) == (
        "class Counter extends React.Component<{}, CounterState> {"
    )


def test_props_from_destructuring():
    cls = component("Card", method("render", destructure(["title", "size"], this("props"))))
    result = make_props_and_state(source(cls), RESOLVER)
    props = _find(result, InterfaceDeclaration)
    assert _members(props) == [("size", "any", True), ("title", "any", True)]
    assert _heritage(_find(result, ClassDeclaration)) == (
        "class Card extends React.Component<ICardProps, {}> {"
    )


def test_declarations_inserted_immediately_before_class():
    first = ExpressionStatement(ident("first"))
    cls = component(
        "Card",
        method("render", ExpressionStatement(this("props", "title")), set_state(("open", num(1)))),
    )
    last = ExpressionStatement(ident("last"))
    result = make_props_and_state(source(first, cls, last), RESOLVER)
    kinds = [type(s).__name__ for s in result.statements]
    assert kinds == [
        "ExpressionStatement",
        "InterfaceDeclaration",
        "TypeAliasDeclaration",
        "ClassDeclaration",
        "ExpressionStatement",
    ]
    assert result.statements[0] is first
    assert result.statements[4] is last


def test_no_usage_gives_empty_type_arguments():
    result = make_props_and_state(source(component("Empty", method("render"))), RESOLVER)
    assert len(result.statements) == 1
    assert _heritage(result.statements[0]) == "class Empty extends React.Component<{}, {}> {"


def test_two_heritage_clauses_unchanged():
    cls = ClassDeclaration(
        "Dual",
        [extends("Component"), HeritageClause("implements", [])],
        [method("render", ExpressionStatement(this("props", "title")))],
    )
    tree = source(cls)
    result = make_props_and_state(tree, RESOLVER)
    assert result.statements == [cls]
    assert result.statements[0] is cls


def test_non_component_untouched():
    cls = plain_class("Plain", method("m", ExpressionStatement(this("props", "title"))))
    result = make_props_and_state(source(cls), RESOLVER)
    assert result.statements[0] is cls


def test_component_inside_function_not_visited():
    inner = component("Inner", method("render", ExpressionStatement(this("props", "x"))))
    fn = FunctionDeclaration("make", [], Block([inner]))
    result = make_props_and_state(source(fn), RESOLVER)
    assert result.statements == [fn]
    assert result.statements[0] is fn


def test_anonymous_component_untouched():
    cls = ClassDeclaration(None, [extends("Component")], [method("render", ExpressionStatement(this("props", "x")))])
    result = make_props_and_state(source(cls), RESOLVER)
    assert result.statements == [cls]


def test_conflicting_mutations_keep_first_type():
    cls = component(
        "A",
        method("one", set_state(("x", num(1)))),
        method("two", set_state(("x", string("s")))),
    )
    result = make_props_and_state(source(cls), RESOLVER)
    assert _members(_find(result, TypeAliasDeclaration)) == [("x", "number", True)]


def test_prop_and_state_share_a_name():
    cls = component(
        "A",
        method("render", ExpressionStatement(this("props", "value")), set_state(("value", num(1)))),
    )
    result = make_props_and_state(source(cls), RESOLVER)
    assert _members(_find(result, InterfaceDeclaration)) == [("value", "any", True)]
    assert _members(_find(result, TypeAliasDeclaration)) == [("value", "number", True)]


def test_prop_types_hint_required_and_wins():
    cls = component(
        "A",
        static_prop_types(("title", prop_type("string.isRequired"))),
        method("render", ExpressionStatement(this("props", "title")), ExpressionStatement(this("props", "size"))),
    )
    result = make_props_and_state(source(cls), RESOLVER)
    assert _members(_find(result, InterfaceDeclaration)) == [
        ("size", "any", True),
        ("title", "string", False),
    ]


def test_assigned_prop_types_become_props():
    cls = component("Foo", method("render"))
    hint = assign(dotted("Foo.propTypes"), obj(("title", prop_type("string.isRequired"))))
    result = make_props_and_state(source(cls, hint), RESOLVER)
    assert _members(_find(result, InterfaceDeclaration)) == [("title", "string", False)]
    assert _heritage(_find(result, ClassDeclaration)) == (
        "class Foo extends React.Component<IFooProps, {}> {"
    )
    assert result.statements[-1] is hint


def test_assigned_prop_types_for_other_class_ignored():
    cls = component("Foo", method("render"))
    hint = assign(dotted("Bar.propTypes"), obj(("title", prop_type("string"))))
    result = make_props_and_state(source(cls, hint), RESOLVER)
    assert [type(s).__name__ for s in result.statements] == ["ClassDeclaration", "ExpressionStatement"]


def test_static_prop_types_win_over_assigned():
    cls = component("Foo", static_prop_types(("size", prop_type("number.isRequired"))))
    hint = assign(dotted("Foo.propTypes"), obj(("size", prop_type("string")), ("title", prop_type("string"))))
    result = make_props_and_state(source(cls, hint), RESOLVER)
    assert _members(_find(result, InterfaceDeclaration)) == [
        ("size", "number", False),
        ("title", "string", True),
    ]


def test_input_tree_not_mutated():
    cls = component("A", method("m", set_state(("x", num(1)))))
    tree = source(cls)
    make_props_and_state(tree, RESOLVER)
    assert tree.statements == [cls]
    assert cls.heritage_clauses[0].types[0].type_arguments == []


def test_custom_base_and_slots():
    options = MigrateOptions(component_bases=("Widget",), state_mutator="update")
    cls = component("A", method("m", ExpressionStatement(CallExpression(this("update"), [obj(("x", num(1)))]))), base="Widget")
    result = make_props_and_state(source(cls), RESOLVER, options)
    assert _members(_find(result, TypeAliasDeclaration)) == [("x", "number", True)]


class _CannedResolver:
    """Resolves every node to a fixed descriptor."""

    def __init__(self, descriptor):
        self.descriptor = descriptor

    def resolve_type(self, node):
        return self.descriptor

    def type_to_node(self, descriptor):
        return LiteralResolver().type_to_node(descriptor)


def test_stub_resolver_drives_state_types():
    cls = component("A", method("m", set_state(("child", ident("c")))))
    resolver = _CannedResolver(TypeDescriptor("ReactNode", symbol="ReactNode"))
    result = make_props_and_state(source(cls), resolver)
    assert _members(_find(result, TypeAliasDeclaration)) == [("child", "React.ReactNode", True)]


# ── Instance fields ──


def test_plain_class_constructor_fields():
    existing = method("render")
    cls = plain_class("Point", ctor(assign(this("name"), string("")), assign(this("count"), num(1))), existing)
    result = declare_instance_fields(source(cls), RESOLVER)
    new_cls = result.statements[0]
    fields = [m for m in new_cls.members if isinstance(m, PropertyDeclaration)]
    assert [(f.name, print_node(f.type)) for f in fields] == [("count", "number"), ("name", "string")]
    assert new_cls.members[:2] == fields
    assert new_cls.members[2:] == cls.members
    assert new_cls.members[3] is existing


def test_instance_fields_no_duplicate_of_declared_member():
    cls = plain_class("Point", PropertyDeclaration("count"), ctor(assign(this("count"), num(1))))
    result = declare_instance_fields(source(cls), RESOLVER)
    assert result.statements[0] is cls


def test_instance_fields_reach_class_expressions():
    inner = plain_class(None, ctor(assign(this("n"), num(1))))
    decl = VariableDeclaration(ident("A"), initializer=inner)
    tree = source(VariableStatement(VariableDeclarationList([decl])))
    result = declare_instance_fields(tree, RESOLVER)
    new_inner = result.statements[0].declaration_list.declarations[0].initializer
    assert [m.name for m in new_inner.members if isinstance(m, PropertyDeclaration)] == ["n"]


# ── propTypes removal ──


def test_remove_static_prop_types():
    hint = static_prop_types(("title", prop_type("string")))
    render = method("render")
    cls = component("A", hint, render)
    result = remove_prop_types(source(cls), RESOLVER)
    assert result.statements[0].members == [render]


def test_remove_assigned_prop_types():
    cls = component("A")
    stray = assign(dotted("A.propTypes"), obj(("title", prop_type("string"))))
    result = remove_prop_types(source(cls, stray), RESOLVER)
    assert result.statements == [cls]


def test_remove_prop_types_leaves_plain_classes():
    cls = plain_class("A", static_prop_types(("title", prop_type("string"))))
    tree = source(cls)
    assert remove_prop_types(tree, RESOLVER) is tree


def test_stage_independence():
    cls = component(
        "A",
        static_prop_types(("title", prop_type("string"))),
        method("render", set_state(("open", num(1)))),
    )
    migrated = make_props_and_state(source(cls), RESOLVER)
    cleaned = remove_prop_types(migrated, RESOLVER)
    assert _find(cleaned, InterfaceDeclaration) is _find(migrated, InterfaceDeclaration)
    assert _find(cleaned, TypeAliasDeclaration) is _find(migrated, TypeAliasDeclaration)
    new_cls = _find(cleaned, ClassDeclaration)
    assert _heritage(new_cls) == "class A extends React.Component<IAProps, AState> {"
    assert [type(m).__name__ for m in new_cls.members] == ["MethodDeclaration"]


# ── Pipeline ──


def test_migrate_runs_all_passes():
    cls = component(
        "Clock",
        static_prop_types(("zone", prop_type("string"))),
        method(
            "componentDidMount",
            assign(this("timer"), CallExpression(ident("setInterval"), [ident("tick"), num(1000)])),
            set_state(("now", num(0))),
        ),
    )
    result = migrate(source(cls))
    assert print_node(result) == (
        "interface IClockProps extends React.HTMLAttributes<Element> {\n"
        "  zone?: string;\n"
        "}\n"
        "type ClockState = {\n"
        "  now?: number;\n"
        "};\n"
        "class Clock extends React.Component<IClockProps, ClockState> {\n"
        "  timer: number;\n"
        "  componentDidMount() {\n"
        "    this.timer = setInterval(tick, 1000);\n"
        "    this.setState({ now: 0 });\n"
        "  }\n"
        "}\n"
    )


def test_migrate_keeps_assigned_prop_types_as_props():
    cls = component("Foo", method("render", ExpressionStatement(this("props", "size"))))
    hint = assign(dotted("Foo.propTypes"), obj(("title", prop_type("string.isRequired"))))
    result = migrate(source(cls, hint))
    assert [type(s).__name__ for s in result.statements] == ["InterfaceDeclaration", "ClassDeclaration"]
    assert _members(result.statements[0]) == [("size", "any", True), ("title", "string", False)]
    assert _heritage(result.statements[1]) == "class Foo extends React.Component<IFooProps, {}> {"


def test_migrate_declares_dollar_prefixed_field():
    cls = plain_class("A", ctor(assign(this("$el"), string(""))))
    result = migrate(source(cls))
    fields = [m for m in result.statements[0].members if isinstance(m, PropertyDeclaration)]
    assert [(f.name, print_node(f.type)) for f in fields] == [("$el", "string")]


def test_migrate_quotes_non_identifier_state_keys():
    state = ObjectLiteralExpression([PropertyAssignment(string("data-id"), num(1))])
    cls = component("C", ctor(assign(this("state"), state)))
    result = migrate(source(cls))
    assert print_node(_find(result, TypeAliasDeclaration)) == 'type CState = {\n  "data-id"?: number;\n};'


def test_pass_order():
    assert ALL_TRANSFORMS == (make_props_and_state, remove_prop_types, declare_instance_fields)


def test_emit_helpers_preserved():
    tree = SourceFile([component("A", method("m", set_state(("x", num(1)))))], emit_helpers=["__extends"])
    result = migrate(tree)
    assert result.emit_helpers == ["__extends"]
    for transform in ALL_TRANSFORMS:
        assert transform(tree, RESOLVER, MigrateOptions()).emit_helpers == ["__extends"]


def test_malformed_usage_aborts_file():
    bad = component("Bad", method("m", assign(this("[x]"), num(1))))
    try:
        migrate(source(bad))
    except MigrateError as e:
        assert "fail to analyze property name" in str(e)
    else:
        raise AssertionError("expected MigrateError")


def test_batch_continues_after_failure():
    bad = component("Bad", method("m", assign(this("[x]"), num(1))))
    good = plain_class("Good", ctor(assign(this("n"), num(1))))
    result = migrate_batch([("bad.json", source(bad)), ("good.json", source(good))])
    assert not result.ok()
    assert [path for path, _ in result.failures] == ["bad.json"]
    assert "fail to analyze property name" in result.failures[0][1]
    assert list(result.migrated) == ["good.json"]


def test_batch_resolver_factory_per_file():
    seen = []

    def factory(tree):
        seen.append(tree.file_name)
        return LiteralResolver()

    trees = [("a", SourceFile([], file_name="a.tsx")), ("b", SourceFile([], file_name="b.tsx"))]
    result = migrate_batch(trees, resolver_factory=factory)
    assert result.ok()
    assert seen == ["a.tsx", "b.tsx"]


def test_batch_records_resolver_factory_failure():
    def factory(tree):
        if tree.file_name == "a.tsx":
            raise TypeResolutionFailure("no program for a.tsx")
        return LiteralResolver()

    trees = [("a", SourceFile([], file_name="a.tsx")), ("b", SourceFile([], file_name="b.tsx"))]
    result = migrate_batch(trees, resolver_factory=factory)
    assert result.failures == [("a", "no program for a.tsx")]
    assert list(result.migrated) == ["b"]
