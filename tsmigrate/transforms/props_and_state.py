"""Props and state declarations for component classes.

Before:
    class MyComponent extends React.Component {
        onClick() { this.setState({ open: true }); }
        render() { return <div title={this.props.title} />; }
    }

After:
    interface IMyComponentProps extends React.HTMLAttributes<Element> {
        title?: any;
    }
    type MyComponentState = {
        open?: boolean;
    };
    class MyComponent extends React.Component<IMyComponentProps, MyComponentState> { ... }
"""

from __future__ import annotations

from dataclasses import replace

from ..analysis.compose import compose_props, compose_state
from ..analysis.hints import assigned_prop_type_hints
from ..analysis.usage import (
    ComponentClassContext,
    classify_class,
    extract_prop_fields,
    extract_state_fields,
)
from ..ast import ClassDeclaration, SourceFile, Statement, TypeDeclaration, TypeLiteral, TypeNode, TypeReference
from ..errors import UnsupportedHeritageShape
from ..options import DEFAULT_OPTIONS, MigrateOptions
from ..resolver import TypeResolver
from ..splice import check_heritage_shape, rewrite_heritage, splice_class


def make_props_and_state(
    source: SourceFile,
    resolver: TypeResolver,
    options: MigrateOptions = DEFAULT_OPTIONS,
) -> SourceFile:
    """Declare props and state of every top-level component class."""
    statements: list[Statement] = list(source.statements)
    for stmt in source.statements:
        if not isinstance(stmt, ClassDeclaration) or not stmt.name:
            continue
        context = classify_class(stmt, options)
        if context.is_component_class:
            statements = _visit_component(stmt, context, statements, resolver, options)
    return replace(source, statements=statements)


def _visit_component(
    cls: ClassDeclaration,
    context: ComponentClassContext,
    statements: list[Statement],
    resolver: TypeResolver,
    options: MigrateOptions,
) -> list[Statement]:
    try:
        check_heritage_shape(cls)
    except UnsupportedHeritageShape:
        return statements
    props_decl = compose_props(
        context.class_name,
        context.existing_declarative_hints + assigned_prop_type_hints(statements, context.class_name, options),
        extract_prop_fields(cls, context, options),
        options,
    )
    state_decl = compose_state(
        context.class_name,
        extract_state_fields(cls, context, resolver, options),
        options,
    )
    props_ref: TypeNode = TypeReference(props_decl.name) if props_decl is not None else TypeLiteral([])
    state_ref: TypeNode = TypeReference(state_decl.name) if state_decl is not None else TypeLiteral([])
    new_cls = rewrite_heritage(cls, [props_ref, state_ref])
    declarations: list[TypeDeclaration] = [d for d in (props_decl, state_decl) if d is not None]
    return splice_class(statements, cls, declarations, new_cls)
