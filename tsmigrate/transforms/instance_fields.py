"""Instance field declarations for classes.

Before:
    class Counter {
        constructor() {
            this.name = "";
            this.count = 1;
        }
    }

After:
    class Counter {
        count: number;
        name: string;
        constructor() { ... }
    }
"""

from __future__ import annotations

from dataclasses import replace

from ..analysis import walk
from ..analysis.usage import classify_class, extract_instance_fields
from ..ast import ClassDeclaration, ClassMember, Node, PropertyDeclaration, SourceFile
from ..options import DEFAULT_OPTIONS, MigrateOptions
from ..resolver import TypeResolver


def declare_class_fields(
    cls: ClassDeclaration,
    resolver: TypeResolver,
    options: MigrateOptions = DEFAULT_OPTIONS,
) -> ClassDeclaration:
    """Copy of cls with inferred fields declared ahead of its members."""
    context = classify_class(cls, options)
    fields = extract_instance_fields(cls, context, resolver, options)
    if not fields:
        return cls
    declarations: list[ClassMember] = [PropertyDeclaration(f.name, f.type) for f in fields]
    return replace(cls, members=declarations + list(cls.members))


def declare_instance_fields(
    source: SourceFile,
    resolver: TypeResolver,
    options: MigrateOptions = DEFAULT_OPTIONS,
) -> SourceFile:
    """Declare inferred instance fields on every class reachable in source."""

    def visit(node: Node) -> Node:
        if isinstance(node, ClassDeclaration):
            return declare_class_fields(node, resolver, options)
        return node

    return walk.rebuild(source, visit)
