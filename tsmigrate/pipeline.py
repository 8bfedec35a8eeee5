"""Pass pipeline over one source file or a batch of them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from .ast import SourceFile
from .errors import MigrateError
from .options import DEFAULT_OPTIONS, MigrateOptions
from .resolver import LiteralResolver, TypeResolver
from .transforms import declare_instance_fields, make_props_and_state, remove_prop_types

Transform = Callable[[SourceFile, TypeResolver, MigrateOptions], SourceFile]

# Props/state first: it reads the propTypes hint that the removal pass drops.
ALL_TRANSFORMS: tuple[Transform, ...] = (
    make_props_and_state,
    remove_prop_types,
    declare_instance_fields,
)


def migrate(
    tree: SourceFile,
    resolver: TypeResolver | None = None,
    options: MigrateOptions | None = None,
    transforms: tuple[Transform, ...] = ALL_TRANSFORMS,
) -> SourceFile:
    """Run transforms in order. Raises MigrateError; the input is never mutated."""
    if resolver is None:
        resolver = LiteralResolver()
    if options is None:
        options = DEFAULT_OPTIONS
    result = tree
    for transform in transforms:
        result = transform(result, resolver, options)
    return result


@dataclass
class BatchResult:
    """Outcome of migrating several files. Paths keep input order."""

    migrated: dict[str, SourceFile] = field(default_factory=dict)
    failures: list[tuple[str, str]] = field(default_factory=list)

    def ok(self) -> bool:
        return len(self.failures) == 0


def migrate_batch(
    units: list[tuple[str, SourceFile]],
    resolver_factory: Callable[[SourceFile], TypeResolver] | None = None,
    options: MigrateOptions | None = None,
) -> BatchResult:
    """Migrate each (path, tree) independently.

    A MigrateError aborts only its own file and is recorded as
    (path, reason); other exceptions propagate.
    """
    result = BatchResult()
    for path, tree in units:
        try:
            resolver = resolver_factory(tree) if resolver_factory is not None else None
            result.migrated[path] = migrate(tree, resolver, options)
        except MigrateError as e:
            result.failures.append((path, str(e)))
    return result
