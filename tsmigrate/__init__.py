"""tsmigrate - infers props, state and instance fields of untyped component classes."""

from .errors import MalformedUsageExpression, MigrateError, TypeResolutionFailure, UnsupportedHeritageShape
from .options import DEFAULT_OPTIONS, MigrateOptions
from .pipeline import ALL_TRANSFORMS, BatchResult, migrate, migrate_batch
from .printer import print_node
from .resolver import LiteralResolver, TypeDescriptor, TypeResolver

__all__ = [
    "ALL_TRANSFORMS",
    "BatchResult",
    "DEFAULT_OPTIONS",
    "LiteralResolver",
    "MalformedUsageExpression",
    "MigrateError",
    "MigrateOptions",
    "TypeDescriptor",
    "TypeResolutionFailure",
    "TypeResolver",
    "UnsupportedHeritageShape",
    "migrate",
    "migrate_batch",
    "print_node",
]
