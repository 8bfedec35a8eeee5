"""Declared type for an inferred field.

Narrow types seen at a single usage site are widened to their primitive
so the declaration does not over-constrain later code.
"""

from __future__ import annotations

import re

from ..ast import ArrayType, KeywordType, TypeNode, TypeReference
from ..options import DEFAULT_OPTIONS, MigrateOptions
from ..resolver import TypeDescriptor, TypeResolver

_STRING_LITERAL_RE = re.compile(r'"\w*"')


def synthesize_type(
    descriptor: TypeDescriptor,
    resolver: TypeResolver,
    options: MigrateOptions = DEFAULT_OPTIONS,
    index_target: bool = False,
) -> TypeNode:
    """Map a resolved type to a declared type. First matching rule wins."""
    text = descriptor.text
    if index_target:
        return KeywordType("any")
    framework = options.framework_node_types.get(descriptor.symbol or text)
    if framework is not None:
        return TypeReference(framework)
    if text.endswith("undefined[]"):
        return ArrayType(KeywordType("any"))
    if text in ("true", "false"):
        return KeywordType("boolean")
    if text in options.timer_types or descriptor.kind == "number_literal":
        return KeywordType("number")
    if descriptor.kind == "string_literal" or _STRING_LITERAL_RE.search(text):
        return KeywordType("string")
    return resolver.type_to_node(descriptor)
