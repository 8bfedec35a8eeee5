"""Rewrite passes. Each takes (source, resolver, options) and returns a new source."""

from .instance_fields import declare_class_fields, declare_instance_fields
from .props_and_state import make_props_and_state
from .remove_prop_types import remove_prop_types

__all__ = [
    "declare_class_fields",
    "declare_instance_fields",
    "make_props_and_state",
    "remove_prop_types",
]
