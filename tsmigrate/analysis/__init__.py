"""Analysis package - walks classes and infers declarations from usage."""

from .compose import PropsBuilder, StateBuilder, compose_props, compose_state
from .synth import synthesize_type
from .usage import (
    ComponentClassContext,
    FieldUsageSite,
    InferredField,
    classify_class,
    extract_instance_fields,
    extract_prop_fields,
    extract_state_fields,
    field_name_from_text,
)
from .walk import children, filter, rebuild, traverse

__all__ = [
    "ComponentClassContext",
    "FieldUsageSite",
    "InferredField",
    "PropsBuilder",
    "StateBuilder",
    "children",
    "classify_class",
    "compose_props",
    "compose_state",
    "extract_instance_fields",
    "extract_prop_fields",
    "extract_state_fields",
    "field_name_from_text",
    "filter",
    "rebuild",
    "synthesize_type",
    "traverse",
]
