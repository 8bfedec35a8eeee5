"""Conversion between syntax nodes and JSON-compatible dicts.

Each node becomes a dict keyed by its dataclass fields plus "_type", the
variant class name. Positions serialize the same way (_type "Pos").
"""

from __future__ import annotations

from dataclasses import fields, is_dataclass

from . import ast
from .errors import MigrateError

NODE_TYPES: dict[str, type] = {
    name: obj
    for name, obj in vars(ast).items()
    if isinstance(obj, type) and is_dataclass(obj) and obj.__module__ == ast.__name__
}


def to_dict(obj: object) -> object:
    """Recursively convert a node (or list of nodes) to plain data."""
    if obj is None or isinstance(obj, (bool, int, float, str)):
        return obj
    if isinstance(obj, (list, tuple)):
        return [to_dict(x) for x in obj]
    if is_dataclass(obj) and type(obj).__name__ in NODE_TYPES:
        d: dict[str, object] = {"_type": type(obj).__name__}
        for f in fields(obj):
            d[f.name] = to_dict(getattr(obj, f.name))
        return d
    raise TypeError(f"cannot serialize {type(obj).__name__}")


def from_dict(data: object) -> object:
    """Inverse of to_dict. Raises MigrateError on malformed input."""
    if data is None or isinstance(data, (bool, int, float, str)):
        return data
    if isinstance(data, list):
        return [from_dict(x) for x in data]
    if not isinstance(data, dict):
        raise MigrateError(f"unexpected value of type {type(data).__name__}")
    type_name = data.get("_type")
    if not isinstance(type_name, str):
        raise MigrateError("node without _type")
    cls = NODE_TYPES.get(type_name)
    if cls is None or cls in (ast.Node, ast.TypeNode, ast.Expression, ast.Statement, ast.ClassMember):
        raise MigrateError(f"unknown node type '{type_name}'")
    known = {f.name for f in fields(cls)}
    kwargs: dict[str, object] = {}
    for key, value in data.items():
        if key == "_type":
            continue
        if key not in known:
            raise MigrateError(f"{type_name}: unknown field '{key}'")
        kwargs[key] = from_dict(value)
    try:
        return cls(**kwargs)
    except TypeError as e:
        raise MigrateError(f"{type_name}: {e}") from e


def source_file_from_dict(data: object) -> ast.SourceFile:
    """Decode a whole tree, which must be a SourceFile."""
    node = from_dict(data)
    if not isinstance(node, ast.SourceFile):
        raise MigrateError("top-level node is not a SourceFile")
    return node
