"""Migration errors."""

from __future__ import annotations

from .ast import Pos


class MigrateError(Exception):
    """Error that aborts migration of one source file."""

    def __init__(self, message: str, pos: Pos | None = None):
        self.message: str = message
        self.pos: Pos | None = pos
        super().__init__(message)

    def __str__(self) -> str:
        if self.pos is not None and self.pos.line > 0:
            return f"{self.pos.line}:{self.pos.col}: {self.message}"
        return self.message


class MalformedUsageExpression(MigrateError):
    """A usage-site text cannot be reduced to a leading field name."""

    def __init__(self, text: str, pos: Pos | None = None):
        self.text: str = text
        super().__init__("fail to analyze property name: " + text, pos)


class UnsupportedHeritageShape(MigrateError):
    """Class heritage is not a single clause with a type to parameterize.

    Recoverable: the props/state pass leaves such classes unchanged.
    """

    def __init__(self, class_name: str, reason: str, pos: Pos | None = None):
        self.class_name: str = class_name
        super().__init__(f"class '{class_name}': {reason}", pos)


class TypeResolutionFailure(MigrateError):
    """The type-resolution capability could not type a node."""
