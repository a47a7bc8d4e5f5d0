"""Typing-centric domain modules."""

from typedforms.typing.enums import LogicOp, ValidationMode
from typedforms.typing.protocol import BinarySource, Snapshottable

__all__ = [
    "BinarySource",
    "LogicOp",
    "Snapshottable",
    "ValidationMode",
]
