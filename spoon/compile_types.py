"""Compilation data types (pure data, no business logic)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from . import constants


class ClassState(Enum):
    """Whether emission currently happens inside a nested class body."""

    TOP_LEVEL = "top_level"
    IN_CLASS = "in_class"


@dataclass(frozen=True)
class CompilerConfig:
    """Groups code-generation configuration."""

    source_path: str = constants.DEFAULT_SOURCE_PATH
    indent_unit: str = constants.INDENT_UNIT
    verbose: bool = False
