"""AST Design — the tree contract produced by the external parser."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict


class NodeKind(str, Enum):
    ROOT = "root"
    BLOCK = "block"
    CLOSURE = "closure"
    IF = "if"
    FOR = "for"
    WHILE = "while"
    ASSIGN = "assign"
    OPERATION = "op"
    CALL = "call"
    NEW = "new"
    RETURN = "return"
    IMPORT = "import"
    PARAM = "param"
    VALUE = "value"
    TABLE = "table"


class Fixity(str, Enum):
    """Placement of an operator relative to its operands."""

    INFIX = "infix"
    PREFIX = "prefix"
    SUFFIX = "suffix"


class Node(BaseModel):
    """A parsed AST node: kind tag, ordered children and option flags.

    Children are either nested nodes or literal values (text, numbers,
    booleans). Nodes are frozen; the compiler only reads them.
    """

    model_config = ConfigDict(frozen=True)

    kind: NodeKind
    children: list[Node | bool | int | float | str] = []
    options: dict[str, Any] = {}

    def option(self, key: str) -> Any:
        return self.options.get(key)

    def __str__(self) -> str:
        flags = " ".join(f"{k}={v}" for k, v in self.options.items())
        inner = ", ".join(str(c) for c in self.children)
        head = f"{self.kind.value} {flags}".rstrip()
        return f"({head}: {inner})"


Node.model_rebuild()
