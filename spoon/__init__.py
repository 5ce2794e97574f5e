"""spoon code generator package."""

from .api import (  # noqa: F401
    compile_json,
    compile_tree,
    load_ast,
    program_name,
)
from .compiler import Compiler, SelfReferenceError  # noqa: F401
from .nodes import Fixity, Node, NodeKind  # noqa: F401
