"""Composable API functions for the spoon code generator.

Each function corresponds to a CLI workflow but is callable
programmatically without argparse.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .compile_types import CompilerConfig
from .compiler import Compiler, program_name
from .nodes import Node
from . import constants

logger = logging.getLogger(__name__)


def load_ast(path: str) -> Node:
    """Read a JSON-serialized AST produced by the external parser.

    Args:
        path: Location of the JSON document.

    Returns:
        The root node.
    """
    logger.info("Loading AST from %s", path)
    return Node.model_validate_json(Path(path).read_text(encoding="utf-8"))


def compile_tree(
    root: Node,
    source_path: str = constants.DEFAULT_SOURCE_PATH,
    config: CompilerConfig | None = None,
) -> str:
    """Compile an AST into target source text.

    Args:
        root: The program's root node.
        source_path: Source identifier the emitted class name is derived from.
        config: Full compiler configuration; overrides *source_path* when given.

    Returns:
        The complete emitted program.
    """
    config = config or CompilerConfig(source_path=source_path)
    compiler = Compiler(config)
    logger.info(
        "Compiling %s as class %s", config.source_path, compiler.context.program_name
    )
    text = compiler.compile(root)
    logger.info("Emitted %d lines", text.count("\n") + 1)
    return text


def compile_json(text: str, source_path: str = constants.DEFAULT_SOURCE_PATH) -> str:
    """Validate a JSON-serialized AST and compile it.

    Args:
        text: The JSON document.
        source_path: Source identifier the emitted class name is derived from.

    Returns:
        The complete emitted program.
    """
    return compile_tree(Node.model_validate_json(text), source_path)


__all__ = ["compile_json", "compile_tree", "load_ast", "program_name"]
