#!/usr/bin/env python3
"""spoon compiler — emits target source from a JSON-serialized AST."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from spoon.api import compile_tree, load_ast
from spoon.compile_types import CompilerConfig
from spoon.compiler import SelfReferenceError


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="spoon code generator")
    parser.add_argument("file",
                        help="JSON-serialized AST to compile")
    parser.add_argument("--name", "-n", default=None,
                        help="Source path the class name is derived from "
                             "(default: the AST file name)")
    parser.add_argument("--output", "-o", default=None,
                        help="Write the emitted program here instead of stdout")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Log every compiled node")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    root = load_ast(args.file)
    config = CompilerConfig(source_path=args.name or args.file, verbose=args.verbose)
    try:
        text = compile_tree(root, config=config)
    except SelfReferenceError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if args.output:
        Path(args.output).write_text(text + "\n", encoding="utf-8")
    else:
        print(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
