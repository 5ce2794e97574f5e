"""Shared AST builders for the code-generation test suite."""

from __future__ import annotations

from spoon.compiler import Compiler
from spoon.nodes import Node, NodeKind


def node(kind: NodeKind, *children, **options) -> Node:
    return Node(kind=kind, children=list(children), options=options)


def value(*children, **options) -> Node:
    return node(NodeKind.VALUE, *children, **options)


def name(identifier: str, **options) -> Node:
    """A value wrapping a nested identifier, so member prefixes apply."""
    return value(value(identifier), **options)


def op(operator: str, *operands, fixity: str = "infix") -> Node:
    return node(NodeKind.OPERATION, operator, *operands, operation=fixity)


def assign(left, right) -> Node:
    return node(NodeKind.ASSIGN, left, right)


def call(callee, *args) -> Node:
    return node(NodeKind.CALL, callee, *args)


def block(*statements) -> Node:
    return node(NodeKind.BLOCK, *statements)


def root(*children) -> Node:
    return node(NodeKind.ROOT, *children)


def enter_program(compiler: Compiler) -> Compiler:
    """Put *compiler* in the state the root handler sets up for its body."""
    ctx = compiler.context
    ctx.scope.enter_level()
    ctx.scope.register(ctx.program_name)
    ctx.enter_class(ctx.program_name)
    ctx.class_scope.enter_level()
    ctx.instance_scope.enter_level()
    return compiler
