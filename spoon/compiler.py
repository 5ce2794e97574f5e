"""Compiler — spoon AST → target source text emission."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable

from .compile_types import CompilerConfig
from .context import EmissionContext
from .nodes import Fixity, Node, NodeKind
from . import constants

logger = logging.getLogger(__name__)

Handler = Callable[[Node, "Node | None", str], str]


class SelfReferenceError(ValueError):
    """A self reference was compiled outside of a nested class."""


def program_name(path: str) -> str:
    """Derive the emitted class name from a source path (``my_file`` → ``MyFile``)."""
    stem = Path(path).stem
    return "".join(part.capitalize() for part in stem.split("_"))


def normalize_identifier(text: str) -> str:
    if text.startswith(constants.QUOTE_CHARS):
        return text
    return text.replace("-", "_")


def literal_text(value: Any) -> str:
    """Render a literal child verbatim in target syntax."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return normalize_identifier(str(value))


def _is_flagged(child: Any, flag: str) -> bool:
    return isinstance(child, Node) and bool(child.option(flag))


def _is_operation(node: Node | None) -> bool:
    return node is not None and node.kind == NodeKind.OPERATION


class Compiler:
    """Walks a spoon AST once and emits the target program text.

    Every node kind maps to one handler in ``_DISPATCH``. Handlers compile
    their children through :meth:`compile`, passing themselves as the
    parent and the indentation their children should use.
    """

    def __init__(self, config: CompilerConfig = CompilerConfig()):
        self.config = config
        self.context = EmissionContext(program_name=program_name(config.source_path))
        self._DISPATCH: dict[NodeKind, Handler] = {
            NodeKind.ROOT: self._compile_root,
            NodeKind.BLOCK: self._compile_block,
            NodeKind.CLOSURE: self._compile_closure,
            NodeKind.IF: self._compile_if,
            NodeKind.FOR: self._compile_for,
            NodeKind.WHILE: self._compile_while,
            NodeKind.ASSIGN: self._compile_assign,
            NodeKind.OPERATION: self._compile_operation,
            NodeKind.CALL: self._compile_call,
            NodeKind.NEW: self._compile_new,
            NodeKind.RETURN: self._compile_return,
            NodeKind.IMPORT: self._compile_import,
            NodeKind.PARAM: self._compile_param,
            NodeKind.VALUE: self._compile_value,
            NodeKind.TABLE: self._compile_table,
        }
        missing = [kind.value for kind in NodeKind if kind not in self._DISPATCH]
        if missing:
            raise ValueError(f"No handler registered for node kinds: {missing}")

    # ── dispatcher ───────────────────────────────────────────────

    def compile(self, node: Node, parent: Node | None = None, indent: str = "") -> str:
        handler = self._DISPATCH[node.kind]
        logger.log(
            logging.INFO if self.config.verbose else logging.DEBUG,
            "Compiling %s under %s",
            node.kind.value,
            parent.kind.value if parent else "<none>",
        )
        return handler(node, parent, indent)

    def _compile_child(self, child: Any, parent: Node, indent: str) -> str:
        if isinstance(child, Node):
            return self.compile(child, parent, indent)
        return literal_text(child)

    def _compile_list(self, children: list[Any], parent: Node, indent: str) -> str:
        return constants.ARG_SEPARATOR.join(
            self._compile_child(child, parent, indent) for child in children
        )

    # ── program & blocks ─────────────────────────────────────────

    def _compile_root(self, node: Node, parent: Node | None, indent: str) -> str:
        ctx = self.context
        unit = self.config.indent_unit
        body_indent = unit * 2

        ctx.scope.enter_level()
        ctx.scope.register(ctx.program_name)
        ctx.enter_class(ctx.program_name)
        ctx.class_scope.enter_level()
        ctx.instance_scope.enter_level()

        imports: list[str] = []
        body: list[str] = []
        for child in node.children:
            text = self._compile_child(child, node, body_indent)
            if isinstance(child, Node) and child.kind == NodeKind.IMPORT:
                imports.append(text + constants.STATEMENT_TERMINATOR)
            else:
                body.append(body_indent + text + constants.STATEMENT_TERMINATOR)

        static_vars = "".join(
            f"{unit}{constants.STATIC_VAR_KEYWORD} {name};\n"
            for name in ctx.class_scope.names()
        )
        instance_vars = "".join(
            f"{unit}{constants.VAR_KEYWORD} {name};\n"
            for name in ctx.instance_scope.names()
        )
        logger.debug(
            "Hoisted %d static and %d instance variables into %s",
            len(ctx.class_scope.names()),
            len(ctx.instance_scope.names()),
            ctx.program_name,
        )

        ctx.scope.exit_level()
        ctx.class_scope.exit_level()
        ctx.instance_scope.exit_level()
        ctx.exit_class()

        return (
            "".join(imports)
            + f"class {ctx.program_name} {{\n"
            + static_vars
            + instance_vars
            + f"{unit}{constants.ENTRY_POINT_SIGNATURE} {{\n"
            + "".join(body)
            + f"{unit}}}\n"
            + "}"
        )

    def _compile_block(self, node: Node, parent: Node | None, indent: str) -> str:
        inner = indent + self.config.indent_unit
        lines = "".join(
            inner + self._compile_child(child, node, inner) + constants.STATEMENT_TERMINATOR
            for child in node.children
        )
        return "{\n" + lines + indent + "}"

    # ── assignment ───────────────────────────────────────────────

    def _compile_assign(self, node: Node, parent: Node | None, indent: str) -> str:
        left, right = node.children[0], node.children[1]

        if _is_flagged(left, constants.OPT_IS_ARRAY):
            return self._compile_array_destructure(node, left, right, indent)
        if _is_flagged(left, constants.OPT_IS_HASH):
            return self._compile_hash_destructure(node, left, right, indent)

        target = self._declare_target(left, node, indent)
        text = f"{target} = {self._compile_child(right, node, indent)}"
        if _is_operation(parent):
            return f"({text})"
        return text

    def _compile_array_destructure(
        self, node: Node, left: Node, right: Any, indent: str
    ) -> str:
        rhs = self._compile_child(right, node, indent)
        temp = self.context.fresh_temp()
        statements = [f"{constants.VAR_KEYWORD} {temp} = {rhs}"]
        for index, element in enumerate(left.children):
            target = self._declare_target(element, node, indent)
            statements.append(f"{indent}{target} = {temp}[{index}]")
        return constants.STATEMENT_TERMINATOR.join(statements)

    def _compile_hash_destructure(
        self, node: Node, left: Node, right: Any, indent: str
    ) -> str:
        rhs = self._compile_child(right, node, indent)
        temp = self.context.fresh_temp()
        statements = [f"{constants.VAR_KEYWORD} {temp} = {rhs}"]
        for entry in left.children:
            # (marker, alias, field)
            alias_node, field_node = entry.children[1], entry.children[2]
            target = self._declare_target(alias_node, node, indent)
            field = self._compile_child(field_node, node, indent)
            statements.append(f"{indent}{target} = {temp}.{field}")
        return constants.STATEMENT_TERMINATOR.join(statements)

    def _declare_target(self, target: Any, assign: Node, indent: str) -> str:
        """Emit an assignment target, registering it in the matching scope.

        Plain names go to the lexical scope and get a ``var`` keyword the
        first time they become visible. Self targets are hoisted as static
        class variables; this targets as instance variables, or as static
        ones when there is no enclosing class.
        """
        ctx = self.context
        is_self = _is_flagged(target, constants.OPT_IS_SELF)
        is_this = _is_flagged(target, constants.OPT_IS_THIS)

        if not (is_self or is_this):
            name = self._compile_child(target, assign, indent)
            if ctx.scope.register(name):
                return f"{constants.VAR_KEYWORD} {name}"
            return name

        if is_self and not ctx.in_class:
            raise SelfReferenceError(constants.SELF_OUTSIDE_CLASS)

        content = self.compile(target, assign, indent)
        name = self._compile_child(target.children[0], target, indent)
        if is_self or not ctx.in_class:
            ctx.class_scope.register(name)
        else:
            ctx.instance_scope.register(name)
        return content

    # ── expressions ──────────────────────────────────────────────

    def _compile_operation(self, node: Node, parent: Node | None, indent: str) -> str:
        operator = str(node.children[0])
        operands = node.children[1:]
        fixity = Fixity(node.option(constants.OPT_OPERATION))

        if fixity == Fixity.INFIX:
            lhs = self._compile_child(operands[0], node, indent)
            rhs = self._compile_child(operands[1], node, indent)
            text = f"{lhs} {operator} {rhs}"
        elif fixity == Fixity.PREFIX:
            text = operator + self._compile_child(operands[0], node, indent)
        else:
            text = self._compile_child(operands[0], node, indent) + operator

        if _is_operation(parent):
            return f"({text})"
        return text

    def _compile_value(self, node: Node, parent: Node | None, indent: str) -> str:
        parts: list[str] = []
        for child in node.children:
            if isinstance(child, Node):
                parts.append(self._member_prefix(node) + self.compile(child, node, indent))
            else:
                parts.append(literal_text(child))
        return constants.CONCAT_OPERATOR.join(parts)

    def _member_prefix(self, node: Node) -> str:
        ctx = self.context
        if node.option(constants.OPT_IS_SELF):
            if not ctx.in_class:
                raise SelfReferenceError(constants.SELF_OUTSIDE_CLASS)
            return ctx.current_class + constants.MEMBER_SEPARATOR
        if node.option(constants.OPT_IS_THIS):
            if ctx.in_class:
                return constants.THIS_PREFIX
            return ctx.current_class + constants.MEMBER_SEPARATOR
        return ""

    def _compile_param(self, node: Node, parent: Node | None, indent: str) -> str:
        name = self._compile_child(node.children[0], node, indent)
        if len(node.children) > 1:
            return f"{name} = {self._compile_child(node.children[1], node, indent)}"
        return name

    def _compile_table(self, node: Node, parent: Node | None, indent: str) -> str:
        items = self._compile_list(node.children, node, indent)
        if node.option(constants.OPT_IS_ARRAY):
            return f"[{items}]"
        return f"{{{items}}}"

    def _compile_new(self, node: Node, parent: Node | None, indent: str) -> str:
        return "new " + self._compile_call(node, parent, indent)

    def _compile_call(self, node: Node, parent: Node | None, indent: str) -> str:
        callee = self._compile_child(node.children[0], node, indent)
        return f"{callee}({self._compile_list(node.children[1:], node, indent)})"

    def _compile_import(self, node: Node, parent: Node | None, indent: str) -> str:
        path = ".".join(self._compile_child(c, node, indent) for c in node.children)
        return f"import {path}"

    # ── functions & control flow ─────────────────────────────────

    def _compile_closure(self, node: Node, parent: Node | None, indent: str) -> str:
        ctx = self.context
        *params, body = node.children

        ctx.scope.enter_level()
        param_texts: list[str] = []
        for param in params:
            ctx.scope.register(self._compile_child(param.children[0], param, indent))
            param_texts.append(self.compile(param, node, indent))
        body_text = self._compile_child(body, node, indent)
        ctx.scope.exit_level()

        return f"function ({constants.ARG_SEPARATOR.join(param_texts)}) return {body_text}"

    def _compile_if(self, node: Node, parent: Node | None, indent: str) -> str:
        condition = self._compile_child(node.children[0], node, indent)
        text = f"if ({condition}) {self._compile_child(node.children[1], node, indent)}"
        if len(node.children) > 2:
            text += f" else {self._compile_child(node.children[2], node, indent)}"
        return text

    def _compile_for(self, node: Node, parent: Node | None, indent: str) -> str:
        clause = self._compile_child(node.children[0], node, indent)
        return f"for ({clause}) {self._compile_child(node.children[1], node, indent)}"

    def _compile_while(self, node: Node, parent: Node | None, indent: str) -> str:
        condition = self._compile_child(node.children[0], node, indent)
        return f"while ({condition}) {self._compile_child(node.children[1], node, indent)}"

    def _compile_return(self, node: Node, parent: Node | None, indent: str) -> str:
        values = [self._compile_child(c, node, indent) for c in node.children]
        if not values:
            return "return"
        if len(values) > 1:
            return f"return [{constants.ARG_SEPARATOR.join(values)}]"
        return f"return {values[0]}"
