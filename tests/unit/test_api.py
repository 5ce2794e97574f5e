"""Tests for the composable API functions in spoon.api."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from spoon.api import compile_json, compile_tree, load_ast
from spoon.compile_types import CompilerConfig
from spoon.nodes import Node, NodeKind
from tests.unit.conftest import assign, call, node, root, value

PROGRAM = root(
    node(NodeKind.IMPORT, value("pack"), value("Mod")),
    assign(value("x"), value(1)),
    call(value("trace"), value("x")),
)


class TestCompileTree:
    def test_returns_program_text(self):
        text = compile_tree(PROGRAM)
        assert text.startswith("import pack.Mod;\nclass Main {")
        assert "    var x = 1;\n    trace(x);\n" in text

    def test_source_path_names_class(self):
        assert "class GameLoop {" in compile_tree(PROGRAM, "game_loop.spoon")

    def test_each_call_gets_fresh_counter(self):
        tree = root(assign(node(NodeKind.TABLE, value("a"), is_array=True), value("t")))
        assert compile_tree(tree) == compile_tree(tree)


class TestJson:
    def test_compile_json_matches_compile_tree(self):
        assert compile_json(PROGRAM.model_dump_json()) == compile_tree(PROGRAM)

    def test_literal_types_survive_json(self):
        tree = Node.model_validate_json(
            '{"kind": "value", "children": [1, true, "x", {"kind": "value", "children": [2.5]}]}'
        )
        assert tree.children[:3] == [1, True, "x"]
        assert isinstance(tree.children[1], bool)
        assert isinstance(tree.children[3], Node)

    def test_operation_kind_uses_short_tag(self):
        tree = Node.model_validate_json(
            '{"kind": "op", "children": ["+", 1, 2], "options": {"operation": "infix"}}'
        )
        assert tree.kind == NodeKind.OPERATION

    def test_unknown_kind_is_rejected(self):
        with pytest.raises(ValidationError):
            Node.model_validate_json('{"kind": "class", "children": []}')

    def test_load_ast(self, tmp_path):
        path = tmp_path / "prog.json"
        path.write_text(PROGRAM.model_dump_json(), encoding="utf-8")
        assert load_ast(str(path)) == PROGRAM


class TestNode:
    def test_option_lookup(self):
        n = value("x", is_self=True)
        assert n.option("is_self") is True
        assert n.option("is_this") is None

    def test_nodes_are_frozen(self):
        with pytest.raises(ValidationError):
            value("x").kind = NodeKind.BLOCK


class TestCompileTreeConfig:
    def test_config_overrides_source_path(self):
        text = compile_tree(root(), "ignored", config=CompilerConfig(source_path="game_loop"))
        assert text.startswith("class GameLoop {")

    def test_config_indent_unit(self):
        text = compile_tree(root(assign(value("x"), value(1))), config=CompilerConfig(indent_unit="\t"))
        assert "\tstatic public function main() {\n\t\tvar x = 1;\n\t}\n" in text
