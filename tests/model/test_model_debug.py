import json
import os
from asm_model import FunctionModel, ModelArena, NamespaceModel, VariableModel
from model_debug import format_model_tree, pretty_print_model, print_model_tree
from scope_stack import ScopeStack


def _arena():
    arena = ModelArena("main.cpp")
    stack = ScopeStack()
    stack.push(arena.insert_in_current_scope(NamespaceModel("", line=2), stack))
    stack.push(arena.insert_in_current_scope(FunctionModel("f", line=3), stack))
    arena.insert_in_current_scope(VariableModel("x", "int", line=4), stack)
    return arena


def test_tree_view_includes_function_locals():
    assert format_model_tree(_arena()).splitlines() == [
        "File: main.cpp (id=0)",
        "  Namespace: <anonymous> (id=1, line=2)",
        "    Function: f (id=2, line=3)",
        "      Variable: x (type='int', id=3, line=4)",
    ]


def test_print_model_tree(capsys):
    print_model_tree(ModelArena("empty.java"))
    assert capsys.readouterr().out == "File: empty.java (id=0)\n"


def test_pretty_print_model_writes_json(temp_dir, capsys):
    doc = {"file_name": "main.cpp"}
    path = pretty_print_model(doc, "dump.json", out_dir=temp_dir)
    assert path == os.path.join(temp_dir, "dump.json")
    with open(path, "r", encoding="utf-8") as f:
        assert json.load(f) == doc
    assert "[DEBUG] Model pretty-printed to" in capsys.readouterr().out
