"""
model_debug.py
Pretty-print and debug dump utilities for ASM models.
"""
import os
import json
from typing import Any, Dict, List

from asm_model import ModelArena, ModelKind


def pretty_print_model(document: Dict[str, Any], file_path: str = None, out_dir: str = "./generated/asm_debug"):
    """
    Pretty-print a serialized document to a file (as JSON) for inspection.
    If file_path is not given, use out_dir/model_debug_dump.json.
    """
    if file_path is None:
        file_path = os.path.join(out_dir, "model_debug_dump.json")
    else:
        file_path = os.path.join(out_dir, file_path)

    os.makedirs(os.path.dirname(file_path), exist_ok=True)
    with open(file_path, "w", encoding="utf-8") as f:
        json.dump(document, f, indent=2)
    print(f"[DEBUG] Model pretty-printed to {file_path}")
    return file_path


def format_model_tree(arena: ModelArena) -> str:
    """
    Indented text view of every node in the arena, including the function locals that the
    serialized document leaves out.
    """
    lines: List[str] = []
    for node_id, depth in arena.walk():
        node = arena[node_id]
        ind = '  ' * depth
        if node.kind == ModelKind.FILE:
            lines.append(f"{ind}File: {node.name} (id={node_id})")
            continue
        label = node.kind.tag.capitalize()
        details = [f"id={node_id}"]
        if node.kind == ModelKind.VARIABLE:
            details.insert(0, f"type='{node.type_name}'")
        if node.line is not None:
            details.append(f"line={node.line}")
        lines.append(f"{ind}{label}: {node.name or '<anonymous>'} ({', '.join(details)})")
    return "\n".join(lines)


def print_model_tree(arena: ModelArena):
    print(format_model_tree(arena))
