"""
JSON output for ASM documents.
Writes the document produced by asm_serializer in the layout the visualization layer reads.
"""
import json
import os
from typing import Any, Dict, List, Optional


def generate_asm_json(document: Dict[str, Any], indent=2) -> str:
    return json.dumps(document, indent=indent, ensure_ascii=False)


def output_path_for(source_path: str, out_dir: str, base_dir: Optional[str] = None) -> str:
    """
    out_dir/<source file name>.json, e.g. src/Main.java -> out/Main.java.json.
    With base_dir the source's directory below base_dir is kept:
    a/Foo.java, base_dir='.' -> out/a/Foo.java.json
    """
    if base_dir is None:
        relative = os.path.basename(source_path)
    else:
        relative = os.path.relpath(os.path.abspath(source_path), os.path.abspath(base_dir))
    return os.path.join(out_dir, relative + ".json")


def common_source_dir(source_paths: List[str]) -> str:
    """Deepest directory containing every source path."""
    return os.path.commonpath([os.path.dirname(os.path.abspath(p)) for p in source_paths])


def write_asm_json_file(document: Dict[str, Any], out_path, indent=2):
    out_dir = os.path.dirname(out_path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    with open(out_path, "w", encoding="utf-8") as f:
        f.write(generate_asm_json(document, indent=indent))
        f.write("\n")
