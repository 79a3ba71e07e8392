"""
asm_serializer.py
Converts ASM nodes into the JSON-ready document consumed by the visualization layer.

Document layout (empty collections are omitted, never emitted as []):
    {"file_name": ..., "functions": [{"function": {...}}, ...], "namespaces": [...], ...}
"""
from typing import Any, Dict

from asm_model import ACCEPTED_CHILDREN, AsmNode, ModelArena, ModelKind

# Collections surfaced in each kind's document. Functions keep their locals in the
# arena but their document is only {"name": ...}.
SERIALIZED_COLLECTIONS = {
    ModelKind.FILE: ACCEPTED_CHILDREN[ModelKind.FILE],
    ModelKind.NAMESPACE: ACCEPTED_CHILDREN[ModelKind.NAMESPACE],
    ModelKind.CLASS: ACCEPTED_CHILDREN[ModelKind.CLASS],
    ModelKind.FUNCTION: (),
    ModelKind.VARIABLE: (),
    ModelKind.IMPORT: (),
}


def _file_attributes(node: AsmNode) -> Dict[str, Any]:
    return {"file_name": node.name}


def _named_attributes(node: AsmNode) -> Dict[str, Any]:
    return {"name": node.name}


def _variable_attributes(node: AsmNode) -> Dict[str, Any]:
    return {"name": node.name, "type": node.type_name}


ATTRIBUTE_WRITERS = {
    ModelKind.FILE: _file_attributes,
    ModelKind.NAMESPACE: _named_attributes,
    ModelKind.CLASS: _named_attributes,
    ModelKind.FUNCTION: _named_attributes,
    ModelKind.VARIABLE: _variable_attributes,
    ModelKind.IMPORT: _named_attributes,
}


def serialize(arena: ModelArena, node_id: int = ModelArena.ROOT) -> Dict[str, Any]:
    """
    Serialize the node at node_id and, recursively, its children.
    Pure: the same arena state always yields an equal document.
    """
    node = arena[node_id]
    doc = ATTRIBUTE_WRITERS[node.kind](node)
    for child_kind in SERIALIZED_COLLECTIONS[node.kind]:
        child_ids = node.children[child_kind]
        if not child_ids:
            continue
        doc[child_kind.collection] = [
            {child_kind.tag: serialize(arena, child_id)} for child_id in child_ids
        ]
    return doc
