"""
JSON Schema generator for ASM documents.
Generates a valid JSON Schema (Draft 7+) describing the document layout produced by
asm_serializer, so downstream consumers can validate what they receive.
"""
from asm_model import ModelKind
from asm_serializer import SERIALIZED_COLLECTIONS

KIND_TITLES = {
    ModelKind.FILE: "File",
    ModelKind.NAMESPACE: "Namespace",
    ModelKind.CLASS: "Class",
    ModelKind.FUNCTION: "Function",
    ModelKind.VARIABLE: "Variable",
    ModelKind.IMPORT: "Import",
}

# Own attributes of each kind's document, all strings
KIND_ATTRIBUTES = {
    ModelKind.FILE: ["file_name"],
    ModelKind.NAMESPACE: ["name"],
    ModelKind.CLASS: ["name"],
    ModelKind.FUNCTION: ["name"],
    ModelKind.VARIABLE: ["name", "type"],
    ModelKind.IMPORT: ["name"],
}


def _ref(kind: ModelKind) -> dict:
    return {"$ref": f"#/definitions/{KIND_TITLES[kind]}"}


def collection_schema(kind: ModelKind) -> dict:
    """A non-empty list of single-key {"<tag>": <doc>} wrappers."""
    return {
        "type": "array",
        "minItems": 1,
        "items": {
            "type": "object",
            "properties": {kind.tag: _ref(kind)},
            "required": [kind.tag],
            "additionalProperties": False,
        },
    }


def kind_schema(kind: ModelKind) -> dict:
    properties = {attr: {"type": "string"} for attr in KIND_ATTRIBUTES[kind]}
    for child_kind in SERIALIZED_COLLECTIONS[kind]:
        properties[child_kind.collection] = collection_schema(child_kind)
    return {
        "type": "object",
        "description": f"{KIND_TITLES[kind]} declaration",
        "properties": properties,
        "required": list(KIND_ATTRIBUTES[kind]),
        "additionalProperties": False,
    }


def generate_asm_json_schema(title="ASM Document", description="JSON schema for one source file's declaration model"):
    schema = {
        "$schema": "http://json-schema.org/draft-07/schema#",
        "title": title,
        "description": description,
        "definitions": {KIND_TITLES[kind]: kind_schema(kind) for kind in ModelKind},
    }
    schema.update(_ref(ModelKind.FILE))
    return schema
