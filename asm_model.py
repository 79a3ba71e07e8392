"""
asm_model.py
Language-agnostic Abstract Syntax Model (ASM) built from a source file's parse tree.

All nodes live in a ModelArena and are addressed by their index in it. Parent/child links
are indices, so the arena is the only owner of the nodes and the tree cannot contain cycles.
"""
from enum import Enum
from typing import Dict, List, Optional

from asm_errors import TraversalProtocolError
from scope_stack import ScopeStack


class ModelKind(Enum):
    FILE = "file"
    NAMESPACE = "namespace"
    CLASS = "class"
    FUNCTION = "function"
    VARIABLE = "variable"
    IMPORT = "import"

    @property
    def tag(self) -> str:
        """Key used to wrap a child's document, e.g. {"function": {...}}."""
        return self.value

    @property
    def collection(self) -> str:
        """Document field holding children of this kind. The file root is never a child."""
        return COLLECTION_NAMES[self]


COLLECTION_NAMES = {
    ModelKind.NAMESPACE: "namespaces",
    ModelKind.CLASS: "classes",
    ModelKind.FUNCTION: "functions",
    ModelKind.VARIABLE: "variables",
    ModelKind.IMPORT: "imports",
}

# Accepted children per kind, in document field order. Leaves map to an empty tuple.
ACCEPTED_CHILDREN = {
    ModelKind.FILE: (ModelKind.FUNCTION, ModelKind.NAMESPACE, ModelKind.CLASS, ModelKind.VARIABLE, ModelKind.IMPORT),
    ModelKind.NAMESPACE: (ModelKind.FUNCTION, ModelKind.NAMESPACE, ModelKind.CLASS, ModelKind.VARIABLE, ModelKind.IMPORT),
    ModelKind.CLASS: (ModelKind.FUNCTION, ModelKind.CLASS, ModelKind.VARIABLE),
    ModelKind.FUNCTION: (ModelKind.VARIABLE, ModelKind.CLASS),
    ModelKind.VARIABLE: (),
    ModelKind.IMPORT: (),
}


class UnsupportedInsertionError(TraversalProtocolError):
    def __init__(self, parent_kind: ModelKind, child_kind: ModelKind, parent_name: Optional[str] = None):
        self.parent_kind = parent_kind
        self.child_kind = child_kind
        self.parent_name = parent_name
        where = f" '{parent_name}'" if parent_name else ""
        super().__init__(f"{parent_kind.tag}{where} does not accept {child_kind.tag} children")


class AsmNode:
    kind: ModelKind = None

    def __init__(self, name: str, line: Optional[int] = None):
        self.name = name
        self.line = line
        self.parent: Optional[int] = None
        self.children: Dict[ModelKind, List[int]] = {k: [] for k in ACCEPTED_CHILDREN[self.kind]}

    def accepts(self, child_kind: ModelKind) -> bool:
        return child_kind in self.children

    def __repr__(self):
        return f"{type(self).__name__}(name={self.name!r})"


class FileModel(AsmNode):
    kind = ModelKind.FILE

    def __init__(self, file_name: str):
        super().__init__(file_name, line=None)

    @property
    def file_name(self) -> str:
        return self.name


class NamespaceModel(AsmNode):
    kind = ModelKind.NAMESPACE


class ClassModel(AsmNode):
    kind = ModelKind.CLASS


class FunctionModel(AsmNode):
    kind = ModelKind.FUNCTION


class VariableModel(AsmNode):
    kind = ModelKind.VARIABLE

    def __init__(self, name: str, type_name: str, line: Optional[int] = None):
        super().__init__(name, line)
        self.type_name = type_name


class ImportModel(AsmNode):
    kind = ModelKind.IMPORT


MODEL_CLASSES = {
    ModelKind.FILE: FileModel,
    ModelKind.NAMESPACE: NamespaceModel,
    ModelKind.CLASS: ClassModel,
    ModelKind.FUNCTION: FunctionModel,
    ModelKind.VARIABLE: VariableModel,
    ModelKind.IMPORT: ImportModel,
}


class ModelArena:
    """
    Owns every node of one file's model. Index 0 is always the FileModel root.
    """

    ROOT = 0

    def __init__(self, file_name: str):
        self._nodes: List[AsmNode] = [FileModel(file_name)]

    @property
    def root(self) -> FileModel:
        return self._nodes[self.ROOT]

    def __getitem__(self, node_id: int) -> AsmNode:
        return self._nodes[node_id]

    def __len__(self):
        return len(self._nodes)

    def children_of(self, node_id: int, kind: ModelKind) -> List[AsmNode]:
        node = self._nodes[node_id]
        return [self._nodes[i] for i in node.children.get(kind, [])]

    def insert_child(self, parent_id: int, node: AsmNode) -> int:
        """
        Append node to the collection of parent_id that matches the node's kind.

        Returns:
            The node's position inside that collection.

        Raises:
            UnsupportedInsertionError: the parent kind does not accept the node's kind.
        """
        parent = self._nodes[parent_id]
        if not parent.accepts(node.kind):
            raise UnsupportedInsertionError(parent.kind, node.kind, parent.name)
        if node.parent is not None:
            raise TraversalProtocolError(f"{node!r} is already owned by node {node.parent}")
        self._nodes.append(node)
        node.parent = parent_id
        collection = parent.children[node.kind]
        collection.append(len(self._nodes) - 1)
        return len(collection) - 1

    def insert_in_current_scope(self, node: AsmNode, scope_stack: ScopeStack) -> int:
        """
        Insert node under the innermost open scope, or the file root when no scope is open.
        Returns the node's arena index.
        """
        parent_id = scope_stack.peek() if scope_stack.depth() else self.ROOT
        self.insert_child(parent_id, node)
        return len(self._nodes) - 1

    def walk(self, node_id: int = ROOT, depth: int = 0):
        """Yield (node_id, depth) in document order."""
        yield node_id, depth
        node = self._nodes[node_id]
        for kind in ACCEPTED_CHILDREN[node.kind]:
            for child_id in node.children[kind]:
                yield from self.walk(child_id, depth + 1)
