"""
asm_listener.py
Builds the ASM for one file from the enter/exit events of a parse tree walk.

The listener is language independent: a grammar module supplies RULE_KINDS, mapping the
rule names that realize a namespace, class, function, variable or import to a ModelKind.
Grammars follow a small structural contract so names and types can be read off any tree:
  - scope rules carry a `decl_name` child (no child means anonymous),
  - variable rules carry a `type_ref` child (or an inline type definition with its own
    `decl_name`) and one `declarator` child per declared name, each declarator holding a
    `decl_name` and optionally `ptr_op` and `dims` children,
  - import rules carry an `import_name` child.
"""
from typing import Dict, Iterable, List, Optional

from lark import Token, Tree

from asm_errors import TraversalProtocolError
from asm_model import ImportModel, MODEL_CLASSES, ModelArena, ModelKind, VariableModel
from scope_stack import ScopeStack
from tree_walker import ParseTreeListener

SCOPE_KINDS = (ModelKind.NAMESPACE, ModelKind.CLASS, ModelKind.FUNCTION)


def _is_word(text: str) -> bool:
    return bool(text) and (text[0].isalnum() or text[0] in "_$")


def _ends_word(text: str) -> bool:
    return bool(text) and (text[-1].isalnum() or text[-1] in "_$")


def join_tokens(tokens: Iterable[str]) -> str:
    """
    Rebuild source text from tokens: words are separated by one space, punctuation is
    glued to its neighbours, and a comma is followed by a space.
      ['std', '::', 'map', '<', 'int', ',', 'Foo', '>'] -> 'std::map<int, Foo>'
    """
    out = ""
    prev = ""
    for tok in tokens:
        tok = str(tok)
        if out and _is_word(tok) and (_ends_word(prev) or prev in ("?", "*", "&", ",")):
            out += " "
        elif out and prev == "," and not _is_word(tok):
            out += " "
        out += tok
        prev = tok
    return out


def tree_text(node) -> str:
    if node is None:
        return ""
    if isinstance(node, Token):
        return str(node)
    return join_tokens(node.scan_values(lambda v: isinstance(v, Token)))


def _child_trees(tree: Tree, data: str) -> List[Tree]:
    return [c for c in tree.children if isinstance(c, Tree) and c.data == data]


def _first_child_tree(tree: Tree, data: str) -> Optional[Tree]:
    found = _child_trees(tree, data)
    return found[0] if found else None


def _line_of(tree: Tree) -> Optional[int]:
    meta = getattr(tree, "meta", None)
    if meta is None or getattr(meta, "empty", True):
        return None
    return getattr(meta, "line", None)


def declared_name(tree: Tree) -> str:
    return tree_text(_first_child_tree(tree, "decl_name"))


def declared_type(tree: Tree) -> str:
    type_ref = _first_child_tree(tree, "type_ref")
    if type_ref is not None:
        return tree_text(type_ref)
    # inline type definition, e.g. `struct P { ... } p;`
    for child in tree.children:
        if isinstance(child, Tree) and child.data != "declarator":
            return declared_name(child)
    return ""


def declared_variables(tree: Tree) -> List[VariableModel]:
    """One VariableModel per declarator of a variable-declaration rule."""
    base_type = declared_type(tree)
    if _first_child_tree(tree, "varargs") is not None:
        base_type += "..."
    variables = []
    for declarator in _child_trees(tree, "declarator"):
        type_name = base_type
        type_name += "".join(tree_text(p) for p in _child_trees(declarator, "ptr_op"))
        type_name += "".join(tree_text(d) for d in _child_trees(declarator, "dims"))
        name = declared_name(declarator)
        variables.append(VariableModel(name, type_name, line=_line_of(declarator) or _line_of(tree)))
    return variables


class AsmListener(ParseTreeListener):
    """
    Translates rule enter/exit callbacks into model mutations.

    Scope rules: on enter, create the node, insert it under the innermost open scope and
    push its arena index; on exit, pop. Leaf rules (variables, imports) are inserted under
    the innermost open scope without touching the stack.
    """

    def __init__(self, file_name: str, rule_kinds: Dict[str, ModelKind], verbose: bool = False):
        self.arena = ModelArena(file_name)
        self.scope_stack = ScopeStack()
        self.rule_kinds = rule_kinds
        self.verbose = verbose

    def debug_print(self, message: str) -> None:
        if self.verbose:
            print(f"[DEBUG] {message}")

    def enter_every_rule(self, tree: Tree) -> None:
        kind = self.rule_kinds.get(tree.data)
        if kind is None:
            return
        if kind in SCOPE_KINDS:
            node = MODEL_CLASSES[kind](declared_name(tree), line=_line_of(tree))
            node_id = self.arena.insert_in_current_scope(node, self.scope_stack)
            self.scope_stack.push(node_id)
            self.debug_print(f"enter {kind.tag} '{node.name}' (id={node_id}, depth={self.scope_stack.depth()})")
        elif kind == ModelKind.VARIABLE:
            for variable in declared_variables(tree):
                self.arena.insert_in_current_scope(variable, self.scope_stack)
                self.debug_print(f"variable '{variable.name}': {variable.type_name}")
        elif kind == ModelKind.IMPORT:
            node = ImportModel(tree_text(_first_child_tree(tree, "import_name")), line=_line_of(tree))
            self.arena.insert_in_current_scope(node, self.scope_stack)
            self.debug_print(f"import '{node.name}'")
        else:
            raise TraversalProtocolError(f"rule '{tree.data}' is mapped to {kind.tag}, which no rule may create")

    def exit_every_rule(self, tree: Tree) -> None:
        if self.rule_kinds.get(tree.data) in SCOPE_KINDS:
            node_id = self.scope_stack.pop()
            self.debug_print(f"exit {self.arena[node_id].kind.tag} '{self.arena[node_id].name}'")

    def finish(self) -> ModelArena:
        """Check that every scope opened during the walk was closed and return the arena."""
        if self.scope_stack.depth():
            raise TraversalProtocolError(
                f"walk ended with {self.scope_stack.depth()} open scope(s): {self.scope_stack.snapshot()}")
        return self.arena
