import pytest
from lark import Token, Tree

from asm_errors import TraversalProtocolError
from asm_listener import AsmListener, declared_variables, join_tokens
from asm_model import ModelKind, UnsupportedInsertionError
from asm_serializer import serialize
from grammars import cpp_grammar
from tree_walker import ParseTreeWalker


def name(text):
    return Tree("decl_name", [Token("NAME", text)])


def int_local(var_name):
    return Tree("local_var_decl", [
        Tree("type_ref", [Token("INT", "int")]),
        Tree("declarator", [name(var_name)]),
    ])


def build(tree, rule_kinds=None):
    listener = AsmListener("main.cpp", rule_kinds or cpp_grammar.RULE_KINDS)
    ParseTreeWalker().walk(listener, tree)
    return listener


def test_canonical_namespace_function_variable():
    tree = Tree("translation_unit", [
        Tree("namespace_def", [
            name("N"),
            Tree("function_def", [
                name("f"),
                Tree("fn_params", []),
                Tree("block", [int_local("x")]),
            ]),
        ]),
    ])
    listener = build(tree)
    assert listener.scope_stack.depth() == 0
    arena = listener.finish()
    assert serialize(arena) == {
        "file_name": "main.cpp",
        "namespaces": [{"namespace": {"name": "N", "functions": [{"function": {"name": "f"}}]}}],
    }
    # the local is kept in the arena, under the function
    fn = arena.children_of(1, ModelKind.FUNCTION)[0]
    assert [arena[i].name for i in fn.children[ModelKind.VARIABLE]] == ["x"]


def test_anonymous_namespace_has_empty_name():
    tree = Tree("translation_unit", [Tree("namespace_def", [])])
    assert serialize(build(tree).finish())["namespaces"] == [{"namespace": {"name": ""}}]


def test_one_variable_per_declarator():
    decl = Tree("simple_decl", [
        Tree("type_ref", [Token("UNSIGNED", "unsigned"), Token("INT", "int")]),
        Tree("declarator", [name("a")]),
        Tree("declarator", [Tree("ptr_op", [Token("STAR", "*")]), name("b")]),
        Tree("declarator", [name("c"), Tree("dims", [Token("LSQB", "["), Token("NUMBER", "4"), Token("RSQB", "]")])]),
    ])
    variables = declared_variables(decl)
    assert [(v.name, v.type_name) for v in variables] == [
        ("a", "unsigned int"), ("b", "unsigned int*"), ("c", "unsigned int[4]"),
    ]


def test_varargs_are_part_of_the_type():
    param = Tree("param", [
        Tree("modifiers", []),
        Tree("type_ref", [Token("NAME", "String")]),
        Tree("varargs", [Token("ELLIPSIS", "...")]),
        Tree("declarator", [name("args")]),
    ])
    assert [(v.name, v.type_name) for v in declared_variables(param)] == [("args", "String...")]


def test_imports_are_recorded_under_the_current_scope():
    tree = Tree("translation_unit", [
        Tree("using_directive", [Token("USING", "using"), Token("NAMESPACE", "namespace"),
                                 Tree("import_name", [Token("NAME", "std")])]),
    ])
    assert serialize(build(tree).finish())["imports"] == [{"import": {"name": "std"}}]


def test_import_inside_class_is_an_unsupported_insertion():
    tree = Tree("translation_unit", [
        Tree("class_def", [
            name("C"),
            Tree("class_body", [Tree("using_decl", [Tree("import_name", [Token("NAME", "x")])])]),
        ]),
    ])
    with pytest.raises(UnsupportedInsertionError):
        build(tree)


def test_rule_mapped_to_file_is_a_protocol_fault():
    with pytest.raises(TraversalProtocolError):
        build(Tree("translation_unit", [Tree("weird", [])]), {"weird": ModelKind.FILE})


def test_finish_rejects_unclosed_scopes():
    listener = AsmListener("main.cpp", cpp_grammar.RULE_KINDS)
    listener.enter_every_rule(Tree("namespace_def", [name("N")]))
    with pytest.raises(TraversalProtocolError, match="1 open scope"):
        listener.finish()


def test_unbalanced_exit_underflows():
    listener = AsmListener("main.cpp", cpp_grammar.RULE_KINDS)
    with pytest.raises(TraversalProtocolError):
        listener.exit_every_rule(Tree("function_def", [name("f")]))


def test_unmapped_rules_are_ignored():
    tree = Tree("translation_unit", [Tree("fn_prototype", [name("g")]), Tree("statement", [])])
    assert serialize(build(tree).finish()) == {"file_name": "main.cpp"}


@pytest.mark.parametrize("tokens,expected", [
    (["std", "::", "map", "<", "int", ",", "Foo", ">"], "std::map<int, Foo>"),
    (["const", "std", "::", "string"], "const std::string"),
    (["List", "<", "?", "extends", "Number", ">"], "List<? extends Number>"),
    (["java", ".", "util", ".", "*"], "java.util.*"),
    (["unsigned", "long", "long"], "unsigned long long"),
])
def test_join_tokens(tokens, expected):
    assert join_tokens(tokens) == expected
