import time

import pytest
from asm_model import ModelKind
from asm_serializer import serialize
from lark_parser import get_parser, parse_source_text
from source_parser_facade import SourceParserFacade


def names(doc, collection, tag):
    return [entry[tag]["name"] for entry in doc.get(collection, [])]


def parse_java(text):
    return SourceParserFacade("java").parse_text(text, "Test.java")


def test_parse_tree_has_structural_rules():
    tree = parse_source_text("class A { int x; void f() {} }", "java")
    text = tree.pretty()
    assert 'class_decl' in text, text
    assert 'field_decl' in text, text
    assert 'method_decl' in text, text


def test_package_opens_a_namespace(src_path):
    doc = SourceParserFacade("java").parse_file(src_path("Greeter.java"))
    assert list(doc) == ["file_name", "namespaces"]
    package = doc["namespaces"][0]["namespace"]
    assert package["name"] == "com.example.app"
    assert names(package, "imports", "import") == ["java.util.List", "java.lang.Math.max"]
    assert names(package, "classes", "class") == ["Greeter"]


def test_class_members(src_path):
    doc = SourceParserFacade("java").parse_file(src_path("Greeter.java"))
    greeter = doc["namespaces"][0]["namespace"]["classes"][0]["class"]
    assert greeter["functions"] == [{"function": {"name": "Greeter"}}, {"function": {"name": "greet"}}]
    assert greeter["variables"] == [
        {"variable": {"name": "greeting", "type": "String"}},
        {"variable": {"name": "count", "type": "int"}},
    ]


def test_interfaces_enums_and_nested_classes(src_path):
    doc = SourceParserFacade("java").parse_file(src_path("Shapes.java"))
    assert names(doc, "imports", "import") == ["java.util.ArrayList"]
    assert names(doc, "classes", "class") == ["Shape", "Square", "Color"]
    shape, square, color = [entry["class"] for entry in doc["classes"]]
    assert names(shape, "functions", "function") == ["area"]
    assert names(square, "functions", "function") == ["Square", "area"]
    assert names(square, "classes", "class") == ["Builder"]
    assert square["variables"] == [{"variable": {"name": "side", "type": "double"}}]
    assert square["classes"][0]["class"]["variables"] == [{"variable": {"name": "size", "type": "int"}}]
    assert names(color, "functions", "function") == ["lower"]


def test_wildcard_import():
    doc = parse_java("import java.util.*;\nclass A {}\n")
    assert names(doc, "imports", "import") == ["java.util.*"]


def test_generic_and_array_field_types():
    doc = parse_java("class A {\n    java.util.Map<String, Integer> counts;\n    int[] values;\n}\n")
    assert doc["classes"][0]["class"]["variables"] == [
        {"variable": {"name": "counts", "type": "java.util.Map<String, Integer>"}},
        {"variable": {"name": "values", "type": "int[]"}},
    ]


def test_several_declarators_in_one_field():
    doc = parse_java("class A { int a, b; }")
    assert names(doc["classes"][0]["class"], "variables", "variable") == ["a", "b"]


def test_locals_and_parameters_stay_out_of_the_document():
    doc = parse_java("class A {\n    void run(int n) {\n        int i = 0;\n        i = i + n;\n    }\n}\n")
    assert doc["classes"][0]["class"]["functions"] == [{"function": {"name": "run"}}]
    assert "variables" not in doc["classes"][0]["class"]


def test_comments_are_ignored():
    doc = parse_java("// header\n/* block\n comment */\nclass A { /* x */ int y; // z\n}\n")
    assert names(doc["classes"][0]["class"], "variables", "variable") == ["y"]


def test_non_ascii_identifiers():
    doc = parse_java("class Größe { int café = 1; }")
    assert doc["classes"] == [
        {"class": {"name": "Größe", "variables": [{"variable": {"name": "café", "type": "int"}}]}}
    ]


def test_contextual_keywords_as_identifiers():
    doc = parse_java("non-sealed class A {\n    String record;\n    int sealed() { return 0; }\n}\n")
    a = doc["classes"][0]["class"]
    assert a["name"] == "A"
    assert a["variables"] == [{"variable": {"name": "record", "type": "String"}}]
    assert names(a, "functions", "function") == ["sealed"]


def test_statement_shapes_in_method_bodies():
    body = (
        "class A {\n"
        "    int run(java.util.List<String> xs, int n) {\n"
        "        outer: for (String x : xs) { if (x == null) continue outer; }\n"
        "        switch (n) { case 1: n++; break; default: n = -n; }\n"
        "        java.util.function.Function<Integer, Integer> f = v -> v >> 1;\n"
        "        xs.forEach(System.out::println);\n"
        "        n;\n"
        "        return n > 0 ? n : 0;\n"
        "    }\n"
        "}\n"
    )
    doc = parse_java(body)
    assert doc["classes"][0]["class"]["functions"] == [{"function": {"name": "run"}}]


def test_local_classes_stay_in_the_arena_but_out_of_the_document():
    arena = SourceParserFacade("java").build_model(
        "class A {\n    void run() {\n        class Local { int v; }\n    }\n}\n", "Test.java")
    class_id = arena.root.children[ModelKind.CLASS][0]
    function_id = arena[class_id].children[ModelKind.FUNCTION][0]
    assert [c.name for c in arena.children_of(function_id, ModelKind.CLASS)] == ["Local"]
    assert serialize(arena)["classes"][0]["class"]["functions"] == [{"function": {"name": "run"}}]


def _java_class_with_methods(count):
    lines = ["package com.example.load;", "", "public class Load {"]
    for i in range(count):
        lines += [
            f"    public int compute{i}(int a, java.util.List<String> names) {{",
            f"        int total = a * {i};",
            "        for (String name : names) {",
            "            total += name.length();",
            "        }",
            "        if (total > 100) { return total - 1; }",
            "        return total;",
            "    }",
        ]
    lines.append("}")
    return "\n".join(lines) + "\n"


def test_parse_time_of_a_few_hundred_lines_is_bounded():
    text = _java_class_with_methods(50)
    assert text.count("\n") > 400
    get_parser("java")
    started = time.perf_counter()
    doc = parse_java(text)
    elapsed = time.perf_counter() - started
    load = doc["namespaces"][0]["namespace"]["classes"][0]["class"]
    assert len(load["functions"]) == 50
    assert elapsed < 5.0, f"parsing {text.count(chr(10))} lines took {elapsed:.2f}s"


if __name__ == "__main__":
    pytest.main([__file__])
