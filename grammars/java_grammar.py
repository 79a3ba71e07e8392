"""
java_grammar.py
Declaration-level Lark grammar for Java source files.

Packages, imports, type declarations, members, parameters and local variables are parsed
structurally; method bodies are otherwise balanced token soup. A package declaration
opens a scope holding the rest of the compilation unit.

`record` and `sealed` are contextual keywords and are still accepted as identifiers.
"""
from asm_model import ModelKind
from grammars.common_grammar import SOUP_GRAMMAR

LANGUAGE = "java"
FILE_EXTENSIONS = (".java",)

JAVA_RULES = r"""
    start: compilation_unit

    compilation_unit: packaged_unit | _unit_item*
    packaged_unit: annotation* PACKAGE decl_name ";" _unit_item*
    _unit_item: import_decl | _type_decl | ";"
    import_decl: IMPORT STATIC? import_name ";"
    !import_name: _ident ("." _ident)* ("." "*")?

    _type_decl: class_decl | interface_decl | enum_decl | record_decl | annotation_type_decl
    class_decl.2: modifiers CLASS type_name _class_header* class_body
    interface_decl.2: modifiers INTERFACE type_name _header_item* class_body
    annotation_type_decl.2: modifiers "@" INTERFACE type_name class_body
    enum_decl.2: modifiers ENUM type_name _header_item* enum_body
    record_decl.3: modifiers RECORD type_name _header_item* "(" (param ("," param)*)? ")" _header_item* class_body
    type_name: _ident -> decl_name
    _header_item: NAME | _keyword | NUMBER | OP | _punct | COMMA
    _class_header: _header_item | paren_group

    class_body: "{" _member* "}"
    _member: field_decl
           | method_decl
           | constructor_decl
           | compact_constructor_decl
           | _type_decl
           | initializer_block
           | ";"
    field_decl.2: modifiers type_ref _declarators ";"
    method_decl.2: modifiers type_params? type_ref decl_name formal_params dims? throws_clause? (block | _init_atom* ";")
    constructor_decl.2: modifiers type_params? decl_name formal_params throws_clause? block
    compact_constructor_decl: modifiers decl_name block
    initializer_block: STATIC? block
    throws_clause: THROWS type_ref ("," type_ref)*

    enum_body: "{" (enum_constant ("," enum_constant)*)? ","? (";" _member*)? "}"
    enum_constant: annotation* _ident paren_group? class_body?

    formal_params: "(" (param ("," param)*)? ")"
    param.2: modifiers type_ref varargs? declarator
    !varargs: "..."

    _declarators: declarator ("," declarator)*
    declarator: decl_name dims? ("=" _init_atom+)?

    modifiers: (annotation | _modifier)*
    annotation: "@" _ident ("." _ident)* paren_group?
    _modifier: PUBLIC | PROTECTED | PRIVATE | STATIC | ABSTRACT | FINAL | NATIVE | SYNCHRONIZED
             | TRANSIENT | VOLATILE | STRICTFP | DEFAULT | SEALED | NON_SEALED

    !decl_name: _ident ("." _ident)*
    !type_ref: _ident type_args? ("." _ident type_args?)* dims?
    !type_args: "<" (type_arg ("," type_arg)*)? ">"
    !type_arg: type_ref | "?" ((EXTENDS | SUPER) type_ref ("&" type_ref)*)?
    !type_params: "<" type_param ("," type_param)* ">"
    !type_param: _ident (EXTENDS type_ref ("&" type_ref)*)?
    !dims: ("[" "]")+
    _ident: NAME | RECORD | SEALED

    block: "{" _block_item* "}"
    _block_item: local_var_decl | _type_decl | block | statement | ";"
    local_var_decl.2: modifiers type_ref _declarators ";"
    statement: _stmt_body ";" | _stmt_body block

    _keyword: ABSTRACT | ASSERT | BREAK | CASE | CATCH | CLASS | CONST | CONTINUE | DEFAULT | DO
            | ELSE | ENUM | EXTENDS | FINAL | FINALLY | FOR | GOTO | IF | IMPLEMENTS | IMPORT
            | INSTANCEOF | INTERFACE | NATIVE | NEW | PACKAGE | PRIVATE | PROTECTED | PUBLIC
            | RETURN | STATIC | STRICTFP | SUPER | SWITCH | SYNCHRONIZED | THROW | THROWS
            | TRANSIENT | TRY | VOLATILE | WHILE | YIELD | RECORD | SEALED | NON_SEALED

    ABSTRACT: "abstract"
    ASSERT: "assert"
    BREAK: "break"
    CASE: "case"
    CATCH: "catch"
    CLASS: "class"
    CONST: "const"
    CONTINUE: "continue"
    DEFAULT: "default"
    DO: "do"
    ELSE: "else"
    ENUM: "enum"
    EXTENDS: "extends"
    FINAL: "final"
    FINALLY: "finally"
    FOR: "for"
    GOTO: "goto"
    IF: "if"
    IMPLEMENTS: "implements"
    IMPORT: "import"
    INSTANCEOF: "instanceof"
    INTERFACE: "interface"
    NATIVE: "native"
    NEW: "new"
    PACKAGE: "package"
    PRIVATE: "private"
    PROTECTED: "protected"
    PUBLIC: "public"
    RETURN: "return"
    STATIC: "static"
    STRICTFP: "strictfp"
    SUPER: "super"
    SWITCH: "switch"
    SYNCHRONIZED: "synchronized"
    THROW: "throw"
    THROWS: "throws"
    TRANSIENT: "transient"
    TRY: "try"
    VOLATILE: "volatile"
    WHILE: "while"
    YIELD: "yield"
    RECORD: "record"
    SEALED: "sealed"
    NON_SEALED.2: "non-sealed"
"""

grammar = JAVA_RULES + SOUP_GRAMMAR

RULE_KINDS = {
    "packaged_unit": ModelKind.NAMESPACE,
    "class_decl": ModelKind.CLASS,
    "interface_decl": ModelKind.CLASS,
    "enum_decl": ModelKind.CLASS,
    "record_decl": ModelKind.CLASS,
    "annotation_type_decl": ModelKind.CLASS,
    "method_decl": ModelKind.FUNCTION,
    "constructor_decl": ModelKind.FUNCTION,
    "compact_constructor_decl": ModelKind.FUNCTION,
    "field_decl": ModelKind.VARIABLE,
    "local_var_decl": ModelKind.VARIABLE,
    "param": ModelKind.VARIABLE,
    "import_decl": ModelKind.IMPORT,
}
