"""
cpp_grammar.py
Declaration-level Lark grammar for C++ source and header files.

Namespaces, using-directives, class/struct/union definitions, function definitions,
parameters and variable declarations are parsed structurally. Declarators that follow a
class body (`struct P { ... } p;`) are variables of that class type. Prototypes, forward
declarations, typedefs, enums and everything inside expressions fall back to token soup.
Preprocessor lines are skipped and extern "C" blocks are transparent.
"""
from asm_model import ModelKind
from grammars.common_grammar import SOUP_GRAMMAR

LANGUAGE = "cpp"
FILE_EXTENSIONS = (".cpp", ".cc", ".cxx", ".c++", ".hpp", ".hh", ".hxx", ".h")

CPP_RULES = r"""
    start: translation_unit

    translation_unit: _declaration*
    _declaration: namespace_def
                | using_directive
                | using_decl
                | linkage_spec
                | template_decl
                | class_decl
                | class_object_decl
                | function_def
                | fn_prototype
                | simple_decl
                | other_decl
                | ";"

    namespace_def.3: INLINE? NAMESPACE namespace_name? "{" _declaration* "}"
    !namespace_name: NAME ("::" INLINE? NAME)* -> decl_name
    using_directive.3: USING NAMESPACE import_name ";"
    using_decl.2: USING TYPENAME? import_name ";"
    !import_name: "::"? NAME ("::" NAME)*
    linkage_spec.2: EXTERN STRING ("{" _declaration* "}" | _declaration)
    template_decl.2: TEMPLATE template_args _declaration
    simple_decl.2: _decl_prefix* type_ref _declarators ";"
    other_decl: _stmt_atom+ ";"

    class_decl.3: class_def ";" | TYPEDEF class_def _class_tail* ";"
    class_object_decl.3: _storage* class_def _declarators ";"
    class_def: _class_key bracket_group* (class_name _class_head*)? class_body
    class_name: NAME -> decl_name
    _class_head: NAME | _keyword | NUMBER | OP | _punct | COMMA | paren_group
    _class_tail: _init_atom | COMMA
    class_body: "{" _member* "}"
    _member: access_spec
           | function_def
           | fn_prototype
           | field_decl
           | class_decl
           | class_object_decl
           | member_template
           | other_member
           | ";"
    access_spec: _access ":"
    field_decl.2: _decl_prefix* type_ref _declarators ";"
    member_template.2: TEMPLATE template_args _member
    other_member: _stmt_atom+ ";"

    function_def.3: _decl_prefix* type_ref? ptr_op* function_name fn_params _fn_suffix* block
    fn_prototype.3: _decl_prefix* type_ref? ptr_op* function_name prototype_params _fn_suffix* ";"
    !function_name: (NAME template_args? "::")* (NAME template_args? | "~" NAME | OPERATOR operator_symbol) -> decl_name
    !operator_symbol: (OP | _punct | "(" ")" | "[" "]" | NAME | _keyword)+
    fn_params: "(" _param_list? ")" | paren_group
    prototype_params: "(" _prototype_param_list? ")"
    _param_list: _any_param ("," _any_param)* ("," "...")? | "..."
    _any_param: param | unnamed_param
    _prototype_param_list: _prototype_param ("," _prototype_param)* ("," "...")? | "..."
    _prototype_param: prototype_param | unnamed_param
    prototype_param: type_ref declarator
    param.2: type_ref declarator
    unnamed_param: type_ref ptr_op* dims? ("=" _init_atom+)?
    _fn_suffix: NAME | _keyword | NUMBER | STRING | OP | _punct | COMMA | paren_group | bracket_group | brace_group
    _decl_prefix: _storage | bracket_group

    _declarators: declarator ("," declarator)*
    declarator: ptr_op* variable_name dims? _var_init?
    !variable_name: NAME ("::" NAME)* -> decl_name
    _var_init: "=" _init_atom+ | brace_group | paren_group
    !ptr_op: ("*" | "&") _cv*
    !dims: ("[" _group_item* "]")+

    !type_ref: _cv* _elaborated? (_builtin+ | scoped_type) _cv*
    !scoped_type: "::"? NAME template_args? ("::" TEMPLATE? NAME template_args?)*
    !template_args: "<" _template_item* ">"
    _template_item: NAME | _keyword | NUMBER | STRING | CHAR_LIT | OP | _punct_no_angle
                  | paren_group | bracket_group | COMMA | template_args

    block: "{" _block_item* "}"
    _block_item: local_var_decl | class_decl | class_object_decl | block | statement | ";"
    local_var_decl.2: _decl_prefix* type_ref _declarators ";"
    statement: _stmt_body ";" | _stmt_body block

    _class_key: CLASS | STRUCT | UNION
    _elaborated: CLASS | STRUCT | UNION | ENUM | TYPENAME
    _access: PUBLIC | PROTECTED | PRIVATE
    _cv: CONST | VOLATILE
    _storage: STATIC | EXTERN | INLINE | CONSTEXPR | CONSTEVAL | CONSTINIT | VIRTUAL | EXPLICIT
            | FRIEND | MUTABLE | THREAD_LOCAL | REGISTER
    _builtin: UNSIGNED | SIGNED | SHORT | LONG | INT | CHAR | CHAR8_T | CHAR16_T | CHAR32_T
            | WCHAR_T | DOUBLE | FLOAT | BOOL | VOID | AUTO

    _keyword: _class_key | ENUM | TYPENAME | _access | _cv | _storage | _builtin
            | NAMESPACE | USING | TEMPLATE | TYPEDEF | OPERATOR
            | ALIGNAS | ALIGNOF | ASM | BREAK | CASE | CATCH | CO_AWAIT | CO_RETURN | CO_YIELD
            | CONST_CAST | CONTINUE | DECLTYPE | DEFAULT | DELETE | DO | DYNAMIC_CAST | ELSE
            | EXPORT | FOR | GOTO | IF | NEW | NOEXCEPT | REINTERPRET_CAST | RETURN | SIZEOF
            | STATIC_ASSERT | STATIC_CAST | SWITCH | THROW | TRY | TYPEID | WHILE

    CLASS: "class"
    STRUCT: "struct"
    UNION: "union"
    ENUM: "enum"
    TYPENAME: "typename"
    PUBLIC: "public"
    PROTECTED: "protected"
    PRIVATE: "private"
    CONST: "const"
    VOLATILE: "volatile"
    STATIC: "static"
    EXTERN: "extern"
    INLINE: "inline"
    CONSTEXPR: "constexpr"
    CONSTEVAL: "consteval"
    CONSTINIT: "constinit"
    VIRTUAL: "virtual"
    EXPLICIT: "explicit"
    FRIEND: "friend"
    MUTABLE: "mutable"
    THREAD_LOCAL: "thread_local"
    REGISTER: "register"
    UNSIGNED: "unsigned"
    SIGNED: "signed"
    SHORT: "short"
    LONG: "long"
    INT: "int"
    CHAR: "char"
    CHAR8_T: "char8_t"
    CHAR16_T: "char16_t"
    CHAR32_T: "char32_t"
    WCHAR_T: "wchar_t"
    DOUBLE: "double"
    FLOAT: "float"
    BOOL: "bool"
    VOID: "void"
    AUTO: "auto"
    NAMESPACE: "namespace"
    USING: "using"
    TEMPLATE: "template"
    TYPEDEF: "typedef"
    OPERATOR: "operator"
    ALIGNAS: "alignas"
    ALIGNOF: "alignof"
    ASM: "asm"
    BREAK: "break"
    CASE: "case"
    CATCH: "catch"
    CO_AWAIT: "co_await"
    CO_RETURN: "co_return"
    CO_YIELD: "co_yield"
    CONST_CAST: "const_cast"
    CONTINUE: "continue"
    DECLTYPE: "decltype"
    DEFAULT: "default"
    DELETE: "delete"
    DO: "do"
    DYNAMIC_CAST: "dynamic_cast"
    ELSE: "else"
    EXPORT: "export"
    FOR: "for"
    GOTO: "goto"
    IF: "if"
    NEW: "new"
    NOEXCEPT: "noexcept"
    REINTERPRET_CAST: "reinterpret_cast"
    RETURN: "return"
    SIZEOF: "sizeof"
    STATIC_ASSERT: "static_assert"
    STATIC_CAST: "static_cast"
    SWITCH: "switch"
    THROW: "throw"
    TRY: "try"
    TYPEID: "typeid"
    WHILE: "while"

    PREPROCESSOR: /#(?:\\\r?\n|[^\n])*/
    %ignore PREPROCESSOR
"""

grammar = CPP_RULES + SOUP_GRAMMAR

RULE_KINDS = {
    "namespace_def": ModelKind.NAMESPACE,
    "class_def": ModelKind.CLASS,
    "class_object_decl": ModelKind.VARIABLE,
    "function_def": ModelKind.FUNCTION,
    "simple_decl": ModelKind.VARIABLE,
    "field_decl": ModelKind.VARIABLE,
    "local_var_decl": ModelKind.VARIABLE,
    "param": ModelKind.VARIABLE,
    "using_directive": ModelKind.IMPORT,
    "using_decl": ModelKind.IMPORT,
}
