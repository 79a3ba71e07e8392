"""
common_grammar.py
Lark rules shared by the language grammars: balanced "token soup" for the parts of a
source file that carry no declarations (expressions, statements, initializers), plus
literals, punctuation, comments and whitespace.

The grammars run on lark's basic lexer, so every character sequence lexes to exactly one
terminal. Keywords are plain string terminals which lark carves out of NAME; each language
grammar lists its keywords in a `_keyword` rule so they can appear inside soup.

Group rules keep their bracket tokens so a declared type can be rebuilt from its tokens.
Punctuation is referenced by terminal name inside soup so it survives inlining into `!` rules.
"""

SOUP_GRAMMAR = r"""
    !paren_group: "(" _group_item* ")"
    !bracket_group: "[" _group_item* "]"
    !brace_group: "{" _group_item* "}"
    !angle_group: "<" (_init_atom | COMMA)* ">"
    _group_item: _token | paren_group | bracket_group | brace_group | ";" | COMMA

    _token: NAME | NUMBER | STRING | CHAR_LIT | OP | _punct | _keyword
    _punct: _punct_no_angle | LT | GT
    _punct_no_angle: STAR | AMP | EQ | TILDE | AT | DOT | COLON | DCOLON | QMARK | ELLIPSIS
    _init_atom: _token | paren_group | bracket_group | brace_group | angle_group

    _stmt_atom: NAME | _non_name_atom
    _non_name_atom: NUMBER | STRING | CHAR_LIT | OP | _punct | _keyword
                  | paren_group | bracket_group | brace_group | COMMA
    // Two leading identifiers can only start a declaration, so a statement body never
    // begins with NAME NAME.
    _stmt_body: _non_name_atom _stmt_atom*
              | NAME _non_name_atom _stmt_atom*
              | NAME

    NAME: /(?:[^\W\d]|\$)[\w$]*/
    NUMBER: /(?:\d\w*(?:\.\w*)?|\.\d\w*)(?:[eEpP][+-]\w+)?/
    STRING: /\"\"\"[\s\S]*?\"\"\"|"(?:\\.|[^"\\\n])*"/
    CHAR_LIT: /'(?:\\.|[^'\\\n])*'/
    OP: /[^\s\w$(){}\[\];,"'#<>*&=~@.:?]/

    LT: "<"
    GT: ">"
    STAR: "*"
    AMP: "&"
    EQ: "="
    TILDE: "~"
    AT: "@"
    DOT: "."
    COLON: ":"
    DCOLON: "::"
    QMARK: "?"
    ELLIPSIS: "..."
    COMMA: ","

    LINE_COMMENT: /\/\/[^\n]*/
    BLOCK_COMMENT: /\/\*[\s\S]*?\*\//

    %import common.WS
    %ignore WS
    %ignore LINE_COMMENT
    %ignore BLOCK_COMMENT
"""
