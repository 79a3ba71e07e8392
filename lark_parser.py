import os
import threading
from typing import Dict, Optional

from lark import Lark, Tree
from lark.exceptions import LarkError

from asm_errors import SourceParseError, UnsupportedLanguageError
from asm_model import ModelKind
from grammars import cpp_grammar, java_grammar


LANGUAGES = {
    java_grammar.LANGUAGE: java_grammar,
    cpp_grammar.LANGUAGE: cpp_grammar,
}

LANGUAGE_ALIASES = {
    "c++": "cpp",
    "cxx": "cpp",
}

# Lark parser instances are built once per thread, so concurrent parses never share
# parser state.
_local = threading.local()


def normalize_language(language: str) -> str:
    key = language.strip().lower()
    key = LANGUAGE_ALIASES.get(key, key)
    if key not in LANGUAGES:
        raise UnsupportedLanguageError(
            f"Unsupported language '{language}' (choose from {', '.join(sorted(LANGUAGES))})")
    return key


def language_for_path(path: str) -> str:
    ext = os.path.splitext(path)[1].lower()
    for name, module in LANGUAGES.items():
        if ext in module.FILE_EXTENSIONS:
            return name
    raise UnsupportedLanguageError(f"Cannot infer the language of '{path}' from its extension")


def rule_kinds_for(language: str) -> Dict[str, ModelKind]:
    return LANGUAGES[normalize_language(language)].RULE_KINDS


def get_parser(language: str) -> Lark:
    language = normalize_language(language)
    parsers = getattr(_local, "parsers", None)
    if parsers is None:
        parsers = _local.parsers = {}
    if language not in parsers:
        parsers[language] = Lark(
            LANGUAGES[language].grammar,
            start='start',
            parser='earley',
            lexer='basic',
            propagate_positions=True,
        )
    return parsers[language]


def parse_source_text(text: str, language: str, path: Optional[str] = None) -> Tree:
    """
    Parse source text with the grammar for language and return the concrete parse tree.

    Raises:
        SourceParseError: the grammar rejected the text; carries path (or '<string>').
        UnsupportedLanguageError: no grammar is registered for language.
    """
    parser = get_parser(language)
    try:
        return parser.parse(text)
    except LarkError as e:
        # first line only; lark appends the expected-terminal listing
        detail = str(e).strip().splitlines()
        raise SourceParseError(path or "<string>", detail[0] if detail else type(e).__name__) from e
