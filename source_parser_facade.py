"""
source_parser_facade.py
Entry points that turn source files into ASM documents.

Each call owns its own parse tree, listener, scope stack and model arena, so files can be
processed on separate threads without sharing any state.
"""
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional

from asm_errors import AsmError, SourceReadError, TraversalProtocolError
from asm_listener import AsmListener
from asm_model import ModelArena
from asm_serializer import serialize
from lark_parser import language_for_path, normalize_language, parse_source_text, rule_kinds_for
from tree_walker import ParseTreeWalker


class SourceParserFacade:
    """
    Parses one source file into an ASM document.
    """

    def __init__(self, language: Optional[str] = None, verbose: bool = False):
        """
        Args:
            language: 'java' or 'cpp'. When None the language is inferred per file from
                its extension.
            verbose: Whether to print debug information (default: False)
        """
        self.language = normalize_language(language) if language else None
        self.verbose = verbose
        self.errors: List[str] = []

    def debug_print(self, message: str) -> None:
        if self.verbose:
            print(f"[DEBUG] {message}")

    def log_error(self, error: str) -> None:
        self.errors.append(error)
        if self.verbose:
            print(f"[ERROR] {error}")

    def read_source(self, path: str) -> str:
        """Read the whole file as UTF-8 before any parsing starts."""
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return f.read()
        except UnicodeDecodeError as e:
            raise SourceReadError(path, f"unsupported encoding ({e.reason})") from e
        except OSError as e:
            raise SourceReadError(path, e.strerror or str(e)) from e

    def build_model(self, text: str, file_name: str, language: Optional[str] = None) -> ModelArena:
        """
        Parse text and walk the tree, returning the populated arena.

        Raises:
            SourceParseError: the grammar rejected the text.
            TraversalProtocolError: the walk broke a scope or insertion contract.
        """
        language = language or self.language or language_for_path(file_name)
        self.debug_print(f"Parsing {file_name} as {language}")
        tree = parse_source_text(text, language, path=file_name)
        listener = AsmListener(file_name, rule_kinds_for(language), verbose=self.verbose)
        ParseTreeWalker().walk(listener, tree)
        arena = listener.finish()
        self.debug_print(f"Built {len(arena)} model node(s) for {file_name}")
        return arena

    def parse_text(self, text: str, file_name: str, language: Optional[str] = None) -> Dict[str, Any]:
        return serialize(self.build_model(text, file_name, language))

    def parse_file(self, path: str) -> Dict[str, Any]:
        language = self.language or language_for_path(path)
        return self.parse_text(self.read_source(path), path, language)


def parse_source_file(path: str, language: Optional[str] = None, verbose: bool = False) -> Dict[str, Any]:
    """Parse one file and return its ASM document. Errors propagate to the caller."""
    return SourceParserFacade(language, verbose).parse_file(path)


class ParseReport:
    """
    Outcome of a batch parse: documents for parsed files, error messages and the errors
    themselves for skipped ones.
    """

    def __init__(self, paths: List[str]):
        self.paths = list(paths)
        self.documents: Dict[str, Dict[str, Any]] = {}
        self.skipped: Dict[str, str] = {}
        self.errors: Dict[str, AsmError] = {}

    @property
    def has_contract_fault(self) -> bool:
        """True when a skipped file broke a traversal contract rather than having bad input."""
        return any(isinstance(e, TraversalProtocolError) for e in self.errors.values())

    @property
    def file_count(self) -> int:
        return len(self.paths)

    @property
    def parsed_count(self) -> int:
        return len(self.documents)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)


def parse_source_files(paths: List[str], language: Optional[str] = None, max_workers: Optional[int] = None,
                       verbose: bool = False) -> ParseReport:
    """
    Parse several files. A file that fails to read, parse or build is logged and skipped;
    the remaining files are still processed.

    Args:
        max_workers: When greater than 1, files are parsed on a thread pool. Every file
            gets its own facade, so no state is shared between workers.
    """
    report = ParseReport(paths)
    log = SourceParserFacade(language, verbose)

    def _parse_one(path: str):
        try:
            return path, SourceParserFacade(language, verbose).parse_file(path), None
        except AsmError as e:
            return path, None, e

    if max_workers and max_workers > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            results = list(pool.map(_parse_one, paths))
    else:
        results = [_parse_one(path) for path in paths]

    # results keep input order whichever way they were produced
    for path, document, error in results:
        if error is not None:
            log.log_error(f"Skipping {path}: {error}")
            report.skipped[path] = str(error)
            report.errors[path] = error
        else:
            report.documents[path] = document
    return report
