"""
asm_errors.py
Exception hierarchy shared by the parser front end.

Input errors (SourceInputError) mean the file never produced a parse tree. Traversal
protocol errors mean the grammar's rule set and the model's accepted-children table
disagree; both abort the current file only.
"""


class AsmError(Exception):
    pass


class TraversalProtocolError(AsmError):
    pass


class UnsupportedLanguageError(AsmError):
    pass


class SourceInputError(AsmError):
    def __init__(self, path: str, detail: str):
        self.path = path
        self.detail = detail
        super().__init__(f"{path}: {detail}")


class SourceReadError(SourceInputError):
    pass


class SourceParseError(SourceInputError):
    pass
