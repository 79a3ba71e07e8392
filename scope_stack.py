"""
scope_stack.py
Stack of open scopes used while walking a parse tree. Each entry is the arena index of
the namespace, class or function currently being filled.
"""
from typing import List

from asm_errors import TraversalProtocolError


class EmptyStackError(TraversalProtocolError):
    pass


class ScopeStack:
    """
    LIFO stack of model identifiers. The content at any instant is the ancestor chain
    from the file root (exclusive) to the innermost open declaration.
    """

    def __init__(self):
        self._items: List[int] = []

    def push(self, identifier: int) -> None:
        self._items.append(identifier)

    def pop(self) -> int:
        if not self._items:
            raise EmptyStackError("pop() called on an empty scope stack")
        return self._items.pop()

    def peek(self) -> int:
        if not self._items:
            raise EmptyStackError("peek() called on an empty scope stack")
        return self._items[-1]

    def depth(self) -> int:
        return len(self._items)

    def snapshot(self) -> List[int]:
        """Copy of the current path, outermost first."""
        return list(self._items)

    def __len__(self):
        return len(self._items)

    def __repr__(self):
        return f"ScopeStack({self._items!r})"
