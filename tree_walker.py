"""
tree_walker.py
Listener-style traversal of lark parse trees.

Lark only ships visitors and transformers; the ASM builder needs paired enter/exit
callbacks per rule, fired in strict pre-order / post-order.
"""
from lark import Token, Tree


class ParseTreeListener:
    """Base listener. Every hook is a no-op."""

    def enter_every_rule(self, tree: Tree) -> None:
        pass

    def exit_every_rule(self, tree: Tree) -> None:
        pass

    def visit_terminal(self, token: Token) -> None:
        pass


class ParseTreeWalker:
    """
    Walks a lark Tree calling enter_every_rule before a rule's children and
    exit_every_rule after them. Iterative, so deep trees do not hit the recursion limit.
    """

    def walk(self, listener: ParseTreeListener, tree: Tree) -> None:
        # (node, exiting) pairs; children are pushed reversed to keep source order
        stack = [(tree, False)]
        while stack:
            node, exiting = stack.pop()
            if node is None:
                # unmatched [optional] placeholder
                continue
            if not isinstance(node, Tree):
                listener.visit_terminal(node)
                continue
            if exiting:
                listener.exit_every_rule(node)
                continue
            listener.enter_every_rule(node)
            stack.append((node, True))
            for child in reversed(node.children):
                stack.append((child, False))
