"""Static passes over the AST.

None of these evaluate expressions; they only inspect tree structure.
Walks use an explicit stack so long operator chains do not exhaust the
Python stack.
"""

from __future__ import annotations

from typing import Callable, TypeVar

from plang.core.ast import Identifier, Let, Node

A = TypeVar("A")


def traverse(node: Node, acc: A, visit: Callable[[Node, A], A]) -> A:
    """Depth-first fold over the tree.

    Children are folded first, left before right, then ``visit`` is applied
    to the node itself.
    """
    stack: list[tuple[Node, bool]] = [(node, False)]
    while stack:
        current, expanded = stack.pop()
        if expanded:
            acc = visit(current, acc)
            continue
        stack.append((current, True))
        stack.extend((child, False) for child in reversed(list(current.children())))
    return acc


def collect_let_before_use(node: Node, seen: dict[str, bool]) -> int:
    """Record in ``seen`` every name bound by a ``Let`` in the tree.

    Returns the number of ``Let`` nodes visited. The mutation of ``seen`` is
    the real result; the count is informational.
    """

    def visit(current: Node, count: int) -> int:
        if current.is_let_binding():
            seen[current.bound_name()] = True
            return count + 1
        return count

    return traverse(node, 0, visit)


def find_use_before_let(node: Node) -> list[Identifier]:
    """Find identifiers referenced before any ``let`` of that name.

    Walks in execution order: a ``Let`` value is checked before its name
    becomes bound, and statements are visited first to last.
    """
    bound: set[str] = set()
    found: list[Identifier] = []
    # A str entry marks the point where a let's name becomes bound
    stack: list[Node | str] = [node]

    while stack:
        current = stack.pop()
        match current:
            case str():
                bound.add(current)
            case Let(name, value):
                stack.append(name)
                stack.append(value)
            case Identifier(name):
                if name not in bound:
                    found.append(current)
            case _:
                stack.extend(reversed(list(current.children())))

    return found
