# src/report/tree.py — v1
"""Generic tree visitor for hierarchical report documents.

The walker knows nothing about the document object model: callers pass
functions that list a node's children and tell leaves apart. Directories
may nest to any depth, so the walk uses an explicit stack instead of
recursion.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from typing import TypeVar

N = TypeVar("N")


def iter_leaves(
    root: N,
    children: Callable[[N], Iterable[N]],
    is_leaf: Callable[[N], bool],
) -> Iterator[N]:
    """Yield leaf nodes below root lazily, in document order.

    Args:
        root: Top node of the tree. It is never yielded itself.
        children: Returns the direct children of a node.
        is_leaf: True for nodes that should be yielded. Leaves are not
            descended into.

    Yields:
        Every leaf node, depth-first, preserving sibling order.
    """
    stack: list[Iterator[N]] = [iter(children(root))]
    while stack:
        node = next(stack[-1], None)
        if node is None:
            stack.pop()
            continue
        if is_leaf(node):
            yield node
        else:
            stack.append(iter(children(node)))
