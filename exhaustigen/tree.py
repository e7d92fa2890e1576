"""NetworkX export of explored choice trees.

Builds a prefix tree from the per-run choice traces recorded by
`exhaustigen.runner.exhaust` (with ``record_paths`` enabled), which is handy
for inspecting how a test body branches.

Example:
    >>> from exhaustigen import EnumerationConfig, exhaust
    >>> from exhaustigen.tree import build_choice_tree, count_runs
    >>>
    >>> result = exhaust(
    ...     lambda g: list(g.gen_elts(2, 1)),
    ...     EnumerationConfig(record_paths=True),
    ... )
    >>> tree = build_choice_tree(result.paths)
    >>> count_runs(tree) == result.runs
    True
"""

from __future__ import annotations

from typing import Iterable, Tuple

import networkx as nx

from exhaustigen.types import ChoiceTrace

#: Tree node identifier: the values chosen from the root down to the node.
Prefix = Tuple[int, ...]

ROOT: Prefix = ()


def build_choice_tree(paths: Iterable[ChoiceTrace]) -> nx.DiGraph:
    """Merge choice traces into a prefix tree.

    Each node is the tuple of values chosen on the way to it; the root is
    ``()``. Every edge carries the chosen ``value`` and the ``bound`` in
    effect at that choice point. Nodes where a run ended carry ``leaf=True``
    and ``runs`` counting how many runs ended there.

    Args:
        paths: Choice traces, one per run.

    Returns:
        A NetworkX DiGraph rooted at ``()``.

    Raises:
        ValueError: If two traces request different bounds after the same
            prefix.
    """
    tree = nx.DiGraph()
    tree.add_node(ROOT, depth=0, leaf=False, runs=0)

    for trace in paths:
        node: Prefix = ROOT
        for value, bound in trace:
            sibling = next(iter(tree.out_edges(node, data="bound")), None)
            if sibling is not None and sibling[2] != bound:
                raise ValueError(
                    f"Inconsistent bound after prefix {list(node)}: "
                    f"{sibling[2]} vs {bound}"
                )

            child = node + (value,)
            if not tree.has_edge(node, child):
                tree.add_node(child, depth=len(child), leaf=False, runs=0)
                tree.add_edge(node, child, value=value, bound=bound)
            node = child

        tree.nodes[node]["leaf"] = True
        tree.nodes[node]["runs"] += 1

    return tree


def count_runs(tree: nx.DiGraph) -> int:
    """Return the total number of runs recorded in ``tree``."""
    return sum(runs for _, runs in tree.nodes(data="runs", default=0))
