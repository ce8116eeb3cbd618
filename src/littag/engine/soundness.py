"""Implication soundness checks.

The engine trusts declared implications: if A implies B, B is never
evaluated when A is. Constraint authors carry the burden of proof. This
module samples values to catch an unsound declaration early (in tests or
at startup in debug mode).
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

import networkx as nx

from littag.engine.registry import REQUIRES, ConstraintRegistry


@dataclass(frozen=True)
class ImplicationViolation:
    """A sample satisfying *source* but not the implied *target*."""

    source: str
    target: str
    value: Any

    def __str__(self) -> str:
        return f"{self.source} -> {self.target} fails for {self.value!r}"


def check_implications(
    registry: ConstraintRegistry,
    samples: Iterable[Any],
) -> list[ImplicationViolation]:
    """Check every declared implication against *samples*.

    A sample outside the source constraint's prerequisites is skipped for
    that implication, since the source predicate is not defined there.
    """
    values = list(samples)
    graph = registry.graph
    violations: list[ImplicationViolation] = []

    for source, target in sorted(registry.implications()):
        guards = _requirements(graph, source)
        src = registry.lookup(source)
        dst = registry.lookup(target)
        for value in values:
            if not all(registry.lookup(g).check(value) for g in guards):
                continue
            if src.check(value) and not dst.check(value):
                violations.append(ImplicationViolation(source, target, value))
    return violations


def _requirements(graph: nx.DiGraph, source: str) -> list[str]:
    """Constraints assumed by *source* (directly or via what it implies), weakest first."""
    reach = {source} | nx.descendants(graph, source)
    required: set[str] = set()
    for node in reach:
        for _u, target, kind in graph.out_edges(node, data="kind"):
            if kind == REQUIRES:
                required.add(target)
                required |= nx.descendants(graph, target)
    order = nx.lexicographical_topological_sort(nx.reverse_view(graph.subgraph(required)))
    return list(order)
