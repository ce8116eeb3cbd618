"""CompositionResolver — turn a concept into a deduplicated evaluation plan.

Resolution, for a requested set of identifiers:

1. Normalize (sort, dedupe) and look up every identifier.
2. Expand the closure over ``implies`` and ``requires`` edges.
3. Drop every closure member implied by another closure member. In a DAG
   the remaining minimal covering set is unique.
4. Order what remains so prerequisites run first; ties break
   lexicographically.

Plans are memoized twice: by the requested signature (fast path) and by the
closure signature, so ``{Positive, Nonnegative}`` and ``{Positive}`` share
one plan object.
"""

from __future__ import annotations

import logging
import threading
from collections import defaultdict
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any

import networkx as nx

from littag.domain.constraints import Constraint
from littag.domain.errors import ConflictingParameterError, ImplicationCycleError
from littag.domain.identifiers import normalize_signature, parse_identifier
from littag.engine.registry import IMPLIES, ConstraintRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class PlanStep:
    """One check in an evaluation plan.

    Attributes:
        constraint: The constraint to evaluate.
        prerequisites: Earlier checks this predicate assumes hold.
        entails: Constraints dropped from the plan because this one implies them.
    """

    constraint: Constraint
    prerequisites: frozenset[str] = frozenset()
    entails: tuple[Constraint, ...] = ()

    @property
    def identifier(self) -> str:
        return self.constraint.identifier


@dataclass(frozen=True, eq=False)
class EvaluationPlan:
    """Immutable, ordered checks for one concept.

    Compared by identity: equal concepts resolve to the same object.
    """

    signature: tuple[str, ...]
    steps: tuple[PlanStep, ...]
    implied: tuple[str, ...] = ()

    @property
    def identifiers(self) -> tuple[str, ...]:
        """Identifiers checked, in evaluation order."""
        return tuple(step.identifier for step in self.steps)

    @property
    def checks(self) -> tuple[Constraint, ...]:
        return tuple(step.constraint for step in self.steps)

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self) -> Iterator[PlanStep]:
        return iter(self.steps)

    def to_dict(self) -> dict[str, Any]:
        return {
            "signature": list(self.signature),
            "checks": list(self.identifiers),
            "implied": list(self.implied),
            "prerequisites": {
                step.identifier: sorted(step.prerequisites)
                for step in self.steps
                if step.prerequisites
            },
        }


@dataclass(frozen=True)
class CacheInfo:
    hits: int
    misses: int
    size: int


class CompositionResolver:
    """Resolves concepts against a :class:`ConstraintRegistry`.

    The first resolution freezes the registry.
    """

    def __init__(self, registry: ConstraintRegistry) -> None:
        self._registry = registry
        self._by_request: dict[tuple[str, ...], EvaluationPlan] = {}
        self._by_signature: dict[tuple[str, ...], EvaluationPlan] = {}
        self._lock = threading.Lock()
        # Separate from _lock so cache hits never wait on a resolution.
        self._stats_lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    @property
    def registry(self) -> ConstraintRegistry:
        return self._registry

    def resolve(self, identifiers: Iterable[str]) -> EvaluationPlan:
        """Return the (cached) evaluation plan for *identifiers*.

        Raises:
            UnknownConstraintError: an identifier is not registered.
            ImplicationCycleError: the relation graph contains a cycle.
            ConflictingParameterError: two parameters of one family are combined.
        """
        requested = normalize_signature(identifiers)
        plan = self._by_request.get(requested)
        if plan is not None:
            self._count_hit()
            return plan

        with self._lock:
            plan = self._by_request.get(requested)
            if plan is not None:
                self._count_hit()
                return plan
            with self._stats_lock:
                self._misses += 1
            plan = self._resolve_uncached(requested)
            self._by_request[requested] = plan
        return plan

    def cache_info(self) -> CacheInfo:
        with self._stats_lock:
            return CacheInfo(
                hits=self._hits, misses=self._misses, size=len(self._by_signature)
            )

    def _count_hit(self) -> None:
        with self._stats_lock:
            self._hits += 1

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _resolve_uncached(self, requested: tuple[str, ...]) -> EvaluationPlan:
        for ident in requested:
            self._registry.lookup(ident)
        self._registry.freeze()

        graph = self._registry.graph
        closure: set[str] = set(requested)
        for ident in requested:
            closure |= nx.descendants(graph, ident)

        sub = graph.subgraph(closure)
        if not nx.is_directed_acyclic_graph(sub):
            edges = nx.find_cycle(sub)
            cycle = [u for u, _v in edges]
            raise ImplicationCycleError([*cycle, cycle[0]])
        _check_parameters(closure)

        signature = tuple(sorted(closure))
        plan = self._by_signature.get(signature)
        if plan is None:
            plan = self._build_plan(signature, sub)
            self._by_signature[signature] = plan
            logger.debug(
                "Resolved concept %s -> checks=%s implied=%s",
                list(requested),
                list(plan.identifiers),
                list(plan.implied),
            )
        return plan

    def _build_plan(self, signature: tuple[str, ...], sub: nx.DiGraph) -> EvaluationPlan:
        implies_only = nx.subgraph_view(
            sub, filter_edge=lambda u, v: sub.edges[u, v]["kind"] == IMPLIES
        )
        # Any implied closure member has a direct implying predecessor in the closure.
        implied = {node for node in sub if implies_only.in_degree(node) > 0}

        order = nx.lexicographical_topological_sort(nx.reverse_view(sub))
        checked = [node for node in order if node not in implied]
        checked_set = set(checked)

        steps: list[PlanStep] = []
        for ident in checked:
            entailed = sorted(nx.descendants(implies_only, ident))
            steps.append(
                PlanStep(
                    constraint=self._registry.lookup(ident),
                    prerequisites=frozenset(nx.descendants(sub, ident) & checked_set),
                    entails=tuple(self._registry.lookup(i) for i in entailed),
                )
            )
        return EvaluationPlan(
            signature=signature,
            steps=tuple(steps),
            implied=tuple(sorted(implied)),
        )


def _check_parameters(closure: Iterable[str]) -> None:
    """Reject concepts that combine two parameters of one family (e.g. two units)."""
    families: dict[str, list[str]] = defaultdict(list)
    for ident in closure:
        key = parse_identifier(ident)
        if key.is_parameterized:
            families[key.family].append(ident)
    for family, members in sorted(families.items()):
        if len(members) > 1:
            raise ConflictingParameterError(family, members)
