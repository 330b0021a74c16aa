"""Lazy and eager evaluation strategies over a Graph."""

from __future__ import annotations

import logging
from typing import Any

from ._errors import InvalidArgumentError
from ._graph import Graph
from ._solver import Solver

logger = logging.getLogger(__name__)

type Solution = tuple[str, Any]


class GraphEvaluator:
    """Graph binding shared by the evaluation strategies.

    The graph can be given at construction or bound later with `set_graph`.
    Each variant adds a `solve` method shaped by what it resolves, and every
    call to it runs on a fresh Solver.
    """

    def __init__(self, graph: Graph | None = None) -> None:
        self._graph: Graph | None = None
        if graph is not None:
            self.set_graph(graph)

    @property
    def graph(self) -> Graph | None:
        return self._graph

    def set_graph(self, graph: Graph) -> None:
        if not isinstance(graph, Graph):
            msg = f"graph is not an instance of Graph: {graph!r}"
            raise InvalidArgumentError(msg)
        self._graph = graph

    def _new_solver(self) -> Solver:
        if self._graph is None:
            msg = f"no graph bound to {type(self).__name__}, call set_graph() first"
            raise InvalidArgumentError(msg)
        return Solver(self._graph)


class LazyEvaluator(GraphEvaluator):
    """Evaluate a single vertex and only what it transitively depends on."""

    def solve(self, name: str) -> Solution:
        solver = self._new_solver()
        logger.debug("Lazily solving %s", name)
        return name, solver.solve(name)


class EagerEvaluator(GraphEvaluator):
    """Evaluate every vertex of the graph, in declaration order.

    A single Solver is shared by the whole pass, so a vertex already computed
    as a dependency of an earlier one is not computed again.
    """

    def solve(self) -> list[Solution]:
        solver = self._new_solver()
        graph = solver.graph
        logger.debug("Eagerly solving %d vertices", len(graph))
        return [(name, solver.solve(name)) for name in graph.names]
