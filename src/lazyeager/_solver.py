"""Recursive memoizing solver with cycle detection."""

from __future__ import annotations

import logging
from typing import Any

from ._errors import CyclicGraphError, InvalidArgumentError, UnknownVertexError
from ._graph import Graph

logger = logging.getLogger(__name__)


class Solver:
    """Resolve vertices of one Graph, dependencies first.

    Results are memoized on the Nodes themselves, so a vertex is computed at
    most once no matter how many vertices depend on it.

    The path of vertices being resolved is passed down the recursion as a
    tuple rather than kept on the instance. Nothing is left behind when a
    call fails, and the same Solver can be used again afterwards.
    """

    def __init__(self, graph: Graph) -> None:
        if not isinstance(graph, Graph):
            msg = f"graph is not an instance of Graph: {graph!r}"
            raise InvalidArgumentError(msg)

        self._graph = graph

    @property
    def graph(self) -> Graph:
        return self._graph

    def solve(self, name: str) -> Any:
        """Return the value of vertex ``name``, computing its dependencies as needed.

        Raises:
            InvalidArgumentError: If ``name`` is not a string.
            UnknownVertexError: If ``name`` or one of its transitive dependencies is not in the graph.
            CyclicGraphError: If ``name`` transitively depends on itself.

        """
        return self._solve(name, ())

    def _solve(self, name: str, active_path: tuple[str, ...]) -> Any:
        if name in active_path:
            start = active_path.index(name)
            raise CyclicGraphError((*active_path[start:], name))

        node = self._graph.get_vertex(name)
        if node is None:
            raise UnknownVertexError(name)

        if node.is_computed():
            logger.debug("Using memoized value for %s", name)
            return node.result

        path = (*active_path, name)
        args = [self._solve(dependency, path) for dependency in node.dependencies]

        logger.debug("Evaluating %s", name)
        node.compute(*args)
        logger.debug("Result for %s: %r", name, node.result)

        return node.result
