"""Insertion-ordered container of named computation nodes."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from ._errors import InvalidArgumentError
from ._node import Node

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator, Mapping

logger = logging.getLogger(__name__)


class Graph:
    """A mapping from unique vertex names to Nodes, in declaration order.

    Dependencies are not checked on insertion: dangling or cyclic references
    surface only when the graph is solved.

    Re-inserting an existing name replaces its Node in place, so the name
    keeps its original position in the iteration order.

    Example:
        >>> graph = Graph()
        >>> graph.add_vertex("xs", Node(lambda: [1, 2, 3, 6]))
        >>> @graph.vertex(depends=["xs"])
        ... def n(xs):
        ...     return len(xs)
        >>> graph.names
        ('xs', 'n')

    """

    def __init__(self) -> None:
        self._vertices: dict[str, Node] = {}

    @property
    def vertices(self) -> Mapping[str, Node]:
        """Read-only view of the name to Node bindings."""
        return MappingProxyType(self._vertices)

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._vertices)

    def add_vertex(self, name: str, node: Node) -> None:
        """Bind ``name`` to ``node``, replacing any previous binding.

        Raises:
            InvalidArgumentError: If ``name`` is not a string or ``node`` is not a Node.

        """
        if not isinstance(name, str):
            msg = f"name is not a string: {name!r}"
            raise InvalidArgumentError(msg)

        if not isinstance(node, Node):
            msg = f"vertex is not an instance of Node: {node!r}"
            raise InvalidArgumentError(msg)

        if name in self._vertices:
            logger.debug("Replacing vertex %s", name)
        self._vertices[name] = node

    def get_vertex(self, name: str) -> Node | None:
        """Return the Node bound to ``name``, or None if there is none.

        Raises:
            InvalidArgumentError: If ``name`` is not a string.

        """
        if not isinstance(name, str):
            msg = f"name is not a string: {name!r}"
            raise InvalidArgumentError(msg)

        return self._vertices.get(name)

    def vertex(
        self,
        name: str | None = None,
        *,
        depends: Iterable[str] = (),
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Decorator to declare a function as a vertex of this graph.

        Args:
            name: Vertex name. Defaults to the function's ``__name__``.
            depends: Dependency names, in the function's positional argument order.

        Example:
            @graph.vertex(depends=["xs", "n"])
            def m(xs, n):
                return sum(xs) / n

        """

        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            self.add_vertex(name if name is not None else func.__name__, Node(func, *depends))
            return func

        return decorator

    def missing_dependencies(self) -> dict[str, tuple[str, ...]]:
        """Find declared dependencies that have no binding in the graph.

        Returns:
            Mapping from vertex name to its unbound dependency names, in declaration
            order. Vertices whose dependencies are all bound are omitted.

        """
        missing: dict[str, tuple[str, ...]] = {}
        for name, node in self._vertices.items():
            unbound = tuple(dict.fromkeys(dep for dep in node.dependencies if dep not in self._vertices))
            if unbound:
                missing[name] = unbound
        return missing

    def reset(self) -> None:
        """Forget the memoized results of every vertex."""
        for node in self._vertices.values():
            node.reset()

    def __len__(self) -> int:
        return len(self._vertices)

    def __contains__(self, name: object) -> bool:
        return name in self._vertices

    def __iter__(self) -> Iterator[str]:
        return iter(self._vertices)
