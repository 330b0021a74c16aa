"""Exceptions raised by the evaluation core."""


class LazyEagerError(Exception):
    """Base class for all lazyeager errors."""


class InvalidArgumentError(LazyEagerError, TypeError):
    """Malformed input to a node, graph, solver or evaluator."""


class UnknownVertexError(LazyEagerError, LookupError):
    """A requested or dependency name has no binding in the graph."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f'there is no vertex "{name}" in the graph.')


class CyclicGraphError(LazyEagerError, ValueError):
    """A vertex was reached while it was already being resolved.

    Attributes:
        cycle: The names along the cycle, in resolution order. The first and
            last entries are the same vertex, e.g. ``("a", "b", "c", "a")``.

    """

    def __init__(self, cycle: tuple[str, ...]) -> None:
        self.cycle = cycle
        super().__init__(f"cyclic graph detected ({' => '.join(cycle)})")
