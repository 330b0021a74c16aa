"""Computation node holding a function, its dependency names and a memo slot."""

from __future__ import annotations

import inspect
import logging
from enum import StrEnum, auto
from typing import TYPE_CHECKING, Any

from ._errors import InvalidArgumentError

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)


class NodeState(StrEnum):
    """Evaluation state of a node's memo slot."""

    NOT_COMPUTED = auto()
    COMPUTED = auto()
    FAILED = auto()  # The last compute() raised


def _check_arity(function: Callable[..., Any], dependencies: tuple[str, ...]) -> None:
    """Check that ``function`` accepts one positional argument per dependency.

    Functions whose signature cannot be inspected (some builtins) are accepted as is.

    Raises:
        InvalidArgumentError: If the signature cannot bind ``len(dependencies)`` positional arguments.

    """
    try:
        signature = inspect.signature(function)
    except (TypeError, ValueError):
        logger.debug("No signature available for %r, skipping arity check", function)
        return

    try:
        signature.bind(*dependencies)
    except TypeError as e:
        msg = f"function {getattr(function, '__name__', function)!r} cannot take {len(dependencies)} argument(s): {e}"
        raise InvalidArgumentError(msg) from e


class Node:
    """A computation with declared, ordered dependencies and a memoized result.

    The function and the dependency names are fixed at construction.
    The dependency order is the positional argument order of the function.

    Example:
        >>> node = Node(lambda xs, n: sum(xs) / n, "xs", "n")
        >>> node.compute([1, 2, 3, 6], 4)
        >>> node.result
        3.0

    """

    __slots__ = ("_dependencies", "_error", "_function", "_result", "_state")

    def __init__(self, function: Callable[..., Any], *dependencies: str, check_arity: bool = True) -> None:
        if not callable(function):
            msg = '"function" is not callable.'
            raise InvalidArgumentError(msg)

        for dependency in dependencies:
            if not isinstance(dependency, str):
                msg = f"dependency names must be strings, got {type(dependency).__name__}: {dependency!r}"
                raise InvalidArgumentError(msg)

        if check_arity:
            _check_arity(function, dependencies)

        self._function = function
        self._dependencies: tuple[str, ...] = dependencies
        self._state = NodeState.NOT_COMPUTED
        self._result: Any = None
        self._error: BaseException | None = None

    @property
    def function(self) -> Callable[..., Any]:
        return self._function

    @property
    def dependencies(self) -> tuple[str, ...]:
        return self._dependencies

    @property
    def state(self) -> NodeState:
        return self._state

    @property
    def result(self) -> Any:
        """The memoized value.

        Raises:
            InvalidArgumentError: If the node has not been computed successfully.

        """
        if self._state is not NodeState.COMPUTED:
            msg = f"node result is not available (state: {self._state})"
            raise InvalidArgumentError(msg)
        return self._result

    @property
    def error(self) -> BaseException | None:
        """The exception raised by the last failed compute, if any."""
        return self._error

    def compute(self, *args: Any) -> None:
        """Call the function with ``args`` and store its return value.

        The argument count is not checked against the dependencies here.
        An exception raised by the function marks the node as failed and propagates.
        """
        try:
            result = self._function(*args)
        except Exception as e:
            self._state = NodeState.FAILED
            self._result = None
            self._error = e
            raise

        self._result = result
        self._error = None
        self._state = NodeState.COMPUTED

    def is_computed(self) -> bool:
        return self._state is NodeState.COMPUTED

    def reset(self) -> None:
        """Forget the memoized result or error."""
        self._state = NodeState.NOT_COMPUTED
        self._result = None
        self._error = None

    def __repr__(self) -> str:
        name = getattr(self._function, "__name__", repr(self._function))
        return f"Node({name}, dependencies={self._dependencies!r}, state={self._state})"
