"""Lazy and eager evaluation of named computation graphs."""

__all__ = [
    "CyclicGraphError",
    "EagerEvaluator",
    "Graph",
    "GraphEvaluator",
    "InvalidArgumentError",
    "LazyEagerError",
    "LazyEvaluator",
    "Node",
    "NodeState",
    "Solution",
    "Solver",
    "UnknownVertexError",
    "export_solutions",
    "solutions_to_dict",
]

from ._errors import CyclicGraphError, InvalidArgumentError, LazyEagerError, UnknownVertexError
from ._evaluators import EagerEvaluator, GraphEvaluator, LazyEvaluator, Solution
from ._graph import Graph
from ._io import export_solutions, solutions_to_dict
from ._node import Node, NodeState
from ._solver import Solver
