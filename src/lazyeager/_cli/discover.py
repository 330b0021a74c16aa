"""Resolve a configured graph source to the Graph object it names.

Both source forms go through the same two steps: import a module, then pick a
Graph out of it. A script is imported under its dotted package name, so
relative imports inside a package keep working.
"""

from __future__ import annotations

import importlib
import logging
import sys
from typing import TYPE_CHECKING

from lazyeager._graph import Graph

from .config import ModuleSource, ScriptSource

if TYPE_CHECKING:
    from pathlib import Path
    from types import ModuleType

    from .config import GraphSource

logger = logging.getLogger(__name__)


def _script_module_name(script: Path) -> tuple[str, Path]:
    """Return the dotted module name of a script and the directory to import it from.

    Parent directories holding an ``__init__.py`` are part of the name.
    """
    path = script.resolve()
    if path.stem == "__init__":
        path = path.parent
    parts = [path.stem]
    root = path.parent
    while (root / "__init__.py").is_file():
        parts.insert(0, root.name)
        root = root.parent
    return ".".join(parts), root


def _import_module(module_name: str, search_path: Path | None = None) -> ModuleType:
    if search_path is not None and str(search_path) not in sys.path:
        sys.path.insert(0, str(search_path))
    logger.debug("Importing %s", module_name)
    return importlib.import_module(module_name)


def _pick_graph(module: ModuleType, variable: str | None) -> Graph:
    """Return the Graph bound to `variable` in `module`, or the only Graph defined there."""
    if variable is not None:
        if not hasattr(module, variable):
            msg = f"Could not find graph '{variable}' in {module.__name__}"
            raise ValueError(msg)
        graph = getattr(module, variable)
        if not isinstance(graph, Graph):
            msg = f"'{variable}' in {module.__name__} is not a Graph instance"
            raise TypeError(msg)
        return graph

    found = {name: obj for name, obj in vars(module).items() if isinstance(obj, Graph)}
    if not found:
        msg = f"Could not find a Graph in {module.__name__}"
        raise ValueError(msg)
    if len(found) > 1:
        msg = f"Several graphs in {module.__name__} ({', '.join(found)}), choose one with --graph"
        raise ValueError(msg)
    name, graph = next(iter(found.items()))
    logger.debug("Found graph: %s", name)
    return graph


def load_graph_from_source(source: GraphSource) -> Graph:
    """Import the module a source points at and return its Graph.

    Raises:
        ImportError: If the module cannot be imported
        ValueError: If the script or the graph variable does not exist, or no
            single Graph can be picked
        TypeError: If the named variable is not a Graph instance

    """
    match source:
        case ScriptSource(script=script, name=name):
            if not script.exists():
                msg = f"Script not found: {script}"
                raise ValueError(msg)
            module_name, search_path = _script_module_name(script)
            module = _import_module(module_name, search_path)
            return _pick_graph(module, name)
        case ModuleSource(module_path=module_path):
            module_name, _, variable = module_path.partition(":")
            if not module_name or not variable:
                msg = f"Module path must be in format 'module.path:variable_name', got '{module_path}'"
                raise ValueError(msg)
            return _pick_graph(_import_module(module_name), variable)
    msg = f"Unsupported graph source: {source!r}"
    raise TypeError(msg)
