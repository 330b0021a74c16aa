"""Configuration loading from pyproject.toml."""

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import cast


class ConfigError(Exception):
    """Error in lazyeager configuration."""


@dataclass(slots=True, frozen=True)
class ScriptSource:
    """Script path with optional variable name."""

    script: Path
    name: str | None = None


@dataclass(slots=True, frozen=True)
class ModuleSource:
    """Module path with variable name (e.g., 'examples.stats:graph')."""

    module_path: str


GraphSource = ScriptSource | ModuleSource


@dataclass(slots=True, frozen=True)
class LazyEagerConfig:
    """Configuration loaded from pyproject.toml.

    All relative paths are resolved from the project root (directory containing pyproject.toml).
    An empty ``nodes`` tuple means the whole graph is solved eagerly.
    """

    graph: GraphSource | None = None
    nodes: tuple[str, ...] = field(default_factory=tuple)
    output: Path | None = None
    project_root: Path | None = None


def find_pyproject_toml(start_dir: Path | None = None) -> Path | None:
    """Find pyproject.toml by walking up from start_dir.

    Args:
        start_dir: Starting directory. Defaults to current working directory.

    Returns:
        Path to pyproject.toml if found, None otherwise.

    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = start_dir.resolve()

    while True:
        candidate = current / "pyproject.toml"
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            # Reached filesystem root
            return None
        current = parent


def parse_graph_source(value: object, project_root: Path | None = None) -> GraphSource:
    """Parse a graph location.

    Args:
        value: A ``"module.path:variable"`` string, or a table with a ``script`` key
            and an optional ``name`` key.
        project_root: Directory that relative script paths are resolved against.

    Returns:
        Parsed GraphSource

    Raises:
        ConfigError: If the value format is invalid

    """
    if isinstance(value, str):
        if ":" not in value:
            msg = f"Invalid module path '{value}'. Expected format: 'module.path:variable_name'"
            raise ConfigError(msg)
        return ModuleSource(module_path=value)

    if isinstance(value, dict):
        value_dict = cast("dict[str, object]", value)
        if "script" not in value_dict:
            msg = "Invalid [tool.lazyeager].graph configuration. Expected string or table with 'script' key."
            raise ConfigError(msg)

        script_value = value_dict["script"]
        if not isinstance(script_value, str):
            msg = "Invalid [tool.lazyeager].graph.script: expected string path"
            raise ConfigError(msg)
        script_path = Path(script_value)
        if project_root is not None and not script_path.is_absolute():
            script_path = project_root / script_path

        name = value_dict.get("name")
        if name is not None and not isinstance(name, str):
            msg = "Invalid [tool.lazyeager].graph.name: expected string"
            raise ConfigError(msg)

        return ScriptSource(script=script_path, name=name)

    msg = "Invalid [tool.lazyeager].graph configuration. Expected string or table with 'script' key."
    raise ConfigError(msg)


def load_config(pyproject_path: Path) -> LazyEagerConfig:
    """Load and validate [tool.lazyeager] config from pyproject.toml.

    Args:
        pyproject_path: Path to pyproject.toml

    Returns:
        Parsed LazyEagerConfig

    Raises:
        ConfigError: If the configuration is invalid

    """
    project_root = pyproject_path.parent

    with pyproject_path.open("rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {pyproject_path}: {e}"
            raise ConfigError(msg) from e

    section = data.get("tool", {}).get("lazyeager", {})

    if not section:
        return LazyEagerConfig(project_root=project_root)

    graph_source: GraphSource | None = None
    if "graph" in section:
        graph_source = parse_graph_source(section["graph"], project_root)

    nodes: tuple[str, ...] = ()
    if "nodes" in section:
        nodes_value = section["nodes"]
        if not isinstance(nodes_value, list) or not all(isinstance(n, str) for n in nodes_value):
            msg = "Invalid [tool.lazyeager].nodes: expected list of vertex names"
            raise ConfigError(msg)
        nodes = tuple(nodes_value)

    output_path: Path | None = None
    if "output" in section:
        output_value = section["output"]
        if not isinstance(output_value, str):
            msg = "Invalid [tool.lazyeager].output: expected string path"
            raise ConfigError(msg)
        output_path = Path(output_value)
        if not output_path.is_absolute():
            output_path = project_root / output_path

    return LazyEagerConfig(
        graph=graph_source,
        nodes=nodes,
        output=output_path,
        project_root=project_root,
    )


def get_config() -> LazyEagerConfig:
    """Get config from pyproject.toml in current directory or parents.

    Returns:
        LazyEagerConfig (may be empty if no pyproject.toml or no [tool.lazyeager] section)

    """
    pyproject_path = find_pyproject_toml()
    if pyproject_path is None:
        return LazyEagerConfig()
    return load_config(pyproject_path)
