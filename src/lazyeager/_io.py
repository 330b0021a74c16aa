from __future__ import annotations

import json
import logging
from datetime import date, datetime, time
from pathlib import Path
from typing import TYPE_CHECKING, Any

import tomli_w
from pydantic import BaseModel
from pydantic_core import to_jsonable_python

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)

_TOML_SCALARS = (str, int, float, bool, datetime, date, time)


def _serialize_value(value: Any) -> Any:
    """Recursively serialize a solved value for TOML export.

    Handles:
    - Pydantic BaseModel: Converts to dict via model_dump()
    - dict: Stringifies keys, drops None values (TOML has no null)
    - list/tuple: Recursively serializes items, drops None items
    - Path objects: Converted to strings
    - TOML-native scalars: Returned as-is
    - Anything else (sets, dataclasses, enums, Decimal...): pydantic's JSON-compatible form
    """
    if value is None:
        return None

    if isinstance(value, BaseModel):
        # mode='python' keeps datetimes, which TOML supports natively
        return _serialize_value(value.model_dump(mode="python"))

    if isinstance(value, dict):
        return {str(k): _serialize_value(v) for k, v in value.items() if v is not None}

    if isinstance(value, (list, tuple)):
        return [_serialize_value(item) for item in value if item is not None]

    if isinstance(value, Path):
        return str(value)

    if isinstance(value, _TOML_SCALARS):
        return value

    return _serialize_value(to_jsonable_python(value))


def solutions_to_dict(solutions: Iterable[tuple[str, Any]]) -> dict[str, Any]:
    """Convert (name, value) pairs to a dictionary, keeping their order.

    Values are converted to JSON-compatible Python objects.

    Example:
        >>> solutions_to_dict([("n", 4), ("m", 3.0)])
        {'n': 4, 'm': 3.0}

    """
    return {name: to_jsonable_python(value) for name, value in solutions}


def export_solutions(solutions: Iterable[tuple[str, Any]], output_path: Path) -> None:
    """Write (name, value) pairs to a TOML or JSON file, chosen by the file suffix.

    In TOML, None values are omitted since TOML has no null. The document is
    rendered in full before the file is touched, so a failed export leaves any
    existing file as it was.

    Raises:
        ValueError: If the suffix is neither ``.toml`` nor ``.json``, or if a
            value cannot be written in that format (NaN or infinity in JSON).

    """
    pairs = list(solutions)
    suffix = output_path.suffix.lower()

    if suffix == ".toml":
        data = {name: _serialize_value(value) for name, value in pairs if value is not None}
        skipped = len(pairs) - len(data)
        if skipped:
            logger.warning("Skipped %d None value(s), TOML has no null", skipped)
        try:
            content = tomli_w.dumps(data)
        except TypeError as e:
            msg = f"Cannot export solutions to TOML: {e}"
            raise ValueError(msg) from e
    elif suffix == ".json":
        try:
            content = json.dumps(solutions_to_dict(pairs), indent=2, allow_nan=False) + "\n"
        except ValueError as e:
            msg = f"Cannot export solutions to JSON: {e}"
            raise ValueError(msg) from e
    else:
        msg = f"Unsupported output format '{output_path.suffix}', expected .toml or .json"
        raise ValueError(msg)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(content.encode())
    logger.debug("Exported %d solution(s) to %s", len(pairs), output_path)
