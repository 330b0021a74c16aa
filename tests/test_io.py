"""Tests for exporting solutions in lazyeager._io."""

import json
import tomllib
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

import pytest
from pydantic import BaseModel

from lazyeager import EagerEvaluator, Graph, Node, export_solutions, solutions_to_dict
from lazyeager._io import _serialize_value


class Mode(StrEnum):
    NOMINAL = "nominal"
    SAFE = "safe"


class Design(BaseModel):
    mass: float
    mode: Mode


@dataclass
class Point:
    x: int
    y: int


class TestSerializeValue:
    """Tests for TOML value serialization."""

    def test_primitives_unchanged(self) -> None:
        assert _serialize_value(1) == 1
        assert _serialize_value(2.5) == 2.5
        assert _serialize_value("s") == "s"
        assert _serialize_value(True) is True

    def test_basemodel(self) -> None:
        assert _serialize_value(Design(mass=1.5, mode=Mode.SAFE)) == {"mass": 1.5, "mode": "safe"}

    def test_dict_drops_none_and_stringifies_keys(self) -> None:
        assert _serialize_value({1: "a", "b": None}) == {"1": "a"}

    def test_tuple_becomes_list(self) -> None:
        assert _serialize_value((1, (2, 3))) == [1, [2, 3]]

    def test_path(self) -> None:
        assert _serialize_value(Path("a") / "b") == str(Path("a") / "b")

    def test_dataclass_and_set(self) -> None:
        assert _serialize_value(Point(1, 2)) == {"x": 1, "y": 2}
        assert sorted(_serialize_value({3, 1, 2})) == [1, 2, 3]


class TestSolutionsToDict:
    def test_keeps_order(self) -> None:
        result = solutions_to_dict([("b", 1), ("a", 2)])

        assert list(result) == ["b", "a"]

    def test_converts_values(self) -> None:
        result = solutions_to_dict([("design", Design(mass=2.0, mode=Mode.NOMINAL)), ("none", None)])

        assert result == {"design": {"mass": 2.0, "mode": "nominal"}, "none": None}


class TestExportSolutions:
    """Tests for writing solutions to files."""

    @pytest.fixture
    def solutions(self) -> list[tuple[str, object]]:
        graph = Graph()
        graph.add_vertex("xs", Node(lambda: [1, 2, 3, 6]))
        graph.add_vertex("n", Node(len, "xs"))
        graph.add_vertex("m", Node(lambda xs, n: sum(xs) / n, "xs", "n"))
        return EagerEvaluator(graph).solve()

    def test_toml(self, tmp_path: Path, solutions: list[tuple[str, object]]) -> None:
        output = tmp_path / "out" / "result.toml"

        export_solutions(solutions, output)

        with output.open("rb") as f:
            data = tomllib.load(f)
        assert data == {"xs": [1, 2, 3, 6], "n": 4, "m": 3.0}

    def test_json(self, tmp_path: Path, solutions: list[tuple[str, object]]) -> None:
        output = tmp_path / "result.json"

        export_solutions(solutions, output)

        data = json.loads(output.read_text())
        assert data == {"xs": [1, 2, 3, 6], "n": 4, "m": 3.0}
        assert list(data) == ["xs", "n", "m"]

    def test_toml_skips_none(self, tmp_path: Path) -> None:
        output = tmp_path / "result.toml"

        export_solutions([("a", None), ("b", 1)], output)

        with output.open("rb") as f:
            assert tomllib.load(f) == {"b": 1}

    def test_json_keeps_none(self, tmp_path: Path) -> None:
        output = tmp_path / "result.json"

        export_solutions([("a", None)], output)

        assert json.loads(output.read_text()) == {"a": None}

    def test_unsupported_suffix(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="Unsupported output format"):
            export_solutions([("a", 1)], tmp_path / "result.yaml")

    def test_toml_drops_none_list_items(self, tmp_path: Path) -> None:
        output = tmp_path / "result.toml"

        export_solutions([("xs", [1, None, 3]), ("nested", {"ys": [None, "a"]})], output)

        with output.open("rb") as f:
            assert tomllib.load(f) == {"xs": [1, 3], "nested": {"ys": ["a"]}}

    def test_failed_toml_export_keeps_existing_file(self, tmp_path: Path) -> None:
        output = tmp_path / "result.toml"
        output.write_text("previous = 1\n")

        with pytest.raises(ValueError, match="serialize"):
            export_solutions([("a", 1), ("b", object())], output)

        assert output.read_text() == "previous = 1\n"

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), [1.0, float("-inf")]])
    def test_json_rejects_non_finite_floats(self, tmp_path: Path, value: object) -> None:
        output = tmp_path / "result.json"

        with pytest.raises(ValueError, match="Cannot export solutions to JSON"):
            export_solutions([("a", value)], output)

        assert not output.exists()
