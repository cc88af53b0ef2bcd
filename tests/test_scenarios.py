from __future__ import annotations

import os
import unittest
from typing import TYPE_CHECKING

import yaml

from formbind import converters, exceptions
from formbind.binder import Binder, Cardinality, FieldDescriptor

from .compat import parametrize, parametrize_class

if TYPE_CHECKING:
    from typing import Any, TypedDict

    class Scenario(TypedDict):
        name: str
        data: dict[str, Any]


# Get the current directory for our later test cases.
curr_dir = os.path.abspath(os.path.dirname(__file__))
scenarios_dir = os.path.join(curr_dir, "test_data", "scenarios")


def load_scenarios() -> list[Scenario]:
    scenarios: list[Scenario] = []
    for f in sorted(os.listdir(scenarios_dir)):
        fname, ext = os.path.splitext(f)
        if ext != ".yaml":
            continue

        with open(os.path.join(scenarios_dir, f), "rb") as fy:
            scenarios.append({"name": fname, "data": yaml.safe_load(fy)})

    return scenarios


def make_descriptor(field: dict[str, Any]) -> FieldDescriptor:
    convert = getattr(converters, field.get("convert", "identity"))
    return FieldDescriptor(field["name"], Cardinality[field["cardinality"]], convert)


scenarios = load_scenarios()


@parametrize_class
class TestScenarios(unittest.TestCase):
    def make_binder(self, data: dict[str, Any]) -> Binder:
        return Binder([make_descriptor(f) for f in data["fields"]], config=data.get("config", {}))

    def pairs(self, data: dict[str, Any]) -> list[tuple[str, str]]:
        return [(k, v) for k, v in data["pairs"]]

    @parametrize("param", scenarios)
    def test_scenario(self, param: Scenario) -> None:
        data = param["data"]
        binder = self.make_binder(data)

        if "error" not in data:
            result = binder.bind(self.pairs(data))
            self.assertEqual(result, data["expected"])
            return

        expected = data["error"]
        error_class = getattr(exceptions, expected["type"])
        with self.assertRaises(error_class) as cm:
            binder.bind(self.pairs(data))

        e = cm.exception
        if "name" in expected:
            self.assertEqual(e.name, expected["name"])
        if "raw_value" in expected:
            self.assertEqual(e.raw_value, expected["raw_value"])
        if "reason" in expected:
            self.assertEqual(e.reason, expected["reason"])
        if "names" in expected:
            self.assertEqual(e.names, expected["names"])

    @parametrize("param", [s for s in scenarios if "error" not in s["data"]])
    def test_idempotent(self, param: Scenario) -> None:
        data = param["data"]
        binder = self.make_binder(data)
        self.assertEqual(binder.bind(self.pairs(data)), binder.bind(self.pairs(data)))

    @parametrize("param", [s for s in scenarios if "error" not in s["data"]])
    def test_extra_keys_never_fail(self, param: Scenario) -> None:
        data = param["data"]
        binder = self.make_binder(data)
        pairs = [("_unrelated", "x")] + self.pairs(data) + [("__extra__", "")]
        self.assertEqual(binder.bind(pairs), data["expected"])


def test_all_scenarios_loaded() -> None:
    names = {s["name"] for s in scenarios}
    assert "contact_basic" in names
    assert "invalid_integer" in names
    assert "missing_required_empty_input" in names
