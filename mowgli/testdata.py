"""
testdata.py

Loader for the shared JSON test data that lets independent implementations
run the same scenarios:

    <base_dir>/specs/<name>.json   a spec in wire format
    <base_dir>/cases/<name>.json   {"testCases": [{"name", "data", "expectedValid"}]}
"""
import json
import os
from dataclasses import dataclass
from typing import Any, List

from .errors import SpecError, TestDataError
from .spec import Spec, parse_spec

DEFAULT_BASE_DIR = "testdata"


@dataclass(frozen=True)
class TestCase:
    __test__ = False  # keep pytest from collecting this as a test class

    name: str
    data: Any
    expected_valid: bool


def _read_json(path: str) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except OSError as e:
        raise TestDataError(f"failed to read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise TestDataError(f"failed to parse {path}: {e}") from e


def load_spec(filename: str, base_dir: str = DEFAULT_BASE_DIR) -> Spec:
    """Load ``<base_dir>/specs/<filename>`` as a Spec."""
    path = os.path.join(base_dir, "specs", filename)
    data = _read_json(path)
    try:
        return parse_spec(data)
    except SpecError as e:
        raise TestDataError(f"failed to parse spec from {path}: {e}") from e


def load_test_cases(filename: str, base_dir: str = DEFAULT_BASE_DIR) -> List[TestCase]:
    """Load ``<base_dir>/cases/<filename>`` as a list of TestCase."""
    path = os.path.join(base_dir, "cases", filename)
    data = _read_json(path)
    if not isinstance(data, dict) or not isinstance(data.get("testCases"), list):
        raise TestDataError(f"{path}: expected an object with a 'testCases' list")

    cases = []
    for i, raw in enumerate(data["testCases"]):
        if not isinstance(raw, dict) or not isinstance(raw.get("expectedValid"), bool):
            raise TestDataError(f"{path}: testCases[{i}] needs a boolean 'expectedValid'")
        cases.append(TestCase(
            name=str(raw.get("name", f"case_{i}")),
            data=raw.get("data"),
            expected_valid=raw["expectedValid"],
        ))
    return cases
