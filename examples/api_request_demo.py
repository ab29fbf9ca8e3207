"""
api_request_demo.py - Conditional validation of API request payloads

Runs a handful of request payloads through one spec whose rules depend on
the request itself:

- action == "create" tightens the shape of "data"
- validationLevel == "strict" demands a timestamp-bearing metadata block
- action == "delete" forbids a payload body larger than an id

Each scenario prints its verdict and errors grouped by top-level field, the
way a form or API layer would present them.
"""

import os
import sys

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from mowgli import has_expressions, parse_spec, validate
from mowgli.helpers import group_all_errors_by_field

# ==========================================
# SPEC
# ==========================================
REQUEST_SPEC = parse_spec({
    "type": "object",
    "properties": {
        "action": {"type": "string", "enum": ["create", "update", "delete"]},
        "resource": {"type": "string", "enum": ["user", "product", "order"]},
        "data": {"type": "object", "properties": {"id": {"type": "string"}, "name": {"type": "string"}}},
        "metadata": {
            "type": "object",
            "properties": {
                "userId": {"type": "string", "minLength": 1},
                "timestamp": {"type": "integer", "min": 0},
                "tags": {"type": "array", "items": {"type": "string"}, "maxLength": 20},
            },
            "required": ["userId"],
        },
        "validationLevel": {"type": "string", "enum": ["strict", "normal", "lenient"]},
    },
    "required": ["action", "resource"],
    "conditions": [
        {
            "if": "action == \"create\"",
            "then": {"data": {"required": ["name"], "properties": {"name": {"minLength": 1}}}},
        },
        {
            "if": "action == \"delete\"",
            "then": {"data": {"required": ["id"], "properties": {"name": {"maxLength": 0}}}},
        },
        {
            "if": "validationLevel == \"strict\"",
            "then": {"metadata": {"required": ["userId", "timestamp"]}},
        },
    ],
})

# ==========================================
# SCENARIOS
# ==========================================
SCENARIOS = [
    {
        "name": "CREATE_OK",
        "desc": "Create with a named payload.",
        "payload": {"action": "create", "resource": "user", "data": {"name": "ada"}},
    },
    {
        "name": "CREATE_WITHOUT_NAME",
        "desc": "Create requires data.name once the condition applies.",
        "payload": {"action": "create", "resource": "user", "data": {}},
    },
    {
        "name": "DELETE_WITH_BODY",
        "desc": "Delete only takes an id.",
        "payload": {"action": "delete", "resource": "order", "data": {"id": "o-1", "name": "x"}},
    },
    {
        "name": "STRICT_WITHOUT_TIMESTAMP",
        "desc": "Strict requests must carry metadata.timestamp.",
        "payload": {
            "action": "update",
            "resource": "product",
            "validationLevel": "strict",
            "metadata": {"userId": "u-7"},
        },
    },
    {
        "name": "UNKNOWN_ACTION",
        "desc": "Enum violation plus a missing required field.",
        "payload": {"action": "archive"},
    },
]


def run_demo():
    print("[*] API request validation demo")
    print(f"    Needs condition evaluation: {has_expressions(REQUEST_SPEC)}")

    for scenario in SCENARIOS:
        print(f"\n--- {scenario['name']} ---")
        print(f"    Desc: {scenario['desc']}")

        result = validate(scenario["payload"], REQUEST_SPEC)
        print(f"    Verdict: {'VALID' if result.valid else 'INVALID'}")
        for field, errors in group_all_errors_by_field(result).items():
            print(f"    [{field or '<root>'}]")
            for err in errors:
                print(f"        {err}")


if __name__ == "__main__":
    run_demo()
