import unittest

from mowgli.builder import boolean, obj, override, string, when
from mowgli.conditions import resolve_conditions


class Recorder:
    def __init__(self):
        self.reports = []

    def __call__(self, path, message):
        self.reports.append((path, message))


class TestResolveConditions(unittest.TestCase):

    def setUp(self):
        self.report = Recorder()

    def test_no_conditions(self):
        spec = obj({"a": string()})
        self.assertEqual(resolve_conditions({"a": "x"}, spec, self.report), {})

    def test_only_touched_fields_appear(self):
        spec = obj(
            {"enabled": boolean(), "value": string(), "other": string()},
            conditions=[when("enabled", then={"value": override(min_length=1)})],
        )
        effective = resolve_conditions({"enabled": True}, spec, self.report)
        self.assertEqual(set(effective), {"value"})
        self.assertEqual(effective["value"].type, "string")
        self.assertEqual(effective["value"].min_length, 1)

    def test_false_without_else_contributes_nothing(self):
        spec = obj(
            {"enabled": boolean(), "value": string()},
            conditions=[when("enabled", then={"value": override(min_length=1)})],
        )
        self.assertEqual(resolve_conditions({"enabled": False}, spec, self.report), {})

    def test_merges_in_declaration_order(self):
        spec = obj(
            {"n": string(min_length=1)},
            conditions=[
                when("true", then={"n": override(min_length=3, max_length=9)}),
                when("true", then={"n": override(min_length=5)}),
            ],
        )
        effective = resolve_conditions({}, spec, self.report)
        self.assertEqual(effective["n"].min_length, 5)
        self.assertEqual(effective["n"].max_length, 9)

    def test_undeclared_field_override_stands_alone(self):
        spec = obj({}, conditions=[when("true", then={"ghost": override(min_length=2)})])
        effective = resolve_conditions({}, spec, self.report)
        self.assertIsNone(effective["ghost"].type)
        self.assertEqual(effective["ghost"].min_length, 2)

    def test_errors_are_reported_at_root(self):
        spec = obj(
            {"a": boolean(), "b": string()},
            conditions=[
                when("(a", then={"b": override(min_length=9)}),
                when("a", then={"b": override(max_length=1)}),
            ],
        )
        effective = resolve_conditions({"a": True}, spec, self.report)
        self.assertEqual(len(self.report.reports), 1)
        path, message = self.report.reports[0]
        self.assertEqual(path, "")
        self.assertTrue(message.startswith("error evaluating condition '(a': "))
        self.assertIsNone(effective["b"].min_length)
        self.assertEqual(effective["b"].max_length, 1)

    def test_declared_spec_is_untouched(self):
        spec = obj(
            {"v": string()},
            conditions=[when("true", then={"v": override(min_length=1)})],
        )
        resolve_conditions({}, spec, self.report)
        self.assertIsNone(spec.properties["v"].min_length)


if __name__ == "__main__":
    unittest.main()
