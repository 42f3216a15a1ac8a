import json
import tempfile
import unittest
from pathlib import Path

from roi_services.simulation.engine import calculate_roi
from roi_services.simulation.inputs import ScenarioInput
from roi_services.storage.errors import DuplicateScenarioError, InvalidEmailError
from roi_services.storage.leads import LeadStore, is_valid_email
from roi_services.storage.scenarios import ScenarioStore

PAYLOAD = {
    "monthly_invoice_volume": 500,
    "num_ap_staff": 2,
    "avg_hours_per_invoice": 0.25,
    "hourly_wage": 28,
    "error_rate_manual": 1.5,
    "error_cost": 40,
    "time_horizon_months": 24,
}


def _inputs(name: str) -> ScenarioInput:
    return ScenarioInput.from_mapping({**PAYLOAD, "scenario_name": name})


class TestScenarioStore(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = self._tmp.name
        self.store = ScenarioStore(self.root)

    def tearDown(self):
        self._tmp.cleanup()

    def _save(self, name: str):
        inputs = _inputs(name)
        return self.store.create(inputs, calculate_roi(inputs))

    def test_create_and_get(self):
        s = self._save("Baseline")
        self.assertTrue(s.id.startswith("s_"))
        got = self.store.get(s.id)
        self.assertIsNotNone(got)
        doc = got.to_dict()
        self.assertEqual(doc["scenario_name"], "Baseline")
        self.assertEqual(doc["one_time_implementation_cost"], 0.0)
        self.assertEqual(doc["results"]["roi_percentage"], "Infinite")
        self.assertIn("created_at", doc)
        self.assertIsNone(self.store.get("s_missing"))

    def test_duplicate_name_rejected(self):
        self._save("Baseline")
        with self.assertRaises(DuplicateScenarioError):
            self._save("Baseline")
        self.assertEqual(len(self.store.list()), 1)

    def test_list_newest_first(self):
        a = self._save("A")
        b = self._save("B")
        c = self._save("C")
        self.assertEqual([s.id for s in self.store.list()], [c.id, b.id, a.id])

    def test_reload_from_disk(self):
        a = self._save("A")
        b = self._save("B")
        doc = json.loads((Path(self.root) / "scenarios" / f"{a.id}.json").read_text())
        self.assertEqual(doc["scenario_name"], "A")
        reopened = ScenarioStore(self.root)
        self.assertEqual([s.id for s in reopened.list()], [b.id, a.id])
        self.assertEqual(reopened.get(a.id).results, a.results)
        with self.assertRaises(DuplicateScenarioError):
            reopened.create(_inputs("A"), calculate_roi(_inputs("A")))

    def test_delete(self):
        a = self._save("A")
        self.assertTrue(self.store.delete(a.id))
        self.assertFalse(self.store.delete(a.id))
        self.assertIsNone(self.store.get(a.id))
        self.assertFalse((Path(self.root) / "scenarios" / f"{a.id}.json").exists())
        # name is free again
        self._save("A")


class TestLeadStore(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.store = LeadStore(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def test_email_pattern(self):
        for ok in ("jane.doe@example.com", "ap-team@corp.co.uk", "a_b@mail.io"):
            self.assertTrue(is_valid_email(ok), ok)
        for bad in ("", "no-at-sign", "x@y", "x@y.toolongtld", "a b@c.com", None, 42):
            self.assertFalse(is_valid_email(bad), bad)

    def test_record_and_list(self):
        lead = self.store.record("jane@example.com", "s_1")
        self.assertTrue(lead.report_downloaded)
        self.assertIsNotNone(lead.report_downloaded_at)
        self.store.record("ops@example.com", "s_2")
        self.assertEqual(len(self.store.list()), 2)
        self.assertEqual([lead.email for lead in self.store.list(scenario_id="s_1")], ["jane@example.com"])
        # persisted across instances
        self.assertEqual(len(LeadStore(self._tmp.name).list()), 2)

    def test_invalid_email_rejected(self):
        with self.assertRaises(InvalidEmailError):
            self.store.record("not-an-email", "s_1")
        self.assertEqual(self.store.list(), [])


if __name__ == '__main__':
    unittest.main()
