import sys
import tempfile
import unittest
from datetime import datetime, timezone
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.core.report_store import REPORT_KEY, InMemoryReportStore, SQLiteReportStore  # noqa: E402
from app.schemas.analysis import AnalysisReport, SectionResult  # noqa: E402


def _report(score: int, role: str = "Backend Engineer") -> AnalysisReport:
    section = SectionResult(summary="* Strong Python", recommendations="* **Add tests**", score=score)
    return AnalysisReport(
        job_role=role,
        skills=section,
        experience=section,
        education=section,
        overall_score=score,
        generated_at=datetime(2026, 3, 1, 12, 30, tzinfo=timezone.utc),
    )


class SQLiteReportStoreTests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.store = SQLiteReportStore(db_path=str(Path(self._tmp.name) / "nested" / "reports.db"))

    def tearDown(self):
        self.store.close()
        self._tmp.cleanup()

    def test_latest_is_empty_initially(self):
        self.assertIsNone(self.store.latest())

    def test_submit_then_latest_round_trips(self):
        report = _report(55)
        self.store.submit(report)
        self.assertEqual(self.store.latest(), report)

    def test_single_fixed_key_keeps_most_recent(self):
        self.store.submit(_report(55))
        self.store.submit(_report(70, role="Data Engineer"))
        latest = self.store.latest()
        self.assertEqual(latest.overall_score, 70)
        self.assertEqual(latest.job_role, "Data Engineer")

        conn = self.store._get_connection()
        keys = [row[0] for row in conn.execute("SELECT store_key FROM report_store")]
        self.assertEqual(keys, [REPORT_KEY])

    def test_corrupt_payload_reads_as_missing(self):
        conn = self.store._get_connection()
        conn.execute(
            "INSERT INTO report_store (store_key, payload_json, updated_at) VALUES (?, ?, ?)",
            (REPORT_KEY, '{"job_role": "x"}', "2026-01-01T00:00:00+00:00"),
        )
        self.assertIsNone(self.store.latest())

    def test_clear(self):
        self.store.submit(_report(55))
        self.store.clear()
        self.assertIsNone(self.store.latest())


class InMemoryReportStoreTests(unittest.TestCase):
    def test_submit_and_latest(self):
        store = InMemoryReportStore()
        self.assertIsNone(store.latest())
        report = _report(65)
        store.submit(report)
        self.assertEqual(store.latest(), report)
        store.clear()
        self.assertIsNone(store.latest())


if __name__ == "__main__":
    unittest.main()
