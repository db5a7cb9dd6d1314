import os
import tempfile
import unittest
from datetime import datetime

from news_fakes import record

from midnews.storage.sqlite_news import SQLiteNewsStore


class TestSQLiteNewsStore(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.store = SQLiteNewsStore(os.path.join(self._tmp.name, "db", "news.db"))

    def tearDown(self):
        self._tmp.cleanup()

    def test_find_by_exact_timestamp(self):
        self.store.save_all([record("01.03.2024 10:00", title="A")])
        self.assertEqual([r.title for r in self.store.find_by_timestamp(datetime(2024, 3, 1, 10, 0))], ["A"])
        self.assertEqual(self.store.find_by_timestamp(datetime(2024, 3, 1, 10, 1)), [])

    def test_seconds_are_ignored_in_lookup(self):
        self.store.save_all([record("01.03.2024 10:00")])
        self.assertEqual(len(self.store.find_by_timestamp(datetime(2024, 3, 1, 10, 0, 42))), 1)

    def test_save_is_last_write_wins_per_timestamp(self):
        rec = record("01.03.2024 10:00", title="A")
        self.store.save_all([rec])
        self.store.save_all([rec.with_content("<div>body</div>")])
        self.assertEqual(self.store.count(), 1)
        self.assertEqual(self.store.find_by_timestamp(rec.published_at)[0].content, "<div>body</div>")

    def test_record_without_content_is_stored(self):
        self.store.save_all([record("01.03.2024 10:00")])
        self.assertIsNone(self.store.find_by_timestamp(datetime(2024, 3, 1, 10, 0))[0].content)

    def test_empty_save_is_noop(self):
        self.assertEqual(self.store.save_all([]), 0)
        self.assertEqual(self.store.count(), 0)

    def test_find_between_is_inclusive_and_ascending(self):
        self.store.save_all([
            record("02.03.2024 09:00", title="C"),
            record("01.03.2024 10:00", title="A"),
            record("01.03.2024 23:59", title="B"),
            record("03.03.2024 00:00", title="D"),
        ])
        out = self.store.find_between(datetime(2024, 3, 1, 10, 0), datetime(2024, 3, 2, 9, 0))
        self.assertEqual([r.title for r in out], ["A", "B", "C"])


if __name__ == "__main__":
    unittest.main()
