import unittest
from datetime import datetime

from news_fakes import MemoryStore, record

from midnews.ingestion.sequencer import DedupSequencer, sequence_new


class TestDedupSequencer(unittest.TestCase):
    def test_pending_is_ascending_regardless_of_page_order(self):
        store = MemoryStore()
        out = sequence_new(
            [record("02.03.2024 09:00"), record("01.03.2024 18:30"), record("02.03.2024 08:15")],
            store,
        )
        self.assertEqual(
            [r.published_at for r in out],
            [datetime(2024, 3, 1, 18, 30), datetime(2024, 3, 2, 8, 15), datetime(2024, 3, 2, 9, 0)],
        )

    def test_stored_timestamps_are_rejected(self):
        store = MemoryStore([record("01.03.2024 10:00", title="Old")])
        seq = DedupSequencer(store)
        self.assertFalse(seq.offer(record("01.03.2024 10:00", title="Old, retitled")))
        self.assertTrue(seq.offer(record("01.03.2024 10:01")))
        self.assertEqual(len(seq.pending), 1)

    def test_same_timestamp_twice_in_one_run_is_accepted_once(self):
        store = MemoryStore()
        out = sequence_new([record("01.03.2024 10:00", title="A"), record("01.03.2024 10:00", title="B")], store)
        self.assertEqual([r.title for r in out], ["A"])

    def test_second_pass_over_same_candidates_accepts_nothing(self):
        store = MemoryStore()
        candidates = [record("01.03.2024 10:00"), record("01.03.2024 11:00")]
        store.save_all(sequence_new(candidates, store))
        self.assertEqual(sequence_new(candidates, store), [])

    def test_pending_returns_a_copy(self):
        seq = DedupSequencer(MemoryStore())
        seq.offer(record("01.03.2024 10:00"))
        seq.pending.clear()
        self.assertEqual(len(seq.pending), 1)


if __name__ == "__main__":
    unittest.main()
