import os
import tempfile
import unittest

from midnews.locking import ProcessLock


class TestProcessLock(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self._tmp.name, "state", "midnews.lock")

    def tearDown(self):
        self._tmp.cleanup()

    def test_second_holder_is_refused_until_release(self):
        first, second = ProcessLock(self.path), ProcessLock(self.path)
        self.assertTrue(first.acquire())
        self.assertFalse(second.acquire())
        self.assertFalse(second.held)
        first.release()
        self.assertTrue(second.acquire())
        second.release()

    def test_lock_file_records_pid(self):
        lock = ProcessLock(self.path)
        self.assertTrue(lock.acquire())
        with open(self.path) as f:
            self.assertEqual(f.read().strip(), str(os.getpid()))
        lock.release()

    def test_release_without_acquire_is_harmless(self):
        ProcessLock(self.path).release()


if __name__ == "__main__":
    unittest.main()
