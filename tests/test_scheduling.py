import unittest

import schedule

from midnews.config import Config
from midnews.scheduling import register_schedules


class TestScheduling(unittest.TestCase):
    def test_three_independent_triggers(self):
        scheduler = schedule.Scheduler()
        calls = []
        jobs = register_schedules(scheduler, Config().schedules, lambda: calls.append(1))
        self.assertEqual(len(jobs), 3)
        self.assertEqual(len(scheduler.get_jobs()), 3)
        self.assertEqual(len(scheduler.get_jobs("hourly")), 1)

    def test_expression_units(self):
        scheduler = schedule.Scheduler()
        daily, hourly = register_schedules(scheduler, {"daily": "09:00", "hourly": ":15"}, lambda: None)
        self.assertEqual(daily.unit, "days")
        self.assertEqual(hourly.unit, "hours")
        self.assertEqual(hourly.at_time.minute, 15)

    def test_run_all_invokes_job_per_trigger(self):
        scheduler = schedule.Scheduler()
        calls = []
        register_schedules(scheduler, Config().schedules, lambda: calls.append(1))
        scheduler.run_all()
        self.assertEqual(len(calls), 3)


if __name__ == "__main__":
    unittest.main()
