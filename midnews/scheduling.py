"""Register the pipeline on the `schedule` library.

Expressions:
- "HH:MM"  every day at that time
- ":MM"    every hour at that minute

The evening, daily and hourly triggers are independent jobs that all start
the same pipeline run.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List

import schedule

logger = logging.getLogger(__name__)


def register_job(scheduler: schedule.Scheduler, expr: str, job: Callable, *, tag: str) -> schedule.Job:
    expr = expr.strip()
    if expr.startswith(":"):
        scheduled = scheduler.every().hour.at(expr)
    else:
        scheduled = scheduler.every().day.at(expr)
    return scheduled.do(job).tag(tag)


def register_schedules(scheduler: schedule.Scheduler, schedules: Dict[str, str], job: Callable) -> List[schedule.Job]:
    jobs = []
    for name, expr in schedules.items():
        jobs.append(register_job(scheduler, expr, job, tag=name))
        logger.info(f"Scheduled '{name}' run at {expr}")
    return jobs
