"""Unit tests for build_scheduler.

Test coverage includes:

1. Job registration
   - One interval job with the given period, not started yet.
   - Non-positive intervals are rejected.

2. Running
   - The first run is due one interval after start().
   - The job runs repeatedly until shutdown.
   - A failing run doesn't stop the schedule.
"""

import threading
from datetime import datetime, timedelta, UTC

import pytest

from linkshortener.lifecycle import build_scheduler


# -------------------------------
# 1. Job registration
# -------------------------------


def test_registers_interval_job():
    """Ensure a single non-overlapping interval job is registered and nothing runs yet."""
    scheduler = build_scheduler(lambda: None, interval=42, name='link-sweep')

    assert scheduler.running is False
    (job,) = scheduler.get_jobs()
    assert job.id == 'link-sweep'
    assert job.trigger.interval == timedelta(seconds=42)
    assert job.max_instances == 1
    assert job.coalesce is True


@pytest.mark.parametrize('interval', [0, -1])
def test_invalid_interval(interval):
    """Ensure non-positive intervals raise ValueError."""
    with pytest.raises(ValueError):
        build_scheduler(lambda: None, interval=interval)


# -------------------------------
# 2. Running
# -------------------------------


def test_first_run_is_one_interval_after_start():
    """Ensure the first run is scheduled a full interval out, not immediately."""
    calls = []
    scheduler = build_scheduler(lambda: calls.append(1), interval=3600, name='link-sweep')

    before = datetime.now(UTC)
    scheduler.start()
    try:
        next_run = scheduler.get_job('link-sweep').next_run_time
    finally:
        scheduler.shutdown(wait=True)

    assert next_run - before >= timedelta(seconds=3599)
    assert calls == []


def test_runs_periodically():
    """Ensure the job runs repeatedly until shutdown."""
    calls = threading.Semaphore(0)
    scheduler = build_scheduler(calls.release, interval=0.05)

    scheduler.start()
    try:
        for _ in range(3):
            assert calls.acquire(timeout=5)
    finally:
        scheduler.shutdown(wait=True)
    assert scheduler.running is False


def test_failing_run_keeps_schedule():
    """Ensure an exception in one run doesn't cancel the next one."""
    calls = threading.Semaphore(0)
    attempts = []

    def flaky():
        attempts.append(1)
        calls.release()
        if len(attempts) == 1:
            raise RuntimeError('boom')

    scheduler = build_scheduler(flaky, interval=0.05, name='flaky-job')
    scheduler.start()
    try:
        assert calls.acquire(timeout=5)
        assert calls.acquire(timeout=5)
    finally:
        scheduler.shutdown(wait=True)
