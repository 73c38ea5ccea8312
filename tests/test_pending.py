"""Tests for the deadline and the one-shot answer slot."""

from __future__ import annotations

import math
import time
from datetime import timedelta

import pytest

from timed_quiz.session import Deadline, PendingAnswer, outstanding_reads
from timed_quiz.session.pending import limit_to_seconds


class FakeClock:
    def __init__(self, now: float = 100.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


def test_deadline_counts_down_once():
    clock = FakeClock()
    deadline = Deadline(30, clock=clock)

    assert deadline.remaining() == 30
    clock.now += 12.5
    assert deadline.remaining() == pytest.approx(17.5)
    assert not deadline.expired()
    clock.now += 17.5
    assert deadline.expired()
    assert deadline.remaining() == 0.0
    clock.now += 5
    assert deadline.remaining() == 0.0


def test_zero_deadline_is_already_expired():
    clock = FakeClock()
    deadline = Deadline(timedelta(0), clock=clock)

    assert deadline.expired()
    assert deadline.remaining() == 0.0


def test_expired_at_a_given_instant():
    deadline = Deadline(10, clock=FakeClock(0.0))

    assert not deadline.expired(at=9.99)
    assert deadline.expired(at=10.0)


def test_limit_to_seconds():
    assert limit_to_seconds(timedelta(minutes=1)) == 60.0
    assert limit_to_seconds(3) == 3.0
    with pytest.raises(ValueError):
        limit_to_seconds(timedelta(seconds=-1))


def test_answer_is_delivered_once(scripted):
    pending = PendingAnswer(0, scripted(" 42 ")).start()

    arrival = pending.wait(timeout=2)

    assert arrival is not None
    assert arrival.answer == " 42 "
    with pytest.raises(RuntimeError):
        pending.wait(timeout=0)
    assert pending.join(timeout=2)


def test_reader_errors_become_failed_reads(scripted):
    pending = PendingAnswer(0, scripted(ValueError("bad bytes"))).start()

    arrival = pending.wait(timeout=2)

    assert arrival is not None
    assert arrival.answer is None


def test_end_of_input_becomes_failed_read(scripted):
    arrival = PendingAnswer(0, scripted()).start().wait(timeout=2)

    assert arrival is not None
    assert arrival.answer is None


def test_abandoned_read_is_tracked_until_it_returns(scripted, block):
    reader = scripted(block)
    pending = PendingAnswer(3, reader).start()

    assert pending.wait(timeout=0.05) is None
    pending.abandon()
    assert pending.abandoned
    assert outstanding_reads() >= 1

    reader.release()
    assert pending.join(timeout=2)
    assert pending.done
    # The late answer was dropped, not queued for anyone to pick up.
    with pytest.raises(RuntimeError):
        pending.wait(timeout=0)


@pytest.mark.parametrize("timeout", [math.inf, 1e12])
def test_wait_accepts_timeouts_beyond_lock_limits(timeout):
    def slow_reader() -> str:
        time.sleep(0.1)
        return "done"

    arrival = PendingAnswer(0, slow_reader).start().wait(timeout)

    assert arrival is not None
    assert arrival.answer == "done"


def test_infinite_deadline_never_expires():
    clock = FakeClock()
    deadline = Deadline(math.inf, clock=clock)

    clock.now += 1e15
    assert not deadline.expired()
    assert deadline.remaining() == math.inf
