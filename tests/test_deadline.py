from datetime import timedelta

import pytest

from conftest import FakeClock
from eventual.core.models.deadline import Deadline


def test_deadline_is_fixed_at_creation():
    clock = FakeClock(start=10.0)
    deadline = Deadline.after(clock, 2.5)

    assert deadline.at == 12.5
    assert not deadline.expired(clock)
    clock.advance(2.4)
    assert deadline.remaining(clock) == pytest.approx(0.1)
    clock.advance(0.1)
    assert deadline.expired(clock)
    assert deadline.remaining(clock) == 0.0


def test_deadline_accepts_timedelta_and_non_positive_timeouts():
    clock = FakeClock(start=0.0)

    assert Deadline.after(clock, timedelta(milliseconds=1500)).at == 1.5
    assert Deadline.after(clock, 0).expired(clock)
    assert Deadline.after(clock, -3).expired(clock)
