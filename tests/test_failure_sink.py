"""Tests for ThreadLocalFailureSink capture windows and fail-fast reporting."""

import threading

import pytest

from eventual.adapters.thread_local_failure_sink import ThreadLocalFailureSink
from eventual.core.config import ReportingConfig
from eventual.core.exceptions import FailFastError, FailureSinkError
from eventual.core.models.failure import Failure


@pytest.fixture
def sink():
    return ThreadLocalFailureSink()


def test_capture_records_failures_in_order(sink):
    token = sink.begin_capture()
    sink.fail("first")
    assert sink.expect(1 + 1 == 2, "never reported") is True
    assert sink.expect(False, "second") is False
    record = sink.end_capture(token)

    assert [f.message for f in record.failures] == ["first", "second"]
    assert record.failed
    assert not sink.capturing()


def test_empty_capture_means_success(sink):
    token = sink.begin_capture()
    record = sink.end_capture(token)

    assert record.passed
    assert len(record) == 0


def test_report_outside_capture_raises_assertion(sink):
    with pytest.raises(AssertionError, match="boom"):
        sink.fail("boom")


def test_nested_windows_only_see_their_own_failures(sink):
    outer = sink.begin_capture()
    sink.fail("outer")
    inner = sink.begin_capture()
    sink.fail("inner")

    assert [f.message for f in sink.end_capture(inner).failures] == ["inner"]
    assert [f.message for f in sink.end_capture(outer).failures] == ["outer"]


def test_closing_out_of_order_is_rejected(sink):
    outer = sink.begin_capture()
    sink.begin_capture()

    with pytest.raises(FailureSinkError):
        sink.end_capture(outer)


def test_capture_is_scoped_to_the_current_thread(sink):
    token = sink.begin_capture()
    errors = []

    def other_thread():
        try:
            sink.fail("from worker")
        except AssertionError as exc:
            errors.append(exc)

    worker = threading.Thread(target=other_thread)
    worker.start()
    worker.join()
    record = sink.end_capture(token)

    # The worker had no window of its own, so it took the normal path
    assert record.passed
    assert len(errors) == 1


def test_token_cannot_be_closed_from_another_thread(sink):
    token = sink.begin_capture()
    errors = []

    def other_thread():
        try:
            sink.end_capture(token)
        except FailureSinkError as exc:
            errors.append(exc)

    worker = threading.Thread(target=other_thread)
    worker.start()
    worker.join()

    assert len(errors) == 1
    assert sink.end_capture(token).passed


def test_fail_fast_raises_even_inside_a_window():
    sink = ThreadLocalFailureSink(ReportingConfig(fail_fast=True))
    token = sink.begin_capture()

    with pytest.raises(FailFastError) as excinfo:
        sink.fail("stop here")
    sink.end_capture(token)

    assert "stop here" in excinfo.value.message
    assert not isinstance(excinfo.value, AssertionError)


def test_failure_from_exception_points_at_raising_line():
    try:
        raise AssertionError("numbers differ")
    except AssertionError as exc:
        failure = Failure.from_exception(exc)

    assert failure.message == "numbers differ"
    assert failure.location.startswith(__file__)
    assert str(failure).endswith(": numbers differ")
