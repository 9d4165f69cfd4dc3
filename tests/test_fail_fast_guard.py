import pytest

from eventual.core.config import ReportingConfig
from eventual.core.managers.fail_fast import FailFastGuard


@pytest.mark.parametrize("initial", [True, False])
def test_guard_disables_and_restores(initial):
    config = ReportingConfig(fail_fast=initial)

    with FailFastGuard(config):
        assert config.fail_fast is False

    assert config.fail_fast is initial


def test_guard_restores_on_exception():
    config = ReportingConfig(fail_fast=True)

    with pytest.raises(RuntimeError):
        with FailFastGuard(config):
            raise RuntimeError("unexpected")

    assert config.fail_fast is True


def test_explicit_save_and_restore():
    config = ReportingConfig(fail_fast=True)
    guard = FailFastGuard(config)

    previous = guard.save_and_disable()
    assert previous is True
    assert config.fail_fast is False

    guard.restore(previous)
    assert config.fail_fast is True
