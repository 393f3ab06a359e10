import pytest

from nas_monitor.models import EnvironmentSnapshot
from nas_monitor.services.reconciler import ReconciliationState, StatusReporter


@pytest.fixture
def state():
    return ReconciliationState()


@pytest.fixture
def reporter(state, clock):
    return StatusReporter(state, interval_seconds=3600, clock=clock)


@pytest.fixture
def snapshot():
    return EnvironmentSnapshot(
        current_network="Office", is_home_network=False, on_ac_power=False, battery_level=42
    )


class TestStatusReporter:
    def test_first_call_always_logs(self, reporter, snapshot, state, clock, caplog):
        caplog.set_level("INFO")

        assert reporter.maybe_log(snapshot, 600) is True
        assert state.last_status_log_time == clock()
        assert "Status: Away, Battery(42%), Check interval: 600s" in caplog.text

    def test_throttled_within_interval(self, reporter, snapshot, clock):
        reporter.maybe_log(snapshot, 600)

        clock.advance(3600)
        assert reporter.maybe_log(snapshot, 600) is False

    def test_logs_again_once_interval_exceeded(self, reporter, snapshot, state, clock):
        reporter.maybe_log(snapshot, 600)

        clock.advance(3601)
        assert reporter.maybe_log(snapshot, 600) is True
        assert state.last_status_log_time == clock()

    def test_custom_interval(self, state, snapshot, clock):
        reporter = StatusReporter(state, interval_seconds=60, clock=clock)
        reporter.maybe_log(snapshot, 600)

        clock.advance(61)
        assert reporter.maybe_log(snapshot, 600) is True
