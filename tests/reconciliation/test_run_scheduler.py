"""Unit tests for RunScheduler."""

import json
import os
from datetime import datetime, timezone

import pytest

from reconciliation.mirror import FetchFailure, FillOutcome
from reconciliation.scheduler import RunScheduler, RunState
from reconciliation.status import MirrorState, MirrorStatus
from remote.errors import RequestFailed
from store.capture import Capture, CaptureList, MissingCapture

NOW = datetime(2023, 10, 14, tzinfo=timezone.utc)


def _captures(present, missing):
    return CaptureList(
        present=[Capture(time=NOW, path=f"/store/{i}") for i in range(present)],
        missing=[MissingCapture(time=NOW, path=str(i), resource=str(i)) for i in range(missing)],
    )


# =============================================================================
# RunState Defaults
# =============================================================================

def test_default_state():
    """Fresh RunState has last_run_time=0.0 and run_count=0."""
    state = RunState()
    assert state.last_run_time == 0.0
    assert state.last_status == ""
    assert state.last_present == 0
    assert state.last_total == 0
    assert state.last_fetched == 0
    assert state.last_error == ""
    assert state.run_count == 0


# =============================================================================
# State Persistence
# =============================================================================

def test_load_state_no_file(tmp_path):
    """load_state() returns defaults when no file exists."""
    state = RunScheduler(str(tmp_path)).load_state("sdo")
    assert state == RunState()


def test_save_and_load_state(tmp_path):
    """Save state, load it back, verify all fields match."""
    scheduler = RunScheduler(str(tmp_path))
    original = RunState(
        last_run_time=1234567890.5,
        last_status="partial",
        last_present=3,
        last_total=5,
        last_fetched=1,
        last_error="HTTP 500",
        run_count=7,
    )
    scheduler.save_state("sdo", original)
    assert scheduler.load_state("sdo") == original


def test_sources_kept_apart(tmp_path):
    """Each source has its own entry in the one state file."""
    scheduler = RunScheduler(str(tmp_path))
    scheduler.save_state("sdo", RunState(run_count=1))
    scheduler.save_state("goesabi", RunState(run_count=2))

    assert scheduler.load_state("sdo").run_count == 1
    assert scheduler.load_state("goesabi").run_count == 2
    with open(tmp_path / RunScheduler.STATE_FILE) as f:
        assert set(json.load(f)) == {"sdo", "goesabi"}


def test_load_state_corrupt_json(tmp_path):
    """Corrupt JSON returns defaults without raising."""
    (tmp_path / RunScheduler.STATE_FILE).write_text("{not json")
    assert RunScheduler(str(tmp_path)).load_state("sdo") == RunState()


def test_load_state_unknown_fields(tmp_path):
    """An entry with unknown fields returns defaults."""
    (tmp_path / RunScheduler.STATE_FILE).write_text(json.dumps({"sdo": {"bogus": 1}}))
    assert RunScheduler(str(tmp_path)).load_state("sdo") == RunState()


def test_save_creates_data_dir(tmp_path):
    data_dir = tmp_path / "state" / "nested"
    RunScheduler(str(data_dir)).save_state("sdo", RunState(run_count=1))
    assert (data_dir / RunScheduler.STATE_FILE).exists()


def test_save_leaves_no_tmp_file(tmp_path):
    scheduler = RunScheduler(str(tmp_path))
    scheduler.save_state("sdo", RunState())
    assert not os.path.exists(scheduler.state_path + ".tmp")


# =============================================================================
# is_due
# =============================================================================

class TestIsDue:

    def test_zero_interval_always_due(self, tmp_path):
        scheduler = RunScheduler(str(tmp_path))
        scheduler.save_state("sdo", RunState(last_run_time=1000.0))
        assert scheduler.is_due("sdo", 0, now=1000.0)

    def test_never_run_is_due(self, tmp_path):
        assert RunScheduler(str(tmp_path)).is_due("sdo", 3600, now=1000.0)

    def test_never_run_with_clock_near_epoch(self, tmp_path):
        """A fresh state is due even when now is within the interval of time 0."""
        scheduler = RunScheduler(str(tmp_path))
        assert scheduler.is_due("sdo", 3600, now=0.0)
        (tmp_path / RunScheduler.STATE_FILE).write_text("{corrupt")
        assert scheduler.is_due("sdo", 3600, now=1000.0)

    def test_recent_run_not_due(self, tmp_path):
        scheduler = RunScheduler(str(tmp_path))
        scheduler.save_state("sdo", RunState(last_run_time=10000.0, run_count=1))
        assert not scheduler.is_due("sdo", 3600, now=10000.0 + 3599)

    def test_elapsed_interval_due(self, tmp_path):
        scheduler = RunScheduler(str(tmp_path))
        scheduler.save_state("sdo", RunState(last_run_time=10000.0, run_count=1))
        assert scheduler.is_due("sdo", 3600, now=10000.0 + 3600)


# =============================================================================
# record_run
# =============================================================================

class TestRecordRun:

    def test_record_fill(self, tmp_path):
        scheduler = RunScheduler(str(tmp_path))
        captures = _captures(present=4, missing=1)
        outcome = FillOutcome(
            captures=captures,
            failures=[FetchFailure(captures.missing[0], RequestFailed("0", "HTTP 500", status=500))],
            fetched=captures.present[:1],
        )
        status = MirrorStatus(MirrorState.PARTIAL, NOW, 0.6)

        state = scheduler.record_run("sdo", status, outcome=outcome, now=5000.0)

        assert state.last_run_time == 5000.0
        assert state.last_status == "partial"
        assert state.last_present == 4
        assert state.last_total == 5
        assert state.last_fetched == 1
        assert state.last_error == "HTTP 500"
        assert state.run_count == 1
        assert scheduler.load_state("sdo") == state

    def test_record_full_without_fill(self, tmp_path):
        scheduler = RunScheduler(str(tmp_path))
        status = MirrorStatus(MirrorState.FULL, NOW, 1.0)
        state = scheduler.record_run("sdo", status, captures=_captures(present=5, missing=0), now=5000.0)
        assert state.last_status == "full"
        assert state.last_present == 5
        assert state.last_fetched == 0
        assert state.last_error == ""

    def test_error_cleared_on_next_run(self, tmp_path):
        scheduler = RunScheduler(str(tmp_path))
        scheduler.save_state("sdo", RunState(last_error="old", run_count=2))
        state = scheduler.record_run("sdo", MirrorStatus(MirrorState.FULL, NOW, 1.0), now=1.0)
        assert state.last_error == ""
        assert state.run_count == 3

    def test_recorded_run_makes_source_not_due(self, tmp_path):
        scheduler = RunScheduler(str(tmp_path))
        scheduler.record_run("sdo", MirrorStatus(MirrorState.FULL, NOW, 1.0), now=10000.0)
        assert not scheduler.is_due("sdo", 600, now=10300.0)
        assert scheduler.is_due("goesabi", 600, now=10300.0)
