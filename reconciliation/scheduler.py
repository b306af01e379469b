"""
Run scheduler for periodic fills.

reflect is invoked by cron (or by hand), not long-running, so the scheduler
uses a check-on-invocation pattern: each run checks whether a source is due
based on persisted state in reflector_state.json.
"""

import json
import os
import time
from dataclasses import dataclass, asdict
from typing import Optional, TYPE_CHECKING

from shared.log import create_logger

if TYPE_CHECKING:
    from reconciliation.mirror import FillOutcome
    from reconciliation.status import MirrorStatus
    from store.capture import CaptureList

_, log_debug, log_info, _, _ = create_logger("Scheduler")


@dataclass
class RunState:
    """Persisted state for one source."""
    last_run_time: float = 0.0          # time.time() of last run
    last_status: str = ""               # MirrorState value seen before filling
    last_present: int = 0               # captures present after the run
    last_total: int = 0                 # captures expected in the loop window
    last_fetched: int = 0               # captures fetched by the run
    last_error: str = ""                # first fill error, if any
    run_count: int = 0                  # total runs


class RunScheduler:
    """Tracks when each source was last filled.

    NOT a timer/thread. On each invocation, call is_due() to check whether a
    source should run based on the minimum interval and its last run time.
    """

    STATE_FILE = 'reflector_state.json'

    def __init__(self, data_dir: str):
        self.data_dir = data_dir
        self.state_path = os.path.join(data_dir, self.STATE_FILE)

    def _load_all(self) -> dict:
        try:
            if os.path.exists(self.state_path):
                with open(self.state_path, 'r') as f:
                    data = json.load(f)
                if isinstance(data, dict):
                    return data
                log_debug(f"Ignoring run state of type {type(data).__name__}")
        except (json.JSONDecodeError, OSError) as e:
            log_debug(f"Failed to load run state, using defaults: {e}")
        return {}

    def load_state(self, source: str) -> RunState:
        """Load the run state for a source from disk."""
        data = self._load_all().get(source)
        if data is None:
            return RunState()
        try:
            return RunState(**data)
        except TypeError as e:
            log_debug(f"Failed to load run state for {source}, using defaults: {e}")
            return RunState()

    def save_state(self, source: str, state: RunState) -> None:
        """Save the run state for a source to disk atomically."""
        data = self._load_all()
        data[source] = asdict(state)
        tmp_path = self.state_path + '.tmp'
        try:
            os.makedirs(self.data_dir, exist_ok=True)
            with open(tmp_path, 'w') as f:
                json.dump(data, f, indent=2, sort_keys=True)
            os.replace(tmp_path, self.state_path)
        except OSError as e:
            log_debug(f"Failed to save run state: {e}")

    def is_due(self, source: str, interval_seconds: float, now: Optional[float] = None) -> bool:
        """Check if a source is due based on the interval and last run time.

        Args:
            source: Source name
            interval_seconds: Minimum seconds between runs (<= 0 means always due)
            now: Current time (default: time.time()). For testing.

        Returns:
            True if the source has never run or the interval has elapsed.
        """
        if interval_seconds <= 0:
            return True

        if now is None:
            now = time.time()

        state = self.load_state(source)
        if state.run_count == 0:
            return True
        elapsed = now - state.last_run_time
        return elapsed >= interval_seconds

    def record_run(
        self,
        source: str,
        status: "MirrorStatus",
        outcome: Optional["FillOutcome"] = None,
        captures: Optional["CaptureList"] = None,
        now: Optional[float] = None,
    ) -> RunState:
        """Record a completed run.

        Args:
            source: Source name
            status: Status evaluated before filling
            outcome: Fill result, None when nothing needed filling
            captures: Captures seen when no fill ran
            now: Current time (default: time.time()). For testing.
        """
        state = self.load_state(source)
        state.last_run_time = time.time() if now is None else now
        state.last_status = status.state.value
        state.last_fetched = 0
        state.last_error = ""
        if outcome is not None:
            captures = outcome.captures
            state.last_fetched = len(outcome.fetched)
            if outcome.error is not None:
                state.last_error = str(outcome.error)
        if captures is not None:
            state.last_present = len(captures.present)
            state.last_total = captures.total
        state.run_count += 1
        self.save_state(source, state)
        log_info(f"Recorded run {state.run_count} for {source}: {state.last_status}")
        return state
