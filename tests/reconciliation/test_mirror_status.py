"""Tests for MirrorStatus classification."""

from datetime import datetime, timezone

import pytest

from reconciliation.status import MirrorState, MirrorStatus
from store.capture import Capture, CaptureList, MissingCapture, NoArtifactsExpected


def _t(hour):
    return datetime(2023, 10, 14, hour, tzinfo=timezone.utc)


def _present(*hours):
    return [Capture(time=_t(h), path=f"/store/{h}") for h in hours]


def _missing(*hours):
    return [MissingCapture(time=_t(h), path=str(h), resource=str(h)) for h in hours]


class TestFromCaptures:

    def test_no_artifacts_expected(self):
        with pytest.raises(NoArtifactsExpected):
            MirrorStatus.from_captures(CaptureList())

    def test_empty_uses_earliest_missing(self):
        status = MirrorStatus.from_captures(CaptureList(missing=_missing(1, 2)))
        assert status == MirrorStatus(MirrorState.EMPTY, _t(1), 0.0)

    def test_partial_uses_latest_present(self):
        status = MirrorStatus.from_captures(CaptureList(present=_present(1, 3), missing=_missing(2, 4)))
        assert status.state is MirrorState.PARTIAL
        assert status.timestamp == _t(3)
        assert status.ratio == 0.5
        assert not status.is_full

    def test_full(self):
        status = MirrorStatus.from_captures(CaptureList(present=_present(1, 2)))
        assert status == MirrorStatus(MirrorState.FULL, _t(2), 1.0)
        assert status.is_full


class TestDisplay:

    def test_full(self):
        assert str(MirrorStatus(MirrorState.FULL, _t(2), 1.0)).endswith(", fully reflected")

    def test_partial(self):
        assert str(MirrorStatus(MirrorState.PARTIAL, _t(2), 0.5)).endswith(", only partially reflected")

    def test_empty(self):
        assert str(MirrorStatus(MirrorState.EMPTY, _t(2), 0.0)).startswith("mirror has no captures since ")


def test_state_values():
    assert [s.value for s in MirrorState] == ["empty", "partial", "full"]
