"""
Mirror: keep a local file store in step with a remote source.

Each pass recomputes everything from the clock: the loop window, the
schedule of instants expected inside it, and the diff of that schedule
against the store. Filling fetches what is missing, oldest first, one
entry at a time, and never stops at the first failure.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional, TYPE_CHECKING

from naming.codec import NameCodec
from naming.factory import new_codec
from remote.client import RemoteClient
from remote.errors import RemoteError
from remote.factory import from_url
from reconciliation.status import MirrorStatus
from shared.log import create_logger
from store.capture import Capture, CaptureList, MissingCapture
from store.errors import StoreError
from store.file_store import FileStore
from timing.schedule import SampleSchedule, generate, validate_period
from timing.util import display_duration, utc_now
from timing.window import TimeWindow

if TYPE_CHECKING:
    from validation.config import SourceConfig

log_trace, log_debug, log_info, log_warn, log_error = create_logger("Mirror")


@dataclass(frozen=True)
class FetchFailure:
    """A missing capture that could not be filled, and why."""
    missing: MissingCapture
    error: Exception

    def __str__(self) -> str:
        return f"{self.missing.resource}: {self.error}"


@dataclass
class FillOutcome:
    """Result of one fill pass.

    Attributes:
        captures: Present and still-missing captures after the pass
        failures: Every entry that could not be filled, oldest first
        fetched: Captures written during this pass
    """
    captures: CaptureList
    failures: list[FetchFailure] = field(default_factory=list)
    fetched: list[Capture] = field(default_factory=list)

    @property
    def error(self) -> Optional[Exception]:
        """First failure encountered, or None."""
        return self.failures[0].error if self.failures else None

    @property
    def complete(self) -> bool:
        return not self.captures.missing


class Mirror:
    """A remote source shadowed into a local store.

    Args:
        name: Source name, for display
        period: Interval between expected captures
        offset: Phase of the captures after midnight UTC
        loop_period: Length of the window evaluated and filled by default
        store: Local store, including the codec naming its files
        client: Remote client fetching by identifier
    """

    def __init__(
        self,
        name: str,
        period: timedelta,
        offset: timedelta,
        loop_period: timedelta,
        store: FileStore,
        client: RemoteClient,
    ):
        validate_period(period, offset)
        if loop_period < timedelta(0):
            raise ValueError(f"loop period must not be negative, got {loop_period}")
        self.name = name
        self.period = period
        self.offset = offset
        self.loop_period = loop_period
        self.store = store
        self.client = client

    @classmethod
    def from_config(cls, source: "SourceConfig", client: Optional[RemoteClient] = None) -> "Mirror":
        """Build a mirror (codec, store and client) from a source configuration.

        No network access happens here.

        Raises:
            UnknownCodec, NoCodecName: Bad codec configuration
            InvalidStore: Local directory unusable
            UnsupportedScheme: No client for the remote URL
        """
        codec = new_codec(
            source.codec,
            prefix=source.prefix,
            suffix=source.suffix,
            pattern=source.pattern,
            timezone=source.timezone,
        )
        store = FileStore(source.local, codec, flatten=source.flatten)
        store.validate()
        if client is None:
            client = from_url(
                source.remote,
                username=source.username,
                password=source.password,
                timeout=source.timeout,
            )
        return cls(
            name=source.name,
            period=timedelta(seconds=source.period),
            offset=timedelta(seconds=source.offset),
            loop_period=timedelta(seconds=source.loop_period),
            store=store,
            client=client,
        )

    @property
    def codec(self) -> NameCodec:
        return self.store.codec

    def loop_range(self, now: Optional[datetime] = None) -> TimeWindow:
        """Window of one loop period ending now."""
        return self.loops_range(1, now)

    def loops_range(self, loops: int, now: Optional[datetime] = None) -> TimeWindow:
        """Window of ``loops`` loop periods ending now."""
        if now is None:
            now = utc_now()
        return TimeWindow.ending_at(now, self.loop_period * loops)

    def schedule(self, window: TimeWindow) -> SampleSchedule:
        return generate(window, self.period, self.offset)

    def identifiers(self, window: TimeWindow) -> list[str]:
        """Local names expected in a window."""
        return self.store.identifiers(self.schedule(window))

    def captures_in_range(self, window: TimeWindow) -> CaptureList:
        return self.store.diff(self.schedule(window))

    def loop_captures(self, now: Optional[datetime] = None) -> CaptureList:
        return self.captures_in_range(self.loop_range(now))

    def latest_capture(self, now: Optional[datetime] = None) -> Optional[Capture]:
        return self.loop_captures(now).latest()

    def evaluate(self, now: Optional[datetime] = None) -> MirrorStatus:
        """Ping the remote, then classify a fresh diff of the loop window.

        Raises:
            RemoteError: The remote is not reachable (nothing is diffed)
            NoArtifactsExpected: No capture is scheduled in the loop window
        """
        latency = self.client.ping()
        log_debug(f"{self} ping {latency.total_seconds() * 1000.0:.1f}ms")
        captures = self.loop_captures(now)
        log_info(f"{self} captures {captures}")
        return MirrorStatus.from_captures(captures)

    def fill(self, captures: CaptureList) -> FillOutcome:
        """Fetch every missing capture, oldest first.

        A failed entry stays missing and is recorded; the pass always visits
        every entry. The input list is not modified.
        """
        present = list(captures.present)
        missing: list[MissingCapture] = []
        failures: list[FetchFailure] = []
        fetched: list[Capture] = []
        for m in sorted(captures.missing, key=lambda m: m.time):
            log_info(f"attempting to fill missing {m.resource}")
            try:
                gotten = self.client.get(m.resource)
                path = self.store.write(m.path, gotten.content)
            except (RemoteError, StoreError) as e:
                log_warn(f"failed to fill {m.resource}: {type(e).__name__}: {e}")
                missing.append(m)
                failures.append(FetchFailure(m, e))
                continue
            log_info(f"success with {gotten.source} ({gotten.size} bytes)")
            capture = Capture(time=m.time, path=path, url=gotten.source)
            present.append(capture)
            fetched.append(capture)
        present.sort(key=lambda c: c.time)
        if failures:
            log_warn(f"{self} {len(failures)} of {len(captures.missing)} missing captures not filled")
        return FillOutcome(CaptureList(present, missing), failures, fetched)

    def fill_loop(self, now: Optional[datetime] = None) -> FillOutcome:
        return self.fill(self.loop_captures(now))

    def ping(self) -> timedelta:
        return self.client.ping()

    def exists(self, resource: str) -> bool:
        return self.client.exists(resource)

    def url(self, resource: str) -> str:
        return self.client.url(resource)

    def describe(self) -> str:
        """One-line summary of what the mirror expects."""
        return (
            f"{self.name}: every {display_duration(self.period)}"
            f" from {display_duration(self.offset)} past midnight,"
            f" loop {display_duration(self.loop_period)}, {self.store}"
        )

    def close(self) -> None:
        self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def __str__(self) -> str:
        return f"<mirror {self.name}>"
