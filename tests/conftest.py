"""
Shared pytest fixtures for reflector tests.

Provides reusable fixtures for:
- A fixed clock (no test depends on the real time of day)
- A fake remote client serving canned content from a dict
- Local stores rooted in tmp_path

These fixtures avoid any network access during test execution.
"""

import os
from datetime import datetime, timedelta, timezone

import pytest

from naming.identity import IdentityCodec
from remote.client import Gotten, RemoteClient
from remote.errors import RemoteUnreachable, ResourceNotFound
from store.file_store import FileStore
from validation.settings import get_settings


# =============================================================================
# Clock Fixtures
# =============================================================================

# Mid-afternoon, so day-aligned schedules never start exactly at "now"
FIXED_NOW = datetime(2023, 10, 14, 15, 17, 30, tzinfo=timezone.utc)


@pytest.fixture
def fixed_now():
    """
    Fixed "current time": 2023-10-14 15:17:30 UTC.

    Usage:
        def test_loop(fixed_now):
            window = mirror.loop_range(fixed_now)
    """
    return FIXED_NOW


@pytest.fixture
def daily_instants():
    """The five midnights inside a five-day loop ending at FIXED_NOW, oldest first."""
    return [datetime(2023, 10, day, tzinfo=timezone.utc) for day in range(10, 15)]


# =============================================================================
# Remote Client Fixtures
# =============================================================================

class FakeRemoteClient(RemoteClient):
    """
    In-memory remote client.

    Attributes:
        resources: resource -> content served by get()
        failures: resource -> exception raised by get() instead
        reachable: ping() raises RemoteUnreachable when False
        requests: every resource passed to get(), in order
    """

    schemes = ("fake",)

    def __init__(self, resources=None, failures=None, reachable=True):
        self.resources = dict(resources or {})
        self.failures = dict(failures or {})
        self.reachable = reachable
        self.requests = []
        self.closed = False

    def url(self, resource):
        return f"fake://remote/{resource}"

    def ping(self):
        if not self.reachable:
            raise RemoteUnreachable("fake://remote/", "remote is down")
        return timedelta(milliseconds=5)

    def exists(self, resource):
        return resource in self.resources

    def get(self, resource):
        self.requests.append(resource)
        if resource in self.failures:
            raise self.failures[resource]
        if resource not in self.resources:
            raise ResourceNotFound(resource, f"no {resource} upstream")
        return Gotten(resource=resource, source=self.url(resource), content=self.resources[resource])

    def close(self):
        self.closed = True


@pytest.fixture
def fake_client():
    """
    Empty FakeRemoteClient.

    Usage:
        def test_fill(fake_client):
            fake_client.resources["2023-10-12T00:00:00+00:00"] = b"data"
    """
    return FakeRemoteClient()


# =============================================================================
# Store Fixtures
# =============================================================================

@pytest.fixture
def store_dir(tmp_path):
    """Existing, empty store directory."""
    path = tmp_path / "store"
    path.mkdir()
    return path


@pytest.fixture
def make_store(store_dir):
    """
    Factory for FileStore instances rooted at store_dir.

    Usage:
        def test_diff(make_store):
            store = make_store(GoesCodec(prefix="ABI_TrueColor_"))
    """
    def _make(codec=None, flatten=False):
        return FileStore(str(store_dir), codec or IdentityCodec(), flatten=flatten)
    return _make


@pytest.fixture
def touch(store_dir):
    """Create a file in the store by relative name (parents included)."""
    def _touch(name, content=b"capture"):
        path = os.path.join(str(store_dir), name)
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, 'wb') as f:
            f.write(content)
        return path
    return _touch


# =============================================================================
# Settings Fixtures
# =============================================================================

@pytest.fixture
def clean_settings(monkeypatch):
    """Clear REFLECTOR_* environment variables and the cached settings."""
    for key in list(os.environ):
        if key.startswith("REFLECTOR_"):
            monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
