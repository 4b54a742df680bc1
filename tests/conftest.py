"""
Global test configuration: environment isolation and in-memory backends.
"""

import asyncio
import logging
import os

import pytest

from plainly.core.exceptions import HistoryStoreError
from plainly.gateway import ExplanationGateway
from plainly.history import InMemoryHistoryStore


# --- Environment Isolation (Autouse) ---
@pytest.fixture(autouse=True)
def isolate_plainly_env(request, monkeypatch):
    """Ensure a clean PLAINLY_* environment for each test.

    Escape hatch: @pytest.mark.allow_env_pollution keeps the current env.
    """
    if request.node.get_closest_marker("allow_env_pollution"):
        return

    for key in list(os.environ.keys()):
        if key.startswith("PLAINLY_"):
            monkeypatch.delenv(key, raising=False)
    # Avoid DEBUG toggles enabling telemetry
    monkeypatch.delenv("DEBUG", raising=False)


@pytest.fixture(autouse=True)
def neutral_config_files(request, monkeypatch, tmp_path):
    """Point home and project config paths at isolated temp files.

    Prevents reading a developer's real ~/.config/plainly.toml or a
    pyproject.toml found above the working directory.
    """
    if request.node.get_closest_marker("allow_real_config_files"):
        return

    isolated = tmp_path / "config_isolated"
    isolated.mkdir(parents=True, exist_ok=True)
    monkeypatch.setenv("PLAINLY_CONFIG_HOME", str(isolated / "plainly.toml"))
    monkeypatch.setenv("PLAINLY_PYPROJECT_PATH", str(isolated / "pyproject.toml"))


# --- Logging Fixtures ---
@pytest.fixture(scope="session", autouse=True)
def quiet_noisy_libraries():
    """Sets the log level for noisy external libraries to WARNING."""
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


# --- Test Environment Markers ---
def pytest_configure(config):
    """Configure custom markers for test organization."""
    markers = [
        "unit: Fast, isolated unit tests",
        "contract: Behavioral guarantees of public components",
        "integration: Component integration tests with fake backends",
        "characterization: Pins current behavior, including known edge cases",
        "allow_env_pollution: Keep PLAINLY_* environment variables",
        "allow_real_config_files: Read real home and project config files",
    ]
    for marker in markers:
        config.addinivalue_line("markers", marker)


# --- Fake backends ---


class FakeLocalBackend:
    """Records prompts; answers with `reply` or raises `error`."""

    def __init__(self, reply="local markdown"):
        self.reply = reply
        self.error: Exception | None = None
        self.prompts: list[str] = []

    async def generate(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


class FakeCloudBackend:
    """Records every call as `(capability, prompt, payload, mime_type)`.

    Set `gate` to an `asyncio.Event` to hold calls until it is set, and
    `replies` to hand out answers in order.
    """

    def __init__(self, reply="cloud markdown"):
        self.reply = reply
        self.replies: list[str] = []
        self.error: Exception | None = None
        self.gate: asyncio.Event | None = None
        self.calls: list[tuple[str, str, object, str | None]] = []

    async def _answer(self, capability, prompt, payload=None, mime_type=None):
        self.calls.append((capability, prompt, payload, mime_type))
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        if self.replies:
            return self.replies.pop(0)
        return self.reply

    async def generate_text(self, prompt):
        return await self._answer("text", prompt)

    async def generate_with_bytes(self, prompt, data, mime_type):
        return await self._answer("bytes", prompt, data, mime_type)

    async def generate_with_reference(self, prompt, uri, mime_type):
        return await self._answer("reference", prompt, uri, mime_type)


class CountingGateway(ExplanationGateway):
    """Gateway that counts dispatches on top of the real routing."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.dispatch_count = 0

    async def dispatch(self, kind, mode):
        self.dispatch_count += 1
        return await super().dispatch(kind, mode)


class FailingHistoryStore(InMemoryHistoryStore):
    """History store whose appends always fail."""

    def __init__(self, error: Exception):
        super().__init__()
        self.error = error

    async def append(self, record):
        raise self.error


# --- Core Fixtures ---


@pytest.fixture
def fake_local():
    return FakeLocalBackend()


@pytest.fixture
def fake_cloud():
    return FakeCloudBackend()


@pytest.fixture
def gateway(fake_local, fake_cloud):
    return CountingGateway(local=fake_local, cloud=fake_cloud, timeout=5.0)


@pytest.fixture
def history_store():
    return InMemoryHistoryStore()


@pytest.fixture
def failing_history_store():
    return FailingHistoryStore(HistoryStoreError("disk full"))

