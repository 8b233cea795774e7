from typing import Any, Callable, Dict, Generator, Iterable, List, Optional, Set

import pytest

from spindown.common.config import Config

DEFAULT_SETTINGS: Dict[str, Any] = {
    "timeout": 3600,
    "poll_time": 600,
    "drives": [],
    "manual_mode": False,
    "quiet": False,
    "verbose": True,
    "dry_run": False,
    "device_pattern": "(hd|sd)[a-z]+",
    "iostat_command": "iostat",
    "hdparm_command": "/sbin/hdparm",
}


@pytest.fixture(autouse=True)
def init_logger_factory() -> Generator[None, None, None]:
    from spindown.common.logger import LoggerFactory

    LoggerFactory._LoggerFactory__instance = None  # type: ignore
    LoggerFactory(parent_logger_name="spindown", verbose=True)
    yield
    LoggerFactory._LoggerFactory__instance = None  # type: ignore


@pytest.fixture(autouse=True)
def reset_config_base_path() -> Generator[None, None, None]:
    from spindown.common.config import BoundConfig
    from spindown.common.config.bound import DEFAULT_CONFIG_DIR

    yield
    BoundConfig.set_config_base_path(DEFAULT_CONFIG_DIR)


@pytest.fixture
def make_config() -> Callable[..., Config]:
    def _make_config(**settings: Any) -> Config:
        return Config({**DEFAULT_SETTINGS, **settings})

    return _make_config


class FakeIostat:
    """Replays one set of active devices per sampling window."""

    def __init__(self, devices: Iterable[str], active_per_window: Optional[List[Set[str]]] = None) -> None:
        self.devices = list(devices)
        self.active_per_window = list(active_per_window or [])
        self.windows: List[int] = []
        self.list_calls = 0

    async def list_devices(self) -> List[str]:
        self.list_calls += 1
        return list(self.devices)

    async def active_devices(self, window_seconds: int) -> Set[str]:
        self.windows.append(window_seconds)
        if self.active_per_window:
            return self.active_per_window.pop(0)
        return set()


class FakeHdparm:
    """Drives spin until they are told to spin down."""

    def __init__(self, stopped: Iterable[str] = ()) -> None:
        self.stopped = set(stopped)
        self.queries: List[str] = []
        self.spin_downs: List[str] = []

    async def is_spinning(self, drive_name: str) -> bool:
        self.queries.append(drive_name)
        return drive_name not in self.stopped

    async def spin_down(self, drive_name: str) -> None:
        self.spin_downs.append(drive_name)
        self.stopped.add(drive_name)


@pytest.fixture
def fake_iostat() -> Callable[..., FakeIostat]:
    return FakeIostat


@pytest.fixture
def fake_hdparm() -> Callable[..., FakeHdparm]:
    return FakeHdparm
