from typing import List, Protocol, Set

from spindown.common.logger import LoggerFactory

LOG = LoggerFactory.get_logger(__name__)


class ActivityProbe(Protocol):
    async def list_devices(self) -> List[str]:
        ...

    async def active_devices(self, window_seconds: int) -> Set[str]:
        ...


class ActivitySampler:
    def __init__(self, probe: ActivityProbe) -> None:
        self._probe = probe

    async def sample(self, window_seconds: int) -> Set[str]:
        """Block for window_seconds and return every visible device without I/O in that window."""
        active = await self._probe.active_devices(window_seconds)
        visible = set(await self._probe.list_devices())
        idle = visible - active
        LOG.debug(f"idle devices: {' '.join(sorted(idle))}")
        return idle
