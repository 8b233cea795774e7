from asyncio import sleep
from typing import AbstractSet, List, Optional, Protocol

from spindown.common.config import Config
from spindown.common.exceptions import ExternalCommandError
from spindown.common.logger import LoggerFactory
from spindown.hardware.drive import Drive, DriveSet
from spindown.logic.actuator import SpindownResult
from spindown.logic.idle_timers import IdleTimerTable

LOG = LoggerFactory.get_logger(__name__)


class Sampler(Protocol):
    async def sample(self, window_seconds: int) -> AbstractSet[str]:
        ...


class Actuator(Protocol):
    async def spin_down(self, drive: Drive) -> SpindownResult:
        ...


class Monitor:
    def __init__(self, config: Config, drives: DriveSet, sampler: Sampler, actuator: Actuator) -> None:
        self._poll_time: int = config.poll_time
        self._drives = drives
        self._sampler = sampler
        self._actuator = actuator
        self._timers = IdleTimerTable(drives, timeout=config.timeout, poll_time=config.poll_time)
        self._iterations = 0

    @property
    def timers(self) -> IdleTimerTable:
        return self._timers

    @property
    def iterations(self) -> int:
        return self._iterations

    async def run(self, max_iterations: Optional[int] = None) -> None:
        """Monitor until cancelled, or for max_iterations poll cycles."""
        LOG.debug(f"Drive timeouts: {self._timers}")
        while max_iterations is None or self._iterations < max_iterations:
            try:
                await self.run_once()
            except ExternalCommandError as e:
                LOG.error(f"Sampling drive activity failed: {e}")
                await sleep(self._poll_time)
            except Exception as e:
                LOG.exception("")
                LOG.error(f"Unknown error occurred during poll cycle: {e}")
                await sleep(self._poll_time)
            self._iterations += 1

    async def run_once(self) -> List[str]:
        """Execute one poll cycle and return the drives whose timer expired."""
        idle = await self._sampler.sample(self._poll_time)
        expired = self._timers.advance(self._drives.keys() & idle)
        for name in expired:
            await self._try_spin_down(name)
        LOG.debug(f"Drive timeouts: {self._timers}")
        return expired

    async def _try_spin_down(self, name: str) -> None:
        try:
            await self._actuator.spin_down(self._drives[name])
        except ExternalCommandError as e:
            LOG.error(f"Spinning down {name} failed: {e}")
        except Exception as e:
            LOG.exception("")
            LOG.error(f"Unknown error occurred while spinning down {name}: {e}")
