import asyncio
import signal
from typing import Optional

from spindown.common.config import Config
from spindown.common.logger import LoggerFactory
from spindown.hardware.hdparm import Hdparm
from spindown.hardware.iostat import Iostat
from spindown.logic.actuator import SpindownActuator
from spindown.logic.monitor import Monitor
from spindown.logic.registry import DriveRegistry
from spindown.logic.sampler import ActivitySampler

LOG = LoggerFactory.get_logger(__name__)

TERMINATION_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class SpindownApplication:
    def __init__(self, config: Config, iostat: Optional[Iostat] = None, hdparm: Optional[Hdparm] = None) -> None:
        self._config = config
        self._iostat = iostat or Iostat(config)
        self._hdparm = hdparm or Hdparm(config)

    def start(self) -> None:
        asyncio.run(self.run())

    async def run(self, max_iterations: Optional[int] = None) -> None:
        self._install_signal_handlers()
        try:
            monitor = await self.prepare_monitor()
            await monitor.run(max_iterations)
        except asyncio.CancelledError:
            LOG.info("Received termination request. Stopped monitoring drives")
        finally:
            self._remove_signal_handlers()

    async def prepare_monitor(self) -> Monitor:
        if self._config.dry_run:
            LOG.info("Performing a dry run...")
        drives = await DriveRegistry(self._config, self._iostat).discover()
        for drive in drives.values():
            LOG.debug(f"Detected drive {drive.name} as {drive.protocol.value} device")
        LOG.info(f"Monitoring drives with a timeout of {self._config.timeout} seconds: {' '.join(drives)}")
        LOG.info(f"I/O check sample period: {self._config.poll_time} sec")
        return Monitor(
            self._config,
            drives,
            sampler=ActivitySampler(self._iostat),
            actuator=SpindownActuator(self._config, self._hdparm),
        )

    @staticmethod
    def _install_signal_handlers() -> None:
        loop = asyncio.get_running_loop()
        task = asyncio.current_task()
        assert task is not None
        for signal_number in TERMINATION_SIGNALS:
            try:
                loop.add_signal_handler(signal_number, task.cancel)
            except (NotImplementedError, RuntimeError):
                LOG.debug(f"Cannot install handler for {signal_number.name}")

    @staticmethod
    def _remove_signal_handlers() -> None:
        loop = asyncio.get_running_loop()
        for signal_number in TERMINATION_SIGNALS:
            try:
                loop.remove_signal_handler(signal_number)
            except (NotImplementedError, RuntimeError):
                pass
