from enum import Enum
from typing import Protocol

from spindown.common.config import Config
from spindown.common.logger import LoggerFactory
from spindown.hardware.drive import Drive

LOG = LoggerFactory.get_logger(__name__)


class PowerInterface(Protocol):
    async def is_spinning(self, drive_name: str) -> bool:
        ...

    async def spin_down(self, drive_name: str) -> None:
        ...


class SpindownResult(Enum):
    SPUN_DOWN = "spun down"
    DRY_RUN = "spun down (dry run)"
    ALREADY_STOPPED = "already spun down"
    UNSUPPORTED = "unsupported"


class SpindownActuator:
    def __init__(self, config: Config, power: PowerInterface) -> None:
        self._dry_run: bool = config.dry_run
        self._power = power

    async def spin_down(self, drive: Drive) -> SpindownResult:
        if not drive.protocol.is_supported:
            LOG.warning(f"Cannot spin down {drive.name}: {drive.protocol.value} drives are not supported")
            return SpindownResult.UNSUPPORTED
        if not await self._power.is_spinning(drive.name):
            LOG.debug(f"Drive is already spun down: {drive.name}")
            return SpindownResult.ALREADY_STOPPED
        if self._dry_run:
            result = SpindownResult.DRY_RUN
        else:
            await self._power.spin_down(drive.name)
            result = SpindownResult.SPUN_DOWN
        LOG.info(f"Spun down idle drive: {drive.name}")
        return result
