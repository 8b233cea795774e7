import re
from typing import List, Protocol

from spindown.common.config import Config
from spindown.common.exceptions import ExternalCommandError
from spindown.common.logger import LoggerFactory
from spindown.hardware.drive import Drive, DriveSet, ProtocolFamily

LOG = LoggerFactory.get_logger(__name__)


class DeviceLister(Protocol):
    async def list_devices(self) -> List[str]:
        ...


class DriveRegistry:
    def __init__(self, config: Config, lister: DeviceLister) -> None:
        self._config = config
        self._lister = lister

    async def discover(self) -> DriveSet:
        if self._config.manual_mode:
            names = list(dict.fromkeys(self._config.drives))
        else:
            names = await self._detect_drive_names()
        return {name: Drive(name=name, protocol=self._detect_protocol(name)) for name in names}

    async def _detect_drive_names(self) -> List[str]:
        try:
            devices = await self._lister.list_devices()
        except ExternalCommandError as e:
            LOG.warning(f"Drive detection failed, no drives will be monitored: {e}")
            return []
        pattern = re.compile(self._config.device_pattern)
        ignored = set(self._config.drives)
        names = [name for name in dict.fromkeys(devices) if pattern.fullmatch(name) and name not in ignored]
        if not names:
            LOG.warning("No drives to monitor detected")
        return names

    @staticmethod
    def _detect_protocol(drive_name: str) -> ProtocolFamily:
        # TODO: distinguish SCSI drives (e.g. via the transport reported by lsblk) once sdparm is supported
        return ProtocolFamily.ATA
