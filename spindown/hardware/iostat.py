from typing import List, Set

from spindown.common.config import Config
from spindown.common.exceptions import ExternalCommandError
from spindown.common.logger import LoggerFactory
from spindown.common.system import run_command

LOG = LoggerFactory.get_logger(__name__)


class Iostat:
    """Block device listing and activity probing through sysstat's iostat."""

    def __init__(self, config: Config) -> None:
        self._command: str = config.iostat_command

    async def list_devices(self) -> List[str]:
        """Return all block devices known to iostat, in report order."""
        output = await run_command([self._command, "-d"])
        return self._parse_device_names(output)

    async def active_devices(self, window_seconds: int) -> Set[str]:
        """Wait for window_seconds and return the devices that performed any I/O meanwhile."""
        output = await run_command([self._command, "-y", "-z", "-d", str(window_seconds), "1"])
        active = set(self._parse_device_names(output))
        LOG.debug(f"active devices during the last {window_seconds}s: {' '.join(sorted(active))}")
        return active

    @staticmethod
    def _parse_device_names(output: str) -> List[str]:
        lines = output.splitlines()
        try:
            header_index = next(i for i, line in enumerate(lines) if line.startswith("Device"))
        except StopIteration:
            raise ExternalCommandError(f"No device report found in iostat output: {output!r}")
        names = []
        for line in lines[header_index + 1 :]:
            if not line.strip():
                break
            names.append(line.split()[0])
        return names
