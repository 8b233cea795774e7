import re

from spindown.common.config import Config
from spindown.common.exceptions import ExternalCommandError
from spindown.common.logger import LoggerFactory
from spindown.common.system import run_command

LOG = LoggerFactory.get_logger(__name__)

DRIVE_STATE_PATTERN = re.compile(r"drive state is:\s+(\S+)")


class Hdparm:
    """Power state query and control for ATA drives."""

    def __init__(self, config: Config) -> None:
        self._command: str = config.hdparm_command

    async def power_state(self, drive_name: str) -> str:
        output = await run_command([self._command, "-C", f"/dev/{drive_name}"])
        match = DRIVE_STATE_PATTERN.search(output)
        if match is None:
            raise ExternalCommandError(f"Cannot find power state of {drive_name} in: {output!r}")
        return match.group(1)

    async def is_spinning(self, drive_name: str) -> bool:
        state = await self.power_state(drive_name)
        LOG.debug(f"power state of {drive_name}: {state}")
        return self.state_is_spinning(state)

    @staticmethod
    def state_is_spinning(state: str) -> bool:
        return "active" in state or state == "idle"

    async def spin_down(self, drive_name: str) -> None:
        await run_command([self._command, "-y", f"/dev/{drive_name}"])
