import asyncio
from asyncio.subprocess import PIPE
from typing import List

from spindown.common.exceptions import ExternalCommandError
from spindown.common.logger import LoggerFactory

LOG = LoggerFactory.get_logger(__name__)


async def run_command(command: List[str]) -> str:
    """Run an external command to completion and return its stdout.

    The child process is killed if the awaiting task gets cancelled.
    """
    LOG.debug(f"running: {' '.join(command)}")
    try:
        process = await asyncio.create_subprocess_exec(*command, stdout=PIPE, stderr=PIPE)
    except OSError as e:
        raise ExternalCommandError(f"Cannot execute {command[0]}: {e}") from e
    try:
        stdout, stderr = await process.communicate()
    except asyncio.CancelledError:
        _kill(process)
        raise
    if process.returncode != 0:
        raise ExternalCommandError(
            f"{' '.join(command)} exited with {process.returncode}: {stderr.decode(errors='replace').strip()}"
        )
    return stdout.decode(errors="replace")


def _kill(process: asyncio.subprocess.Process) -> None:
    if process.returncode is None:
        try:
            process.kill()
        except ProcessLookupError:
            pass
