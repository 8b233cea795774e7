from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Optional, Tuple

import click

from spindown import __version__

if TYPE_CHECKING:
    from spindown.common.config import Config

USAGE_EXAMPLES = """
\b
Example usage:
  spindown
  spindown -q -t 3600 -p 600 -i sda -i sdb
  spindown -q -m -i sda -i sdb -i hda
"""


def setup_logger(verbose: bool, quiet: bool) -> None:
    from spindown.common.logger import LoggerFactory

    if LoggerFactory.is_initialized():
        LoggerFactory.configure(verbose=verbose, quiet=quiet)
    else:
        LoggerFactory(parent_logger_name="spindown", verbose=verbose, quiet=quiet)


def load_config(config_dir: Optional[Path], overrides: Dict[str, Any], extra_drives: Tuple[str, ...]) -> "Config":
    """Read spindown.json and apply the command line on top of it."""
    from spindown.common.config import BoundConfig, get_config
    from spindown.common.exceptions import ConfigValidationError

    if config_dir is not None:
        BoundConfig.set_config_base_path(config_dir)
    try:
        file_config = get_config("spindown.json")
        file_config.validate()
        if extra_drives:
            overrides["drives"] = list(file_config.drives) + list(extra_drives)
        config = file_config.with_overrides(overrides)
        file_config.validate(config)
    except ConfigValidationError as e:
        raise click.UsageError(str(e))
    return config


@click.command(context_settings={"help_option_names": ["-h", "--help"]}, epilog=USAGE_EXAMPLES)
@click.option("-q", "--quiet", is_flag=True, help="Quiet mode. Outputs are suppressed.")
@click.option("-v", "--verbose", is_flag=True, help="Verbose mode. Prints additional information during execution.")
@click.option("-d", "--dry-run", is_flag=True, help="Dry run. No actual spindown is performed.")
@click.option(
    "-m",
    "--manual",
    "manual_mode",
    is_flag=True,
    help="Manual mode. Disables automatic drive detection, -i then lists the drives to monitor.",
)
@click.option(
    "-t",
    "--timeout",
    type=click.IntRange(min=1),
    help="Number of seconds to wait for I/O in total before considering a drive as idle.",
)
@click.option(
    "-p",
    "--poll-time",
    type=click.IntRange(min=1),
    help="Number of seconds to wait for I/O during a single iostat call.",
)
@click.option(
    "-i",
    "--drive",
    "drives",
    multiple=True,
    metavar="DRIVE",
    help="Automatic mode: never spin down DRIVE. Manual mode [-m]: only monitor DRIVE. Can be repeated.",
)
@click.option(
    "-c",
    "--config-dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Directory containing spindown.json.",
)
@click.version_option(__version__, "--version")
def main(
    quiet: bool,
    verbose: bool,
    dry_run: bool,
    manual_mode: bool,
    timeout: Optional[int],
    poll_time: Optional[int],
    drives: Tuple[str, ...],
    config_dir: Optional[Path],
) -> None:
    """Monitors drive I/O and forces HDD spindown after a given idle period.

    A drive is considered as idle and is spun down if there has been no I/O
    operations on it for at least TIMEOUT seconds. I/O requests are detected
    during intervals with a length of POLL_TIME seconds. Detected reads or
    writes reset the drive's timer back to TIMEOUT.
    """
    setup_logger(verbose=verbose, quiet=quiet)
    config = load_config(
        config_dir,
        {
            # flags can only switch a setting on, the config file decides otherwise
            "quiet": quiet or None,
            "verbose": verbose or None,
            "dry_run": dry_run or None,
            "manual_mode": manual_mode or None,
            "timeout": timeout,
            "poll_time": poll_time,
        },
        drives,
    )

    from spindown.common.logger import LoggerFactory
    from spindown.spindown_application import SpindownApplication

    LoggerFactory.configure(verbose=config.verbose, quiet=config.quiet)
    SpindownApplication(config).start()


if __name__ == "__main__":
    main()
