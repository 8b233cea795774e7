from typing import AbstractSet, Dict, Iterable, Iterator, List


class IdleTimerTable:
    """Seconds left until each monitored drive counts as idle long enough to be spun down."""

    def __init__(self, drive_names: Iterable[str], timeout: int, poll_time: int) -> None:
        self._timeout = timeout
        self._poll_time = poll_time
        self._timers: Dict[str, int] = {name: timeout for name in drive_names}

    @property
    def timeout(self) -> int:
        return self._timeout

    def advance(self, idle_drives: AbstractSet[str]) -> List[str]:
        """Apply one poll cycle and return the drives whose timer expired.

        Idle drives count down by the poll time, every other drive is re-armed to the full
        timeout. An expired timer is re-armed immediately so a drive that stays idle is
        reported again after another full timeout.
        """
        expired = []
        for name in self._timers:
            if name in idle_drives:
                self._timers[name] -= self._poll_time
                if self._timers[name] <= 0:
                    self._timers[name] = self._timeout
                    expired.append(name)
            else:
                self._timers[name] = self._timeout
        return expired

    def as_dict(self) -> Dict[str, int]:
        return dict(self._timers)

    def __getitem__(self, drive_name: str) -> int:
        return self._timers[drive_name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._timers)

    def __len__(self) -> int:
        return len(self._timers)

    def __str__(self) -> str:
        return " ".join(f"[{name}]={seconds}" for name, seconds in self._timers.items())
