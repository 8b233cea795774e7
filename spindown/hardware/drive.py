from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict


class ProtocolFamily(Enum):
    ATA = "ATA"
    SCSI = "SCSI"
    UNKNOWN = "unknown"

    @property
    def is_supported(self) -> bool:
        return self is ProtocolFamily.ATA


@dataclass(frozen=True)
class Drive:
    name: str
    protocol: ProtocolFamily = ProtocolFamily.ATA

    @property
    def device_path(self) -> str:
        return f"/dev/{self.name}"


DriveSet = Dict[str, Drive]
