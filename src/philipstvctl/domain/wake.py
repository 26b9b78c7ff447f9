import re
from dataclasses import dataclass
from enum import Enum

from philipstvctl.domain.errors import ConfigError

_WOL_PREFIX = re.compile(r"^WOL:?/?/?", re.IGNORECASE)


class WakeStatus(str, Enum):
    OK = "ok"
    EMPTY = "empty"
    ERROR = "error"


@dataclass(frozen=True)
class WakeResult:
    status: WakeStatus
    mac: str | None = None
    error: Exception | None = None


def parse_wake_target(value: str | None) -> str | None:
    """MAC address from ``WOL[:][//]<MAC>``, or None when wake is disabled.

    Raises ConfigError for other protocols.
    """
    raw = (value or "").strip()
    if not raw:
        return None
    if raw[:3].upper() == "WOL":
        mac = _WOL_PREFIX.sub("", raw)
        return mac or None
    if len(raw) > 3:
        raise ConfigError(f"Unsupported wake protocol: {raw}")
    return None
