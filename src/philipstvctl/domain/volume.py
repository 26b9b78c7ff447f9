from dataclasses import dataclass
from typing import Any


@dataclass
class VolumeState:
    min: int = 0
    max: int = 0
    current: int = 0
    muted: bool = False
    populated: bool = False

    def merge(self, data: dict[str, Any]) -> None:
        # Shallow overwrite: fields missing from the response keep their value.
        # All fields are converted before any is assigned.
        levels = {name: int(data[name]) for name in ("min", "max", "current") if name in data}
        muted = bool(data["muted"]) if "muted" in data else self.muted
        for name, value in levels.items():
            setattr(self, name, value)
        self.muted = muted
        if "min" in levels and "max" in levels:
            self.populated = True

    def to_payload(self) -> dict[str, Any]:
        return {
            "min": self.min,
            "max": self.max,
            "current": self.current,
            "muted": self.muted,
        }


def to_percent(state: VolumeState) -> int:
    """Native level -> 0..100, rounded down.

    Integer arithmetic keeps e.g. 29/100 at 29 instead of 28.999...
    A device reporting ``min == max`` has no usable range and reads as 0.
    """
    span = state.max - state.min
    if span == 0:
        return 0
    return (state.current - state.min) * 100 // span


def from_percent(state: VolumeState, percent: int) -> int:
    """0..100 -> native level, rounded half up."""
    span = state.max - state.min
    return state.min + (span * percent * 2 + 100) // 200


def clamp_percent(value: int) -> int:
    return max(0, min(100, int(value)))
