from dataclasses import dataclass, field
from typing import Any, Iterable, Sequence

LIVE_TV_PACKAGES = frozenset({"org.droidtv.channels", "org.droidtv.playtv"})
NOT_FOUND = 0


def as_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class Channel:
    ccid: Any
    preset: int | None
    name: str = ""
    raw: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> "Channel":
        return cls(
            ccid=data.get("ccid"),
            preset=as_int(data.get("preset")),
            name=str(data.get("name") or ""),
            raw=dict(data),
        )


@dataclass(frozen=True)
class SourceDescriptor:
    """A selectable input: a channel preset, an app launch payload, or neither.

    Neither means "go back to live TV".
    """

    name: str = ""
    channel: int | None = None
    launch: dict[str, Any] | None = None

    def __post_init__(self) -> None:
        if self.channel is not None and self.launch is not None:
            raise ValueError("source cannot set both channel and launch")

    @property
    def launch_package(self) -> str | None:
        try:
            return self.launch["intent"]["component"]["packageName"]
        except (KeyError, TypeError):
            return None


def select_preset(channels: Iterable[Channel], preset: Any) -> Any:
    """ccid of the last listed channel carrying ``preset``, or ``NOT_FOUND``."""
    wanted = as_int(preset)
    if wanted is None:
        return NOT_FOUND
    selected = NOT_FOUND
    for channel in channels:
        if channel.preset == wanted:
            selected = channel.ccid
    return selected


def select_source(
    candidates: Sequence[SourceDescriptor],
    package_name: str | None,
    live_preset: int | None,
) -> int:
    """Index of the active candidate; later matches overwrite earlier ones."""
    selected = 0
    for index, item in enumerate(candidates):
        if live_preset and item.channel is not None and as_int(item.channel) == live_preset:
            selected = index
        elif item.launch and package_name and item.launch_package == package_name:
            selected = index
    return selected
