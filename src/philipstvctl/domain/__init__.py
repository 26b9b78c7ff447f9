from .errors import ConfigError, ParseError, PhilipsTVError, TransportError
from .sources import Channel, SourceDescriptor, select_preset, select_source
from .volume import VolumeState
from .wake import WakeResult, WakeStatus, parse_wake_target

__all__ = [
    "ConfigError",
    "ParseError",
    "PhilipsTVError",
    "TransportError",
    "Channel",
    "SourceDescriptor",
    "select_preset",
    "select_source",
    "VolumeState",
    "WakeResult",
    "WakeStatus",
    "parse_wake_target",
]
