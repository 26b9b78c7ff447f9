from .config import RuntimeTarget, TvConfig, load_config
from .philips_gateway import PhilipsHttpGateway
from .wol_gateway import WakeOnLanGateway

__all__ = [
    "RuntimeTarget",
    "TvConfig",
    "load_config",
    "PhilipsHttpGateway",
    "WakeOnLanGateway",
]
