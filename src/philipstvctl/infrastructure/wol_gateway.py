import asyncio
import logging
from dataclasses import dataclass

import wakeonlan

from philipstvctl.application.ports import WakeSignaler
from philipstvctl.domain.errors import TransportError

LOG = logging.getLogger(__name__)


@dataclass
class WakeOnLanGateway(WakeSignaler):
    broadcast: str = "255.255.255.255"
    port: int = 9

    async def wake_async(self, mac: str) -> None:
        LOG.debug("sending magic packet mac=%s broadcast=%s:%d", mac, self.broadcast, self.port)
        try:
            await asyncio.to_thread(
                wakeonlan.send_magic_packet,
                mac,
                ip_address=self.broadcast,
                port=self.port,
            )
        except (OSError, ValueError) as exc:
            raise TransportError(f"wake-on-lan failed for {mac}: {exc}") from exc
