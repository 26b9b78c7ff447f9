import asyncio
import logging
from typing import Any

from philipstvctl.application.ports import JsonTransport
from philipstvctl.domain.sources import Channel, select_preset

LOG = logging.getLogger(__name__)
_CHANNEL_LIST_PATH = "channeldb/tv/channelLists/all"


class ChannelDirectory:
    """Channel list fetched on first use and kept for the process lifetime.

    Concurrent first lookups share one fetch. An empty list counts as not
    loaded and is fetched again on the next lookup.
    """

    def __init__(self, transport: JsonTransport) -> None:
        self.transport = transport
        self._channels: tuple[Channel, ...] = ()
        self._lock = asyncio.Lock()

    async def channels_async(self) -> tuple[Channel, ...]:
        async with self._lock:
            if not self._channels:
                self._channels = await self._fetch_async()
            return self._channels

    async def resolve_preset_async(self, preset: Any) -> Any:
        channels = await self.channels_async()
        ccid = select_preset(channels, preset)
        LOG.debug("preset %s resolved to ccid=%s", preset, ccid)
        return ccid

    def invalidate(self) -> None:
        self._channels = ()

    async def _fetch_async(self) -> tuple[Channel, ...]:
        data = await self.transport.request_async(_CHANNEL_LIST_PATH)
        rows = data.get("Channel") if isinstance(data, dict) else None
        if not isinstance(rows, list):
            LOG.debug("channel list response has no Channel array")
            return ()
        channels = tuple(Channel.from_payload(row) for row in rows if isinstance(row, dict))
        LOG.debug("loaded %d channels", len(channels))
        return channels
