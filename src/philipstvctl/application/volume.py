import asyncio
import logging

from philipstvctl.application.ports import JsonTransport
from philipstvctl.domain.errors import ParseError, PhilipsTVError
from philipstvctl.domain.volume import VolumeState, clamp_percent, from_percent, to_percent

LOG = logging.getLogger(__name__)
_VOLUME_PATH = "audio/volume"


class VolumeNormalizer:
    """Owns the last known ``audio/volume`` state and maps it to 0..100.

    The state reflects the last value the device confirmed: optimistic local
    writes are rolled back when the device rejects them.
    """

    def __init__(self, transport: JsonTransport) -> None:
        self.transport = transport
        self.state = VolumeState()
        self._lock = asyncio.Lock()

    async def get_volume_async(self) -> int | bool:
        async with self._lock:
            try:
                await self._refresh_async()
            except PhilipsTVError as exc:
                LOG.debug("volume read failed: %s", exc)
                return False
            if self.state.max == self.state.min:
                LOG.debug("device reports empty volume range min=max=%d", self.state.min)
            return to_percent(self.state)

    async def set_volume_async(self, percent: int) -> int | bool:
        percent = clamp_percent(percent)
        async with self._lock:
            if not await self._ensure_populated_async():
                return False
            previous = self.state.current
            self.state.current = from_percent(self.state, percent)
            if await self._write_async():
                return percent
            self.state.current = previous
            return False

    async def set_mute_async(self, value: bool) -> bool:
        if await self.write_mute_async(value):
            return value
        return False

    async def write_mute_async(self, value: bool) -> bool:
        """Like ``set_mute_async`` but returns whether the device accepted it."""
        # The device field is stored inverted relative to the caller's value;
        # kept as-is for wire compatibility with the TV firmware.
        async with self._lock:
            if not await self._ensure_populated_async():
                return False
            previous = self.state.muted
            self.state.muted = not value
            if await self._write_async():
                return True
            self.state.muted = previous
            return False

    async def _ensure_populated_async(self) -> bool:
        # Writes send the whole state back, so min/max/current must be known.
        if self.state.populated:
            return True
        try:
            await self._refresh_async()
        except PhilipsTVError as exc:
            LOG.debug("volume state unknown, write skipped: %s", exc)
            return False
        if not self.state.populated:
            LOG.debug("volume response lacks min/max, write skipped")
            return False
        return True

    async def _refresh_async(self) -> None:
        data = await self.transport.request_async(_VOLUME_PATH)
        try:
            self.state.merge(data)
        except (TypeError, ValueError) as exc:
            raise ParseError(f"Unexpected volume payload: {data}") from exc
        LOG.debug(
            "volume state min=%d max=%d current=%d muted=%s",
            self.state.min,
            self.state.max,
            self.state.current,
            self.state.muted,
        )

    async def _write_async(self) -> bool:
        try:
            await self.transport.request_async(_VOLUME_PATH, self.state.to_payload())
        except PhilipsTVError as exc:
            LOG.warning("volume write failed: %s", exc)
            return False
        return True
