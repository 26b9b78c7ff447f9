import logging
from typing import Any, Callable, Sequence

from philipstvctl.application.channels import ChannelDirectory
from philipstvctl.application.ports import JsonTransport, WakeSignaler
from philipstvctl.application.sources import SourceResolver
from philipstvctl.application.volume import VolumeNormalizer
from philipstvctl.domain.errors import ConfigError, PhilipsTVError
from philipstvctl.domain.sources import NOT_FOUND, Channel, SourceDescriptor
from philipstvctl.domain.wake import WakeResult, WakeStatus, parse_wake_target

LOG = logging.getLogger(__name__)

WATCH_TV_KEY = "WatchTV"
AMBILIGHT_ON_PROFILE = {
    "styleName": "FOLLOW_VIDEO",
    "isExpert": False,
    "menuSetting": "NATURAL",
}

WakeCallback = Callable[[WakeResult], None]


class DeviceController:
    """One coroutine per user-facing TV capability.

    Every operation returns a plain value: device failures are logged and
    turned into a default (``False`` / ``0``) instead of being raised.
    """

    def __init__(
        self,
        transport: JsonTransport,
        wake_signaler: WakeSignaler | None = None,
        wol_url: str = "",
    ) -> None:
        self.transport = transport
        self.wake_signaler = wake_signaler
        self.wol_url = wol_url
        self.volume = VolumeNormalizer(transport)
        self.channels = ChannelDirectory(transport)
        self.sources = SourceResolver(transport)

    # ---- power ----
    async def get_power_state_async(self) -> bool:
        try:
            data = await self.transport.request_async("powerstate")
        except PhilipsTVError as exc:
            LOG.debug("power state read failed, assuming off: %s", exc)
            return False
        return data.get("powerstate") == "On"

    async def set_power_state_async(self, on: bool, on_wake: WakeCallback | None = None) -> bool:
        if on:
            # The network stack of a TV in deep standby only comes up after a
            # magic packet; the outcome never blocks the power write.
            await self.wake_async(on_wake)
        if await self._post_async("powerstate", {"powerstate": "On" if on else "Standby"}):
            return bool(on)
        return False

    async def wake_async(self, on_wake: WakeCallback | None = None) -> WakeResult:
        result = await self._wake_once_async()
        LOG.debug("wake result status=%s mac=%s", result.status.value, result.mac)
        if on_wake is not None:
            try:
                on_wake(result)
            except Exception:
                LOG.warning("wake callback failed", exc_info=True)
        return result

    async def _wake_once_async(self) -> WakeResult:
        try:
            mac = parse_wake_target(self.wol_url)
        except ConfigError as exc:
            LOG.warning("wake skipped: %s", exc)
            return WakeResult(status=WakeStatus.ERROR, error=exc)
        if mac is None or self.wake_signaler is None:
            return WakeResult(status=WakeStatus.EMPTY)
        try:
            await self.wake_signaler.wake_async(mac)
        except PhilipsTVError as exc:
            LOG.warning("wake-on-lan to %s failed: %s", mac, exc)
            return WakeResult(status=WakeStatus.ERROR, mac=mac, error=exc)
        return WakeResult(status=WakeStatus.OK, mac=mac)

    # ---- commands ----
    async def send_key_async(self, key: str) -> bool:
        return await self._post_async("input/key", {"key": key})

    async def set_channel_async(self, ccid: Any) -> bool:
        return await self._post_async(
            "activities/tv",
            {"channel": {"ccid": ccid}, "channelList": {"id": "allsat"}},
        )

    async def launch_app_async(self, app: dict[str, Any]) -> bool:
        return await self._post_async("activities/launch", app)

    # ---- sources ----
    async def get_channel_list_async(self) -> tuple[Channel, ...]:
        try:
            return await self.channels.channels_async()
        except PhilipsTVError as exc:
            LOG.debug("channel list read failed: %s", exc)
            return ()

    async def set_source_async(self, source: SourceDescriptor) -> None:
        # Preset 0 is not a channel; it falls through to WatchTV.
        if source.channel:
            await self.send_key_async(WATCH_TV_KEY)
            try:
                ccid = await self.channels.resolve_preset_async(source.channel)
            except PhilipsTVError as exc:
                LOG.warning("cannot load channel list for preset %s: %s", source.channel, exc)
                return
            if ccid == NOT_FOUND:
                LOG.warning("no channel found for preset %s", source.channel)
                return
            await self.set_channel_async(ccid)
        elif source.launch:
            await self.launch_app_async(source.launch)
        else:
            await self.send_key_async(WATCH_TV_KEY)

    async def get_current_source_async(self, candidates: Sequence[SourceDescriptor]) -> int:
        return await self.sources.current_index_async(candidates)

    # ---- ambilight ----
    async def get_ambilight_state_async(self) -> bool:
        try:
            data = await self.transport.request_async("ambilight/power")
        except PhilipsTVError as exc:
            LOG.debug("ambilight read failed: %s", exc)
            return False
        return data.get("power") == "On"

    async def set_ambilight_state_async(self, on: bool) -> bool:
        if on:
            return await self._post_async(
                "ambilight/currentconfiguration", dict(AMBILIGHT_ON_PROFILE)
            )
        await self._post_async("ambilight/power", {"power": "Off"})
        return False

    # ---- volume ----
    async def get_volume_async(self) -> int | bool:
        return await self.volume.get_volume_async()

    async def set_volume_async(self, percent: int) -> int | bool:
        return await self.volume.set_volume_async(percent)

    async def set_mute_async(self, value: bool) -> bool:
        return await self.volume.set_mute_async(value)

    async def write_mute_async(self, value: bool) -> bool:
        return await self.volume.write_mute_async(value)

    async def _post_async(self, path: str, body: Any) -> bool:
        try:
            await self.transport.request_async(path, body)
        except PhilipsTVError as exc:
            LOG.warning("command %s failed: %s", path, exc)
            return False
        return True
