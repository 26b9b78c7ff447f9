import asyncio
from dataclasses import dataclass
from typing import Any, Sequence

from philipstvctl.application.controller import DeviceController, WakeCallback
from philipstvctl.domain.sources import Channel, SourceDescriptor
from philipstvctl.domain.wake import WakeResult
from philipstvctl.infrastructure.philips_gateway import PhilipsHttpGateway
from philipstvctl.infrastructure.wol_gateway import WakeOnLanGateway


@dataclass
class PhilipsTVClient:
    address: str
    port: int = 1925
    api_version: int = 6
    timeout_s: float = 3.0
    wol_url: str = ""
    wol_broadcast: str = "255.255.255.255"
    wol_port: int = 9

    def __post_init__(self) -> None:
        self._gateway = PhilipsHttpGateway(
            address=self.address,
            port=self.port,
            api_version=self.api_version,
            timeout_s=self.timeout_s,
        )
        self._controller = DeviceController(
            transport=self._gateway,
            wake_signaler=WakeOnLanGateway(broadcast=self.wol_broadcast, port=self.wol_port),
            wol_url=self.wol_url,
        )

    @staticmethod
    def _run(coro):
        return asyncio.run(coro)

    def get_power_state(self) -> bool:
        return self._run(self._controller.get_power_state_async())

    def set_power_state(self, on: bool, on_wake: WakeCallback | None = None) -> bool:
        return self._run(self._controller.set_power_state_async(on, on_wake))

    def wake(self) -> WakeResult:
        return self._run(self._controller.wake_async())

    def send_key(self, key: str) -> bool:
        return self._run(self._controller.send_key_async(key))

    def launch_app(self, app: dict[str, Any]) -> bool:
        return self._run(self._controller.launch_app_async(app))

    def get_channel_list(self) -> tuple[Channel, ...]:
        return self._run(self._controller.get_channel_list_async())

    def set_source(self, source: SourceDescriptor) -> None:
        self._run(self._controller.set_source_async(source))

    def get_current_source(self, candidates: Sequence[SourceDescriptor]) -> int:
        return self._run(self._controller.get_current_source_async(candidates))

    def get_ambilight_state(self) -> bool:
        return self._run(self._controller.get_ambilight_state_async())

    def set_ambilight_state(self, on: bool) -> bool:
        return self._run(self._controller.set_ambilight_state_async(on))

    def get_volume(self) -> int | bool:
        return self._run(self._controller.get_volume_async())

    def set_volume(self, percent: int) -> int | bool:
        return self._run(self._controller.set_volume_async(percent))

    def set_mute(self, value: bool) -> bool:
        return self._run(self._controller.set_mute_async(value))

    def write_mute(self, value: bool) -> bool:
        return self._run(self._controller.write_mute_async(value))
