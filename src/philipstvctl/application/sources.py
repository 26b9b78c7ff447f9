import logging
from typing import Sequence

from philipstvctl.application.ports import JsonTransport
from philipstvctl.domain.errors import PhilipsTVError
from philipstvctl.domain.sources import LIVE_TV_PACKAGES, SourceDescriptor, as_int, select_source

LOG = logging.getLogger(__name__)


class SourceResolver:
    """Works out which configured source is on screen.

    ``activities/current`` names the foreground package; for the live TV
    packages ``activities/tv`` gives the tuned preset. Any failure reads as
    index 0.
    """

    def __init__(self, transport: JsonTransport) -> None:
        self.transport = transport

    async def current_index_async(self, candidates: Sequence[SourceDescriptor]) -> int:
        try:
            package_name, live_preset = await self._active_activity_async()
        except (PhilipsTVError, KeyError, TypeError) as exc:
            LOG.debug("current source lookup failed: %s", exc)
            return 0
        selected = select_source(candidates, package_name, live_preset)
        LOG.debug(
            "current source package=%s preset=%s selected=%d",
            package_name,
            live_preset,
            selected,
        )
        return selected

    async def _active_activity_async(self) -> tuple[str, int | None]:
        current = await self.transport.request_async("activities/current")
        package_name = current["component"]["packageName"]
        live_preset = None
        if package_name in LIVE_TV_PACKAGES:
            tv = await self.transport.request_async("activities/tv")
            live_preset = as_int(tv["channel"]["preset"])
        return package_name, live_preset
