from typing import Any, Protocol


class JsonTransport(Protocol):
    async def request_async(self, path: str, body: Any = None) -> dict[str, Any]:
        """GET ``path`` when body is None, otherwise POST it as JSON."""
        ...


class WakeSignaler(Protocol):
    async def wake_async(self, mac: str) -> None:
        ...
