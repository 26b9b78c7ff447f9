import asyncio

from philipstvctl.application.controller import DeviceController
from philipstvctl.domain.errors import ParseError, TransportError
from philipstvctl.domain.sources import SourceDescriptor
from philipstvctl.domain.wake import WakeStatus


class FakeDevice:
    """Answers per path; an exception instance as answer is raised instead."""

    def __init__(self, answers=None, post_failures=()):
        self.answers = answers or {}
        self.post_failures = set(post_failures)
        self.calls = []

    async def request_async(self, path, body=None):
        self.calls.append((path, body))
        if body is not None:
            if path in self.post_failures:
                raise TransportError(f"{path} timed out")
            return {}
        answer = self.answers.get(path, {})
        if isinstance(answer, Exception):
            raise answer
        return answer


class FakeWakeSignaler:
    def __init__(self, fail=False):
        self.fail = fail
        self.macs = []

    async def wake_async(self, mac):
        self.macs.append(mac)
        if self.fail:
            raise TransportError("no route")


def test_get_power_state_reads_on() -> None:
    ctl = DeviceController(FakeDevice({"powerstate": {"powerstate": "On"}}))
    assert asyncio.run(ctl.get_power_state_async()) is True


def test_get_power_state_standby_and_failures_read_off() -> None:
    standby = DeviceController(FakeDevice({"powerstate": {"powerstate": "Standby"}}))
    broken = DeviceController(FakeDevice({"powerstate": ParseError("garbage")}))
    unreachable = DeviceController(FakeDevice({"powerstate": TransportError("timeout")}))
    assert asyncio.run(standby.get_power_state_async()) is False
    assert asyncio.run(broken.get_power_state_async()) is False
    assert asyncio.run(unreachable.get_power_state_async()) is False


def test_power_on_wakes_then_writes_power_state() -> None:
    device = FakeDevice()
    signaler = FakeWakeSignaler()
    ctl = DeviceController(device, signaler, wol_url="WOL://AA:BB:CC:DD:EE:FF")
    results = []

    assert asyncio.run(ctl.set_power_state_async(True, on_wake=results.append)) is True
    assert signaler.macs == ["AA:BB:CC:DD:EE:FF"]
    assert device.calls == [("powerstate", {"powerstate": "On"})]
    assert results[0].status == WakeStatus.OK


def test_power_on_reports_false_when_power_write_fails_after_wake() -> None:
    device = FakeDevice(post_failures={"powerstate"})
    signaler = FakeWakeSignaler()
    ctl = DeviceController(device, signaler, wol_url="WOL:AA:BB:CC:DD:EE:FF")
    assert asyncio.run(ctl.set_power_state_async(True)) is False
    assert signaler.macs == ["AA:BB:CC:DD:EE:FF"]


def test_power_on_continues_when_wake_fails() -> None:
    device = FakeDevice()
    ctl = DeviceController(device, FakeWakeSignaler(fail=True), wol_url="WOL://AA:BB:CC:DD:EE:FF")
    results = []
    assert asyncio.run(ctl.set_power_state_async(True, on_wake=results.append)) is True
    assert results[0].status == WakeStatus.ERROR
    assert isinstance(results[0].error, TransportError)


def test_power_on_reports_config_error_to_wake_callback() -> None:
    device = FakeDevice()
    signaler = FakeWakeSignaler()
    ctl = DeviceController(device, signaler, wol_url="bogus-protocol")
    results = []
    assert asyncio.run(ctl.set_power_state_async(True, on_wake=results.append)) is True
    assert results[0].status == WakeStatus.ERROR
    assert "Unsupported wake protocol" in str(results[0].error)
    assert signaler.macs == []


def test_power_off_skips_wake() -> None:
    device = FakeDevice()
    signaler = FakeWakeSignaler()
    ctl = DeviceController(device, signaler, wol_url="WOL://AA:BB:CC:DD:EE:FF")
    assert asyncio.run(ctl.set_power_state_async(False)) is False
    assert signaler.macs == []
    assert device.calls == [("powerstate", {"powerstate": "Standby"})]


def test_wake_without_target_is_empty() -> None:
    ctl = DeviceController(FakeDevice(), FakeWakeSignaler())
    result = asyncio.run(ctl.wake_async())
    assert result.status == WakeStatus.EMPTY
    assert result.error is None


def test_set_source_channel_presses_watch_tv_resolves_and_tunes() -> None:
    device = FakeDevice(
        {
            "channeldb/tv/channelLists/all": {
                "Channel": [
                    {"ccid": 11, "preset": "3"},
                    {"ccid": 12, "preset": "3"},
                ]
            }
        }
    )
    ctl = DeviceController(device)
    asyncio.run(ctl.set_source_async(SourceDescriptor(channel=3)))
    assert device.calls == [
        ("input/key", {"key": "WatchTV"}),
        ("channeldb/tv/channelLists/all", None),
        ("activities/tv", {"channel": {"ccid": 12}, "channelList": {"id": "allsat"}}),
    ]


def test_set_source_channel_continues_after_key_failure() -> None:
    device = FakeDevice(
        {"channeldb/tv/channelLists/all": {"Channel": [{"ccid": 11, "preset": "3"}]}},
        post_failures={"input/key"},
    )
    ctl = DeviceController(device)
    asyncio.run(ctl.set_source_async(SourceDescriptor(channel=3)))
    assert device.calls[-1][0] == "activities/tv"


def test_set_source_channel_completes_when_channel_list_unavailable() -> None:
    device = FakeDevice({"channeldb/tv/channelLists/all": TransportError("timeout")})
    ctl = DeviceController(device)
    assert asyncio.run(ctl.set_source_async(SourceDescriptor(channel=3))) is None
    assert [path for path, _ in device.calls] == ["input/key", "channeldb/tv/channelLists/all"]


def test_set_source_unknown_preset_skips_tune() -> None:
    device = FakeDevice({"channeldb/tv/channelLists/all": {"Channel": [{"ccid": 11, "preset": "3"}]}})
    ctl = DeviceController(device)
    asyncio.run(ctl.set_source_async(SourceDescriptor(channel=99)))
    assert "activities/tv" not in [path for path, _ in device.calls]


def test_set_source_launch_posts_payload() -> None:
    launch = {"intent": {"component": {"packageName": "com.netflix.ninja"}}}
    device = FakeDevice()
    ctl = DeviceController(device)
    asyncio.run(ctl.set_source_async(SourceDescriptor(launch=launch)))
    assert device.calls == [("activities/launch", launch)]


def test_set_source_without_target_returns_to_tv() -> None:
    device = FakeDevice()
    ctl = DeviceController(device)
    asyncio.run(ctl.set_source_async(SourceDescriptor(name="TV")))
    assert device.calls == [("input/key", {"key": "WatchTV"})]


def test_get_current_source_delegates_to_resolver() -> None:
    device = FakeDevice(
        {
            "activities/current": {"component": {"packageName": "org.droidtv.playtv"}},
            "activities/tv": {"channel": {"preset": "2"}},
        }
    )
    ctl = DeviceController(device)
    candidates = [SourceDescriptor(name="TV"), SourceDescriptor(channel=2)]
    assert asyncio.run(ctl.get_current_source_async(candidates)) == 1


def test_get_channel_list_failure_is_empty() -> None:
    device = FakeDevice({"channeldb/tv/channelLists/all": TransportError("timeout")})
    assert asyncio.run(DeviceController(device).get_channel_list_async()) == ()


def test_ambilight_on_applies_follow_video_profile() -> None:
    device = FakeDevice()
    ctl = DeviceController(device)
    assert asyncio.run(ctl.set_ambilight_state_async(True)) is True
    assert device.calls == [
        (
            "ambilight/currentconfiguration",
            {"styleName": "FOLLOW_VIDEO", "isExpert": False, "menuSetting": "NATURAL"},
        )
    ]


def test_ambilight_off_writes_power_off() -> None:
    device = FakeDevice()
    ctl = DeviceController(device)
    assert asyncio.run(ctl.set_ambilight_state_async(False)) is False
    assert device.calls == [("ambilight/power", {"power": "Off"})]


def test_ambilight_failures_report_false() -> None:
    device = FakeDevice(
        {"ambilight/power": TransportError("timeout")},
        post_failures={"ambilight/currentconfiguration"},
    )
    ctl = DeviceController(device)
    assert asyncio.run(ctl.get_ambilight_state_async()) is False
    assert asyncio.run(ctl.set_ambilight_state_async(True)) is False


def test_get_ambilight_state_reads_on() -> None:
    ctl = DeviceController(FakeDevice({"ambilight/power": {"power": "On"}}))
    assert asyncio.run(ctl.get_ambilight_state_async()) is True


def test_commands_surface_transport_failure() -> None:
    device = FakeDevice(post_failures={"activities/launch"})
    ctl = DeviceController(device)
    assert asyncio.run(ctl.send_key_async("VolumeUp")) is True
    assert asyncio.run(ctl.launch_app_async({"id": "x"})) is False
    assert asyncio.run(ctl.set_channel_async(5)) is True


def test_volume_operations_share_controller_state() -> None:
    device = FakeDevice({"audio/volume": {"min": 0, "max": 60, "current": 30, "muted": False}})
    ctl = DeviceController(device)
    assert asyncio.run(ctl.get_volume_async()) == 50
    assert asyncio.run(ctl.set_volume_async(100)) == 100
    assert asyncio.run(ctl.set_mute_async(True)) is True
    assert device.calls[-1] == (
        "audio/volume",
        {"min": 0, "max": 60, "current": 60, "muted": False},
    )


def test_power_on_survives_failing_wake_callback() -> None:
    device = FakeDevice()
    ctl = DeviceController(device, FakeWakeSignaler(), wol_url="WOL://AA:BB:CC:DD:EE:FF")

    def broken_callback(result):
        raise RuntimeError("callback bug")

    assert asyncio.run(ctl.set_power_state_async(True, on_wake=broken_callback)) is True
    assert device.calls == [("powerstate", {"powerstate": "On"})]


def test_set_source_preset_zero_returns_to_tv() -> None:
    device = FakeDevice()
    ctl = DeviceController(device)
    asyncio.run(ctl.set_source_async(SourceDescriptor(channel=0)))
    assert device.calls == [("input/key", {"key": "WatchTV"})]
