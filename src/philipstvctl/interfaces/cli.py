import argparse
import logging
import os
import sys

from philipstvctl.api import PhilipsTVClient
from philipstvctl.domain.sources import SourceDescriptor
from philipstvctl.infrastructure.config import TvConfig, load_config

LOG = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        force=True,
    )


def _on_off(value: str) -> bool:
    normalized = value.strip().lower()
    if normalized in {"on", "1", "true", "yes"}:
        return True
    if normalized in {"off", "0", "false", "no"}:
        return False
    raise argparse.ArgumentTypeError(f"expected on/off, got {value!r}")


def _client_from_config(args, cfg: TvConfig) -> PhilipsTVClient:
    target = cfg.target
    ip = args.ip if args.ip is not None else target.ip
    if not ip:
        raise RuntimeError("No TV address configured. Use --ip or set [target].ip in the config.")
    return PhilipsTVClient(
        address=ip,
        port=args.port if args.port is not None else target.port,
        api_version=target.api_version,
        timeout_s=args.timeout if args.timeout is not None else target.timeout_s,
        wol_url=args.wol_url if args.wol_url is not None else target.wol_url,
        wol_broadcast=target.wol_broadcast,
        wol_port=target.wol_port,
    )


def _pick_input(inputs: tuple[SourceDescriptor, ...], selector: str) -> SourceDescriptor:
    if not inputs:
        raise RuntimeError("No inputs configured. Add [[inputs]] tables to the config.")
    for item in inputs:
        if item.name and item.name.lower() == selector.lower():
            return item
    try:
        index = int(selector)
    except ValueError:
        raise RuntimeError(f"Unknown input: {selector}") from None
    if index < 0 or index >= len(inputs):
        raise RuntimeError(f"Invalid input index: {index}")
    return inputs[index]


def _print_bool(value: bool) -> None:
    print("on" if value else "off")


def main() -> None:
    p = argparse.ArgumentParser(
        prog="philipstvctl", description="Philips TV JointSpace control (power, volume, sources)"
    )
    p.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Override log level (e.g. DEBUG, INFO, WARNING).",
    )
    p.add_argument("--config", type=str, default=None)
    p.add_argument("--ip", type=str, default=None, help="TV address (overrides config)")
    p.add_argument("--port", type=int, default=None)
    p.add_argument("--timeout", type=float, default=None)
    p.add_argument("--wol-url", type=str, default=None, help="e.g. WOL://AA:BB:CC:DD:EE:FF")

    sub = p.add_subparsers(dest="cmd", required=True)
    power = sub.add_parser("power")
    power.add_argument("state", type=_on_off, nargs="?", default=None)
    sub.add_parser("wake")
    sub.add_parser("getvol")
    set_parser = sub.add_parser("setvol")
    set_parser.add_argument("value", type=int)
    mute = sub.add_parser("mute")
    mute.add_argument("state", type=_on_off)
    ambilight = sub.add_parser("ambilight")
    ambilight.add_argument("state", type=_on_off, nargs="?", default=None)
    source = sub.add_parser("source")
    source.add_argument("selector", type=str, nargs="?", default=None)
    channel = sub.add_parser("channel")
    channel.add_argument("preset", type=int)
    sub.add_parser("channels")
    key = sub.add_parser("key")
    key.add_argument("name", type=str)

    args = p.parse_args()
    requested_log_level = args.log_level or os.getenv("PHILIPSTVCTL_LOG_LEVEL")
    if requested_log_level is not None:
        _configure_logging(requested_log_level)

    try:
        cfg = load_config(args.config)
        if requested_log_level is None:
            _configure_logging(cfg.log_level)
        client = _client_from_config(args, cfg)

        if args.cmd == "power":
            if args.state is None:
                _print_bool(client.get_power_state())
            else:
                _print_bool(client.set_power_state(args.state))
        elif args.cmd == "wake":
            result = client.wake()
            if result.error is not None:
                raise RuntimeError(str(result.error))
            print(result.status.value.upper())
        elif args.cmd == "getvol":
            volume = client.get_volume()
            if volume is False:
                raise RuntimeError("Cannot read volume")
            print(volume)
        elif args.cmd == "setvol":
            if client.set_volume(args.value) is False:
                raise RuntimeError("Volume change rejected")
            print("OK")
        elif args.cmd == "mute":
            if not client.write_mute(args.state):
                raise RuntimeError("Mute change rejected")
            print("OK")
        elif args.cmd == "ambilight":
            if args.state is None:
                _print_bool(client.get_ambilight_state())
            else:
                _print_bool(client.set_ambilight_state(args.state))
        elif args.cmd == "source":
            if args.selector is None:
                index = client.get_current_source(cfg.inputs)
                name = cfg.inputs[index].name if index < len(cfg.inputs) else ""
                print(f"[{index}] {name}".rstrip())
            else:
                client.set_source(_pick_input(cfg.inputs, args.selector))
                print("OK")
        elif args.cmd == "channel":
            client.set_source(SourceDescriptor(channel=args.preset))
            print("OK")
        elif args.cmd == "channels":
            for item in client.get_channel_list():
                print(f"{item.preset if item.preset is not None else '-'}\t{item.ccid}\t{item.name}")
        elif args.cmd == "key":
            if not client.send_key(args.name):
                raise RuntimeError(f"Key {args.name} rejected")
            print("OK")
    except KeyboardInterrupt:
        return
    except Exception as exc:
        LOG.debug("command %s failed", args.cmd, exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(2)
