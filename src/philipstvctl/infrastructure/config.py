import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from philipstvctl.domain.sources import SourceDescriptor

try:
    import tomllib
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib


@dataclass(frozen=True)
class RuntimeTarget:
    ip: str | None = None
    port: int = 1925
    api_version: int = 6
    timeout_s: float = 3.0
    wol_url: str = ""
    wol_broadcast: str = "255.255.255.255"
    wol_port: int = 9


@dataclass(frozen=True)
class TvConfig:
    target: RuntimeTarget
    inputs: tuple[SourceDescriptor, ...] = field(default_factory=tuple)
    log_level: str = "INFO"


def _toml_error_type():
    return getattr(tomllib, "TOMLDecodeError", ValueError)


def _reject_bool(value):
    if isinstance(value, bool):
        raise ValueError("boolean values are not valid for numeric fields")
    return value


class _TargetConfigModel(BaseModel):
    ip: str | None = None
    port: int = 1925
    api_version: int = 6
    timeout_s: float = 3.0
    wol_url: str = ""
    wol_broadcast: str = "255.255.255.255"
    wol_port: int = 9

    @field_validator("port", "api_version", "timeout_s", "wol_port", mode="before")
    @classmethod
    def _reject_bool_numbers(cls, value):
        return _reject_bool(value)

    @field_validator("wol_url", mode="before")
    @classmethod
    def _strip_wol_url(cls, value):
        return str(value or "").strip()


class _InputConfigModel(BaseModel):
    name: str = ""
    channel: int | None = None
    launch: dict[str, Any] | None = None

    @field_validator("channel", mode="before")
    @classmethod
    def _reject_bool_channel(cls, value):
        return _reject_bool(value)

    @model_validator(mode="after")
    def _channel_or_launch(self):
        if self.channel is not None and self.launch is not None:
            raise ValueError("an input cannot set both channel and launch")
        return self


class _TvConfigModel(BaseModel):
    target: _TargetConfigModel = Field(default_factory=_TargetConfigModel)
    inputs: list[_InputConfigModel] = Field(default_factory=list)
    log_level: str = "INFO"

    @field_validator("log_level", mode="before")
    @classmethod
    def _uppercase_log_level(cls, value):
        return str(value).upper()


def _default_config_path() -> Path:
    xdg = os.getenv("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "philipstvctl" / "config.toml"
    return Path.home() / ".config" / "philipstvctl" / "config.toml"


def _load_toml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    if not path.is_file():
        raise ValueError(f"Config path is not a file: {path}")
    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except OSError as exc:
        raise ValueError(f"Cannot read config file: {path}") from exc
    except _toml_error_type() as exc:
        raise ValueError(f"Invalid TOML in config file: {path}") from exc
    return data if isinstance(data, dict) else {}


def _merge_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    merged = dict(data)
    target_data = dict(merged.get("target")) if isinstance(merged.get("target"), dict) else {}

    env_ip = os.getenv("PHILIPSTVCTL_IP")
    env_port = os.getenv("PHILIPSTVCTL_PORT")
    env_wol_url = os.getenv("PHILIPSTVCTL_WOL_URL")
    env_log_level = os.getenv("PHILIPSTVCTL_LOG_LEVEL")
    if env_ip is not None:
        target_data["ip"] = env_ip
    if env_port is not None:
        target_data["port"] = env_port
    if env_wol_url is not None:
        target_data["wol_url"] = env_wol_url
    if env_log_level is not None:
        merged["log_level"] = env_log_level

    merged["target"] = target_data
    return merged


def load_config(path: str | None = None) -> TvConfig:
    cfg_path = Path(path) if path else _default_config_path()
    data = _merge_env_overrides(_load_toml(cfg_path))
    try:
        parsed = _TvConfigModel.model_validate(data)
    except ValidationError as exc:
        raise ValueError(f"Invalid config values: {exc}") from exc

    target = RuntimeTarget(
        ip=parsed.target.ip,
        port=parsed.target.port,
        api_version=parsed.target.api_version,
        timeout_s=parsed.target.timeout_s,
        wol_url=parsed.target.wol_url,
        wol_broadcast=parsed.target.wol_broadcast,
        wol_port=parsed.target.wol_port,
    )
    inputs = tuple(
        SourceDescriptor(name=item.name, channel=item.channel, launch=item.launch)
        for item in parsed.inputs
    )
    return TvConfig(target=target, inputs=inputs, log_level=parsed.log_level)
