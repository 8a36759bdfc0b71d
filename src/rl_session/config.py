from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from config import ConfigurationSet, config_from_dict, config_from_env, config_from_yaml

from rl_session.publish.webhook import BOT_NAME
from rl_session.watch.debouncer import DEFAULT_EXTENSION

_DEFAULTS: dict[str, object] = {
    "watch": {
        "location": "",
        "extension": DEFAULT_EXTENSION,
    },
    "discord": {
        "webhook_url": "",
        "username": BOT_NAME,
        "timeout": 10.0,
    },
}


@dataclass(frozen=True)
class SessionSettings:
    location: Path
    extension: str
    webhook_url: str | None
    username: str
    timeout: float


def create_config(
    yaml_path: str = "rl_session.yaml",
    env_prefix: str = "RL_SESSION",
    defaults: dict[str, object] | None = None,
    *,
    location: Path | None = None,
    webhook_url: str | None = None,
) -> ConfigurationSet:
    """Create a layered configuration.

    Priority (highest to lowest): explicit overrides > env vars > YAML file > defaults dict.

    Args:
        yaml_path: Path to the YAML config file.
        env_prefix: Prefix for environment variables, e.g. ``RL_SESSION__DISCORD__WEBHOOK_URL``.
        defaults: Default configuration values.
        location: Override the replay folder.
        webhook_url: Override the Discord webhook URL.
    """
    if defaults is None:
        defaults = _DEFAULTS

    layers = [
        config_from_env(env_prefix, separator="__", lowercase_keys=True),
        config_from_yaml(yaml_path, read_from_file=True, ignore_missing_paths=True),
        config_from_dict(defaults),
    ]

    overrides = _build_overrides(location, webhook_url)
    if overrides:
        layers.insert(0, config_from_dict(overrides))

    return ConfigurationSet(*layers)


def _build_overrides(location: Path | None, webhook_url: str | None) -> dict[str, object]:
    overrides: dict[str, object] = {}
    if location is not None:
        overrides["watch"] = {"location": str(location)}
    if webhook_url is not None:
        overrides["discord"] = {"webhook_url": webhook_url}
    return overrides


def default_replay_location() -> Path:
    """Folder the BakkesMod replay uploader exports to by default."""
    appdata = os.environ.get("APPDATA")
    roaming = Path(appdata) if appdata else Path.home() / "AppData" / "Roaming"
    return roaming / "bakkesmod" / "bakkesmod" / "data" / "replays"


def load_session_settings(cfg: ConfigurationSet | None = None) -> SessionSettings:
    if cfg is None:
        cfg = create_config()
    location = str(cfg["watch.location"])
    webhook_url = str(cfg["discord.webhook_url"])
    return SessionSettings(
        location=Path(location).expanduser() if location else default_replay_location(),
        extension=str(cfg["watch.extension"]),
        webhook_url=webhook_url or None,
        username=str(cfg["discord.username"]),
        timeout=float(str(cfg["discord.timeout"])),
    )
