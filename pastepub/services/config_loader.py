"""Load :class:`PasteConfig` from a YAML file with environment overrides."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from pastepub.exceptions import ConfigError, InvalidName
from pastepub.models.config import NAME_STYLES, PasteConfig
from pastepub.models.paste import check_filename


ENV_PREFIX = "PASTEPUB_"
DEFAULT_CONFIG_PATH = Path("~/.config/pastepub/config.yaml")

_FIELDS = (
    "http_destination",
    "scp_destination",
    "scp_port",
    "identity_file",
    "author_name",
    "author_link",
    "privacy_marker",
    "staging_dir",
    "index_name",
    "name_style",
    "transport_timeout",
)


def resolve_config_path(
    explicit: str | os.PathLike[str] | None = None,
    environ: Mapping[str, str] | None = None,
) -> Path:
    """Return the config file path from the argument, ``PASTEPUB_CONFIG``, or the default."""

    env = os.environ if environ is None else environ
    raw = explicit or env.get(f"{ENV_PREFIX}CONFIG") or DEFAULT_CONFIG_PATH
    return Path(raw).expanduser()


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        payload = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Could not parse {path}: {exc}") from exc

    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ConfigError(f"{path} must contain a mapping of settings")
    return {str(key).replace("-", "_"): value for key, value in payload.items()}


def _env_overrides(environ: Mapping[str, str]) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    for name in _FIELDS:
        value = environ.get(f"{ENV_PREFIX}{name.upper()}")
        if value is not None and value.strip():
            overrides[name] = value.strip()
    return overrides


def _as_int(name: str, value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from exc


def _as_optional_float(name: str, value: Any) -> float | None:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{name} must be a number, got {value!r}") from exc


def _required(settings: Mapping[str, Any], name: str) -> str:
    value = str(settings.get(name) or "").strip().rstrip("/")
    if not value:
        raise ConfigError(f"{name} is not configured (set it in the config file or {ENV_PREFIX}{name.upper()})")
    return value


def build_config(settings: Mapping[str, Any]) -> PasteConfig:
    """Validate a mapping of raw settings and return a :class:`PasteConfig`."""

    unknown = sorted(set(settings) - set(_FIELDS))
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

    name_style = str(settings.get("name_style") or "title").strip().lower()
    if name_style not in NAME_STYLES:
        raise ConfigError(f"name_style must be one of {', '.join(NAME_STYLES)}, got {name_style!r}")

    index_name = str(settings.get("index_name") or "index").strip()
    try:
        check_filename(index_name)
    except InvalidName as exc:
        raise ConfigError(f"index_name must be a plain filename, got {index_name!r}") from exc

    # An explicit empty marker disables private pastes and index filtering.
    raw_marker = settings.get("privacy_marker")
    privacy_marker = "private" if raw_marker is None else str(raw_marker)
    if "/" in privacy_marker or "\x00" in privacy_marker:
        raise ConfigError(f"privacy_marker cannot contain \"/\" or NUL, got {privacy_marker!r}")

    port = _as_int("scp_port", settings.get("scp_port", 22))
    if not 0 < port < 65536:
        raise ConfigError(f"scp_port must be between 1 and 65535, got {port}")

    identity = settings.get("identity_file")
    staging = settings.get("staging_dir")

    kwargs: dict[str, Any] = {
        "http_destination": _required(settings, "http_destination"),
        "scp_destination": _required(settings, "scp_destination"),
        "scp_port": port,
        "identity_file": Path(str(identity)).expanduser() if identity else None,
        "author_name": str(settings.get("author_name") or "").strip(),
        "author_link": str(settings.get("author_link") or "").strip(),
        "privacy_marker": privacy_marker,
        "index_name": index_name,
        "name_style": name_style,
        "transport_timeout": _as_optional_float("transport_timeout", settings.get("transport_timeout")),
    }
    if staging:
        kwargs["staging_dir"] = Path(str(staging)).expanduser()
    return PasteConfig(**kwargs)


def load_config(
    path: str | os.PathLike[str] | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> PasteConfig:
    """Read the YAML config (if present) and apply ``PASTEPUB_*`` overrides."""

    env = os.environ if environ is None else environ
    config_path = resolve_config_path(path, env)

    settings: dict[str, Any] = {}
    if config_path.exists():
        settings.update(_read_yaml(config_path))
    elif path is not None:
        raise ConfigError(f"Configuration file '{config_path}' does not exist")

    settings.update(_env_overrides(env))
    return build_config(settings)


__all__ = ["DEFAULT_CONFIG_PATH", "build_config", "load_config", "resolve_config_path"]
