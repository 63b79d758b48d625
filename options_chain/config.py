"""Configuration loading for the options-chain tools."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


@dataclass(frozen=True)
class TradierConfig:
    token: str
    base_url: str = "https://sandbox.tradier.com/v1"
    timeout_seconds: float = 30.0


@dataclass(frozen=True)
class AppConfig:
    tradier: TradierConfig


DEFAULT_CONFIG_PATH = Path("config.yaml")
DEFAULT_ENV_PATH = Path(".env")


class ConfigError(RuntimeError):
    """Raised when required configuration is missing."""


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping.")
    return data


def _get_env(name: str) -> Optional[str]:
    value = os.getenv(name)
    return value.strip() if value else None


def _load_dotenv(path: Path) -> None:
    if not path.exists():
        return
    for line in path.read_text(encoding="utf-8").splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        if "=" not in stripped:
            continue
        key, value = stripped.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key and key not in os.environ:
            os.environ[key] = value


def load_config(path: Optional[Path] = None, env_path: Optional[Path] = None) -> AppConfig:
    _load_dotenv(env_path or DEFAULT_ENV_PATH)
    config_path = path or DEFAULT_CONFIG_PATH
    raw = _load_yaml(config_path)

    tradier_cfg = raw.get("tradier") or {}

    # Older deployments export the bare "token" variable.
    token = _get_env("TRADIER_TOKEN") or _get_env("token") or tradier_cfg.get("token")
    if not token:
        raise ConfigError("Missing TRADIER_TOKEN (env or config).")

    base_url = _get_env("TRADIER_BASE_URL") or tradier_cfg.get("base_url") or TradierConfig.base_url
    try:
        timeout = float(tradier_cfg.get("timeout_seconds", TradierConfig.timeout_seconds))
    except (TypeError, ValueError) as exc:
        raise ConfigError("tradier.timeout_seconds must be a number.") from exc

    return AppConfig(
        tradier=TradierConfig(
            token=str(token),
            base_url=str(base_url).rstrip("/"),
            timeout_seconds=timeout,
        ),
    )
