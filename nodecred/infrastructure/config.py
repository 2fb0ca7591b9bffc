"""
Configuration Module

Architectural Intent:
- Centralized configuration loading from JSON files
- Provides typed access to all nodecred settings
- Falls back to sensible defaults when config file is absent
- Environment variables override file-based config

Design Decisions:
- Config is a frozen dataclass for immutability after load
- Nested config sections map to sub-dataclasses
"""

from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import dataclasses
import json
import logging
import os

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProviderConfig:
    """Cloud provider configuration."""
    name: str = "vcloud"
    endpoint: str = "https://vcloud.example.com"
    provider_id: str = "vcloud"


@dataclass(frozen=True)
class InventoryConfig:
    """Simulated backend inventory."""
    path: str = ""


@dataclass(frozen=True)
class TelemetryConfig:
    """OpenTelemetry configuration."""
    endpoint: str = ""
    service_name: str = "nodecred"
    insecure: bool = False


@dataclass(frozen=True)
class NodecredConfig:
    """Root configuration for nodecred."""
    provider: ProviderConfig = field(default_factory=ProviderConfig)
    inventory: InventoryConfig = field(default_factory=InventoryConfig)
    telemetry: TelemetryConfig = field(default_factory=TelemetryConfig)
    log_level: str = "WARNING"
    log_json: bool = False


def _env_override(data: dict, prefix: str = "NODECRED") -> dict:
    """Override config values with environment variables.

    Environment variables follow the pattern NODECRED_SECTION_KEY.
    For example: NODECRED_INVENTORY_PATH=/etc/nodecred/inventory.json
    """
    for key, value in os.environ.items():
        if not key.startswith(f"{prefix}_"):
            continue
        name = key[len(prefix) + 1:].lower()
        if name in ("log_level", "log_json"):
            data[name] = value
            continue
        parts = name.split("_", 1)
        if len(parts) == 2:
            section, field_name = parts
            if not isinstance(data.get(section), dict):
                data[section] = {}
            data[section][field_name] = value
        else:
            data[parts[0]] = value
    return data


def _parse_config_file(path: Path) -> dict:
    """Parse a JSON config file. Returns empty dict on failure."""
    try:
        with open(path) as f:
            return json.load(f)
    except FileNotFoundError:
        logger.debug("Config file not found: %s", path)
        return {}
    except json.JSONDecodeError as e:
        logger.warning("Invalid config file %s: %s", path, e)
        return {}


def _to_bool(value) -> bool:
    if isinstance(value, str):
        return value.lower() in ("true", "1", "yes")
    return bool(value)


def _build_sub_config(cls, data: dict):
    """Build a sub-config dataclass from a dict, ignoring unknown keys."""
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in data.items() if k in valid_fields}

    # Convert env strings to bool
    for f in dataclasses.fields(cls):
        if f.name in filtered and f.type == "bool":
            filtered[f.name] = _to_bool(filtered[f.name])

    return cls(**filtered)


def load_config(
    path: Optional[str] = None,
    env_prefix: str = "NODECRED",
) -> NodecredConfig:
    """Load configuration from file and environment variables.

    Priority (highest to lowest):
    1. Environment variables (NODECRED_SECTION_KEY)
    2. Config file values
    3. Defaults

    Args:
        path: Path to config file (JSON). Defaults to nodecred.json in CWD.
        env_prefix: Environment variable prefix. Defaults to NODECRED.
    """
    config_path = Path(path) if path else Path("nodecred.json")
    data = _parse_config_file(config_path)
    data = _env_override(data, env_prefix)

    return NodecredConfig(
        provider=_build_sub_config(ProviderConfig, data.get("provider", {})),
        inventory=_build_sub_config(InventoryConfig, data.get("inventory", {})),
        telemetry=_build_sub_config(TelemetryConfig, data.get("telemetry", {})),
        log_level=str(data.get("log_level", "WARNING")).upper(),
        log_json=_to_bool(data.get("log_json", False)),
    )
