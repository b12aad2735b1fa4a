"""
Plan persistence — plain-data round trip, JSON plan files and compact share tokens.

A plan is the FinancialConfiguration plus its ProjectionConfig. Nothing derived
is stored: loading a plan and re-running the engine reproduces the projection.
Corrupt or unreadable input falls back to the default plan instead of failing.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
import zlib
from dataclasses import asdict, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

from core.config import PLAN_FILE, FinancialConfiguration, ProjectionConfig
from core.defaults import default_plan
from core.exceptions import ConfigurationError

from .validators import parse_configuration

logger = logging.getLogger(__name__)

PLAN_FORMAT_VERSION = 1

Plan = Tuple[FinancialConfiguration, ProjectionConfig]


def plan_to_dict(config: FinancialConfiguration, projection: ProjectionConfig) -> Dict[str, Any]:
    return {
        "version": PLAN_FORMAT_VERSION,
        "config": config.model_dump(mode="json"),
        "projection": asdict(projection),
    }


def _projection_from_dict(data: Any) -> ProjectionConfig:
    if data is None:
        return ProjectionConfig()
    if not isinstance(data, Mapping):
        raise ConfigurationError(["projection: expected an object"])
    known = {f.name for f in fields(ProjectionConfig)}
    extra = sorted(set(data) - known)
    if extra:
        raise ConfigurationError([f"projection: unknown fields {extra}"])
    values = {}
    for key, value in data.items():
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigurationError([f"projection.{key}: expected an integer, got {value!r}"])
        values[key] = value
    return ProjectionConfig(**values)


def plan_from_dict(data: Any) -> Plan:
    """Inverse of plan_to_dict. Raises ConfigurationError on malformed data."""
    if not isinstance(data, Mapping):
        raise ConfigurationError(["plan: expected an object"])
    version = data.get("version", PLAN_FORMAT_VERSION)
    if version != PLAN_FORMAT_VERSION:
        raise ConfigurationError([f"plan: unsupported format version {version!r}"])
    if "config" not in data:
        raise ConfigurationError(["plan: missing 'config'"])
    config = parse_configuration(data["config"])
    projection = _projection_from_dict(data.get("projection"))
    return config, projection


def save_plan(config: FinancialConfiguration, projection: ProjectionConfig, path: Optional[Path] = None) -> Path:
    target = Path(path or PLAN_FILE)
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("w", encoding="utf-8") as handle:
        json.dump(plan_to_dict(config, projection), handle, indent=2, sort_keys=True)
    return target


def load_plan(path: Optional[Path] = None) -> Plan:
    target = Path(path or PLAN_FILE)
    if not target.exists():
        return default_plan()
    try:
        with target.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
        return plan_from_dict(data)
    except (json.JSONDecodeError, UnicodeDecodeError, OSError, ConfigurationError) as exc:
        logger.warning("Could not load plan from %s (%s); using the default plan.", target, exc)
        return default_plan()


def encode_share_token(config: FinancialConfiguration, projection: ProjectionConfig) -> str:
    """Compact URL-safe token: minified JSON, zlib-compressed, base64url without padding."""
    raw = json.dumps(plan_to_dict(config, projection), separators=(",", ":"), sort_keys=True)
    packed = zlib.compress(raw.encode("utf-8"), 9)
    return base64.urlsafe_b64encode(packed).decode("ascii").rstrip("=")


def decode_share_token(token: str, *, fallback: bool = True) -> Plan:
    """
    Rehydrate a plan from encode_share_token output.
    With fallback=True a corrupt token yields the default plan; otherwise ConfigurationError.
    """
    try:
        padded = token.strip() + "=" * (-len(token.strip()) % 4)
        raw = zlib.decompress(base64.urlsafe_b64decode(padded.encode("ascii")))
        return plan_from_dict(json.loads(raw.decode("utf-8")))
    except (binascii.Error, zlib.error, UnicodeError, ValueError) as exc:
        # ConfigurationError and JSONDecodeError are both ValueErrors
        if not fallback:
            if isinstance(exc, ConfigurationError):
                raise
            raise ConfigurationError([f"share token is not readable: {exc}"]) from exc
        logger.warning("Could not decode share token (%s); using the default plan.", exc)
        return default_plan()
