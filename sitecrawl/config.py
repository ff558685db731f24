"""Typed crawler configuration with JSON/YAML load helpers."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import yaml  # type: ignore

from .constants import (
    DEFAULT_EXCLUDED_EXTENSIONS,
    DEFAULT_RATE_LIMIT_SECONDS,
    DEFAULT_RESPECT_ROBOTS,
    DEFAULT_STRICT_ROBOTS_PATHS,
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_USER_AGENT,
    SUPPORTED_CONFIG_SUFFIXES,
)
from .types import JSONDict


def _as_float(value: Any, key: str) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid float for '{key}': {value!r}") from exc


def _as_bool(value: Any, key: str) -> bool:
    if isinstance(value, bool):
        return value
    raise ValueError(f"Invalid bool for '{key}': {value!r}")


def _as_extensions(value: Any) -> tuple[str, ...]:
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        raise ValueError(f"Invalid excluded_extensions: {value!r}")

    out: list[str] = []
    for item in value:
        ext = str(item).strip().lower()
        if not ext:
            continue
        if not ext.startswith("."):
            ext = "." + ext
        out.append(ext)
    return tuple(out)


@dataclass(slots=True)
class CrawlConfig:
    """Run configuration consumed by the scheduler, fetcher, and robots loader."""

    seed: str

    rate_limit_seconds: float = DEFAULT_RATE_LIMIT_SECONDS
    timeout_seconds: float | None = DEFAULT_TIMEOUT_SECONDS

    user_agent: str = DEFAULT_USER_AGENT
    respect_robots: bool = DEFAULT_RESPECT_ROBOTS
    strict_robots_paths: bool = DEFAULT_STRICT_ROBOTS_PATHS

    excluded_extensions: tuple[str, ...] = field(
        default_factory=lambda: tuple(DEFAULT_EXCLUDED_EXTENSIONS)
    )

    def __post_init__(self) -> None:
        self.seed = (self.seed or "").strip()
        if not self.seed:
            raise ValueError("CrawlConfig requires a seed URL")

        if self.rate_limit_seconds < 0:
            raise ValueError("rate_limit_seconds must be >= 0")
        if self.timeout_seconds is not None and self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be > 0 when set")
        if not self.user_agent.strip():
            raise ValueError("user_agent cannot be empty")

        self.excluded_extensions = _as_extensions(self.excluded_extensions)

    def to_dict(self) -> JSONDict:
        """Serialize config for logging and stats output."""

        return {
            "seed": self.seed,
            "rate_limit_seconds": self.rate_limit_seconds,
            "timeout_seconds": self.timeout_seconds,
            "user_agent": self.user_agent,
            "respect_robots": self.respect_robots,
            "strict_robots_paths": self.strict_robots_paths,
            "excluded_extensions": list(self.excluded_extensions),
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "CrawlConfig":
        """Build config from a parsed dictionary."""

        if not payload.get("seed"):
            raise ValueError("Config missing required key: 'seed'")

        rate_limit = _as_float(
            payload.get("rate_limit_seconds", DEFAULT_RATE_LIMIT_SECONDS),
            "rate_limit_seconds",
        )

        return cls(
            seed=str(payload["seed"]),
            rate_limit_seconds=DEFAULT_RATE_LIMIT_SECONDS if rate_limit is None else rate_limit,
            timeout_seconds=_as_float(
                payload.get("timeout_seconds", DEFAULT_TIMEOUT_SECONDS),
                "timeout_seconds",
            ),
            user_agent=str(payload.get("user_agent", DEFAULT_USER_AGENT)),
            respect_robots=_as_bool(
                payload.get("respect_robots", DEFAULT_RESPECT_ROBOTS),
                "respect_robots",
            ),
            strict_robots_paths=_as_bool(
                payload.get("strict_robots_paths", DEFAULT_STRICT_ROBOTS_PATHS),
                "strict_robots_paths",
            ),
            excluded_extensions=_as_extensions(
                payload.get("excluded_extensions", DEFAULT_EXCLUDED_EXTENSIONS)
            ),
        )


def _load_yaml(path: Path) -> dict[str, Any]:
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"YAML config at {path} must be a mapping at top level")
    return data


def load_config_payload(path: str | Path) -> dict[str, Any]:
    """Read a JSON/YAML config file into a plain mapping without validating it."""

    config_path = Path(path)
    suffix = config_path.suffix.lower()
    if suffix not in SUPPORTED_CONFIG_SUFFIXES:
        raise ValueError(
            f"Unsupported config suffix '{suffix}'. Supported: {SUPPORTED_CONFIG_SUFFIXES}"
        )

    if suffix == ".json":
        payload = json.loads(config_path.read_text(encoding="utf-8"))
    else:
        payload = _load_yaml(config_path)

    if not isinstance(payload, dict):
        raise ValueError(f"Config at {config_path} must be a mapping")

    return payload


def load_config(path: str | Path) -> CrawlConfig:
    """Load CrawlConfig from JSON/YAML path."""

    return CrawlConfig.from_dict(load_config_payload(path))


__all__ = [
    "CrawlConfig",
    "load_config",
    "load_config_payload",
]
