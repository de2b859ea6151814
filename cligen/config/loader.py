"""Helpers for reading generator settings into typed dataclasses."""

from __future__ import annotations

from pathlib import Path
from typing import Any
from collections.abc import Mapping

from compoconf import parse_config
from omegaconf import OmegaConf

from ..errors import CligenError
from .schema import GeneratorConfig


class ConfigLoaderError(CligenError):
    """Raised when the configuration file cannot be parsed."""


def _load_yaml(path: Path) -> Mapping[str, Any]:
    cfg = OmegaConf.load(path)
    return OmegaConf.to_container(cfg, resolve=True)  # type: ignore[return-value]


def load_generator_config(
    path: str | Path | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> GeneratorConfig:
    """Build a ``GeneratorConfig`` from an optional YAML file and overrides.

    Overrides whose value is ``None`` are ignored, so unset command line
    options do not mask values from the file.
    """
    data: dict[str, Any] = {}
    if path is not None:
        path = Path(path)
        if not path.exists():
            raise ConfigLoaderError(f"Configuration file not found: {path}")
        loaded = _load_yaml(path)
        if not isinstance(loaded, Mapping):
            raise ConfigLoaderError(f"Configuration root must be a mapping: {path}")
        data = dict(loaded)

    explicit = {key: value for key, value in (overrides or {}).items() if value is not None}
    merged = OmegaConf.to_container(OmegaConf.merge(OmegaConf.create(data), explicit), resolve=True)

    for key in ("source_file", "command"):
        if not merged.get(key):
            raise ConfigLoaderError(f"Missing required setting: {key}")
    try:
        return parse_config(GeneratorConfig, merged)
    except Exception as exc:  # pragma: no cover - compoconf raises rich errors
        raise ConfigLoaderError(f"Unable to parse generator config: {exc}") from exc


__all__ = ["ConfigLoaderError", "load_generator_config"]
