from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Union

from omegaconf import DictConfig, OmegaConf

ConfigSource = Union[str, Path, Dict[str, Any], DictConfig, None]


@dataclass
class EditorConfig:
    """Editor geometry and wiring switches."""

    block_width: float = 160.0
    snap_distance: float = 40.0
    input_x: float = 50.0
    input_y: float = 100.0
    layout_x: float = 100.0
    layout_y: float = 200.0
    layout_spacing: float = 180.0
    auto_connect: bool = True
    guard_cycles: bool = False


def default_config() -> DictConfig:
    return OmegaConf.structured(EditorConfig)


def load_config(source: ConfigSource = None) -> DictConfig:
    """Load editor config over the defaults, with `_base_` inheritance for files."""
    if source is None:
        return default_config()
    if isinstance(source, (str, Path)):
        cfg = _load_file(Path(source))
    elif isinstance(source, dict):
        cfg = OmegaConf.create(source)
    else:
        cfg = source
    return OmegaConf.merge(default_config(), cfg)


def _load_file(path: Path) -> DictConfig:
    cfg = OmegaConf.load(path)
    # `_base_` is resolved relative to the file that names it
    if "_base_" in cfg:
        base_path = Path(str(cfg._base_))
        if not base_path.is_absolute():
            base_path = path.parent / base_path
        cfg = OmegaConf.merge(_load_file(base_path), cfg)
        del cfg["_base_"]
    return cfg


def save_config(config: DictConfig, path: str | Path) -> None:
    OmegaConf.save(config, path)


def merge_configs(*configs: DictConfig) -> DictConfig:
    """Merge several configs over the defaults (last wins)."""
    return OmegaConf.merge(default_config(), *configs)
