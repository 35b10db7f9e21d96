"""Project layout and the optional archdispatch.yaml config file.

Config YAML format (all keys optional):
- arch: default architecture
- arch_dir: directory holding one sub-build per architecture (default: arch)
- make: sub-build program (default: make)
- toolchain: mapping with rust_root, llvm_root, gcc_prefix
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from archdispatch.errors import ConfigError
from archdispatch.toolchain import DEFAULT_TOOLCHAIN

log = logging.getLogger(__name__)

CONFIG_FILE_NAME = "archdispatch.yaml"

DEFAULT_LAYOUT: dict[str, str] = {
    "arch": "arm",
    "arch_dir": "arch",
    "make": "make",
}


def resolve_layout(layout: dict[str, Any] | None) -> dict[str, str]:
    """Return layout dict with defaults filled. Unknown keys are dropped."""
    out = dict(DEFAULT_LAYOUT)
    if layout is None:
        return out
    out.update({k: str(v) for k, v in layout.items() if k in out and v is not None})
    return out


def load_config(project_root: Path, config_path: Path | None = None) -> dict[str, Any]:
    """Load archdispatch.yaml. Returns {"layout": {...}, "toolchain": {...}}.

    Without config_path, a missing <project_root>/archdispatch.yaml means built-in
    defaults. An explicit config_path must exist. Raises ConfigError on unreadable,
    unparsable or non-mapping content.
    """
    explicit = config_path is not None
    path = config_path if config_path is not None else project_root / CONFIG_FILE_NAME
    if not path.is_file():
        if explicit:
            msg = f"Config file not found: {path}"
            raise ConfigError(msg)
        log.debug("No %s in %s, using defaults", CONFIG_FILE_NAME, project_root)
        return {"layout": resolve_layout(None), "toolchain": {}}

    try:
        with path.open() as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        msg = f"Could not read config {path}: {e}"
        raise ConfigError(msg) from e
    if not isinstance(data, dict):
        msg = f"Config {path} must be a mapping, got {type(data).__name__}"
        raise ConfigError(msg)

    toolchain = data.get("toolchain") or {}
    if not isinstance(toolchain, dict):
        msg = f"Config {path}: 'toolchain' must be a mapping"
        raise ConfigError(msg)

    log.debug("Loaded config %s", path)
    return {
        "layout": resolve_layout(data),
        "toolchain": {
            k: str(v) for k, v in toolchain.items() if k in DEFAULT_TOOLCHAIN and v is not None
        },
    }


def arch_root(project_root: Path, layout: dict[str, Any] | None = None) -> Path:
    return project_root / resolve_layout(layout)["arch_dir"]


def list_architectures(project_root: Path, layout: dict[str, Any] | None = None) -> list[str]:
    """Architectures with a sub-build directory under <root>/<arch_dir>/. Sorted."""
    d = arch_root(project_root, layout)
    if not d.is_dir():
        return []
    return sorted(x.name for x in d.iterdir() if x.is_dir() and not x.name.startswith("."))
