"""Toolchain locations exported to every sub-build.

Each field maps to one environment variable. Overrides are merged over the
built-in defaults field by field; values are passed through untouched (a
trailing slash on GCC_PREFIX matters, sub-builds append tool names to it).
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields

# field name -> exported variable
ENV_NAMES: dict[str, str] = {
    "rust_root": "RUST_ROOT",
    "llvm_root": "LLVM_ROOT",
    "gcc_prefix": "GCC_PREFIX",
}

DEFAULT_TOOLCHAIN: dict[str, str] = {
    "rust_root": "/opt/rust-master",
    "llvm_root": "/usr",
    "gcc_prefix": "/usr/bin/",
}


@dataclass(frozen=True)
class ToolchainConfig:
    rust_root: str = DEFAULT_TOOLCHAIN["rust_root"]
    llvm_root: str = DEFAULT_TOOLCHAIN["llvm_root"]
    gcc_prefix: str = DEFAULT_TOOLCHAIN["gcc_prefix"]

    @classmethod
    def from_overrides(cls, *layers: Mapping[str, str] | None) -> ToolchainConfig:
        """Build from field-name mappings, later layers taking precedence. Unknown keys are ignored."""
        values = dict(DEFAULT_TOOLCHAIN)
        for layer in layers:
            if not layer:
                continue
            values.update({k: str(v) for k, v in layer.items() if k in values and v is not None})
        return cls(**values)

    def as_env(self) -> dict[str, str]:
        """Variables to add to the sub-build environment (RUST_ROOT, LLVM_ROOT, GCC_PREFIX)."""
        return {ENV_NAMES[f.name]: getattr(self, f.name) for f in fields(self)}


def overrides_from_env(env: Mapping[str, str]) -> dict[str, str]:
    """Pick toolchain overrides out of an environment mapping, keyed by field name."""
    out: dict[str, str] = {}
    for field_name, var in ENV_NAMES.items():
        if var in env:
            out[field_name] = env[var]
    return out


def field_for_var(var: str) -> str | None:
    """Field name for an exported variable name (GCC_PREFIX -> gcc_prefix), else None."""
    for field_name, name in ENV_NAMES.items():
        if name == var:
            return field_name
    return None
