"""Architecture build dispatcher: forward make targets to arch/<arch>/ with toolchain paths exported."""

from .dispatch import (
    DEFAULT_TARGET,
    Invocation,
    dispatch,
    locate_subbuild,
    plan,
    resolve_arch,
    run,
    split_arguments,
)
from .errors import (
    ArchitectureNotFound,
    ConfigError,
    DispatchError,
    SubBuildFailure,
    SubBuildNotInvocable,
)
from .layout import list_architectures, load_config
from .subbuild import MakeSubBuild, SubBuild
from .toolchain import ToolchainConfig

__all__ = [
    "DEFAULT_TARGET",
    "ArchitectureNotFound",
    "ConfigError",
    "DispatchError",
    "Invocation",
    "MakeSubBuild",
    "SubBuild",
    "SubBuildFailure",
    "SubBuildNotInvocable",
    "ToolchainConfig",
    "dispatch",
    "list_architectures",
    "load_config",
    "locate_subbuild",
    "plan",
    "resolve_arch",
    "run",
    "split_arguments",
]
