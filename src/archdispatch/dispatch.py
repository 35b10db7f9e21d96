"""Root dispatcher: pick the architecture sub-build and forward targets to it.

The dispatcher owns no target names. Every target, including the default
"all", is handed to the sub-build unchanged; the sub-build decides what it means.
"""

from __future__ import annotations

import logging
import os
import re
import shlex
import sys
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from archdispatch.errors import ArchitectureNotFound, DispatchError, SubBuildFailure
from archdispatch.layout import arch_root, load_config, resolve_layout
from archdispatch.subbuild import MakeSubBuild, SubBuild
from archdispatch.toolchain import ToolchainConfig, field_for_var, overrides_from_env

log = logging.getLogger(__name__)

DEFAULT_TARGET = "all"
ARCH_VARS = ("arch", "ARCH")

_SAFE_ARCH = re.compile(r"^[A-Za-z0-9_.+-]+$")
_ASSIGNMENT = re.compile(r"^([A-Za-z_][A-Za-z0-9_]*)=(.*)$", re.DOTALL)


@dataclass(frozen=True)
class Invocation:
    """Everything resolved for one dispatcher run; built fresh every time."""

    arch: str
    directory: Path
    toolchain: ToolchainConfig
    targets: tuple[str, ...]
    assignments: tuple[str, ...]
    program: str
    env: Mapping[str, str]


def split_arguments(args: Sequence[str]) -> tuple[list[str], list[tuple[str, str]]]:
    """Separate targets from NAME=value assignments, keeping order within each."""
    targets: list[str] = []
    assignments: list[tuple[str, str]] = []
    for a in args:
        m = _ASSIGNMENT.match(a)
        if m:
            assignments.append((m.group(1), m.group(2)))
        else:
            targets.append(a)
    return targets, assignments


def resolve_arch(
    explicit: str | None,
    env: Mapping[str, str],
    layout: dict[str, str] | None = None,
) -> str:
    """Explicit value, else ARCH / arch from env, else the configured default.

    An empty ARCH in env counts as unset, unlike the toolchain variables where
    an empty value is a real override (GCC_PREFIX= means tools on PATH).
    """
    if explicit is not None:
        return explicit
    for var in ("ARCH", "arch"):
        if env.get(var):
            return env[var]
    return resolve_layout(layout)["arch"]


def locate_subbuild(project_root: Path, arch: str, layout: dict[str, str] | None = None) -> Path:
    """<root>/<arch_dir>/<arch>/. Raises ArchitectureNotFound if it is not a directory."""
    if not _SAFE_ARCH.match(arch) or arch in (".", ".."):
        raise ArchitectureNotFound(arch)
    path = arch_root(project_root, layout) / arch
    if not path.is_dir():
        raise ArchitectureNotFound(arch, path)
    return path


def plan(
    project_root: Path,
    args: Sequence[str] = (),
    *,
    arch: str | None = None,
    env: Mapping[str, str] | None = None,
    config_path: Path | None = None,
    arch_dir: str | None = None,
) -> Invocation:
    """Resolve arch, toolchain, sub-build directory and targets. Nothing is run.

    Precedence per value: args/arch parameter, then env, then archdispatch.yaml,
    then built-in defaults.
    """
    base_env = dict(os.environ if env is None else env)
    cfg = load_config(project_root, config_path)
    layout = dict(cfg["layout"])
    if arch_dir:
        layout["arch_dir"] = arch_dir

    targets, assignments = split_arguments(args)
    cli_arch: str | None = arch
    cli_toolchain: dict[str, str] = {}
    forwarded: list[str] = []
    for name, value in assignments:
        if name in ARCH_VARS:
            # --arch wins over an arch= assignment
            if arch is None:
                cli_arch = value
            continue
        field_name = field_for_var(name)
        if field_name is not None:
            cli_toolchain[field_name] = value
        # command-line values also beat the sub-make's own assignments
        forwarded.append(f"{name}={value}")

    resolved_arch = resolve_arch(cli_arch, base_env, layout)
    directory = locate_subbuild(project_root, resolved_arch, layout)
    toolchain = ToolchainConfig.from_overrides(
        cfg["toolchain"], overrides_from_env(base_env), cli_toolchain
    )
    program = base_env.get("MAKE") or layout["make"]
    sub_env = {**base_env, **toolchain.as_env()}

    log.debug("arch=%s directory=%s toolchain=%s", resolved_arch, directory, toolchain)
    return Invocation(
        arch=resolved_arch,
        directory=directory,
        toolchain=toolchain,
        targets=tuple(targets) or (DEFAULT_TARGET,),
        assignments=tuple(forwarded),
        program=program,
        env=sub_env,
    )


def make_subbuild(invocation: Invocation) -> MakeSubBuild:
    return MakeSubBuild(
        directory=invocation.directory,
        env=invocation.env,
        program=invocation.program,
        assignments=invocation.assignments,
    )


def dispatch(
    invocation: Invocation,
    subbuild_factory: Callable[[Invocation], SubBuild] = make_subbuild,
) -> int:
    """Invoke each target in order. Returns 0; raises SubBuildFailure on the first non-zero status."""
    sub = subbuild_factory(invocation)
    for target in invocation.targets:
        status = sub.invoke(target)
        if status != 0:
            raise SubBuildFailure(target, status)
    return 0


def describe(invocation: Invocation) -> list[str]:
    """Shell-style lines for --dry-run: toolchain variables then the sub-build command."""
    sub = make_subbuild(invocation)
    prefix = " ".join(f"{k}={shlex.quote(v)}" for k, v in invocation.toolchain.as_env().items())
    return [f"{prefix} {shlex.join(sub.command(t))}" for t in invocation.targets]


def run(
    project_root: Path,
    args: Sequence[str] = (),
    *,
    arch: str | None = None,
    env: Mapping[str, str] | None = None,
    config_path: Path | None = None,
    arch_dir: str | None = None,
    dry_run: bool = False,
) -> int:
    """Plan and dispatch. Returns the sub-build status or the error's exit code."""
    try:
        invocation = plan(
            project_root,
            args,
            arch=arch,
            env=env,
            config_path=config_path,
            arch_dir=arch_dir,
        )
        if dry_run:
            for line in describe(invocation):
                print(line)
            return 0
        return dispatch(invocation)
    except SubBuildFailure as e:
        # the sub-build already reported; pass its status through silently
        log.debug("%s", e)
        return e.exit_code
    except DispatchError as e:
        print(f"❌ {e}", file=sys.stderr)
        return e.exit_code
