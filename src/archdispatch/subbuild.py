"""Per-architecture sub-build: the external build procedure targets are forwarded to."""

from __future__ import annotations

import logging
import shlex
import subprocess
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from archdispatch.errors import SubBuildNotInvocable

log = logging.getLogger(__name__)


class SubBuild(Protocol):
    def invoke(self, target: str) -> int:
        """Run target and return its exit status."""


@dataclass(frozen=True)
class MakeSubBuild:
    """`<make> <target> -C <directory> [NAME=value ...]` with an explicit environment.

    program is split like a shell word list, so MAKE="make -j4" works.
    """

    directory: Path
    env: Mapping[str, str]
    program: str = "make"
    assignments: Sequence[str] = field(default_factory=tuple)

    def command(self, target: str) -> list[str]:
        argv = shlex.split(self.program)
        if not argv:
            raise SubBuildNotInvocable(self.program, "empty program")
        return [*argv, target, "-C", str(self.directory), *self.assignments]

    def invoke(self, target: str) -> int:
        cmd = self.command(target)
        log.debug("Running %s", shlex.join(cmd))
        try:
            r = subprocess.run(cmd, env=dict(self.env))
        except (FileNotFoundError, PermissionError) as e:
            raise SubBuildNotInvocable(self.program, e.strerror or str(e)) from e
        if r.returncode < 0:
            # killed by signal N: report 128+N like a shell does
            return 128 - r.returncode
        return r.returncode
