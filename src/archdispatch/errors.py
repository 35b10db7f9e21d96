"""Dispatch errors and the exit codes they map to."""

from __future__ import annotations

from pathlib import Path

# sysexits.h: EX_NOINPUT, EX_CONFIG; 127 is the shell's "command not found".
EXIT_ARCH_NOT_FOUND = 66
EXIT_CONFIG = 78
EXIT_NOT_INVOCABLE = 127


class DispatchError(Exception):
    """Base error; exit_code is what the CLI terminates with."""

    exit_code: int = 1


class ArchitectureNotFound(DispatchError):
    exit_code = EXIT_ARCH_NOT_FOUND

    def __init__(self, arch: str, path: Path | None = None) -> None:
        self.arch = arch
        self.path = path
        if path is None:
            msg = f"Invalid architecture name: {arch!r}"
        else:
            msg = f"Architecture {arch!r} not found (no sub-build at {path})"
        super().__init__(msg)


class ConfigError(DispatchError):
    exit_code = EXIT_CONFIG


class SubBuildNotInvocable(DispatchError):
    exit_code = EXIT_NOT_INVOCABLE

    def __init__(self, program: str, reason: str) -> None:
        self.program = program
        super().__init__(f"Cannot run sub-build program {program!r}: {reason}")


class SubBuildFailure(DispatchError):
    """Sub-build exited non-zero; the status is propagated as-is."""

    def __init__(self, target: str, status: int) -> None:
        self.target = target
        self.status = status
        self.exit_code = status
        super().__init__(f"Sub-build target {target!r} failed with status {status}")
