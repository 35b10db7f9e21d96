"""Pytest fixtures for archdispatch tests."""

from pathlib import Path

import pytest


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Project root with arch/arm/ and arch/x86/ sub-build directories."""
    for arch in ("arm", "x86"):
        d = tmp_path / "arch" / arch
        d.mkdir(parents=True)
        (d / "Makefile").write_text("all:\n\t@true\n")
    return tmp_path


@pytest.fixture
def clean_env() -> dict[str, str]:
    """Environment with no ARCH, toolchain or MAKE variables set."""
    return {"PATH": "/usr/bin:/bin", "HOME": "/home/builder"}
