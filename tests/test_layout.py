"""Tests for archdispatch.layout."""

from pathlib import Path

import pytest

from archdispatch.errors import ConfigError
from archdispatch.layout import list_architectures, load_config, resolve_layout


class TestResolveLayout:
    def test_defaults(self) -> None:
        assert resolve_layout(None) == {"arch": "arm", "arch_dir": "arch", "make": "make"}

    def test_override_and_unknown_keys(self) -> None:
        out = resolve_layout({"arch": "x86", "extra": 1, "make": None})
        assert out == {"arch": "x86", "arch_dir": "arch", "make": "make"}


class TestLoadConfig:
    def test_missing_default_file_uses_defaults(self, tmp_path: Path) -> None:
        cfg = load_config(tmp_path)
        assert cfg == {"layout": resolve_layout(None), "toolchain": {}}

    def test_missing_explicit_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError):
            load_config(tmp_path, tmp_path / "nope.yaml")

    def test_reads_layout_and_toolchain(self, tmp_path: Path) -> None:
        (tmp_path / "archdispatch.yaml").write_text(
            "arch: x86\n"
            "arch_dir: ports\n"
            "toolchain:\n"
            "  rust_root: /src/rust\n"
            "  gcc_prefix: /opt/cross/bin/\n"
            "  unknown: x\n"
        )
        cfg = load_config(tmp_path)
        assert cfg["layout"] == {"arch": "x86", "arch_dir": "ports", "make": "make"}
        assert cfg["toolchain"] == {"rust_root": "/src/rust", "gcc_prefix": "/opt/cross/bin/"}

    def test_empty_file_is_defaults(self, tmp_path: Path) -> None:
        (tmp_path / "archdispatch.yaml").write_text("")
        assert load_config(tmp_path)["layout"] == resolve_layout(None)

    def test_invalid_yaml_raises(self, tmp_path: Path) -> None:
        (tmp_path / "archdispatch.yaml").write_text("arch: [unterminated\n")
        with pytest.raises(ConfigError):
            load_config(tmp_path)

    def test_non_mapping_raises(self, tmp_path: Path) -> None:
        (tmp_path / "archdispatch.yaml").write_text("- arm\n- x86\n")
        with pytest.raises(ConfigError):
            load_config(tmp_path)

    def test_toolchain_must_be_mapping(self, tmp_path: Path) -> None:
        (tmp_path / "archdispatch.yaml").write_text("toolchain: /usr\n")
        with pytest.raises(ConfigError):
            load_config(tmp_path)


class TestListArchitectures:
    def test_lists_directories_sorted(self, project: Path) -> None:
        (project / "arch" / "README").write_text("not an arch\n")
        (project / "arch" / ".cache").mkdir()
        assert list_architectures(project) == ["arm", "x86"]

    def test_missing_arch_dir(self, tmp_path: Path) -> None:
        assert list_architectures(tmp_path) == []

    def test_custom_arch_dir(self, tmp_path: Path) -> None:
        (tmp_path / "ports" / "riscv").mkdir(parents=True)
        assert list_architectures(tmp_path, {"arch_dir": "ports"}) == ["riscv"]
