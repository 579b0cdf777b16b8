"""Tests for the built-in checksum plugin."""

import hashlib
from pathlib import Path

from cikit.plugins.builtins.checksums import ChecksumPlugin
from cikit.plugins.manager import PluginManager


def test_writes_sha256sums(tmp_path: Path) -> None:
    archive = tmp_path / "demo_v1_linux_amd64.tar.gz"
    archive.write_bytes(b"tarball")

    pm = PluginManager()
    pm.register_plugin(ChecksumPlugin())
    pm.hook.post_packages(
        project="demo", version="v1", build_path=str(tmp_path), archives=[str(archive)]
    )

    sums = (tmp_path / "SHA256SUMS").read_text()
    assert sums == f"{hashlib.sha256(b'tarball').hexdigest()}  demo_v1_linux_amd64.tar.gz\n"


def test_no_archives_no_file(tmp_path: Path) -> None:
    ChecksumPlugin().post_packages(project="demo", version="v1", build_path=str(tmp_path), archives=[])
    assert not (tmp_path / "SHA256SUMS").exists()
