"""Tarballs and checksums for packaged binaries."""

from __future__ import annotations

import hashlib
import shutil
import tarfile
from pathlib import Path

CHECKSUMS_FILENAME = "SHA256SUMS"
_CHUNK = 1 << 16


def create_tarball(source_dir: Path, archive: Path) -> Path:
    """Write *source_dir* (as its own top-level directory) to a ``.tar.gz``."""
    archive.parent.mkdir(parents=True, exist_ok=True)
    with tarfile.open(archive, "w:gz") as tar:
        tar.add(source_dir, arcname=source_dir.name)
    return archive


def copy_content(source: Path, dest_dir: Path) -> Path:
    """Copy a file or directory into *dest_dir*, replacing what is there."""
    target = dest_dir / source.name
    if source.is_dir():
        shutil.copytree(source, target, dirs_exist_ok=True)
    else:
        shutil.copy2(source, target)
    return target


def reset_directory(path: Path) -> None:
    """Remove *path* and everything below it, then recreate it empty."""
    shutil.rmtree(path, ignore_errors=True)
    path.mkdir(parents=True)


def sha256sum(path: Path) -> str:
    digest = hashlib.sha256()
    with path.open("rb") as fh:
        for chunk in iter(lambda: fh.read(_CHUNK), b""):
            digest.update(chunk)
    return digest.hexdigest()


def write_checksums(files: list[Path], dest: Path) -> Path:
    """Write ``<sha256>  <name>`` lines (``sha256sum`` format) for *files*."""
    lines = [f"{sha256sum(f)}  {f.name}\n" for f in files]
    dest.write_text("".join(lines), encoding="utf-8")
    return dest
