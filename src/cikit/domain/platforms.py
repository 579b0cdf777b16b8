"""OS/architecture matrix and the names derived from it."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath

# The platform whose binaries land in bin/ for Dockerfiles to copy.
HOST_OS = "linux"
HOST_ARCH = "amd64"


@dataclass(frozen=True)
class Platform:
    """One GOOS/GOARCH pair."""

    os: str
    arch: str

    def __str__(self) -> str:
        return f"{self.os}/{self.arch}"

    @property
    def is_host(self) -> bool:
        return self.os == HOST_OS and self.arch == HOST_ARCH

    def env(self) -> dict[str, str]:
        """Environment variables selecting this target for ``go build``."""
        return {"GOOS": self.os, "GOARCH": self.arch}

    def package_dir(self, project: str) -> str:
        """Directory name holding this platform's binaries."""
        return f"{project}_{self.os}_{self.arch}"

    def archive_name(self, project: str, version: str) -> str:
        """File name of this platform's tarball."""
        return f"{project}_{version}_{self.os}_{self.arch}.tar.gz"


def platform_matrix(oses: list[str], arches: list[str]) -> list[Platform]:
    """Expand OS and arch lists into pairs, OS-major, keeping declared order.

    Duplicate entries are dropped so each pair is packaged once.
    """
    matrix: list[Platform] = []
    for os_name in oses:
        for arch in arches:
            platform = Platform(os_name, arch)
            if platform not in matrix:
                matrix.append(platform)
    return matrix


def binary_name(command: str, platform: Platform) -> str:
    """Output file name for a command directory (``cmd/foo`` -> ``foo``)."""
    name = PurePosixPath(command.rstrip("/")).name
    return f"{name}.exe" if platform.os == "windows" else name


def go_package(command: str) -> str:
    """Relative Go package path for a command directory."""
    command = command.rstrip("/")
    if command.startswith(("./", "/")) or "." in command.split("/", 1)[0]:
        return command
    return f"./{command}"
