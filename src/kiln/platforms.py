"""
Platform resolution for packaging.

Maps a user-supplied platform token to the packager's canonical
(platform, architecture) pair.
"""

import platform
import sys
from dataclasses import dataclass

from .errors import UnsupportedPlatformError

DARWIN = "darwin"
LINUX = "linux"
WIN32 = "win32"

IA32 = "ia32"
X64 = "x64"

# token -> (platform, forced arch or None to keep the host arch)
PLATFORM_TABLE: dict[str, tuple[str, str | None]] = {
    "mac": (DARWIN, X64),
    "darwin": (DARWIN, X64),
    "freebsd": (LINUX, None),
    "linux": (LINUX, None),
    "linux32": (LINUX, IA32),
    "linux64": (LINUX, X64),
    "win": (WIN32, IA32),
    "win32": (WIN32, IA32),
    "windows": (WIN32, IA32),
}

_X64_MACHINES = {"x86_64", "amd64", "x64"}
_IA32_MACHINES = {"i386", "i486", "i586", "i686", "x86", "ia32"}


@dataclass(frozen=True)
class PlatformDescriptor:
    """Resolved packaging target."""

    platform: str
    arch: str

    @property
    def label(self) -> str:
        return f"{self.platform}-{self.arch}"


def host_arch() -> str | None:
    """Get the host architecture in packager terms, or None if it has no equivalent."""
    machine = platform.machine().lower()
    if machine in _X64_MACHINES:
        return X64
    if machine in _IA32_MACHINES:
        return IA32
    return None


def host_platform() -> str:
    """Get the host platform token (e.g. ``freebsd13`` -> ``freebsd``)."""
    name = sys.platform.lower()
    if name.startswith("freebsd"):
        return "freebsd"
    if name.startswith("linux"):
        return "linux"
    return name


def resolve_platform(token: str, arch: str | None = None) -> PlatformDescriptor:
    """
    Resolve a platform token to a PlatformDescriptor.

    Args:
        token: Case-insensitive platform token (mac, linux64, win, ...)
        arch: Host architecture; ia32 is assumed when it is None

    Returns:
        PlatformDescriptor for the token

    Raises:
        UnsupportedPlatformError: If the token is not in the platform table
    """
    normalized = token.strip().lower()
    if normalized not in PLATFORM_TABLE:
        raise UnsupportedPlatformError(token)

    target, forced_arch = PLATFORM_TABLE[normalized]
    return PlatformDescriptor(platform=target, arch=forced_arch or arch or IA32)


def supported_tokens() -> list[str]:
    """List accepted platform tokens."""
    return sorted(PLATFORM_TABLE)
