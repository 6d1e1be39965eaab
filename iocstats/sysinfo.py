"""Operating system, board support and boot information strings."""

from __future__ import annotations

import os
import platform
import posixpath
import shlex
import sys
from collections.abc import Mapping, Sequence

from .types import NOT_AVAILABLE, NOT_IMPLEMENTED, ST_CMD, STARTUP, StatsUnavailable

_WINDOWS_NAMES = {
    (6, 0): "Windows Vista/server 2003",
    (6, 1): "Windows 7/Server 2008",
    (5, 0): "Windows 2000",
    (5, 1): "Windows XP",
    (5, 2): "Windows Server 2003",
}


def _uname_fields(uname: object) -> tuple[str, str, str]:
    system = getattr(uname, "sysname", None)
    if system is None:
        system = getattr(uname, "system")
    return str(system), str(getattr(uname, "release")), str(getattr(uname, "machine"))


def kernel_version(uname: object | None = None) -> str:
    """System name, release and machine type, separated by single spaces.

    ``uname`` may be a result of ``os.uname()`` or ``platform.uname()``;
    by default the running system is asked.
    """
    if uname is None:
        uname = os.uname() if hasattr(os, "uname") else platform.uname()
    return " ".join(_uname_fields(uname))


def bsp_version() -> str:
    """Board support package revision; not available on this system."""
    raise StatsUnavailable(NOT_AVAILABLE, fallback=NOT_AVAILABLE)


def decode_windows_version(packed: int) -> tuple[int, int, int]:
    """Split a packed Windows version number into major, minor and build.

    The build number is only present when the top bit is clear.
    """
    packed &= 0xFFFFFFFF
    low_word = packed & 0xFFFF
    major = low_word & 0xFF
    minor = (low_word >> 8) & 0xFF
    build = (packed >> 16) & 0xFFFF if packed < 0x80000000 else 0
    return major, minor, build


def windows_version_string(major: int, minor: int, build: int) -> str:
    """Human readable Windows version; empty for versions without a known name."""
    name = _WINDOWS_NAMES.get((major, minor))
    if name is None:
        return ""
    return f"{name} {major}.{minor}({build})"


def boot_line() -> str:
    """Boot parameter line; this system keeps none, so a placeholder is returned."""
    return NOT_IMPLEMENTED


def startup_script(environ: Mapping[str, str] | None = None) -> str:
    """Startup script named by the ST_CMD variable.

    When STARTUP is set, it is taken as the directory the script lives
    in and joined in front of the name.
    """
    env = os.environ if environ is None else environ
    script = env.get(ST_CMD)
    if not script:
        raise StatsUnavailable("no startup script", fallback=NOT_AVAILABLE)
    directory = env.get(STARTUP)
    if directory:
        return posixpath.join(directory, script)
    return script


def command_line(argv: Sequence[str] | None = None) -> str:
    """The command line the process was started with, as one string."""
    args = sys.argv if argv is None else argv
    return shlex.join(list(args))