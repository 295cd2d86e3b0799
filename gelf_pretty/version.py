"""Version and build metadata block, printed by ``--version``."""

import os

from gelf_pretty import __version__

UNKNOWN = "unknown"


def build_info() -> dict[str, str]:
    """Version, build commit and build time; build values come from the environment."""
    return {
        "Version:": __version__,
        "Build Commit Hash:": os.environ.get("GELF_PRETTY_BUILD_COMMIT", UNKNOWN),
        "Build Time:": os.environ.get("GELF_PRETTY_BUILD_DATE", UNKNOWN),
    }


def version_info(info: dict[str, str] | None = None) -> str:
    """Right-aligned key/value block framed by blank lines.

              Version:  0.1.0
    Build Commit Hash:  640197df9b907efe9bfdf8ac2914b28a3ec9b8ef
           Build Time:  2019-03-30T12:48:27Z
    """
    info = build_info() if info is None else info
    width = max(len(label) for label in info)
    lines = [""]
    lines.extend(f"{label:>{width}}  {value}" for label, value in info.items())
    lines.append("")
    return "\n".join(lines) + "\n"
