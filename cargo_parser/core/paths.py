"""
Helpers for file paths reported by rustc and cargo.

The toolchain refers to its own bundled sources with relative paths like
``../src/libcore/option.rs`` (or ``/rustc/<hash>/library/...`` on newer
releases). Such locations usually do not exist in the user's project.
"""

from __future__ import annotations

from typing import Optional

UNIX_RUST_SRC_PREFIX = "../src/"
WINDOWS_RUST_SRC_PREFIX = "..\\src\\"
RUSTC_SRC_PREFIX = "/rustc/"

_RELATIVE_PREFIXES = (UNIX_RUST_SRC_PREFIX, WINDOWS_RUST_SRC_PREFIX)


def is_rust_source_link(file_path: str) -> bool:
    """Check if the given path points into the toolchain's own sources."""
    return file_path.startswith(_RELATIVE_PREFIXES) or file_path.startswith(
        RUSTC_SRC_PREFIX
    )


def is_synthetic_buffer(file_path: str) -> bool:
    """Check if the path names a compiler-generated buffer such as ``<std macros>``."""
    return file_path.startswith("<")


def normalize_path(file_path: str, rust_src_path: Optional[str]) -> str:
    """
    Rewrite a relative toolchain source path to live under ``rust_src_path``.

    Paths that are not relative toolchain links, or calls without a
    ``rust_src_path``, are returned unchanged.
    """
    if not rust_src_path or not file_path.startswith(_RELATIVE_PREFIXES):
        return file_path
    # Both prefixes have the same length; keep the original separator
    tail = file_path[len(UNIX_RUST_SRC_PREFIX) - 1 :]
    return rust_src_path.rstrip("/\\") + tail
