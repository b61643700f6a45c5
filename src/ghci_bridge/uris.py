"""Filesystem path → editor URI normalization."""

from __future__ import annotations

import os
from pathlib import Path


def path_to_uri(path: str, root: Path | str | None = None) -> str:
    """Convert a compiler-reported path to a percent-encoded ``file://`` URI.

    Relative paths are resolved against *root* (the directory GHCi runs
    in), falling back to the current directory. ``..`` segments are
    collapsed; symlinks are left alone.
    """
    base = os.fspath(root) if root is not None else os.getcwd()
    return Path(os.path.normpath(os.path.join(base, path))).as_uri()
