"""Aggregate module re-exporting the other TypeScript artifacts."""

from __future__ import annotations

import os
from pathlib import Path, PurePosixPath
from typing import Iterable

_TS_SUFFIXES = (".ts", ".tsx")


def relative_module_path(barrel_path: Path, module_path: Path) -> str:
    """Import specifier for `module_path` as seen from the barrel file."""
    relative = PurePosixPath(Path(os.path.relpath(module_path, barrel_path.parent)).as_posix())
    if relative.suffix in _TS_SUFFIXES:
        relative = relative.with_suffix("")
    specifier = str(relative)
    return specifier if specifier.startswith(".") else f"./{specifier}"


def render_barrel(barrel_path: Path, module_paths: Iterable[Path]) -> str:
    lines = [
        f'export * from "{relative_module_path(barrel_path, path)}";'
        for path in module_paths
        if Path(path) != Path(barrel_path)
    ]
    return "\n".join(lines) + "\n"
