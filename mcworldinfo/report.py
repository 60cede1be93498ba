"""
World inventory report.

Finds every level.dat below a directory, reads it, and prints one block per
world:

    /saves/New World (New World), Size: 1.25 MB:
        Version:                            1.20.1 (Id: 3465)
        Type:                               Forge
        Mods (1):
            Mod ID 'examplemod'             1.0

Worlds that cannot be read are listed as "Invalid world <folder>" and the
scan carries on.
"""

import logging
import os
import sys
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, TextIO

from mcworldinfo import nbt
from mcworldinfo.utils.fs import dir_size, find_files, format_file_size
from mcworldinfo.world import InvalidWorldData, SaveType, World, extract_world

log = logging.getLogger(__name__)


@dataclass
class WorldReport:
    folder: str
    world: Optional[World] = None
    size: int = 0
    error: Optional[str] = None

    @property
    def valid(self) -> bool:
        return self.world is not None


def inspect_world(level_dat: str, max_depth: int = nbt.DEFAULT_MAX_DEPTH) -> WorldReport:
    """Read one level.dat; failures end up in ``error`` instead of raising."""
    folder = os.path.dirname(os.path.abspath(level_dat))
    try:
        root = nbt.load(level_dat, max_depth=max_depth)
        world = extract_world(root)
    except (nbt.NBTError, InvalidWorldData, OSError) as e:
        log.warning(f"[SCAN] Invalid world {folder}: {e}")
        return WorldReport(folder, error=str(e))

    size = dir_size(folder)
    log.debug(f"[SCAN] {folder}: {world.save_type}, {len(world.mods)} mods, {size} bytes")
    return WorldReport(folder, world, size)


def format_world(report: WorldReport, width: int = 40) -> str:
    if not report.valid:
        return f"Invalid world {report.folder}"

    world = report.world
    lines = [
        f"{report.folder} ({world.name}), Size: {format_file_size(report.size)}:",
        "    Version:".ljust(width) + str(world.version),
        "    Type:".ljust(width) + str(world.save_type),
    ]
    if world.save_type == SaveType.FORGE:
        lines.append(f"    Mods ({len(world.mods)}):")
        for mod in world.mods:
            lines.append(f"        Mod ID '{mod.id}'".ljust(width) + mod.version)
    lines.append("")
    return "\n".join(lines)


def scan(root: str, cfg: Dict[str, Any]) -> List[WorldReport]:
    """Inspect every world below ``root``, in discovery order."""
    files = find_files(root, cfg["metadata_filename"])
    log.info(f"[SCAN] Found {len(files)} {cfg['metadata_filename']} file(s) under {root}")

    max_depth = cfg["max_depth"]
    workers = cfg["workers"]
    if workers > 1 and len(files) > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            return list(pool.map(lambda path: inspect_world(path, max_depth), files))
    return [inspect_world(path, max_depth) for path in files]


def write_report(reports: Iterable[WorldReport], width: int = 40, out: Optional[TextIO] = None) -> int:
    """Print each report block; returns how many worlds were valid."""
    out = out or sys.stdout
    valid = 0
    for report in reports:
        print(format_world(report, width), file=out)
        if report.valid:
            valid += 1
    return valid
