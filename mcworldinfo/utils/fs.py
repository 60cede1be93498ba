"""Filesystem helpers: finding level.dat files and measuring world folders."""

import logging
import os
from typing import List

log = logging.getLogger(__name__)

SIZE_UNIT = 1024
SIZE_PREFIXES = "KMGTPE"


def find_files(root: str, filename: str = "level.dat") -> List[str]:
    """Recursively collect every file under ``root`` named ``filename``."""
    if not os.path.isdir(root):
        log.warning(f"[SCAN] Not a directory: {root}")
        return []

    def on_error(err: OSError):
        log.warning(f"[SCAN] Skipping unreadable directory {err.filename}: {err.strerror}")

    found = []
    for dirpath, dirnames, filenames in os.walk(root, onerror=on_error):
        dirnames.sort()
        if filename in filenames:
            found.append(os.path.join(dirpath, filename))
    return found


def dir_size(path: str) -> int:
    """Total size in bytes of all regular files below ``path``."""
    total = 0
    for dirpath, _, filenames in os.walk(path):
        for name in filenames:
            file_path = os.path.join(dirpath, name)
            try:
                if not os.path.islink(file_path):
                    total += os.path.getsize(file_path)
            except OSError as e:
                log.debug(f"[SIZE] Cannot stat {file_path}: {e}")
    return total


def format_file_size(size: int) -> str:
    """
    Human readable size: '512 B', '1.50 KB', '3.00 GB'.

    Units step by 1024.
    """
    if size < SIZE_UNIT:
        return f"{size} B"
    exp = 0
    while exp < len(SIZE_PREFIXES) and size >= SIZE_UNIT ** (exp + 1):
        exp += 1
    return f"{size / SIZE_UNIT ** exp:.2f} {SIZE_PREFIXES[exp - 1]}B"
