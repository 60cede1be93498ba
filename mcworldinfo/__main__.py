"""CLI entry point: python -m mcworldinfo <directory> [options]"""

import logging
import sys
from typing import List, Optional

from mcworldinfo.report import scan, write_report
from mcworldinfo.utils.config import load_cfg

log = logging.getLogger(__name__)

USAGE = """
Minecraft world inventory - list every world below a directory

Usage: python -m mcworldinfo <directory> [options]

Options:
  --config PATH          Read settings from PATH (default: ./config.json)
  --workers N            Read N worlds in parallel (default: from config)
  --verbose, -v          Log debug output
  --help, -h             Show this help message
"""


def setup_logging(cfg, verbose=False):
    handlers = [logging.StreamHandler()]
    if cfg.get("log_file"):
        handlers.append(logging.FileHandler(cfg["log_file"]))
    level = logging.DEBUG if verbose else getattr(logging, str(cfg["log_level"]).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format='%(asctime)s | [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        handlers=handlers,
        force=True,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)

    root = None
    config_path = None
    workers = None
    verbose = False

    i = 0
    while i < len(args):
        arg = args[i]
        if arg in ("--help", "-h"):
            print(USAGE)
            return 0
        elif arg == "--config" and i + 1 < len(args):
            config_path = args[i + 1]
            i += 2
            continue
        elif arg == "--workers" and i + 1 < len(args):
            try:
                workers = int(args[i + 1])
            except ValueError:
                workers = 0
            if workers < 1:
                print("[ERROR] --workers requires a positive integer value", file=sys.stderr)
                return 1
            i += 2
            continue
        elif arg in ("--verbose", "-v"):
            verbose = True
        elif arg.startswith("-"):
            print(f"[ERROR] Unknown option: {arg}", file=sys.stderr)
            print(USAGE, file=sys.stderr)
            return 1
        elif root is None:
            root = arg
        else:
            print(f"[ERROR] Unexpected argument: {arg}", file=sys.stderr)
            return 1
        i += 1

    if root is None:
        print(USAGE, file=sys.stderr)
        return 1

    try:
        cfg = load_cfg(config_path)
    except (OSError, ValueError) as e:
        print(f"[ERROR] Cannot read config: {e}", file=sys.stderr)
        return 1
    if workers is not None:
        cfg["workers"] = workers

    setup_logging(cfg, verbose)

    reports = scan(root, cfg)
    valid = write_report(reports, cfg["label_width"])
    log.info(f"[SCAN] {valid} valid world(s), {len(reports) - valid} invalid")
    return 0


if __name__ == "__main__":
    sys.exit(main())
