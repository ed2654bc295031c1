"""Cron entry point for pruning images the backend no longer references."""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import dataclass
from pathlib import Path

from image_vault.config import load_config
from image_vault.logging import configure_logging
from image_vault.media.asset_store import AssetStore
from image_vault.media.garbage_collector import GarbageCollector


@dataclass(slots=True)
class CollectSummary:
    orphans: list[str]
    dry_run: bool


def load_active_names(path: Path) -> list[str]:
    """Read ``{"activeImages": [...]}`` or a bare JSON list of names."""
    raw = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(raw, dict):
        raw = raw.get("activeImages", [])
    if not isinstance(raw, list) or not all(isinstance(name, str) for name in raw):
        raise ValueError("active file must hold a list of image names")
    return raw


def perform_collect(*, active_file: Path, dry_run: bool) -> CollectSummary:
    config = load_config()
    collector = GarbageCollector(store=AssetStore(root=config.images_dir))
    active = load_active_names(active_file)

    if dry_run:
        return CollectSummary(orphans=collector.plan(active), dry_run=True)

    report = collector.collect(active, client_ip="cron")
    return CollectSummary(orphans=list(report.removed), dry_run=False)


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Remove images absent from the active set.")
    parser.add_argument(
        "--active-file",
        type=Path,
        required=True,
        help="JSON file with the names still referenced by the backend.",
    )
    parser.add_argument("--dry-run", action="store_true", help="Only list orphans without deleting files.")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv if argv is not None else sys.argv[1:])
    configure_logging()
    try:
        summary = perform_collect(active_file=args.active_file, dry_run=args.dry_run)
    except Exception as exc:
        print(f"garbage collect failed: {exc}", file=sys.stderr)
        return 2

    label = "orphans" if summary.dry_run else "removed"
    print(f"garbage collect {'dry-run' if summary.dry_run else 'done'}, {label}={len(summary.orphans)}")
    for name in summary.orphans:
        print(name)
    return 0


if __name__ == "__main__":
    sys.exit(main())
