"""Persist a snapshot bundle as five JSON files, all or nothing.

Every artifact is first written into a staging directory created inside the
output directory. Only when all five are on disk are they swapped in, each
live file being moved aside into the staging directory first, `meta.json`
last. If staging or any swap fails, the files already swapped are put back
from those backups, so the directory holds either the complete previous
snapshot or the complete new one.
"""
from __future__ import annotations

import json
import logging
import os
import shutil
import tempfile
import threading
from pathlib import Path

from dissertation_pipeline.snapshot.build import SnapshotBundle

log = logging.getLogger(__name__)

# Serializes the write phase of concurrent refreshes within one process.
_write_lock = threading.Lock()

BACKUP_DIR = "previous"


class SnapshotWriteError(RuntimeError):
    """Raised when the snapshot artifacts could not be written."""


def dump_artifact(payload: object) -> str:
    """Serialize an artifact the way the chart layer expects (2-space indent)."""
    return json.dumps(payload, indent=2, ensure_ascii=False, allow_nan=False)


def _rollback(out_dir: Path, installed: list[str], backups: dict[str, Path]) -> None:
    """Restore the previous snapshot after a failed swap.

    Files installed without a predecessor are removed; every backed-up file
    is moved back over its live path.
    """
    for name in installed:
        if name not in backups:
            (out_dir / name).unlink(missing_ok=True)
    for name, backup in backups.items():
        try:
            os.replace(backup, out_dir / name)
        except OSError:
            log.exception("Could not restore %s from %s", name, backup)
    log.warning("Rolled back %d file(s) in %s", len(installed), out_dir)


def write_snapshot(bundle: SnapshotBundle, out_dir: Path) -> list[Path]:
    """Write every artifact of `bundle` into `out_dir`.

    Args:
        bundle: Artifacts from `build_snapshot`.
        out_dir: Explorer data directory; created if missing.

    Returns:
        Paths of the written files, in write order.

    Raises:
        SnapshotWriteError: if staging or swapping any file fails. The
            previous snapshot is left in place.
    """
    artifacts = bundle.artifacts()

    with _write_lock:
        try:
            out_dir.mkdir(parents=True, exist_ok=True)
            staging = Path(tempfile.mkdtemp(prefix=".staging-", dir=out_dir))
        except OSError as e:
            raise SnapshotWriteError(f"Cannot prepare {out_dir}: {e}") from e

        installed: list[str] = []
        backups: dict[str, Path] = {}
        try:
            for name, payload in artifacts.items():
                (staging / name).write_text(dump_artifact(payload), encoding="utf-8")
                log.debug("Staged %s", name)

            backup_dir = staging / BACKUP_DIR
            backup_dir.mkdir()

            written: list[Path] = []
            for name in artifacts:
                target = out_dir / name
                if target.is_file():
                    backups[name] = backup_dir / name
                    os.replace(target, backups[name])
                os.replace(staging / name, target)
                installed.append(name)
                written.append(target)
                log.info("  - %s created", name)
        except (OSError, ValueError) as e:
            _rollback(out_dir, installed, backups)
            raise SnapshotWriteError(f"Failed to write snapshot to {out_dir}: {e}") from e
        finally:
            shutil.rmtree(staging, ignore_errors=True)

    log.info("Files written to: %s", out_dir)
    return written
