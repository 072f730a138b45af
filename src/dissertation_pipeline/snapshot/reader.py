"""Read persisted snapshot artifacts back from the explorer data directory."""
from __future__ import annotations

from pathlib import Path

from dissertation_pipeline.models import SchoolsSnapshot, SnapshotMeta
from dissertation_pipeline.snapshot.build import META_FILE, SCHOOLS_FILE


class SnapshotNotFoundError(FileNotFoundError):
    """Raised when a snapshot artifact has not been generated yet."""


def _read(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise SnapshotNotFoundError(
            f"Snapshot not found at {path}. Please generate snapshots first."
        ) from None


def read_meta(out_dir: Path) -> SnapshotMeta:
    """Return the meta descriptor of the current snapshot."""
    return SnapshotMeta.model_validate_json(_read(out_dir / META_FILE))


def read_schools(out_dir: Path) -> SchoolsSnapshot:
    """Return the schools artifact of the current snapshot."""
    return SchoolsSnapshot.model_validate_json(_read(out_dir / SCHOOLS_FILE))
