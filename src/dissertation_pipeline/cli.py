"""Command-line interface for the explorer snapshot pipeline.

Provides subcommands: `snapshot`, `meta`, `compare`, and `concentration`.
Each command is implemented as a `cmd_*` function that accepts an argparse
namespace and returns a process exit code.
"""
from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Sequence

from dotenv import load_dotenv

from dissertation_pipeline.aggregate.frame import summaries_to_frame
from dissertation_pipeline.aggregate.schools import pareto_entries, top_n_comparison
from dissertation_pipeline.aggregate.timeseries import MAX_COMPARED_SCHOOLS, compare_schools
from dissertation_pipeline.config import Settings, get_settings
from dissertation_pipeline.db import get_client, get_dissertations
from dissertation_pipeline.ingest.fetch_records import FetchError, fetch_school_summaries
from dissertation_pipeline.logging_config import configure_logging
from dissertation_pipeline.snapshot.reader import SnapshotNotFoundError, read_meta, read_schools
from dissertation_pipeline.snapshot.refresh import refresh_snapshot

log = logging.getLogger(__name__)


# --------------------------------------------------
# Helpers
# --------------------------------------------------
def _out_dir(args: argparse.Namespace, s: Settings) -> Path:
    return args.out_dir if args.out_dir is not None else s.explorer_data_dir


def _print_json(payload: object) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False))


def _split_names(raw: str) -> list[str]:
    return [n.strip() for n in raw.split(",") if n.strip()]


# --------------------------------------------------
# SNAPSHOT
# --------------------------------------------------
def cmd_snapshot(args: argparse.Namespace) -> int:
    """Regenerate the five explorer artifacts and print the new meta.

    Args:
        args: argparse namespace with `out_dir` and `top_n`.
    """
    s = get_settings()
    client = get_client(s.mongo_uri)
    try:
        result = refresh_snapshot(
            get_dissertations(client, s),
            _out_dir(args, s),
            page_size=s.page_size,
            top_n=args.top_n if args.top_n is not None else s.timeseries_top_n,
        )
    finally:
        client.close()

    _print_json(result.model_dump(mode="json", exclude_none=True))
    return 0 if result.success else 1


# --------------------------------------------------
# META
# --------------------------------------------------
def cmd_meta(args: argparse.Namespace) -> int:
    """Print the meta descriptor of the current snapshot."""
    s = get_settings()
    try:
        meta = read_meta(_out_dir(args, s))
    except SnapshotNotFoundError as e:
        log.error("%s", e)
        return 1

    _print_json(meta.model_dump(mode="json"))
    return 0


# --------------------------------------------------
# COMPARE
# --------------------------------------------------
def cmd_compare(args: argparse.Namespace) -> int:
    """Fetch the named schools' records and print their yearly time series."""
    names = _split_names(args.schools)[:MAX_COMPARED_SCHOOLS]
    if not names:
        log.error("Schools parameter required")
        return 2

    s = get_settings()
    client = get_client(s.mongo_uri)
    try:
        summaries = fetch_school_summaries(
            get_dissertations(client, s), names, page_size=s.page_size
        )
    except FetchError:
        log.exception("Error getting school comparison")
        return 1
    finally:
        client.close()

    series = compare_schools(summaries_to_frame(summaries), names)
    _print_json(series.model_dump(mode="json"))
    return 0


# --------------------------------------------------
# CONCENTRATION
# --------------------------------------------------
def cmd_concentration(args: argparse.Namespace) -> int:
    """Print the top-N vs rest split and the leading Pareto entries."""
    s = get_settings()
    try:
        schools = read_schools(_out_dir(args, s)).schools
    except SnapshotNotFoundError as e:
        log.error("%s", e)
        return 1

    if not schools:
        log.warning("Snapshot contains no schools.")
        return 0

    comparison = top_n_comparison(schools, args.top_n)
    entries = pareto_entries(schools)[: args.limit]
    _print_json(
        {
            "comparison": comparison.model_dump(mode="json"),
            "pareto": [e.model_dump(mode="json", by_alias=True) for e in entries],
        }
    )
    return 0


# --------------------------------------------------
# CLI
# --------------------------------------------------
def _positive(value: str) -> int:
    n = int(value)
    if n < 1:
        raise argparse.ArgumentTypeError("must be a positive integer")
    return n


def build_parser() -> argparse.ArgumentParser:
    """Build and return the top-level argument parser for the CLI.

    The returned parser has subcommands `snapshot`, `meta`, `compare` and
    `concentration` with commonly used options configured.

    Returns:
        Configured argparse.ArgumentParser instance.
    """
    p = argparse.ArgumentParser(prog="dissertation_pipeline")
    sub = p.add_subparsers(dest="cmd", required=True)
    p.add_argument("--log-level", default=None, help="Logging level name (default: LOG_LEVEL or INFO)")

    p_snapshot = sub.add_parser("snapshot")
    p_snapshot.add_argument("--out-dir", type=Path, default=None)
    p_snapshot.add_argument("--top-n", type=_positive, default=None)

    p_meta = sub.add_parser("meta")
    p_meta.add_argument("--out-dir", type=Path, default=None)

    p_compare = sub.add_parser("compare")
    p_compare.add_argument("--schools", required=True, help="Comma-separated school names")

    p_conc = sub.add_parser("concentration")
    p_conc.add_argument("--out-dir", type=Path, default=None)
    p_conc.add_argument("--top-n", type=_positive, default=10)
    p_conc.add_argument("--limit", type=_positive, default=20)

    return p


COMMANDS = {
    "snapshot": cmd_snapshot,
    "meta": cmd_meta,
    "compare": cmd_compare,
    "concentration": cmd_concentration,
}


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point: parse args, configure logging and dispatch commands.

    Configuration errors (e.g. a non-numeric `FETCH_PAGE_SIZE`) are logged and
    exit with status 1 like every other command failure.
    """
    load_dotenv()
    args = build_parser().parse_args(argv)
    try:
        configure_logging(Path("logs/pipeline.log"), args.log_level)
    except ValueError as e:
        raise SystemExit(f"error: {e}") from None

    try:
        code = COMMANDS[args.cmd](args)
    except RuntimeError as e:
        log.error("%s", e)
        code = 1
    raise SystemExit(code)


if __name__ == "__main__":
    main()
