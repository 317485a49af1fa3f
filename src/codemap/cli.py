"""Command line entrypoint."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path

from codemap.config import FLAT_ATTRIBUTION_MODES, CliOverrides, load_effective_config
from codemap.index import IndexService
from codemap.logging import JsonlAuditLogger
from codemap.render import ReportWriteError, dumps_tree, render_compact, render_flat

AUDIT_LOG_NAME = "audit.jsonl"
AUDIT_READ_LIMIT = 50


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for the codemap command."""
    parser = argparse.ArgumentParser(prog="codemap")
    parser.add_argument("--project-root", required=False, default=".")
    parser.add_argument("--scripts-dir", required=False, default=None)
    parser.add_argument("--data-dir", required=False, default=None)
    parser.add_argument(
        "--flat-attribution", choices=FLAT_ATTRIBUTION_MODES, required=False, default=None
    )
    parser.add_argument("--no-mask-comments", action="store_true")
    parser.add_argument("--verbose", "-v", action="store_true")

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("flat", help="Print the flat index")
    tree = commands.add_parser("tree", help="Print the code hierarchy")
    tree.add_argument("--format", choices=("compact", "json"), default="compact")
    commands.add_parser("save-flat", help="Write the flat index file")
    commands.add_parser("save-json", help="Write the code hierarchy JSON file")
    commands.add_parser("save-compact", help="Write the compact code hierarchy file")
    commands.add_parser("status", help="Refresh and print index status and config")
    audit = commands.add_parser("audit", help="Print recent audit log entries")
    audit.add_argument("--since", required=False, default=None)
    audit.add_argument("--limit", type=int, required=False, default=AUDIT_READ_LIMIT)
    return parser


def create_service(project_root: str, cli_overrides: CliOverrides | None = None) -> IndexService:
    """Create an index service with an audit log in the data dir."""
    config = load_effective_config(Path(project_root), cli_overrides)
    audit_logger = JsonlAuditLogger(path=config.output.data_dir / AUDIT_LOG_NAME)
    return IndexService(config, audit_logger=audit_logger)


def main(argv: list[str] | None = None) -> int:
    """Entrypoint for the codemap command."""
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    overrides = CliOverrides(
        scripts_dir=args.scripts_dir,
        data_dir=Path(args.data_dir).resolve() if args.data_dir is not None else None,
        flat_attribution=args.flat_attribution,
        mask_comments=False if args.no_mask_comments else None,
    )
    try:
        service = create_service(args.project_root, overrides)
    except (ValueError, LookupError) as error:
        print(f"Invalid configuration: {error}", file=sys.stderr)
        return 1

    if args.command == "flat":
        sys.stdout.write(render_flat(service.refresh().flat))
        return 0
    if args.command == "tree":
        root = service.refresh().root
        sys.stdout.write(dumps_tree(root) if args.format == "json" else render_compact(root))
        return 0
    if args.command == "status":
        service.refresh()
        payload = {
            "status": asdict(service.status()),
            "effective_config": service.config.to_public_dict(),
        }
        sys.stdout.write(json.dumps(payload, indent=2, sort_keys=True) + "\n")
        return 0
    if args.command == "audit":
        limit = max(1, min(args.limit, AUDIT_READ_LIMIT))
        audit_logger = JsonlAuditLogger(path=service.config.output.data_dir / AUDIT_LOG_NAME)
        entries = audit_logger.read(args.since, limit)
        sys.stdout.write(json.dumps({"entries": entries}, indent=2, sort_keys=True) + "\n")
        return 0

    savers = {
        "save-flat": service.save_flat,
        "save-json": service.save_json,
        "save-compact": service.save_compact,
    }
    try:
        target = savers[args.command]()
    except ReportWriteError as error:
        print(str(error), file=sys.stderr)
        return 1
    print(f"Wrote {target}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
