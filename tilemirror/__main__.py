"""Entry point: ``python -m tilemirror``.

Works on captured joins (see :mod:`tilemirror.net.capture`):
  - ``python -m tilemirror inspect CAPTURE``  → print a summary of the mirrored room
  - ``python -m tilemirror serve CAPTURE``    → serve the read-only inspection API
"""

from __future__ import annotations

import argparse
import logging
from collections import Counter

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Tile room mirror")
    sub = parser.add_subparsers(dest="command", required=True)

    insp = sub.add_parser("inspect", help="Summarize a captured room")
    insp.add_argument("capture", type=str)
    insp.add_argument("--top", type=int, default=10, help="Most frequent foregrounds to list")
    insp.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])
    insp.add_argument("--net-log-level", type=str, default=None, choices=["DEBUG", "INFO", "WARNING"])

    srv = sub.add_parser("serve", help="Serve the inspection API over a captured room")
    srv.add_argument("capture", type=str)
    srv.add_argument("--host", type=str, default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    srv.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])
    srv.add_argument("--net-log-level", type=str, default=None, choices=["DEBUG", "INFO", "WARNING"])

    return parser


def _run_inspect(args: argparse.Namespace) -> None:
    from tilemirror.api.dependencies import open_capture
    from tilemirror.config import MirrorConfig
    from tilemirror.systems.fingerprint import room_fingerprint_hex
    from tilemirror.utils.logging import setup_logging

    config = MirrorConfig(log_level=args.log_level, net_log_level=args.net_log_level)
    setup_logging(config)
    session = open_capture(args.capture, config).session
    room = session.room
    snap = room.snapshot()

    counts = Counter(snap.foreground)
    data_cells = sum(1 for v in snap.metadata if v is not None)

    print("=" * 60)
    print(f"  Room: {snap.name!r} ({snap.width}x{snap.height}, category {snap.category})")
    print(f"  Plays: {snap.plays}  Visible: {snap.visible}  Autosave: {snap.auto_save}")
    print(f"  Coins: {snap.gold_coin_count} gold, {snap.blue_coin_count} blue")
    print(f"  Active keys: {', '.join(snap.active_keys) or '-'}")
    print(f"  Participants online: {len(session.roster)}")
    print(f"  Cells with metadata: {data_cells}")
    print(f"  Fingerprint: {room_fingerprint_hex(snap)}")
    print("-" * 60)
    for tile_id, count in counts.most_common(args.top):
        print(f"  {session.catalog.foreground(tile_id).name:<30} {count:>8}")
    print("=" * 60)


def _run_server(args: argparse.Namespace) -> None:
    import uvicorn

    from tilemirror.api.app import create_app
    from tilemirror.api.dependencies import open_capture
    from tilemirror.config import MirrorConfig
    from tilemirror.utils.logging import setup_logging

    config = MirrorConfig(
        api_host=args.host, api_port=args.port,
        log_level=args.log_level, net_log_level=args.net_log_level,
    )
    setup_logging(config)
    app = create_app(open_capture(args.capture, config))
    uvicorn.run(app, host=config.api_host, port=config.api_port, log_level=config.log_level.lower())


def main(argv: list[str] | None = None) -> None:
    args = _build_parser().parse_args(argv)
    if args.command == "inspect":
        _run_inspect(args)
    else:
        _run_server(args)


if __name__ == "__main__":
    main()
