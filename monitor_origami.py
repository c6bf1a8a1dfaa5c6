"""CLI entrypoint for the Origami printer toner monitor."""

from __future__ import annotations

import argparse
import logging
import sys

from origami.config import DEFAULT_CONFIG_PATH, ConfigError, load_config
from origami.export import export_snapshot_to_xlsx
from origami.models import Snapshot
from origami.runner import OrigamiRunner
from origami.scheduler import PollScheduler
from origami.scraper import DEFAULT_TIMEOUT, PrinterClient
from origami.store import SnapshotStore
from origami.web import create_app

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Origami: checks the toner levels of networked printers",
    )
    parser.add_argument(
        "-f",
        "--config",
        default=DEFAULT_CONFIG_PATH,
        help="path of the configuration file (overrides ORIGAMI_CONFIG env var)",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="run one poll cycle, print the results and exit",
    )
    parser.add_argument(
        "--export",
        metavar="PATH",
        help="with --once, write the snapshot to an xlsx file",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help="seconds to wait on each printer status page",
    )
    parser.add_argument("--verbose", action="store_true", help="enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if args.export and not args.once:
        parser.error("--export requires --once")

    try:
        config = load_config(args.config)
    except ConfigError as exc:
        logger.error("%s", exc)
        return 2

    store = SnapshotStore(Snapshot.placeholder(config.devices))
    client = PrinterClient(timeout=args.timeout)
    runner = OrigamiRunner(
        devices=config.devices,
        selectors=config.selectors,
        interval=config.interval,
        store=store,
        fetcher=client.fetch,
    )

    if args.once:
        snapshot = runner.run_cycle()
        for row in snapshot.rows:
            logger.info(
                "%s | toner: %s | cartridge: %s | %s",
                row.name,
                row.toner or "N/A",
                row.cartridge or "N/A",
                row.url,
            )
        if args.export:
            export_snapshot_to_xlsx(snapshot, args.export)
        return 0

    scheduler = PollScheduler(runner, interval=config.interval, port=config.port)
    app = create_app(store)
    scheduler.start()
    try:
        app.run(host="0.0.0.0", port=config.port, threaded=True)
    finally:
        scheduler.stop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
