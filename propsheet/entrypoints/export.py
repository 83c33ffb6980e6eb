"""Command-line entrypoint.

    propsheet events
    propsheet markets EVENT_ID [--csv]
    propsheet export EVENT_ID --club Inter --player Messi [--market "Anytime Goalscorer" ...] [--all-markets]
"""

import argparse
import asyncio
import logging
import os
import sys
from typing import List, Optional

from dotenv import load_dotenv

from propsheet.config import Settings, load_settings, sanitize_dict
from propsheet.export import ExportSession, format_odds, load_events, serialize_flat, write_export
from propsheet.props import classify, group_markets, map_market_label, map_selection_label, players_in_markets
from propsheet.providers.ladbrokes import DataSource, EventRecord, LadbrokesClient
from propsheet.shared.errors import PropsheetError, SelectionError
from propsheet.shared.logging import setup_logging

logger = logging.getLogger("propsheet.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="propsheet", description="Export player proposition odds to CSV")
    parser.add_argument("--config", type=str, default=None, help="YAML settings file")
    parser.add_argument("--log-level", type=str, default=None)
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("events", help="List available events")

    markets = sub.add_parser("markets", help="List player markets for an event")
    markets.add_argument("event_id")
    markets.add_argument("--csv", action="store_true", help="Print every outcome as plain CSV")

    export = sub.add_parser("export", help="Write <club>_odds.csv for selected players")
    export.add_argument("event_id")
    export.add_argument("--club", required=True)
    export.add_argument("--player", action="append", default=[], help="Repeat for several players")
    export.add_argument("--market", action="append", default=[], help="Market name or id; repeatable")
    export.add_argument("--all-markets", action="store_true")
    export.add_argument("--output-dir", type=str, default=None)
    return parser


async def _find_event(source: DataSource, event_id: str) -> EventRecord:
    for event in await load_events(source):
        if event.id == event_id:
            return event
    logger.warning({"event_not_listed": {"event_id": event_id}})
    return EventRecord(id=event_id, name=f"Event {event_id}")


async def cmd_events(source: DataSource) -> int:
    events = await load_events(source)
    if not events:
        print("No events found in the response")
        return 0
    for event in events:
        start = event.start_time.strftime("%d/%m/%Y %H:%M") if event.start_datetime else (event.start_time or "")
        parts = [event.id, event.name, start, event.competition_name or ""]
        print("\t".join(str(p) for p in parts))
    return 0


async def cmd_markets(source: DataSource, event_id: str, as_csv: bool, settings: Settings) -> int:
    session = ExportSession(settings.export)
    markets = await session.open_event(source, EventRecord(id=event_id, name=f"Event {event_id}"))
    if not markets:
        print("No betting markets available for this event")
        return 0
    if as_csv:
        sys.stdout.write(serialize_flat(markets))
        return 0
    for group, bucket in group_markets(markets).items():
        print(f"[{group.value}]")
        for market in bucket:
            print(f"  {market.id}\t{market.name}\t-> {map_market_label(market.name)}")
            for outcome in market.outcomes:
                label = map_selection_label(market.name, outcome.name)
                print(f"      {outcome.name}\t{label}\t{format_odds(outcome)}")
    print("Players: " + ", ".join(players_in_markets(markets)))
    return 0


async def cmd_export(source: DataSource, args: argparse.Namespace, settings: Settings) -> int:
    if not args.player:
        raise SelectionError("Select at least one player (--player).")
    if not args.market and not args.all_markets:
        raise SelectionError("Select markets with --market or use --all-markets.")
    session = ExportSession(settings.export)
    event = await _find_event(source, args.event_id)
    markets = await session.open_event(source, event)

    chosen = list(markets)
    if not args.all_markets:
        chosen = []
        for wanted in args.market:
            market = session.find_market(wanted)
            if market is None:
                raise SelectionError(f"Market not found for this event: {wanted}")
            chosen.append(market)

    for player in args.player:
        for market in chosen:
            session.add_to_export(player, market)
    if not session.row_count():
        raise SelectionError("No outcomes matched the selected players.")

    logger.info({"export_summary": {**session.snapshot(), "groups": sorted({classify(m.name).value for m in chosen})}})
    path = write_export(session.serialize(args.club), args.club, args.output_dir or settings.export.output_dir)
    print(str(path))
    return 0


async def run(args: argparse.Namespace, settings: Settings, source: Optional[DataSource] = None) -> int:
    if source is None:
        async with LadbrokesClient(settings=settings.provider) as client:
            return await run(args, settings, client)
    if args.command == "events":
        return await cmd_events(source)
    if args.command == "markets":
        return await cmd_markets(source, args.event_id, args.csv, settings)
    return await cmd_export(source, args, settings)


def main(argv: Optional[List[str]] = None) -> int:
    if os.environ.get("PROPSHEET_TEST_MODE") != "true":
        load_dotenv()
    args = build_parser().parse_args(argv)
    try:
        settings = load_settings(args.config)
    except ValueError as exc:
        print(f"Error: invalid configuration: {exc}", file=sys.stderr)
        return 1
    setup_logging(
        level=args.log_level or settings.logging.level,
        json_logs=settings.logging.json_logs,
        log_dir=settings.logging.log_dir,
    )
    logger.debug({"settings": sanitize_dict(settings.model_dump())})
    try:
        return asyncio.run(run(args, settings))
    except PropsheetError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
