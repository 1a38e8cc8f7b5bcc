"""
Relay pattern tracer
Register one recording listener per pattern, emit events and show which
patterns fired, in firing order.
Usage:
    python main.py --pattern "user.*.created" --pattern "user.**" user.42.created
    python main.py --mode sequential --pattern "a.**" a.b.c
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from Relay.Events.event_dispatcher import EventDispatcher
from Relay.Exception.DispatcherError import DispatcherConfigError
from Relay.Utility.config import options_from_env

MODES = ("sync", "sequential", "parallel")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Trace which listener patterns match an event name",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
            Examples:
            python main.py -p "user.*.created" -p "user.**" user.42.created
            python main.py -p "a/**" --delimiter / a/b
            python main.py --mode parallel -p "a.*" a.x a.y
        """
    )
    parser.add_argument(
        'events',
        nargs='+',
        help='Event names to emit'
    )
    parser.add_argument(
        '-p', '--pattern',
        action='append',
        default=[],
        help='Listener pattern to register (repeatable)'
    )
    parser.add_argument(
        '--mode',
        choices=MODES,
        default='sync',
        help='Emission strategy (default: sync)'
    )
    parser.add_argument('--delimiter', help='Segment delimiter (default: RELAY_DELIMITER or ".")')
    parser.add_argument('--wildcard', help='Wildcard token (default: RELAY_WILDCARD or "*")')
    parser.add_argument('--env-file', default='.env', help='Environment file to load (default: .env)')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    return parser


def trace(dispatcher: EventDispatcher, patterns: List[str], events: List[str], mode: str = "sync") -> List[List[str]]:
    """Emit each event and return, per event, the patterns that fired in order."""
    fired: List[str] = []
    for pattern in patterns:
        dispatcher.on(pattern, lambda *args, pattern=pattern: fired.append(pattern))

    results = []
    for event in events:
        del fired[:]
        if mode == "sequential":
            asyncio.run(dispatcher.emit_async_sequential(event))
        elif mode == "parallel":
            asyncio.run(dispatcher.emit_async(event))
        else:
            dispatcher.emit(event)
        results.append(list(fired))
    return results


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING)

    try:
        options = options_from_env(args.env_file)
        if args.delimiter:
            options.delimiter = args.delimiter
        if args.wildcard:
            options.wildcard = args.wildcard
        dispatcher = EventDispatcher.from_options(options)
    except DispatcherConfigError as e:
        print(f"Error: {e.message}")
        return 1

    results = trace(dispatcher, args.pattern, args.events, args.mode)
    for event, fired in zip(args.events, results):
        print(f"{event}: {', '.join(fired) if fired else '(no listeners)'}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
